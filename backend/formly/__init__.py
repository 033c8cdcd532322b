"""
Formly: Bootstrap-styled form markup on top of a form tag builder.

The renderer is framework-agnostic; see `backend.web.request_context` for the
FastAPI wiring.
"""

from .config import FormlyConfigError, RendererConfig, config_from_env
from .renderer import BUTTON_VARIANTS, Formly
from .required import NoMarker, RequiredMarker, SuffixMarker
from .sources import MappingErrors, MappingOldInput, StaticUri

__all__ = [
    "Formly",
    "BUTTON_VARIANTS",
    "FormlyConfigError",
    "RendererConfig",
    "config_from_env",
    "RequiredMarker",
    "SuffixMarker",
    "NoMarker",
    "MappingOldInput",
    "MappingErrors",
    "StaticUri",
]
