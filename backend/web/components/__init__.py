# Formly component helpers
# Pure Python HTML generation with escaping built in

from .base import Component
from .forms import HtmlTagBuilder

__all__ = [
    "Component",
    "HtmlTagBuilder",
]
