"""
Form tag components for Formly.

Provides the tag builder the renderer delegates to for single controls.
"""

from .tags import HtmlTagBuilder, SPOOFED_METHOD_FIELD

__all__ = [
    "HtmlTagBuilder",
    "SPOOFED_METHOD_FIELD",
]
