"""
Ports consumed by the Formly renderer.

Keep these small and framework-agnostic so tests can supply simple fakes.
The web layer provides request-backed implementations; `sources.py` provides
mapping-backed ones.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence


Attributes = Mapping[str, Any]


class TagBuilder(Protocol):
    """Emits the raw HTML for a single form tag.

    Implementations are responsible for escaping attribute values and texts.
    """

    def open(self, action: str, method: str, attributes: Attributes, https: Optional[bool]) -> str: ...

    def close(self) -> str: ...

    def input(self, type: str, name: str, value: Any, attributes: Attributes) -> str: ...

    def text(self, name: str, value: Any, attributes: Attributes) -> str: ...

    def textarea(self, name: str, value: Any, attributes: Attributes) -> str: ...

    def password(self, name: str, attributes: Attributes) -> str: ...

    def select(self, name: str, options: Mapping[Any, Any], selected: Any, attributes: Attributes) -> str: ...

    def checkbox(self, name: str, value: Any, checked: Any, attributes: Attributes) -> str: ...

    def file(self, name: str, attributes: Attributes) -> str: ...

    def button(self, value: str, attributes: Attributes) -> str: ...

    def label(self, name: str, text: str, attributes: Attributes) -> str: ...


class OldInputSource(Protocol):
    """Values flashed from the previous (failed) submission."""

    def get(self, name: str) -> Any: ...


class ErrorSource(Protocol):
    """Validation messages flashed from the previous submission."""

    def get(self, name: str) -> Sequence[str]: ...


class CsrfTokenProvider(Protocol):
    def token(self) -> str: ...


class UriProvider(Protocol):
    def current(self) -> str: ...

    def root(self) -> str:
        """Absolute site root (e.g. "https://example.com/"), or "" if unknown."""
        ...


__all__ = [
    "Attributes",
    "TagBuilder",
    "OldInputSource",
    "ErrorSource",
    "CsrfTokenProvider",
    "UriProvider",
]
