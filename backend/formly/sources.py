"""
Mapping-backed implementations of the Formly input ports.

Used outside a request (scripts, tests) and by the web adapters once the
flashed payload has been pulled from the session.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


class MappingOldInput:
    """Old input backed by a plain mapping of field name to submitted value."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data = dict(data or {})

    def get(self, name: str) -> Any:
        return self._data.get(name)


class MappingErrors:
    """Validation errors backed by a mapping of field name to messages.

    Empty message lists are treated as "no error" so callers can pass the
    output of a validator verbatim.
    """

    def __init__(self, data: Optional[Mapping[str, Sequence[str]]] = None) -> None:
        self._data = {k: list(v) for k, v in (data or {}).items() if v}

    def get(self, name: str) -> list[str]:
        return list(self._data.get(name, []))


class StaticUri:
    def __init__(self, uri: str, root: str = "") -> None:
        self.uri = uri
        self.base = root

    def current(self) -> str:
        return self.uri

    def root(self) -> str:
        return self.base


__all__ = ["MappingOldInput", "MappingErrors", "StaticUri"]
