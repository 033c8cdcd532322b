"""
Required-field marking policies for labels.

A policy answers two questions about a label text: does it mark the field as
required, and what is the visible text once the marker is removed. The
default convention is a trailing marker such as `"Email.req"`.
"""
from __future__ import annotations

from typing import Protocol


class RequiredMarker(Protocol):
    def matches(self, label: str) -> bool: ...

    def strip(self, label: str) -> str: ...


class SuffixMarker:
    """Marks a label as required when it ends with `suffix`.

    An empty suffix disables the convention (nothing matches).
    """

    def __init__(self, suffix: str = ".req") -> None:
        self.suffix = suffix

    def matches(self, label: str) -> bool:
        return bool(self.suffix) and label.endswith(self.suffix)

    def strip(self, label: str) -> str:
        if self.matches(label):
            return label[: -len(self.suffix)]
        return label


class NoMarker:
    """Never infers "required" from the label; callers pass `required=True`."""

    def matches(self, label: str) -> bool:
        return False

    def strip(self, label: str) -> str:
        return label


__all__ = ["RequiredMarker", "SuffixMarker", "NoMarker"]
