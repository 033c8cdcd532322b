"""
HTML tag builder used by the Formly renderer.

Purpose: Emit the bare form controls (form, input, textarea, select, button,
label) with escaped attributes and texts. Layout concerns (control groups,
labels with required markers, inline errors) live in the renderer; this
module only knows about single tags.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from ..base import Component


# Browsers only submit GET and POST; other verbs travel in a hidden field.
SPOOFED_METHOD_FIELD = "_method"

_RESERVED_INPUT_KEYS = ("type", "name", "value")


def _with_scheme(action: str, https: Optional[bool]) -> str:
    """Force http/https on absolute actions; relative actions stay untouched."""
    if https is None:
        return action
    parts = urlsplit(action)
    if parts.scheme not in ("http", "https"):
        return action
    return urlunsplit(parts._replace(scheme="https" if https else "http"))


def _is_selected(value: Any, selected: Any) -> bool:
    if selected is None:
        return False
    if isinstance(selected, (list, tuple, set, frozenset)):
        return str(value) in {str(s) for s in selected}
    return str(value) == str(selected)


class HtmlTagBuilder(Component):
    """Default `TagBuilder` implementation emitting plain HTML5."""

    def open(self, action: str, method: str = "POST", attributes: Optional[Mapping[str, Any]] = None, https: Optional[bool] = None) -> str:
        attrs = dict(attributes or {})
        attrs.pop("method", None)
        attrs.pop("action", None)
        charset = attrs.pop("accept-charset", "UTF-8")

        verb = (method or "POST").upper()
        spoofed = verb not in ("GET", "POST")
        head = {
            "method": "POST" if spoofed else verb,
            "action": _with_scheme(action, https),
            "accept-charset": charset,
        }
        head.update(attrs)
        out = f"<form {self.attributes(head)}>"
        if spoofed:
            out += self.input("hidden", SPOOFED_METHOD_FIELD, verb)
        return out

    def close(self) -> str:
        return "</form>"

    def input(self, type: str, name: str, value: Any = None, attributes: Optional[Mapping[str, Any]] = None) -> str:
        extra = {k: v for k, v in (attributes or {}).items() if k not in _RESERVED_INPUT_KEYS}
        head = {"type": type, "name": name, "value": value}
        head.update(extra)
        return f"<input {self.attributes(head)}>"

    def text(self, name: str, value: Any = None, attributes: Optional[Mapping[str, Any]] = None) -> str:
        return self.input("text", name, value, attributes)

    def password(self, name: str, attributes: Optional[Mapping[str, Any]] = None) -> str:
        return self.input("password", name, None, attributes)

    def file(self, name: str, attributes: Optional[Mapping[str, Any]] = None) -> str:
        return self.input("file", name, None, attributes)

    def textarea(self, name: str, value: Any = None, attributes: Optional[Mapping[str, Any]] = None) -> str:
        attrs = {"name": name}
        attrs.update({k: v for k, v in (attributes or {}).items() if k != "name"})
        attrs.setdefault("rows", "10")
        attrs.setdefault("cols", "50")
        return f"<textarea {self.attributes(attrs)}>{self.escape(value)}</textarea>"

    def select(
        self,
        name: str,
        options: Optional[Mapping[Any, Any]] = None,
        selected: Any = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a select; nested mappings become option groups.

        `selected` matches option values by their string form and may be a
        list for multi-selects.
        """
        attrs = {"name": name}
        attrs.update({k: v for k, v in (attributes or {}).items() if k != "name"})
        body = []
        for value, display in (options or {}).items():
            if isinstance(display, Mapping):
                body.append(self._optgroup(value, display, selected))
            else:
                body.append(self._option(value, display, selected))
        return f"<select {self.attributes(attrs)}>{''.join(body)}</select>"

    def _optgroup(self, label: Any, options: Mapping[Any, Any], selected: Any) -> str:
        inner = "".join(self._option(v, d, selected) for v, d in options.items())
        return f"<optgroup {self.attributes({'label': label})}>{inner}</optgroup>"

    def _option(self, value: Any, display: Any, selected: Any) -> str:
        attrs = self.attributes({"value": value, "selected": _is_selected(value, selected)})
        return f"<option {attrs}>{self.escape(display)}</option>"

    def checkbox(self, name: str, value: Any = "1", checked: Any = False, attributes: Optional[Mapping[str, Any]] = None) -> str:
        attrs = dict(attributes or {})
        if checked:
            attrs["checked"] = True
        return self.input("checkbox", name, value, attrs)

    def button(self, value: str, attributes: Optional[Mapping[str, Any]] = None) -> str:
        attrs = self.attributes(attributes)
        opening = f"<button {attrs}>" if attrs else "<button>"
        return f"{opening}{self.escape(value)}</button>"

    def label(self, name: str, text: str, attributes: Optional[Mapping[str, Any]] = None) -> str:
        attrs = {"for": name}
        attrs.update(attributes or {})
        return f"<label {self.attributes(attrs)}>{self.escape(text)}</label>"


__all__ = ["HtmlTagBuilder", "SPOOFED_METHOD_FIELD"]
