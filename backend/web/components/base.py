"""
Base Component helpers for Formly's HTML output.

Pure Python HTML generation: every attribute value and text node goes through
`escape`, so callers never build markup from untrusted strings by hand.
"""

from typing import Any, Mapping, Optional
import html


class Component:
    """Base class for HTML-emitting helpers.

    Subclasses expose one method per tag and build on the static helpers.
    """

    @staticmethod
    def escape(text: Optional[Any]) -> str:
        """Escape HTML entities; None renders as an empty string."""
        return html.escape(str(text)) if text is not None else ""

    @staticmethod
    def classes(*args: str, **conditionals: bool) -> str:
        """Build a CSS class string with conditional classes

        Example:
            >>> Component.classes("btn", "btn-primary", disabled=True, active=False)
            'btn btn-primary disabled'
        """
        classes = [c for c in args if c]
        classes.extend(key for key, value in conditionals.items() if value)
        return " ".join(classes)

    @staticmethod
    def attributes(attrs: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> str:
        """Build an HTML attribute string.

        `attrs` keys are used verbatim (`"data-id"`, `"accept-charset"`).
        Keyword names follow the Python-friendly convention: a trailing
        underscore is dropped (`class_` -> `class`) and inner underscores
        become hyphens (`data_value` -> `data-value`).

        True renders a bare boolean attribute; False and None are skipped.

        Example:
            >>> Component.attributes({"id": "field_email"}, class_="span4", disabled=True)
            'id="field_email" class="span4" disabled'
        """
        merged: dict[str, Any] = dict(attrs or {})
        for key, value in kwargs.items():
            if key.endswith("_"):
                key = key[:-1]
            else:
                key = key.replace("_", "-")
            merged[key] = value

        result = []
        for key, value in merged.items():
            if value is True:
                result.append(key)
            elif value is not False and value is not None:
                result.append(f'{key}="{html.escape(str(value))}"')
        return " ".join(result)
