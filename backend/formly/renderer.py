"""
Formly renderer: Bootstrap-styled form fields with some added goodness.

Why:
    Every form field needs the same boilerplate (control-group wrapper, label,
    id, value repopulated after a failed submission, inline error). The
    renderer keeps that in one place so pages only name their fields.

Design:
    Stateless per call. The renderer reads its collaborators (tag builder,
    old input, errors, CSRF token, current URI) through the ports in
    `ports.py`; nothing is pulled from globals, so a renderer can be built per
    request or per test.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union
from urllib.parse import urljoin

from .config import FormlyConfigError, RendererConfig
from .ports import Attributes, CsrfTokenProvider, ErrorSource, OldInputSource, TagBuilder, UriProvider
from .required import RequiredMarker, SuffixMarker
from .sources import MappingErrors, MappingOldInput


logger = logging.getLogger("formly.renderer")

BUTTON_VARIANTS = ("primary", "info", "success", "warning", "danger", "inverse")


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def _merge_classes(existing: Optional[str], extra: str) -> str:
    """Append the tokens of `extra` that `existing` does not carry yet."""
    tokens = (existing or "").split()
    for token in extra.split():
        if token not in tokens:
            tokens.append(token)
    return " ".join(tokens)


class Formly:
    """Form generation based on Twitter Bootstrap.

    Parameters:
        tags: Tag builder that emits the raw HTML for each control.
        old_input: Source of values flashed from the previous submission.
        errors: Source of validation messages flashed with that submission.
        csrf: Token provider; required while `auto_token` is on.
        uri: Current URI provider used as the default form action.
        defaults: Form-level default values by field name.
        config: Rendering options, see `RendererConfig`.
        required_marker: Policy that detects required labels. Defaults to a
            `SuffixMarker` built from `config.required_label`.
    """

    def __init__(
        self,
        tags: TagBuilder,
        *,
        old_input: Optional[OldInputSource] = None,
        errors: Optional[ErrorSource] = None,
        csrf: Optional[CsrfTokenProvider] = None,
        uri: Optional[UriProvider] = None,
        defaults: Optional[Mapping[str, Any]] = None,
        config: Optional[RendererConfig] = None,
        required_marker: Optional[RequiredMarker] = None,
    ) -> None:
        self.tags = tags
        self.old_input = old_input if old_input is not None else MappingOldInput()
        self.errors = errors if errors is not None else MappingErrors()
        self.csrf = csrf
        self.uri = uri
        self.config = config or RendererConfig()
        self._required_marker = required_marker
        self.defaults: Dict[str, Any] = {}
        self.set_defaults(defaults)
        self._check_token_provider()

    # --- Configuration ---------------------------------------------------------

    @property
    def required_marker(self) -> RequiredMarker:
        if self._required_marker is not None:
            return self._required_marker
        return SuffixMarker(self.config.required_label)

    def set_options(self, **options: Any) -> "Formly":
        """Apply rendering options; unknown names raise `FormlyConfigError`."""
        config = self.config.replace(**options)
        self._check_token_provider(config)
        self.config = config
        logger.debug("Renderer options updated: %s", ", ".join(sorted(options)))
        return self

    def set_defaults(self, defaults: Optional[Mapping[str, Any]] = None) -> "Formly":
        """Replace the form-level default values wholesale."""
        self.defaults = dict(defaults or {})
        if self.defaults:
            logger.debug("Form defaults set for %d field(s)", len(self.defaults))
        return self

    def _check_token_provider(self, config: Optional[RendererConfig] = None) -> None:
        if (config or self.config).auto_token and self.csrf is None:
            raise FormlyConfigError("auto_token is enabled but no CSRF token provider was given")

    # --- Resolution ------------------------------------------------------------

    def resolve_value(self, name: str, value: Any = None) -> Any:
        """Pick the value to render for `name`.

        Order:
            1. Old input flashed after a failed submission (even if empty).
            2. The explicit `value` passed by the caller.
            3. The form-level default for `name`.
        Falls back to an empty string.
        """
        old = self.old_input.get(name)
        if old is not None:
            return old
        if not _is_blank(value):
            return value
        default = self.defaults.get(name)
        if not _is_blank(default):
            return default
        return ""

    def resolve_attributes(self, name: str, attributes: Optional[Attributes] = None) -> Dict[str, Any]:
        """Return a copy of `attributes` with an `id` derived from `name` if absent."""
        attrs = dict(attributes or {})
        if not self.config.name_as_id or "id" in attrs:
            return attrs
        attrs["id"] = self.config.id_prefix + name
        return attrs

    def first_error(self, name: str) -> str:
        messages = self.errors.get(name) or []
        return messages[0] if messages else ""

    # --- Label & wrapper -------------------------------------------------------

    def build_label(self, name: str, label: str = "", *, required: bool = False) -> str:
        if not label:
            return ""
        cfg = self.config
        marker = self.required_marker
        classes = ["control-label"]
        if required or marker.matches(label):
            label = cfg.required_prefix + marker.strip(label) + cfg.required_suffix
            if cfg.required_class:
                classes.append(cfg.required_class)
        return self.tags.label(name, label, {"class": " ".join(classes)})

    def build_wrapper(self, field: str, name: str, label: str = "", *, required: bool = False) -> str:
        cfg = self.config
        error = self.first_error(name)
        group_class = "control-group"
        if cfg.control_group_error and error:
            group_class += " " + cfg.control_group_error

        out = f'<div class="{group_class}">'
        out += self.build_label(name, label, required=required)
        out += '<div class="controls">\n'
        out += field
        if cfg.display_inline_errors and error:
            out += f'<span class="help-inline">{error}</span>'
        out += "</div>"
        out += "</div>\n"
        return out

    # --- Form envelope ---------------------------------------------------------

    def open(
        self,
        action: Optional[str] = None,
        method: str = "POST",
        attributes: Optional[Attributes] = None,
        https: Optional[bool] = None,
    ) -> str:
        """Open a form, adding the form style class and the CSRF token.

        The action defaults to the current URI. The configured `form_class`
        is used when no class is given, and appended when the given class has
        no `form-*` token of its own. When `https` is given, a relative
        action is made absolute against the site root so the scheme can be
        forced.
        """
        if not action:
            action = self.uri.current() if self.uri is not None else ""
        if https is not None and self.uri is not None:
            root = self.uri.root()
            if root:
                action = urljoin(root, action)

        attrs = dict(attributes or {})
        form_class = self.config.form_class
        current = attrs.get("class") or ""
        if form_class:
            if not current:
                attrs["class"] = form_class
            elif not any(token.startswith("form-") for token in current.split()):
                attrs["class"] = _merge_classes(current, form_class)

        out = self.tags.open(action, method, attrs, https)
        if self.config.auto_token and self.csrf is not None:
            out += self.csrf.token()
        return out

    def open_for_files(
        self,
        action: Optional[str] = None,
        method: str = "POST",
        attributes: Optional[Attributes] = None,
        https: Optional[bool] = None,
    ) -> str:
        attrs = dict(attributes or {})
        attrs["enctype"] = "multipart/form-data"
        return self.open(action, method, attrs, https)

    def close(self) -> str:
        return self.tags.close()

    def actions(self, buttons: Union[str, Iterable[str]]) -> str:
        """Group pre-rendered buttons in a form-actions container."""
        if isinstance(buttons, str):
            inner = buttons
        else:
            inner = "".join(buttons)
        return f'<div class="form-actions">{inner}</div>'

    # --- Fields ----------------------------------------------------------------

    def hidden(self, name: str, value: Any = None, attributes: Optional[Attributes] = None) -> str:
        value = self.resolve_value(name, value)
        return self.tags.input("hidden", name, value, dict(attributes or {}))

    def text(
        self,
        name: str,
        label: str = "",
        value: Any = None,
        attributes: Optional[Attributes] = None,
        *,
        required: bool = False,
    ) -> str:
        value = self.resolve_value(name, value)
        attrs = self.resolve_attributes(name, attributes)
        field = self.tags.text(name, value, attrs)
        return self.build_wrapper(field, name, label, required=required)

    def textarea(
        self,
        name: str,
        label: str = "",
        value: Any = None,
        attributes: Optional[Attributes] = None,
        *,
        required: bool = False,
    ) -> str:
        value = self.resolve_value(name, value)
        attrs = self.resolve_attributes(name, attributes)
        attrs.setdefault("rows", "4")
        field = self.tags.textarea(name, value, attrs)
        return self.build_wrapper(field, name, label, required=required)

    def password(
        self,
        name: str,
        label: str = "",
        attributes: Optional[Attributes] = None,
        *,
        required: bool = False,
    ) -> str:
        # Passwords are never repopulated.
        attrs = self.resolve_attributes(name, attributes)
        field = self.tags.password(name, attrs)
        return self.build_wrapper(field, name, label, required=required)

    def select(
        self,
        name: str,
        label: str = "",
        options: Optional[Mapping[Any, Any]] = None,
        selected: Any = None,
        attributes: Optional[Attributes] = None,
        *,
        required: bool = False,
    ) -> str:
        selected = self.resolve_value(name, selected)
        attrs = self.resolve_attributes(name, attributes)
        field = self.tags.select(name, options or {}, selected, attrs)
        return self.build_wrapper(field, name, label, required=required)

    def checkbox(
        self,
        name: str,
        label: str = "",
        value: Any = "1",
        checked: bool = False,
        attributes: Optional[Attributes] = None,
        *,
        required: bool = False,
    ) -> str:
        """Render a checkbox whose checked state follows the usual resolution.

        Limitation: browsers do not post unchecked boxes. A box checked by
        default and unchecked by the user comes back without old input after
        a failed validation, so it renders checked again. This is inherent to
        HTML form semantics and not something the renderer can detect.
        """
        checked = self.resolve_value(name, checked)
        attrs = self.resolve_attributes(name, attributes)
        field = self.tags.checkbox(name, value, checked, attrs)
        return self.build_wrapper(field, name, label, required=required)

    def file(
        self,
        name: str,
        label: str = "",
        attributes: Optional[Attributes] = None,
        *,
        required: bool = False,
    ) -> str:
        attrs = self.resolve_attributes(name, attributes)
        field = self.tags.file(name, attrs)
        return self.build_wrapper(field, name, label, required=required)

    # --- Buttons ---------------------------------------------------------------

    def submit(self, value: str, attributes: Optional[Attributes] = None, btn_class: str = "btn") -> str:
        """Render a submit button styled as `btn` or `btn btn-<variant>`."""
        attrs = dict(attributes or {})
        attrs["type"] = "submit"
        if btn_class != "btn":
            btn_class = "btn btn-" + btn_class
        attrs["class"] = _merge_classes(attrs.get("class"), btn_class)
        return self.tags.button(value, attrs)

    def submit_default(self, value: str, attributes: Optional[Attributes] = None) -> str:
        return self.submit(value, attributes)

    def submit_primary(self, value: str, attributes: Optional[Attributes] = None) -> str:
        return self.submit(value, attributes, "primary")

    def submit_info(self, value: str, attributes: Optional[Attributes] = None) -> str:
        return self.submit(value, attributes, "info")

    def submit_success(self, value: str, attributes: Optional[Attributes] = None) -> str:
        return self.submit(value, attributes, "success")

    def submit_warning(self, value: str, attributes: Optional[Attributes] = None) -> str:
        return self.submit(value, attributes, "warning")

    def submit_danger(self, value: str, attributes: Optional[Attributes] = None) -> str:
        return self.submit(value, attributes, "danger")

    def submit_inverse(self, value: str, attributes: Optional[Attributes] = None) -> str:
        return self.submit(value, attributes, "inverse")

    def reset(self, value: str, attributes: Optional[Attributes] = None) -> str:
        attrs = dict(attributes or {})
        attrs["type"] = "reset"
        attrs["class"] = _merge_classes(attrs.get("class"), "btn")
        return self.tags.button(value, attrs)


__all__ = ["Formly", "BUTTON_VARIANTS"]
