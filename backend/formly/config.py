"""
Renderer configuration for Formly.

Intent:
    Provide one explicit, immutable record of every rendering option instead
    of assigning arbitrary attributes onto the renderer. Unknown option names
    and wrongly typed values are rejected with `FormlyConfigError`.

Behavior:
    - `RendererConfig` carries the Bootstrap defaults (form-horizontal,
      control-group error class, `.req` required marker, ...).
    - `RendererConfig.replace(**options)` validates and returns a new record.
    - `config_from_env()` reads `FORMLY_*` overrides with the same validation.

Permissions:
    Pure configuration; no external calls or privileges required.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace as _dc_replace
from typing import Any, Mapping, Optional


class FormlyConfigError(ValueError):
    """Raised for malformed renderer configuration."""


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class RendererConfig:
    # Options are form-vertical, form-horizontal, form-inline, form-search
    form_class: str = "form-horizontal"
    auto_token: bool = True
    name_as_id: bool = True
    id_prefix: str = "field_"
    required_label: str = ".req"
    required_prefix: str = ""
    required_suffix: str = " *"
    required_class: str = "label-required"
    control_group_error: str = "error"
    display_inline_errors: bool = False

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def replace(self, **options: Any) -> "RendererConfig":
        """Return a copy with `options` applied.

        Raises:
            FormlyConfigError: unknown option name or value of the wrong type.
        """
        _validate_options(options)
        return _dc_replace(self, **options)


def _validate_options(options: Mapping[str, Any]) -> None:
    known = {f.name: f for f in fields(RendererConfig)}
    unknown = sorted(set(options) - set(known))
    if unknown:
        raise FormlyConfigError(
            f"unknown renderer option(s): {', '.join(unknown)} (known: {', '.join(RendererConfig.option_names())})"
        )
    for name, value in options.items():
        expected = known[name].type
        # Annotations are strings under postponed evaluation.
        if expected in ("bool", bool):
            if not isinstance(value, bool):
                raise FormlyConfigError(f"option {name!r} expects a bool, got {type(value).__name__}")
        elif not isinstance(value, str):
            raise FormlyConfigError(f"option {name!r} expects a str, got {type(value).__name__}")


def _parse_bool(name: str, raw: str) -> bool:
    val = raw.strip().lower()
    if val in _TRUE_VALUES:
        return True
    if val in _FALSE_VALUES:
        return False
    raise FormlyConfigError(f"{name} must be a boolean flag (true/false), got {raw!r}")


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> RendererConfig:
    """Build a `RendererConfig` from `FORMLY_*` environment variables.

    Env:
        FORMLY_<OPTION> for every option of `RendererConfig`, e.g.
        FORMLY_FORM_CLASS=form-inline or FORMLY_DISPLAY_INLINE_ERRORS=true.
        Unset variables keep the defaults. String options are taken verbatim
        (no stripping) so suffixes like " *" survive.
    """
    env = os.environ if environ is None else environ
    options: dict[str, Any] = {}
    for f in fields(RendererConfig):
        var = f"FORMLY_{f.name.upper()}"
        raw = env.get(var)
        if raw is None:
            continue
        if f.type in ("bool", bool):
            options[f.name] = _parse_bool(var, raw)
        else:
            options[f.name] = raw
    return RendererConfig().replace(**options)


__all__ = [
    "FormlyConfigError",
    "RendererConfig",
    "config_from_env",
]
