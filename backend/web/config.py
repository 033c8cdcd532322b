"""
Configuration and startup checks for the Formly web app.

Why: A form without a CSRF token is easy to ship by accident (one env flag).
This module loads the renderer options once at startup and refuses to start
a production-like deployment that disabled the token.

Permissions: The caller needs no special privileges. The functions read
environment variables and raise `SystemExit` on fatal misconfiguration.
"""
from __future__ import annotations

import os
from typing import Mapping, Optional

from backend.formly import FormlyConfigError, RendererConfig, config_from_env


def _is_prod_like(env: str) -> bool:
    env_l = (env or "").lower()
    return env_l in {"prod", "production", "stage", "staging"}


def load_form_config(environ: Optional[Mapping[str, str]] = None) -> RendererConfig:
    """Load renderer options from `FORMLY_*` variables or abort startup.

    Checks:
    - Every FORMLY_* value must parse (booleans as true/false, ...).
    - FORMLY_AUTO_TOKEN must stay enabled when FORMLY_ENV is prod-like.
    """
    env = os.environ if environ is None else environ
    try:
        cfg = config_from_env(env)
    except FormlyConfigError as exc:
        raise SystemExit(f"Refusing to start: invalid form configuration ({exc}).")

    if _is_prod_like(env.get("FORMLY_ENV", "dev")) and not cfg.auto_token:
        raise SystemExit(
            "Refusing to start: FORMLY_AUTO_TOKEN=false is not allowed in production/staging."
        )
    return cfg
