"""
Request wiring for the Formly renderer.

Why: The renderer only knows ports. This module backs them with per-session
server-side state so a form can be repopulated after a failed POST:

- `FlashStore` keeps the submitted input and validation errors of one failed
  submission until the next request of the same session pulls them.
- `CsrfTokenStore` keeps one expiring synchronizer token per session.
- `get_formly` is the FastAPI dependency handing a ready renderer to routes.

Security: Cookies carry only an opaque session id. Flashed input and tokens
stay server-side. In-memory stores are meant for single-process deployments;
replace them with a shared store when scaling out.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import hmac
import secrets
import time

from fastapi import Request

from backend.formly import Formly, MappingErrors, MappingOldInput, RendererConfig
from backend.web.components.forms.tags import HtmlTagBuilder


SESSION_COOKIE_NAME = "formly_session"
CSRF_FIELD_NAME = "csrf_token"


def _now() -> int:
    return int(time.time())


@dataclass
class FlashRecord:
    old_input: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)
    expires_at: Optional[int] = None


class FlashStore:
    def __init__(self) -> None:
        self._data: Dict[str, FlashRecord] = {}

    def flash(
        self,
        session_id: str,
        *,
        old_input: Dict[str, Any],
        errors: Dict[str, List[str]],
        ttl_seconds: int = 300,
    ) -> FlashRecord:
        self._sweep()
        rec = FlashRecord(old_input=dict(old_input), errors={k: list(v) for k, v in errors.items()}, expires_at=_now() + ttl_seconds)
        self._data[session_id] = rec
        return rec

    def _sweep(self) -> None:
        now = _now()
        for sid in [s for s, rec in self._data.items() if rec.expires_at and rec.expires_at < now]:
            del self._data[sid]

    def pull(self, session_id: Optional[str]) -> Optional[FlashRecord]:
        """Remove and return the flashed record; expired records are dropped."""
        if not session_id:
            return None
        rec = self._data.pop(session_id, None)
        if not rec:
            return None
        if rec.expires_at and rec.expires_at < _now():
            return None
        return rec


@dataclass
class TokenRecord:
    token: str
    expires_at: int


class CsrfTokenStore:
    """One synchronizer token per session, valid for `ttl_seconds`."""

    def __init__(self, ttl_seconds: int = 3600) -> None:
        self.ttl_seconds = ttl_seconds
        self._tokens: Dict[str, TokenRecord] = {}

    def get_or_create(self, session_id: str) -> str:
        rec = self._tokens.get(session_id)
        if rec is None or rec.expires_at < _now():
            self._sweep()
            rec = TokenRecord(token=secrets.token_urlsafe(24), expires_at=_now() + self.ttl_seconds)
            self._tokens[session_id] = rec
        return rec.token

    def validate(self, session_id: Optional[str], form_value: Optional[str]) -> bool:
        if not session_id or not form_value:
            return False
        rec = self._tokens.get(session_id)
        if rec is None:
            return False
        if rec.expires_at < _now():
            self._tokens.pop(session_id, None)
            return False
        return hmac.compare_digest(rec.token, str(form_value))

    def _sweep(self) -> None:
        now = _now()
        for sid in [s for s, rec in self._tokens.items() if rec.expires_at < now]:
            del self._tokens[sid]


# --- Port adapters ----------------------------------------------------------------

class RequestCsrf:
    """Emits the hidden CSRF field for the request's session."""

    def __init__(self, store: CsrfTokenStore, session_id: str, tags: HtmlTagBuilder) -> None:
        self.store = store
        self.session_id = session_id
        self.tags = tags

    def token(self) -> str:
        return self.tags.input("hidden", CSRF_FIELD_NAME, self.store.get_or_create(self.session_id))


class RequestUri:
    def __init__(self, request: Request) -> None:
        self.request = request

    def current(self) -> str:
        return self.request.url.path

    def root(self) -> str:
        return str(self.request.base_url)


def session_id(request: Request) -> Optional[str]:
    """Session id issued by the session middleware, or the incoming cookie."""
    return getattr(request.state, "session_id", None) or request.cookies.get(SESSION_COOKIE_NAME)


def pull_flash(request: Request) -> FlashRecord:
    """Pull the flashed submission once per request.

    The record is cached on `request.state` so several renderers built for
    the same request see the same old input.
    """
    cached = getattr(request.state, "formly_flash", None)
    if cached is not None:
        return cached
    store: FlashStore = request.app.state.flash_store
    rec = store.pull(session_id(request)) or FlashRecord()
    request.state.formly_flash = rec
    return rec


def get_formly(request: Request) -> Formly:
    """FastAPI dependency: a renderer bound to the current request."""
    tags = HtmlTagBuilder()
    flashed = pull_flash(request)
    config: RendererConfig = getattr(request.app.state, "formly_config", None) or RendererConfig()
    return Formly(
        tags,
        old_input=MappingOldInput(flashed.old_input),
        errors=MappingErrors(flashed.errors),
        csrf=RequestCsrf(request.app.state.csrf_store, session_id(request) or "", tags),
        uri=RequestUri(request),
        config=config,
    )


__all__ = [
    "SESSION_COOKIE_NAME",
    "CSRF_FIELD_NAME",
    "FlashRecord",
    "FlashStore",
    "TokenRecord",
    "CsrfTokenStore",
    "RequestCsrf",
    "RequestUri",
    "session_id",
    "pull_flash",
    "get_formly",
]
