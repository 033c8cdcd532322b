"Formly demo app"
from __future__ import annotations

import logging
import os
import secrets
import sys
from typing import Dict, List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from backend.formly import Formly
from backend.web.components.base import Component
from backend.web.config import load_form_config
from backend.web.request_context import (
    CSRF_FIELD_NAME,
    SESSION_COOKIE_NAME,
    CsrfTokenStore,
    FlashStore,
    get_formly,
    session_id,
)


def _should_load_dotenv() -> bool:
    """Decide if we should load a local .env file.

    - Never load under pytest to avoid contaminating test env.
    - Allow explicit opt-out via FORMLY_ENABLE_DOTENV (default true outside
      pytest).
    """
    if "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST"):
        return False
    flag = (os.getenv("FORMLY_ENABLE_DOTENV", "true") or "").strip().lower()
    return flag in ("1", "true", "yes")


if _should_load_dotenv():
    from dotenv import load_dotenv

    load_dotenv()


logger = logging.getLogger("formly.web")

app = FastAPI(title="Formly", description="Bootstrap form helpers", version="1.0.1")
app.state.formly_config = load_form_config()
app.state.flash_store = FlashStore()
app.state.csrf_store = CsrfTokenStore()

TOPICS = {
    "general": "General question",
    "billing": "Billing",
    "Support": {"bug": "Bug report", "feature": "Feature request"},
}
CONTACT_DEFAULTS = {"topic": "general"}
MESSAGE_MAX_LENGTH = 2000


@app.middleware("http")
async def session_cookie(request: Request, call_next):
    """Issue an opaque session id on first visit."""
    sid = request.cookies.get(SESSION_COOKIE_NAME)
    issued = False
    if not sid:
        sid = secrets.token_urlsafe(24)
        issued = True
    request.state.session_id = sid
    response = await call_next(request)
    if issued:
        response.set_cookie(SESSION_COOKIE_NAME, sid, httponly=True, secure=True, samesite="lax", path="/")
    return response


def _page(title: str, content: str) -> str:
    return (
        "<!DOCTYPE html>"
        f"<html><head><meta charset=\"utf-8\"><title>{Component.escape(title)}</title></head>"
        f"<body><main id=\"main-content\">{content}</main></body></html>"
    )


def validate_contact(data: Dict[str, str]) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    if not (data.get("name") or "").strip():
        errors.setdefault("name", []).append("Please tell us your name.")
    email = (data.get("email") or "").strip()
    if not email:
        errors.setdefault("email", []).append("An email address is required.")
    elif "@" not in email:
        errors.setdefault("email", []).append("That does not look like an email address.")
    if len(data.get("message") or "") > MESSAGE_MAX_LENGTH:
        errors.setdefault("message", []).append(f"Messages are limited to {MESSAGE_MAX_LENGTH} characters.")
    return errors


def render_contact_form(form: Formly) -> str:
    form.set_defaults(CONTACT_DEFAULTS)
    return "".join(
        (
            form.open(),
            form.text("name", "Name.req"),
            form.text("email", "Email.req", attributes={"placeholder": "you@example.com"}),
            form.select("topic", "Topic", TOPICS),
            form.textarea("message", "Message"),
            form.checkbox("newsletter", "Subscribe to the newsletter"),
            form.actions([form.submit_primary("Send"), form.reset("Clear")]),
            form.close(),
        )
    )


@app.get("/contact", response_class=HTMLResponse)
async def contact_form(request: Request, form: Formly = Depends(get_formly)):
    notice = ""
    if request.query_params.get("sent") == "1":
        notice = '<div class="alert alert-success">Thanks, your message was sent.</div>'
    return HTMLResponse(_page("Contact", notice + render_contact_form(form)))


@app.post("/contact")
async def contact_submit(request: Request):
    form = await request.form()
    sid = session_id(request)
    if not request.app.state.csrf_store.validate(sid, form.get(CSRF_FIELD_NAME)):
        logger.warning("CSRF validation failed for %s", request.url.path)
        return Response("invalid csrf token", status_code=403, media_type="text/plain")

    data = {k: str(v) for k, v in form.items() if k != CSRF_FIELD_NAME}
    errors = validate_contact(data)
    if errors:
        logger.info("Contact form rejected: %s", ", ".join(sorted(errors)))
        request.app.state.flash_store.flash(sid, old_input=data, errors=errors)
        return RedirectResponse(url="/contact", status_code=303)
    return RedirectResponse(url="/contact?sent=1", status_code=303)
