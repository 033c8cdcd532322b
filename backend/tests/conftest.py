"""
Pytest configuration for Formly tests.

Why: Force AnyIO to use the asyncio backend for the HTTP round-trip tests and
provide small fakes for the renderer ports so core tests need no web stack.
"""
import sys
from pathlib import Path

import pytest

# Ensure `backend.*` is importable without installing the project
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from backend.formly import Formly, MappingErrors, MappingOldInput, RendererConfig, StaticUri  # noqa: E402
from backend.web.components.forms.tags import HtmlTagBuilder  # noqa: E402


TOKEN_FIELD = '<input type="hidden" name="csrf_token" value="tok-123">'


class FakeCsrf:
    def token(self) -> str:
        return TOKEN_FIELD


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def tags() -> HtmlTagBuilder:
    return HtmlTagBuilder()


@pytest.fixture
def make_formly(tags):
    """Factory building a renderer with in-memory ports.

    Keyword arguments: old_input, errors, defaults, uri, plus any renderer
    option (e.g. display_inline_errors=True).
    """

    def _make(*, old_input=None, errors=None, defaults=None, uri="/contact", **options):
        return Formly(
            tags,
            old_input=MappingOldInput(old_input),
            errors=MappingErrors(errors),
            csrf=FakeCsrf(),
            uri=StaticUri(uri, root="http://test.local/"),
            defaults=defaults,
            config=RendererConfig().replace(**options),
        )

    return _make
