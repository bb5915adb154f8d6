"""Fixtures for API unit tests: action wired to the scripted Okta, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from okta_suspend.handlers import SuspendUserAction
from okta_suspend.main import app


@pytest.fixture
def app_with_overrides(settings, http_client, logger, sleep):
    """App with the action overridden so tests never reach a real tenant or wait on backoff."""
    from okta_suspend.api import dependencies

    action = SuspendUserAction(settings=settings, http_client=http_client, logger=logger, sleep=sleep)
    app.dependency_overrides[dependencies.get_action] = lambda: action
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def bearer_body():
    return {
        "params": {"userId": "user123", "address": "https://example.okta.com"},
        "context": {"secrets": {"BEARER_AUTH_TOKEN": "SSWS test-token"}, "environment": {}},
    }
