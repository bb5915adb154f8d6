"""Shared fixtures: scripted Okta transport, settings, action wired to both."""

from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from okta_suspend.config.settings import AppSettings
from okta_suspend.domain.models import AuthorizationHeader, SuspendRequest
from okta_suspend.domain.schemas import ActionContext
from okta_suspend.handlers import SuspendUserAction

ADDRESS = "https://example.okta.com"


class FakeOkta:
    """Scripted responses served in order; every request is recorded for assertions."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def queue(self, status_code: int, json: Any = None, content: Optional[bytes] = None) -> "FakeOkta":
        if json is not None:
            self._responses.append(httpx.Response(status_code, json=json))
        else:
            self._responses.append(httpx.Response(status_code, content=content or b""))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request {request.method} {request.url}")
        return self._responses.pop(0)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def methods(self) -> list[str]:
        return [r.method for r in self.requests]

    @property
    def posts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def okta():
    return FakeOkta()


@pytest.fixture
async def http_client(okta):
    async with httpx.AsyncClient(transport=okta.transport) as client:
        yield client


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, environment="test", address=None)


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def sleep():
    return AsyncMock(return_value=None)


@pytest.fixture
def action(settings, http_client, logger, sleep):
    return SuspendUserAction(settings=settings, http_client=http_client, logger=logger, sleep=sleep)


@pytest.fixture
def bearer_context():
    return ActionContext(secrets={"BEARER_AUTH_TOKEN": "SSWS test-token"})


@pytest.fixture
def suspend_request():
    return SuspendRequest(
        user_id="user123",
        address=ADDRESS,
        authorization=AuthorizationHeader("SSWS test-token", static_api_token=True),
    )
