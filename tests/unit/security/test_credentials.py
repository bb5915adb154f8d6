"""Credential resolution: provider selection, header formats, SSWS rewrite, client-credentials token fetch."""

import base64
from urllib.parse import parse_qs

import pytest

from okta_suspend.domain.exceptions import AuthConfigurationError, TokenRequestError
from okta_suspend.domain.models import AuthorizationHeader
from okta_suspend.domain.schemas import ActionContext
from okta_suspend.security.credentials import (
    AuthorizationCodeProvider,
    BasicAuthProvider,
    BearerTokenProvider,
    ClientCredentialsProvider,
    apply_ssws_scheme,
    resolve_credential_provider,
)

TOKEN_URL = "https://example.okta.com/oauth2/v1/token"


def _client_credentials_context(**environment) -> ActionContext:
    env = {
        "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL": TOKEN_URL,
        "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID": "client-1",
        "OAUTH2_CLIENT_CREDENTIALS_SCOPE": "okta.users.manage",
    }
    env.update(environment)
    return ActionContext(
        secrets={"OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET": "s3cret"},
        environment=env,
    )


# ---------- provider selection ----------


def test_no_credentials_configured(http_client):
    with pytest.raises(AuthConfigurationError, match="No authentication configured"):
        resolve_credential_provider(ActionContext(), http_client)


def test_empty_secret_counts_as_missing(http_client):
    with pytest.raises(AuthConfigurationError):
        resolve_credential_provider(ActionContext(secrets={"BEARER_AUTH_TOKEN": ""}), http_client)


def test_bearer_token_selected_first(http_client):
    context = ActionContext(
        secrets={
            "BEARER_AUTH_TOKEN": "tok",
            "BASIC_USERNAME": "u",
            "BASIC_PASSWORD": "p",
        }
    )
    assert isinstance(resolve_credential_provider(context, http_client), BearerTokenProvider)


def test_basic_requires_both_parts(http_client):
    with pytest.raises(AuthConfigurationError):
        resolve_credential_provider(ActionContext(secrets={"BASIC_USERNAME": "u"}), http_client)
    provider = resolve_credential_provider(
        ActionContext(secrets={"BASIC_USERNAME": "u", "BASIC_PASSWORD": "p"}), http_client
    )
    assert isinstance(provider, BasicAuthProvider)


def test_authorization_code_selected(http_client):
    context = ActionContext(secrets={"OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN": "at"})
    assert isinstance(resolve_credential_provider(context, http_client), AuthorizationCodeProvider)


def test_client_credentials_selected(http_client):
    assert isinstance(
        resolve_credential_provider(_client_credentials_context(), http_client),
        ClientCredentialsProvider,
    )


def test_client_credentials_require_token_url(http_client):
    context = _client_credentials_context(OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL="")
    with pytest.raises(AuthConfigurationError, match="OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL"):
        resolve_credential_provider(context, http_client)


# ---------- header formats ----------


async def test_bearer_header_is_static_api_token():
    header = await BearerTokenProvider("tok").authorization()
    assert header.value == "Bearer tok"
    assert header.static_api_token is True


async def test_basic_header():
    header = await BasicAuthProvider("user", "pass").authorization()
    assert header.value == "Basic " + base64.b64encode(b"user:pass").decode("ascii")
    assert header.static_api_token is False


async def test_authorization_code_header():
    header = await AuthorizationCodeProvider("at").authorization()
    assert header.value == "Bearer at"
    assert header.static_api_token is False


# ---------- SSWS rewrite ----------


def test_ssws_prefix_added_for_static_token():
    header = apply_ssws_scheme(AuthorizationHeader("Bearer token-without-prefix", static_api_token=True))
    assert header.value == "SSWS token-without-prefix"


def test_ssws_prefix_not_doubled():
    header = apply_ssws_scheme(AuthorizationHeader("Bearer SSWS test-token", static_api_token=True))
    assert header.value == "SSWS test-token"


def test_oauth_bearer_never_rewritten():
    header = AuthorizationHeader("Bearer oauth-access-token")
    assert apply_ssws_scheme(header) is header


def test_basic_never_rewritten():
    header = AuthorizationHeader("Basic dTpw", static_api_token=True)
    assert apply_ssws_scheme(header).value == "Basic dTpw"


# ---------- client credentials ----------


async def test_client_credentials_in_header(okta, http_client):
    okta.queue(200, json={"access_token": "cc-token", "token_type": "Bearer", "expires_in": 3600})
    provider = resolve_credential_provider(_client_credentials_context(), http_client)

    header = await provider.authorization()

    assert header.value == "Bearer cc-token"
    assert header.static_api_token is False
    request = okta.requests[0]
    assert str(request.url) == TOKEN_URL
    assert request.headers["Authorization"] == "Basic " + base64.b64encode(b"client-1:s3cret").decode("ascii")
    form = parse_qs(request.content.decode())
    assert form["grant_type"] == ["client_credentials"]
    assert form["scope"] == ["okta.users.manage"]
    assert "client_secret" not in form


async def test_client_credentials_in_params(okta, http_client):
    okta.queue(200, json={"access_token": "cc-token"})
    context = _client_credentials_context(
        OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE="InParams",
        OAUTH2_CLIENT_CREDENTIALS_AUDIENCE="api://default",
    )
    provider = resolve_credential_provider(context, http_client)

    await provider.authorization()

    request = okta.requests[0]
    assert "Authorization" not in request.headers
    form = parse_qs(request.content.decode())
    assert form["client_id"] == ["client-1"]
    assert form["client_secret"] == ["s3cret"]
    assert form["audience"] == ["api://default"]


async def test_client_credentials_token_endpoint_failure(okta, http_client):
    okta.queue(401, json={"error": "invalid_client"})
    provider = resolve_credential_provider(_client_credentials_context(), http_client)

    with pytest.raises(TokenRequestError) as exc_info:
        await provider.authorization()

    assert exc_info.value.status_code == 401


async def test_client_credentials_missing_access_token(okta, http_client):
    okta.queue(200, json={"token_type": "Bearer"})
    provider = resolve_credential_provider(_client_credentials_context(), http_client)

    with pytest.raises(TokenRequestError) as exc_info:
        await provider.authorization()

    assert exc_info.value.status_code == 500
