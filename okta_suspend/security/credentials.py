"""
Credential resolution. One provider per invocation, chosen by which secrets the job context
carries; the suspend flow only ever sees the resulting AuthorizationHeader.
"""

import base64
from typing import Optional, Protocol

import httpx

from okta_suspend.domain.exceptions import AuthConfigurationError, TokenRequestError
from okta_suspend.domain.models import AuthorizationHeader
from okta_suspend.domain.schemas import ActionContext

BEARER_PREFIX = "Bearer "
SSWS_PREFIX = "SSWS "

BEARER_AUTH_TOKEN = "BEARER_AUTH_TOKEN"
BASIC_USERNAME = "BASIC_USERNAME"
BASIC_PASSWORD = "BASIC_PASSWORD"
OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN = "OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN"
OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET = "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET"
OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID = "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID"
OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL = "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL"
OAUTH2_CLIENT_CREDENTIALS_SCOPE = "OAUTH2_CLIENT_CREDENTIALS_SCOPE"
OAUTH2_CLIENT_CREDENTIALS_AUDIENCE = "OAUTH2_CLIENT_CREDENTIALS_AUDIENCE"
OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE = "OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE"

AUTH_STYLE_IN_HEADER = "InHeader"
AUTH_STYLE_IN_PARAMS = "InParams"


class CredentialProvider(Protocol):
    """Produces the Authorization header for one invocation."""

    async def authorization(self) -> AuthorizationHeader: ...


class BearerTokenProvider:
    """Static API token. The only provider whose header may be rewritten to the SSWS scheme."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def authorization(self) -> AuthorizationHeader:
        return AuthorizationHeader(f"{BEARER_PREFIX}{self._token}", static_api_token=True)


class BasicAuthProvider:
    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    async def authorization(self) -> AuthorizationHeader:
        raw = f"{self._username}:{self._password}".encode("utf-8")
        return AuthorizationHeader(f"Basic {base64.b64encode(raw).decode('ascii')}")


class AuthorizationCodeProvider:
    """Access token already obtained through the OAuth2 authorization-code flow."""

    def __init__(self, access_token: str) -> None:
        self._access_token = access_token

    async def authorization(self) -> AuthorizationHeader:
        return AuthorizationHeader(f"{BEARER_PREFIX}{self._access_token}")


class ClientCredentialsProvider:
    """Fetches an access token with the OAuth2 client-credentials grant."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_url: str,
        client_id: str,
        client_secret: str,
        scope: Optional[str] = None,
        audience: Optional[str] = None,
        auth_style: str = AUTH_STYLE_IN_HEADER,
    ) -> None:
        self._http = http_client
        self._token_url = token_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._scope = scope
        self._audience = audience
        self._auth_style = auth_style

    async def authorization(self) -> AuthorizationHeader:
        data = {"grant_type": "client_credentials"}
        if self._scope:
            data["scope"] = self._scope
        if self._audience:
            data["audience"] = self._audience

        auth = None
        if self._auth_style == AUTH_STYLE_IN_PARAMS:
            data["client_id"] = self._client_id
            data["client_secret"] = self._client_secret
        else:
            auth = httpx.BasicAuth(self._client_id, self._client_secret)

        response = await self._http.post(
            self._token_url,
            data=data,
            auth=auth,
            headers={"Accept": "application/json"},
        )
        if not response.is_success:
            raise TokenRequestError(
                f"OAuth2 token request failed: HTTP {response.status_code}",
                response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise TokenRequestError(f"Cannot parse OAuth2 token response: {e}", 500) from e
        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            raise TokenRequestError("OAuth2 token response did not include an access_token", 500)
        return AuthorizationHeader(f"{BEARER_PREFIX}{access_token}")


def resolve_credential_provider(
    context: ActionContext,
    http_client: httpx.AsyncClient,
) -> CredentialProvider:
    """
    Pick the provider for the configured auth type: bearer token, basic, OAuth2
    authorization code, then OAuth2 client credentials. Raises AuthConfigurationError
    when nothing usable is configured.
    """
    token = context.secret(BEARER_AUTH_TOKEN)
    if token:
        return BearerTokenProvider(token)

    username = context.secret(BASIC_USERNAME)
    password = context.secret(BASIC_PASSWORD)
    if username and password:
        return BasicAuthProvider(username, password)

    access_token = context.secret(OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN)
    if access_token:
        return AuthorizationCodeProvider(access_token)

    client_secret = context.secret(OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET)
    if client_secret:
        token_url = context.env(OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL)
        client_id = context.env(OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID)
        if not token_url or not client_id:
            raise AuthConfigurationError(
                "OAuth2 client credentials require "
                f"{OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL} and {OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID}"
            )
        return ClientCredentialsProvider(
            http_client,
            token_url=token_url,
            client_id=client_id,
            client_secret=client_secret,
            scope=context.env(OAUTH2_CLIENT_CREDENTIALS_SCOPE),
            audience=context.env(OAUTH2_CLIENT_CREDENTIALS_AUDIENCE),
            auth_style=context.env(OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE) or AUTH_STYLE_IN_HEADER,
        )

    raise AuthConfigurationError("No authentication configured")


def apply_ssws_scheme(header: AuthorizationHeader) -> AuthorizationHeader:
    """Rewrite "Bearer <token>" to Okta's "SSWS <token>" for static API tokens only."""
    if not header.static_api_token or not header.value.startswith(BEARER_PREFIX):
        return header
    token = header.value[len(BEARER_PREFIX):]
    value = token if token.startswith(SSWS_PREFIX) else f"{SSWS_PREFIX}{token}"
    return AuthorizationHeader(value, static_api_token=True)
