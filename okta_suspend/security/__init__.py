"""Security layer: credential resolution and the directory's auth scheme. No FastAPI."""

from okta_suspend.security.credentials import (
    AuthorizationCodeProvider,
    BasicAuthProvider,
    BearerTokenProvider,
    ClientCredentialsProvider,
    CredentialProvider,
    apply_ssws_scheme,
    resolve_credential_provider,
)

__all__ = [
    "AuthorizationCodeProvider",
    "BasicAuthProvider",
    "BearerTokenProvider",
    "ClientCredentialsProvider",
    "CredentialProvider",
    "apply_ssws_scheme",
    "resolve_credential_provider",
]
