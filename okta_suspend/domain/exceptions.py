"""Action exceptions. Every error carries the status code the recovery policy classifies on."""

from typing import Optional


class ActionError(Exception):
    """Base for all suspend-action errors."""

    default_status_code: Optional[int] = None

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status_code
        super().__init__(message)


class InputValidationError(ActionError):
    """Raised when userId is missing or malformed. No network call is made."""

    default_status_code = 400


class ConfigurationError(ActionError):
    """Raised when the invocation cannot be configured (credentials, address)."""


class AuthConfigurationError(ConfigurationError):
    """Raised when no usable credential can be resolved from the invocation context."""


class AddressConfigurationError(ConfigurationError):
    """Raised when no directory base address can be resolved."""


class OperationError(ActionError):
    """Raised when a directory call fails. status_code mirrors the transport status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, status_code)


class FetchError(OperationError):
    """Raised when reading the user record does not succeed."""


class ParseError(OperationError):
    """Raised when a user record body cannot be decoded."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message, status_code)


class InvalidStateError(OperationError):
    """Raised when the user is not in a state the suspend transition is valid from."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class TokenRequestError(OperationError):
    """Raised when the OAuth2 token endpoint does not issue an access token."""


class UnrecoverableError(OperationError):
    """Raised when the recovery policy gives up. Wraps the original failure."""

    def __init__(self, user_id: str, original: BaseException) -> None:
        self.user_id = user_id
        self.original = original
        original_message = getattr(original, "message", None) or str(original)
        super().__init__(
            f"Unrecoverable error suspending user {user_id}: {original_message}",
            getattr(original, "status_code", None),
        )
