"""Input validators. Pure functions, no network."""

from typing import Any

from okta_suspend.domain.exceptions import InputValidationError


def validate_user_id(user_id: Any) -> str:
    """Return the stripped userId. Raises InputValidationError if missing, blank, or not a string."""
    if user_id is None:
        raise InputValidationError("userId is required")
    if not isinstance(user_id, str):
        raise InputValidationError(f"userId must be a string, got {type(user_id).__name__}")
    stripped = user_id.strip()
    if not stripped:
        raise InputValidationError("userId must not be empty")
    return stripped
