"""Domain layer: models, schemas, validators, exceptions. No HTTP."""

from okta_suspend.domain.exceptions import (
    ActionError,
    AddressConfigurationError,
    AuthConfigurationError,
    ConfigurationError,
    FetchError,
    InputValidationError,
    InvalidStateError,
    OperationError,
    ParseError,
    TokenRequestError,
    UnrecoverableError,
)
from okta_suspend.domain.models import (
    AccountRecord,
    AuthorizationHeader,
    FlowStrategy,
    SuspendRequest,
    UserStatus,
)
from okta_suspend.domain.schemas import ActionContext, ActionRequest, HaltResult, SuspendResult
from okta_suspend.domain.validators import validate_user_id

__all__ = [
    "AccountRecord",
    "ActionContext",
    "ActionError",
    "ActionRequest",
    "AddressConfigurationError",
    "AuthConfigurationError",
    "AuthorizationHeader",
    "ConfigurationError",
    "FetchError",
    "FlowStrategy",
    "HaltResult",
    "InputValidationError",
    "InvalidStateError",
    "OperationError",
    "ParseError",
    "SuspendRequest",
    "SuspendResult",
    "TokenRequestError",
    "UnrecoverableError",
    "UserStatus",
    "validate_user_id",
]
