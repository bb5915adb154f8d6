# okta_suspend/config/address.py

from typing import Any, Mapping, Optional

from okta_suspend.domain.exceptions import AddressConfigurationError
from okta_suspend.domain.schemas import ActionContext

ADDRESS_ENV = "ADDRESS"


def resolve_address(
    params: Mapping[str, Any],
    context: ActionContext,
    default: Optional[str] = None,
) -> str:
    """Job param, then invocation environment, then process settings. Trailing slashes stripped."""
    address = params.get("address") or context.env(ADDRESS_ENV) or default
    if not address or not str(address).strip():
        raise AddressConfigurationError(
            "No URL specified. Provide address parameter or ADDRESS environment variable"
        )
    return str(address).strip().rstrip("/")
