"""Domain model for the suspend action. Pure data, no HTTP."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class UserStatus(str, Enum):
    """Okta lifecycle statuses. The directory may report others; status fields stay plain strings."""

    STAGED = "STAGED"
    PROVISIONED = "PROVISIONED"
    ACTIVE = "ACTIVE"
    RECOVERY = "RECOVERY"
    LOCKED_OUT = "LOCKED_OUT"
    PASSWORD_EXPIRED = "PASSWORD_EXPIRED"
    SUSPENDED = "SUSPENDED"
    DEPROVISIONED = "DEPROVISIONED"


class FlowStrategy(str, Enum):
    """Ordering of the precondition read relative to the suspend call."""

    CHECK_THEN_SUSPEND = "check_then_suspend"
    SUSPEND_THEN_CHECK = "suspend_then_check"


def utc_now_iso() -> str:
    """Current UTC time in the directory's timestamp format (millisecond precision, Z suffix)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class AuthorizationHeader:
    """
    Resolved Authorization header value. static_api_token is set only for raw API tokens,
    the one case where the directory's SSWS scheme applies.
    """

    value: str = field(repr=False)
    static_api_token: bool = False


@dataclass(frozen=True)
class AccountRecord:
    """Snapshot of a user read from the directory. Never cached across invocations."""

    user_id: str
    status: str
    status_changed: Optional[str] = None
    last_updated: Optional[str] = None

    @classmethod
    def from_payload(cls, user_id: str, payload: Dict[str, Any]) -> "AccountRecord":
        return cls(
            user_id=user_id,
            status=payload["status"],
            status_changed=payload.get("statusChanged"),
            last_updated=payload.get("lastUpdated"),
        )

    @property
    def is_suspended(self) -> bool:
        return self.status == UserStatus.SUSPENDED.value

    def changed_at(self) -> str:
        return self.status_changed or self.last_updated or utc_now_iso()


@dataclass(frozen=True)
class SuspendRequest:
    """One attempt's inputs. Built fresh per attempt."""

    user_id: str
    address: str
    authorization: AuthorizationHeader
