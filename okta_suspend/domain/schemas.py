"""Pydantic schemas for action input and output. camelCase on the wire."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ActionContext(BaseModel):
    """Execution context handed over by the job framework. Secrets never render in repr or logs."""

    secrets: Dict[str, SecretStr] = Field(default_factory=dict)
    environment: Dict[str, str] = Field(default_factory=dict)

    def secret(self, name: str) -> Optional[str]:
        value = self.secrets.get(name)
        if value is None:
            return None
        return value.get_secret_value() or None

    def env(self, name: str) -> Optional[str]:
        return self.environment.get(name) or None


class SuspendResult(BaseModel):
    """Sole externally observable output of a successful run."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(..., alias="userId")
    suspended: bool = True
    address: str
    suspended_at: str = Field(..., alias="suspendedAt")
    status: str
    recovery_method: Optional[str] = Field(None, alias="recoveryMethod")

    def to_output(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class HaltResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field("unknown", alias="userId")
    reason: Optional[str] = None
    halted_at: str = Field(..., alias="haltedAt")
    cleanup_completed: bool = Field(True, alias="cleanupCompleted")

    def to_output(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ActionRequest(BaseModel):
    """Body the job framework posts to the action routes."""

    params: Dict[str, Any] = Field(default_factory=dict)
    context: ActionContext = Field(default_factory=ActionContext)
