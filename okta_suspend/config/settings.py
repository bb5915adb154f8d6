# okta_suspend/config/settings.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from okta_suspend.domain.models import FlowStrategy


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "okta-suspend-user"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Directory ---
    # Fallback when neither the job params nor the invocation environment carry an address.
    address: Optional[str] = None
    flow_strategy: FlowStrategy = FlowStrategy.CHECK_THEN_SUSPEND
    eligible_status: str = Field("ACTIVE", min_length=1)

    # --- Recovery ---
    rate_limit_backoff_ms: int = Field(30_000, ge=0)
    service_unavailable_backoff_ms: int = Field(10_000, ge=0)

    # --- Transport ---
    http_timeout_seconds: float = Field(30.0, gt=0)

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()

