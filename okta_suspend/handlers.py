"""Job handlers for the host framework: invoke, error, halt. Plus run, which chains invoke and recovery in-process."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Mapping, Optional

import httpx

from okta_suspend.application.suspend_service import SuspendUserService
from okta_suspend.config.address import resolve_address
from okta_suspend.config.settings import AppSettings, get_settings
from okta_suspend.core.context import user_id_ctx
from okta_suspend.domain.exceptions import (
    ActionError,
    InputValidationError,
    OperationError,
    UnrecoverableError,
)
from okta_suspend.domain.models import SuspendRequest, utc_now_iso
from okta_suspend.domain.schemas import ActionContext, HaltResult, SuspendResult
from okta_suspend.domain.validators import validate_user_id
from okta_suspend.infrastructure.okta.users_client import OktaUsersClient
from okta_suspend.resilience.recovery_policy import RecoveryPolicy
from okta_suspend.security.credentials import apply_ssws_scheme, resolve_credential_provider

UNKNOWN_USER = "unknown"


def _coerce_error(error: Any) -> BaseException:
    """Accept the error as an exception or as the framework's {message, statusCode} payload."""
    if isinstance(error, BaseException):
        return error
    if isinstance(error, Mapping):
        message = str(error.get("message") or "Unknown error")
        status_code = error.get("statusCode", error.get("status_code"))
        if isinstance(status_code, str) and status_code.strip().isdigit():
            status_code = int(status_code)
        if isinstance(status_code, int):
            return OperationError(message, status_code)
        return ActionError(message)
    if isinstance(error, str) and error:
        return ActionError(error)
    raise InputValidationError("error is required")


class SuspendUserAction:
    """
    Suspends one Okta user per invocation. Stateless across invocations; settings,
    transport, logger and sleep are injected so tests never touch the network or wait.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._settings = settings or get_settings()
        self._http_client = http_client
        self._logger = logger or logging.getLogger(__name__)
        self._sleep = sleep

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._settings.http_timeout_seconds) as client:
            yield client

    def recovery_policy(self) -> RecoveryPolicy:
        """Fresh policy per invocation; it records the transitions it went through."""
        return RecoveryPolicy(
            rate_limit_backoff_ms=self._settings.rate_limit_backoff_ms,
            service_unavailable_backoff_ms=self._settings.service_unavailable_backoff_ms,
            sleep=self._sleep,
            logger=self._logger,
        )

    async def invoke(
        self,
        params: Mapping[str, Any],
        context: Optional[ActionContext] = None,
    ) -> SuspendResult:
        """
        Validate input, resolve address and credentials, then run one suspend attempt.
        Validation and configuration errors are raised before any network call.
        """
        context = context or ActionContext()
        try:
            user_id = validate_user_id(params.get("userId"))
        except InputValidationError as e:
            self._logger.error("suspension_rejected", extra={"error": e.message})
            raise
        token = user_id_ctx.set(user_id)
        try:
            self._logger.info("suspension_started", extra={"user_id": user_id})
            address = resolve_address(params, context, self._settings.address)
            async with self._client() as http:
                provider = resolve_credential_provider(context, http)
                authorization = apply_ssws_scheme(await provider.authorization())
                request = SuspendRequest(user_id=user_id, address=address, authorization=authorization)
                service = SuspendUserService(
                    OktaUsersClient(http),
                    self._logger,
                    flow_strategy=self._settings.flow_strategy,
                    eligible_status=self._settings.eligible_status,
                )
                result = await service.suspend(request)
        except ActionError as e:
            self._logger.error(
                "suspension_failed",
                extra={"user_id": user_id, "error": e.message, "status_code": e.status_code},
            )
            raise
        finally:
            user_id_ctx.reset(token)

        self._logger.info(
            "suspension_completed",
            extra={"user_id": user_id, "status": result.status, "suspended_at": result.suspended_at},
        )
        return result

    async def error(
        self,
        params: Mapping[str, Any],
        context: Optional[ActionContext] = None,
    ) -> SuspendResult:
        """
        Recovery entry point. params carries the original job params plus "error".
        Retries once for rate limiting or service unavailability, otherwise raises
        UnrecoverableError so the framework knows this component is done.
        """
        error = _coerce_error(params.get("error"))
        user_id = params.get("userId") or UNKNOWN_USER
        self._logger.error(f"User suspension failed for user {user_id}: {error}")

        retry_params: Dict[str, Any] = {k: v for k, v in params.items() if k != "error"}
        policy = self.recovery_policy()
        return await policy.recover(
            user_id,
            error,
            lambda: self.invoke(retry_params, context),
        )

    async def run(
        self,
        params: Mapping[str, Any],
        context: Optional[ActionContext] = None,
    ) -> SuspendResult:
        """invoke, and on an operation failure hand over to the recovery policy."""
        try:
            return await self.invoke(params, context)
        except UnrecoverableError:
            raise
        except OperationError as e:
            return await self.error({**params, "error": e}, context)

    async def halt(
        self,
        params: Mapping[str, Any],
        context: Optional[ActionContext] = None,
    ) -> HaltResult:
        """Nothing to cancel: the suspend call either completed or it did not."""
        user_id = str(params.get("userId") or UNKNOWN_USER)
        reason = params.get("reason")
        if reason is not None:
            reason = str(reason)
        self._logger.info(
            f"User suspension job is being halted ({reason}) for user {user_id}",
            extra={"user_id": user_id},
        )
        return HaltResult(user_id=user_id, reason=reason, halted_at=utc_now_iso())
