"""Suspend application service. Precondition check, suspend call, verification read."""

import logging
from typing import Optional

import httpx

from okta_suspend.domain.exceptions import (
    FetchError,
    InvalidStateError,
    OperationError,
    ParseError,
)
from okta_suspend.domain.models import AccountRecord, FlowStrategy, SuspendRequest, UserStatus
from okta_suspend.domain.schemas import SuspendResult
from okta_suspend.infrastructure.okta.users_client import OktaUsersClient


def _suspend_error_message(response: httpx.Response) -> str:
    """Prefer the directory's errorSummary; fall back to the bare status code."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("errorSummary"):
        return f"Failed to suspend user: {body['errorSummary']}"
    return f"Failed to suspend user: HTTP {response.status_code}"


class SuspendUserService:
    """
    Orchestrates one suspend attempt against the directory. No retries here; the recovery
    policy owns those. The flow strategy only changes ordering: whichever strategy runs,
    a SuspendResult is built from a read that reported SUSPENDED.
    """

    def __init__(
        self,
        users_client: OktaUsersClient,
        logger: logging.Logger,
        flow_strategy: FlowStrategy = FlowStrategy.CHECK_THEN_SUSPEND,
        eligible_status: str = UserStatus.ACTIVE.value,
    ) -> None:
        self._client = users_client
        self._logger = logger
        self._flow_strategy = flow_strategy
        self._eligible_status = eligible_status

    @property
    def flow_strategy(self) -> FlowStrategy:
        return self._flow_strategy

    async def suspend(self, request: SuspendRequest) -> SuspendResult:
        """Run one attempt under the configured flow strategy."""
        if self._flow_strategy is FlowStrategy.CHECK_THEN_SUSPEND:
            already_suspended = await self.check_precondition(request)
            if already_suspended is not None:
                return already_suspended
            await self.invoke_suspend(request)
        else:
            await self.invoke_suspend(request, tolerate_bad_request=True)
        return await self.verify_suspended(request)

    async def check_precondition(self, request: SuspendRequest) -> Optional[SuspendResult]:
        """
        Read the user before mutating. Returns a result when the user is already SUSPENDED
        (no suspend call needed), None when the user is eligible. Raises InvalidStateError otherwise.
        """
        account = await self._read_account(request)
        if account.is_suspended:
            self._logger.info(
                "user_already_suspended",
                extra={"user_id": request.user_id, "status_changed": account.status_changed},
            )
            return self._result(request, account)
        if account.status != self._eligible_status:
            message = (
                f"User must have an {self._eligible_status} status to be suspended. "
                f"Current status: {account.status}"
            )
            self._logger.error(message, extra={"user_id": request.user_id})
            raise InvalidStateError(message)
        return None

    async def invoke_suspend(self, request: SuspendRequest, tolerate_bad_request: bool = False) -> None:
        """
        POST the lifecycle transition. 2xx is expected; with tolerate_bad_request a 400 is
        left for the verification read to judge. Anything else raises OperationError.
        """
        response = await self._client.suspend_user(request)
        self._logger.info(
            "suspend_response_received",
            extra={"user_id": request.user_id, "status_code": response.status_code},
        )
        if response.is_success:
            self._inspect_suspend_body(request, response)
            return
        if tolerate_bad_request and response.status_code == 400:
            self._logger.info(
                "suspend_rejected_deferred_to_verification",
                extra={"user_id": request.user_id, "status_code": response.status_code},
            )
            return

        message = _suspend_error_message(response)
        self._logger.error(
            "suspend_failed",
            extra={"user_id": request.user_id, "status_code": response.status_code, "error": message},
        )
        raise OperationError(message, response.status_code)

    async def verify_suspended(self, request: SuspendRequest) -> SuspendResult:
        """Fresh read after the suspend call. Only a SUSPENDED status counts as success."""
        account = await self._read_account(request)
        if not account.is_suspended:
            message = f"User {request.user_id} could not be suspended. User is currently {account.status}"
            self._logger.error(message, extra={"user_id": request.user_id})
            raise InvalidStateError(message)
        self._logger.info(
            "user_suspended_verified",
            extra={"user_id": request.user_id},
        )
        return self._result(request, account)

    async def _read_account(self, request: SuspendRequest) -> AccountRecord:
        response = await self._client.get_user(request)
        if not response.is_success:
            message = f"Cannot fetch information about User: HTTP {response.status_code}"
            self._logger.error(message, extra={"user_id": request.user_id})
            raise FetchError(message, response.status_code)
        try:
            payload = response.json()
        except ValueError as e:
            message = f"Cannot parse user data: {e}"
            self._logger.error(message, extra={"user_id": request.user_id})
            raise ParseError(message) from e
        if not isinstance(payload, dict) or not isinstance(payload.get("status"), str):
            message = "Cannot parse user data: response has no status"
            self._logger.error(message, extra={"user_id": request.user_id})
            raise ParseError(message)
        return AccountRecord.from_payload(request.user_id, payload)

    def _inspect_suspend_body(self, request: SuspendRequest, response: httpx.Response) -> None:
        # The body is informational only; verification re-reads the user either way.
        try:
            body = response.json()
        except ValueError:
            self._logger.warning(
                "suspend_response_unparseable",
                extra={"user_id": request.user_id, "status_code": response.status_code},
            )
            return
        if isinstance(body, dict):
            self._logger.debug(
                "suspend_response_status",
                extra={"user_id": request.user_id, "reported_status": body.get("status")},
            )

    @staticmethod
    def _result(request: SuspendRequest, account: AccountRecord) -> SuspendResult:
        return SuspendResult(
            user_id=request.user_id,
            suspended=True,
            address=request.address,
            suspended_at=account.changed_at(),
            status=account.status,
        )
