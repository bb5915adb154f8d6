"""Recovery policy: one bounded retry for transient failures. ATTEMPTING -> RETRY_PENDING -> RETRYING."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, FrozenSet, List, Optional

from okta_suspend.domain.exceptions import UnrecoverableError
from okta_suspend.domain.schemas import SuspendResult
from okta_suspend.resilience.failure_classifier import FailureClass, FailureClassifier

MAX_RETRIES = 1

DEFAULT_RATE_LIMIT_BACKOFF_MS = 30_000
DEFAULT_SERVICE_UNAVAILABLE_BACKOFF_MS = 10_000


class RecoveryState(str, Enum):
    ATTEMPTING = "attempting"
    RETRY_PENDING = "retry_pending"
    RETRYING = "retrying"
    SUCCESS = "success"
    FAILED = "failed"


class RecoveryMethod(str, Enum):
    RATE_LIMIT_RETRY = "rate_limit_retry"
    SERVICE_ERROR_RETRY = "service_error_retry"


_TRANSITIONS: Dict[RecoveryState, FrozenSet[RecoveryState]] = {
    RecoveryState.ATTEMPTING: frozenset({RecoveryState.SUCCESS, RecoveryState.RETRY_PENDING, RecoveryState.FAILED}),
    RecoveryState.RETRY_PENDING: frozenset({RecoveryState.RETRYING}),
    RecoveryState.RETRYING: frozenset({RecoveryState.SUCCESS, RecoveryState.FAILED}),
    RecoveryState.SUCCESS: frozenset(),
    RecoveryState.FAILED: frozenset(),
}

_METHODS: Dict[FailureClass, RecoveryMethod] = {
    FailureClass.RATE_LIMIT: RecoveryMethod.RATE_LIMIT_RETRY,
    FailureClass.SERVICE_UNAVAILABLE: RecoveryMethod.SERVICE_ERROR_RETRY,
}

Attempt = Callable[[], Awaitable[SuspendResult]]


class RecoveryPolicy:
    """
    Entered after an attempt failed. Retryable classes wait their configured backoff and
    re-run the attempt exactly once; everything else ends in UnrecoverableError.
    Any further retrying belongs to the host framework.

    One instance per invocation: transitions records the path taken.
    """

    def __init__(
        self,
        rate_limit_backoff_ms: int = DEFAULT_RATE_LIMIT_BACKOFF_MS,
        service_unavailable_backoff_ms: int = DEFAULT_SERVICE_UNAVAILABLE_BACKOFF_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._backoff_ms = {
            FailureClass.RATE_LIMIT: rate_limit_backoff_ms,
            FailureClass.SERVICE_UNAVAILABLE: service_unavailable_backoff_ms,
        }
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)
        self._state = RecoveryState.ATTEMPTING
        self._retries = 0
        self.transitions: List[RecoveryState] = [RecoveryState.ATTEMPTING]

    @property
    def state(self) -> RecoveryState:
        return self._state

    @property
    def retries(self) -> int:
        return self._retries

    def backoff_seconds(self, failure_class: FailureClass) -> float:
        """Configured wait before the retry, in seconds. 0 for non-retryable classes."""
        return self._backoff_ms.get(failure_class, 0) / 1000.0

    def _transition(self, new: RecoveryState) -> None:
        if new not in _TRANSITIONS[self._state]:
            raise RuntimeError(f"Invalid recovery transition from {self._state.value} to {new.value}")
        self._state = new
        self.transitions.append(new)

    async def recover(self, user_id: str, error: BaseException, attempt: Attempt) -> SuspendResult:
        """
        Handle a failed attempt. Returns the retried result annotated with the recovery
        method, or raises UnrecoverableError wrapping the original error.
        """
        failure_class = FailureClassifier.classify(error)
        if failure_class is FailureClass.NON_RETRYABLE:
            self._transition(RecoveryState.FAILED)
            self._logger.error(
                "recovery_not_possible",
                extra={"user_id": user_id, "error": str(error), "status_code": getattr(error, "status_code", None)},
            )
            raise UnrecoverableError(user_id, error) from error

        self._transition(RecoveryState.RETRY_PENDING)
        delay = self.backoff_seconds(failure_class)
        self._logger.warning(
            "recovery_backoff",
            extra={
                "user_id": user_id,
                "failure_class": failure_class.value,
                "backoff_ms": self._backoff_ms[failure_class],
            },
        )
        await self._sleep(delay)

        # Exactly MAX_RETRIES (one) retry.
        self._transition(RecoveryState.RETRYING)
        self._retries += 1
        try:
            result = await attempt()
        except Exception as retry_error:
            self._transition(RecoveryState.FAILED)
            self._logger.error(
                "recovery_retry_failed",
                extra={"user_id": user_id, "error": str(retry_error), "retries": self._retries},
            )
            raise UnrecoverableError(user_id, error) from retry_error

        self._transition(RecoveryState.SUCCESS)
        method = _METHODS[failure_class]
        self._logger.info(
            "recovery_succeeded",
            extra={"user_id": user_id, "recovery_method": method.value},
        )
        return result.model_copy(update={"recovery_method": method.value})
