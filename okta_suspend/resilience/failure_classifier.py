"""Failure classification for the recovery policy. Maps errors to retry classes by status code."""

from enum import Enum

from okta_suspend.domain.exceptions import OperationError, UnrecoverableError

RATE_LIMIT_STATUSES = frozenset({429})
SERVICE_UNAVAILABLE_STATUSES = frozenset({502, 503, 504})


class FailureClass(str, Enum):
    """Retry taxonomy."""

    RATE_LIMIT = "rate_limit"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NON_RETRYABLE = "non_retryable"


class FailureClassifier:
    """
    Classifies exceptions into FailureClass. Only OperationError carries a transport status;
    everything else (validation, configuration, unexpected) is NON_RETRYABLE.
    """

    @staticmethod
    def classify(exception: BaseException) -> FailureClass:
        """Map exception to FailureClass. Unknown -> NON_RETRYABLE."""
        if isinstance(exception, UnrecoverableError):
            return FailureClass.NON_RETRYABLE
        if not isinstance(exception, OperationError):
            return FailureClass.NON_RETRYABLE
        if exception.status_code in RATE_LIMIT_STATUSES:
            return FailureClass.RATE_LIMIT
        if exception.status_code in SERVICE_UNAVAILABLE_STATUSES:
            return FailureClass.SERVICE_UNAVAILABLE
        return FailureClass.NON_RETRYABLE

    @staticmethod
    def is_retryable(exception: BaseException) -> bool:
        return FailureClassifier.classify(exception) is not FailureClass.NON_RETRYABLE
