"""Resilience layer: failure classification and the single-retry recovery policy. No FastAPI."""

from okta_suspend.resilience.failure_classifier import FailureClass, FailureClassifier
from okta_suspend.resilience.recovery_policy import (
    MAX_RETRIES,
    RecoveryMethod,
    RecoveryPolicy,
    RecoveryState,
)

__all__ = [
    "FailureClass",
    "FailureClassifier",
    "MAX_RETRIES",
    "RecoveryMethod",
    "RecoveryPolicy",
    "RecoveryState",
]
