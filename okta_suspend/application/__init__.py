# Application layer: services that orchestrate domain and infrastructure.

from okta_suspend.application.suspend_service import SuspendUserService

__all__ = [
    "SuspendUserService",
]
