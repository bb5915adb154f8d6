"""FastAPI dependency injection: the suspend action."""

import logging

from okta_suspend.config.settings import get_settings
from okta_suspend.handlers import SuspendUserAction

_action: SuspendUserAction | None = None


def get_action() -> SuspendUserAction:
    """Return singleton action. It holds no per-invocation state."""
    global _action
    if _action is None:
        _action = SuspendUserAction(
            settings=get_settings(),
            logger=logging.getLogger("okta_suspend.suspend_user"),
        )
    return _action
