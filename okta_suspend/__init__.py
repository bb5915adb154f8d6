"""Suspend an Okta user through the User Lifecycle API, with a single bounded retry."""

from okta_suspend.handlers import SuspendUserAction

__all__ = ["SuspendUserAction"]
