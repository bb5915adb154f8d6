"""Suspend-user action routes: POST /invoke, /error, /halt. ActionError is mapped in main."""

from typing import Annotated

from fastapi import APIRouter, Depends

from okta_suspend.api.dependencies import get_action
from okta_suspend.domain.schemas import ActionRequest
from okta_suspend.handlers import SuspendUserAction

router = APIRouter()


@router.post("/invoke")
async def invoke(
    body: ActionRequest,
    action: Annotated[SuspendUserAction, Depends(get_action)],
):
    """Run one suspend attempt."""
    result = await action.invoke(body.params, body.context)
    return result.to_output()


@router.post("/error")
async def error(
    body: ActionRequest,
    action: Annotated[SuspendUserAction, Depends(get_action)],
):
    """Recovery for a failed invoke; params.error carries {message, statusCode}."""
    result = await action.error(body.params, body.context)
    return result.to_output()


@router.post("/halt")
async def halt(
    body: ActionRequest,
    action: Annotated[SuspendUserAction, Depends(get_action)],
):
    """Acknowledge a halt. No pending I/O to cancel."""
    result = await action.halt(body.params, body.context)
    return result.to_output()
