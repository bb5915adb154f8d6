# scripts/smoke_suspend.py
# Manual check against a real tenant: ADDRESS, BEARER_AUTH_TOKEN and SMOKE_USER_ID from the environment.

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import os

from okta_suspend.config.logging import configure_logging
from okta_suspend.domain.schemas import ActionContext
from okta_suspend.handlers import SuspendUserAction


async def smoke():
    configure_logging("INFO")
    context = ActionContext(
        secrets={"BEARER_AUTH_TOKEN": os.environ["BEARER_AUTH_TOKEN"]},
        environment={"ADDRESS": os.environ["ADDRESS"]},
    )
    params = {"userId": os.environ["SMOKE_USER_ID"]}

    action = SuspendUserAction()
    first = await action.run(params, context)
    second = await action.run(params, context)

    print("First run:", first.to_output())
    print("Second run (already suspended):", second.to_output())

asyncio.run(smoke())
