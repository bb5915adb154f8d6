# okta_suspend/main.py

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from okta_suspend.api.middleware import AuditTriggerMiddleware, CorrelationIdMiddleware
from okta_suspend.api.routers import actions, health
from okta_suspend.config.logging import configure_logging
from okta_suspend.config.settings import get_settings
from okta_suspend.domain.exceptions import ActionError

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(ActionError)
async def action_error_handler(request, exc: ActionError):
    # The status code is passed through so the scheduler can classify it.
    return JSONResponse(
        status_code=exc.status_code or 500,
        content={"detail": exc.message, "statusCode": exc.status_code, "error": type(exc).__name__},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /actions/suspend-user
app.include_router(health.router)
app.include_router(actions.router, prefix="/actions/suspend-user")
