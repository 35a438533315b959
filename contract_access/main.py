# =====================================================
# FILE: contract_access/main.py
# FastAPI application factory
# =====================================================

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from contract_access.api.api_v1.access.router import router as access_router
from contract_access.core.config import settings
from contract_access.core.exceptions import AuthorizationError, InvalidRoleError
from contract_access.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(configure_logs: bool = True) -> FastAPI:
    """Build the access API; hosts mount it or include access_router directly"""
    if configure_logs:
        configure_logging()

    app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG)
    app.include_router(access_router)

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError):
        logger.warning(f"Authorization failed on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code}
        )

    @app.exception_handler(InvalidRoleError)
    async def invalid_role_handler(request: Request, exc: InvalidRoleError):
        logger.error(f"Invalid role on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "code": "INVALID_ROLE"}
        )

    return app
