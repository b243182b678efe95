"""ASGI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dealdesk.api.v1._authz import map_domain_error
from dealdesk.api.v1.router import get_api_router
from dealdesk.core.config import get_config
from dealdesk.core.exceptions import DealDeskException
from dealdesk.core.startup import bootstrap
from dealdesk.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)


def create_app(run_bootstrap: bool = True) -> FastAPI:
    """Build the app; ``run_bootstrap`` configures logging and tables on startup."""
    cfg = get_config()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if run_bootstrap:
            bootstrap()
        yield

    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, lifespan=lifespan)
    app.include_router(get_api_router(cfg.API_PREFIX))

    @app.exception_handler(DealDeskException)
    async def handle_domain_error(request: Request, exc: DealDeskException) -> JSONResponse:
        code, error_code, detail = map_domain_error(exc)
        if code >= 500:
            logger.error(
                "api.request.failed",
                extra={"event": "api.request.failed", "path": request.url.path},
                exc_info=exc,
            )
        else:
            logger.info(
                "api.request.rejected",
                extra={"event": "api.request.rejected", "path": request.url.path, "status": error_code},
            )
        envelope = ErrorEnvelope(error_code=error_code, detail=detail)
        return JSONResponse(status_code=code, content=envelope.model_dump())

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Exposed for `uvicorn dealdesk.main:app`; startup runs bootstrap().
app = create_app()


if __name__ == "__main__":
    config = get_config()
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT, log_level=config.LOG_LEVEL.lower())
