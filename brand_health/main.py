from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from brand_health.config import get_app_settings

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_app_settings().log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Release connector sessions on shutdown."""
    try:
        yield
    finally:
        from brand_health.services.aggregation_service import get_brand_health_aggregator
        from brand_health.services.url_metrics_service import get_moz_connector

        if get_brand_health_aggregator.cache_info().currsize:
            get_brand_health_aggregator().close()
            logger.info("Connector sessions closed")
        if get_moz_connector.cache_info().currsize:
            get_moz_connector().close()


def _register_exception_handlers(application: FastAPI) -> None:
    """
    Render every error as `{"error": ..., "details": ...}`.
    """

    @application.exception_handler(HTTPException)
    async def _http_error(_: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @application.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        details = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": str(error.get("msg", ""))}
            for error in errors
        ]
        message = details[0]["msg"] if details else "Invalid request body."

        # Unparseable bodies take the 500 path.
        if any(error.get("type") == "json_invalid" for error in errors):
            logger.warning("Malformed request body: %s", message)
            content: dict[str, object] = {"error": f"Malformed request body: {message}"}
            if not get_app_settings().is_production:
                content["details"] = details
            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message, "details": details},
        )

    @application.exception_handler(Exception)
    async def _unexpected_error(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled API error: %s", exc)
        content: dict[str, str] = {"error": str(exc) or "Internal server error"}
        if not get_app_settings().is_production:
            content["details"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Brand Health API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    _register_exception_handlers(application)

    from brand_health.api.routers import (
        brand_health_router,
        moz_router,
        scrape_router,
        trends_router,
    )

    application.include_router(brand_health_router)
    application.include_router(moz_router)
    application.include_router(scrape_router)
    application.include_router(trends_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok", "service": "brand-health"}

    return application


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
