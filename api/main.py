from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from analytics import middleware as analytics_middleware
from analytics.log import AnalyticsLog, PostgresAnalyticsLog
from core import db, settings, swapi
from persons import router as persons_router
from persons.service import INTERNAL_SERVER_ERROR

logger = logging.getLogger(__name__)


async def _open_analytics_log() -> AnalyticsLog:
    await db.init_pool(settings.database_url())
    log = PostgresAnalyticsLog()
    try:
        await log.ensure_schema()
    except BaseException:
        await db.close_pool()
        raise
    return log


def create_app(
    *,
    swapi_client: swapi.SwapiClient | None = None,
    analytics_log: AnalyticsLog | None = None,
) -> FastAPI:
    """
    Build the gateway. Collaborators passed in are used as-is and left
    open on shutdown; missing ones are built from the environment.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_db = analytics_log is None
        owns_client = swapi_client is None
        app.state.analytics_log = analytics_log if analytics_log is not None else await _open_analytics_log()
        app.state.swapi_client = (
            swapi_client
            if swapi_client is not None
            else swapi.SwapiClient(
                swapi.build_http_client(
                    base_url=settings.swapi_base_url(),
                    timeout_s=settings.swapi_timeout_s(),
                )
            )
        )
        try:
            yield
        finally:
            await analytics_middleware.drain(app.state.analytics_pending)
            if owns_client:
                await app.state.swapi_client.aclose()
            if owns_db:
                await db.close_pool()

    app = FastAPI(lifespan=lifespan)
    analytics_middleware.install(app)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error path=%s", request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_SERVER_ERROR})

    app.include_router(persons_router.router, tags=["persons"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "swapi-gateway api"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host(), port=settings.port(), log_level="info")
