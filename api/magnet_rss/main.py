import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from magnet_rss.database import settings
from magnet_rss.exceptions import MagnetRSSError, StorageFailureError
from magnet_rss.middleware import SecurityHeadersMiddleware
from magnet_rss.routers import feed, health, update
from magnet_rss.services.kv_store import StorageError, create_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_production()
    app.state.store = await create_store(settings)

    yield

    await app.state.store.close()


app = FastAPI(
    title="Magnet RSS",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None if settings.environment == "production" else "/docs",
    redoc_url=None if settings.environment == "production" else "/redoc",
    openapi_url=None if settings.environment == "production" else "/openapi.json",
)

app.add_middleware(SecurityHeadersMiddleware)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


@app.exception_handler(MagnetRSSError)
async def magnet_rss_exception_handler(request: Request, exc: MagnetRSSError):
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.exception("Storage error: %s", exc)
    failure = StorageFailureError()
    return _error_response(failure.status_code, failure.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unrouted method/path combinations are plain 404s, never 405.
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(health.router)
app.include_router(update.router)
app.include_router(feed.router)
