"""Main application module."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lifematch.api.routes import router as api_router
from lifematch.core.config import settings
from lifematch.core.exceptions import LifeMatchError, handle_error
from lifematch.core.logging import get_logger, log_context, setup_logging
from lifematch.database import close_db, init_db

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager."""
    try:
        logger.debug("Initializing database")
        await init_db()
        logger.info("Application startup complete")
        yield
    except Exception:
        logger.error("Error during startup", exc_info=True)
        raise
    finally:
        logger.info("Starting application shutdown")
        await close_db()
        logger.info("Application shutdown complete")


async def bind_request_context(request: Request, call_next):
    """Attach method and path to every structured log event of a request."""
    with log_context(method=request.method, path=request.url.path):
        response = await call_next(request)
        logger.debug("Request handled", status_code=response.status_code)
    return response


async def lifematch_error_handler(request: Request, exc: LifeMatchError) -> JSONResponse:
    """Render domain errors with their mapped status code."""
    logger.info(
        "Request failed",
        path=request.url.path,
        error_code=exc.error_code,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(handle_error(exc)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=jsonable_encoder(handle_error(exc)))


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    application = FastAPI(
        title="LifeMatch",
        description="Job search and matrimonial matchmaking with explained recommendations",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.middleware("http")(bind_request_context)
    application.add_exception_handler(LifeMatchError, lifematch_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    application.include_router(api_router, prefix="/api")
    return application


# Set up logging first
setup_logging(
    log_level=settings.LOG_LEVEL,
    json_logs=settings.json_logs,
    log_file=settings.get_log_file(),
)

app = create_app()
