"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from mailrelay.infrastructure import configure_logging, get_redis_client, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    yield

    logger.info("Shutting down...")
    await get_redis_client().disconnect()
    logger.info("Shutdown complete")


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Answer any unhandled error with its message and a 500."""
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return PlainTextResponse(str(exc), status_code=500)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Inbound email relay: forwarding, Telegram notification and mail preview",
        lifespan=lifespan,
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    from mailrelay.api.routes import router

    app.include_router(router)

    return app


# Create app instance
app = create_app()
