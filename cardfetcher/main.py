import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

import uvicorn
from fastapi import FastAPI

from cardfetcher.api import (
    health_router,
    pages_router,
    upload_router,
    webhook_router,
)
from cardfetcher.config import settings

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    missing = settings.missing_credentials()
    if missing:
        logger.error("Missing config values: %s", ", ".join(missing))
        raise RuntimeError(f"Missing config values: {', '.join(missing)}")
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("cardfetcher"),
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(pages_router)
app.include_router(upload_router)
app.include_router(webhook_router)


def run() -> None:
    """CLI entry point."""
    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
