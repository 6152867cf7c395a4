from cardfetcher.api.health import router as health_router
from cardfetcher.api.pages import router as pages_router
from cardfetcher.api.upload import router as upload_router
from cardfetcher.api.webhook import router as webhook_router

__all__ = [
    "health_router",
    "pages_router",
    "upload_router",
    "webhook_router",
]
