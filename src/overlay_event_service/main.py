"""
Overlay Event Service - Main FastAPI Application

This service receives stream notifications (follows, subscriptions,
donations, raids, now-playing music) and republishes them on a single
publish hub topic consumed by real-time overlay clients.

Key Features:
- One POST endpoint per event type under /api
- Typed envelopes tagged with the event type
- Adapter pattern for hub flexibility (Mercure, NATS, in-memory)
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .api import router
from .services.event_publisher import event_publisher

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup (connect to the publish hub) and shutdown (cleanup).
    """
    await event_publisher.initialize()
    yield
    await event_publisher.shutdown()


# Disable docs in production
app = FastAPI(
    title="Overlay Event Service",
    description="Republishes stream events to overlay clients through a publish hub",
    version=settings.service_version,
    docs_url="/docs" if not settings.is_prod else None,
    redoc_url="/redoc" if not settings.is_prod else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/", tags=["Info"])
async def root() -> Dict[str, str]:
    """Root endpoint with service info."""
    response = {
        "service": settings.service_name,
        "version": settings.service_version,
    }
    if not settings.is_prod:
        response["docs"] = "/docs"
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.service_port)
