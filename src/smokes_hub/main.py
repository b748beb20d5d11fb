# src/smokes_hub/main.py
"""Main entry point for the Smokes Hub application."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from smokes_hub.api.errors import register_exception_handlers
from smokes_hub.api.v1 import (
    auth_router,
    maps_router,
    ratings_router,
    reports_router,
    smokes_router,
    users_router,
)
from smokes_hub.core.logging import configure_logging
from smokes_hub.core.settings import settings
from smokes_hub.services.steam import get_steam_client

API_DESCRIPTION = "Share, rate and report CS2 smoke grenade lineups"

configure_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    await get_steam_client().close()


# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=API_DESCRIPTION,
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(maps_router)
app.include_router(smokes_router)
app.include_router(ratings_router)
app.include_router(reports_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": API_DESCRIPTION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("smokes_hub.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
