"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api import api_tokens, auth, users
from src.config import get_settings

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    if settings.admin_ids:
        logger.info(f"Admin user ids: {sorted(settings.admin_ids)}")
    yield


app = FastAPI(
    title="Asciicast Accounts API",
    description="User accounts, API tokens and login links for a terminal recording site",
    version="0.1.0",
    lifespan=lifespan,
)

# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(api_tokens.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
