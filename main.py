"""
Wedding RSVP Service - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from app.core.config import Settings, settings
from app.api import routes_public, routes_rsvp, routes_webapp
from app.services.repositories import open_store
from app.services.rsvp_service import RsvpService
from app.utils.responses import error_response

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the RSVP store for the lifetime of the application"""
    store = open_store(app.state.settings)
    app.state.rsvp_service = RsvpService(store)
    logger.info("RSVP store ready (%s backend)", app.state.settings.STORE_BACKEND)
    try:
        yield
    finally:
        store.close()
        logger.info("Application shutdown")

async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return error_response("Invalid request body.", status_code=400)

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around ``app_settings`` (default: environment settings)"""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Wedding RSVP Service",
        description="RSVP collection with spreadsheet or database storage",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = app_settings

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(routes_public.router, tags=["public"])
    app.include_router(routes_rsvp.router, prefix="/api", tags=["rsvp"])
    app.include_router(routes_webapp.router, tags=["webapp"])

    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True
    )
