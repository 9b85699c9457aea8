"""
School Directory Backend API Server
Core functionality: school submissions with hosted images, newest-first listing
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database.connection import init_database, close_database
from database.migrations import run_migrations
from api.routes import health, schools
from services.image_host import CloudinaryImageHost
from services.schools_service import SchoolsService
from services.schools_store import SchoolStore
from utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def build_image_host() -> CloudinaryImageHost:
    return CloudinaryImageHost(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        folder=settings.CLOUDINARY_FOLDER
    )


def attach_services(app: FastAPI, store: SchoolStore, image_host: CloudinaryImageHost) -> SchoolsService:
    """Attach the store and service handles that routes receive through dependencies"""
    schools_service = SchoolsService(store, image_host, settings.MAX_IMAGE_BYTES)
    app.state.school_store = store
    app.state.schools_service = schools_service
    return schools_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    db_pool = await init_database()
    if db_pool is not None:
        await run_migrations(db_pool)

    attach_services(app, SchoolStore(db_pool), build_image_host())
    logger.info("School directory ready to accept requests")
    yield
    await close_database(db_pool)


def create_app() -> FastAPI:
    app = FastAPI(
        title="School Directory Backend",
        description="Backend API for submitting and listing schools",
        version="1.0.0",
        lifespan=lifespan
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials="*" not in settings.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(schools.router, prefix="/api/schools", tags=["Schools"])

    return app


# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()
