"""FastAPI application for the gymbook JSON API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, load_settings
from ..errors import NotFoundError, ValidationError
from ..calendar.selection import DateSelectionTracker
from ..storage.images import ImageLoader, ImageStore
from ..storage.kv import SQLiteKeyValueStore
from ..store import FitnessStore
from .routers import calendar, equipment, locations, muscles, preferences, training

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open and load the store on startup."""
    settings: Settings = app.state.settings
    if app.state.store is None:
        kv = SQLiteKeyValueStore(settings.db_path)
        await kv.init()
        store = FitnessStore(kv, default_weight_unit=settings.default_weight_unit)
        await store.load()
        app.state.store = store
        logger.info("Loaded store from %s", settings.db_path)
    yield


def create_app(
    settings: Settings | None = None,
    store: FitnessStore | None = None,
    images: ImageStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    A pre-loaded ``store`` can be passed in; otherwise one is opened from
    the configured database at startup.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="gymbook",
        description="Gym equipment catalog and training log",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.images = images or ImageStore(settings.images_dir)
    app.state.loader = ImageLoader(
        app.state.images,
        is_live=lambda equipment_id: app.state.store.has_equipment(equipment_id),
    )
    app.state.tracker = DateSelectionTracker(interval=settings.double_tap_interval)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    app.include_router(muscles.router)
    app.include_router(equipment.router)
    app.include_router(locations.router)
    app.include_router(training.router)
    app.include_router(calendar.router)
    app.include_router(preferences.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
