# taskapp/main.py
"""FastAPI application for the task tracker backend."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskapp.config import Settings
from taskapp.database import build_engine, create_db_and_tables, dispose_engine
from taskapp.errors import NotFound, StoreUnavailable, ValidationError
from taskapp.routes.tasks import router as tasks_router
from taskapp.store import TaskStore

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    """Translate store errors into HTTP responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors)
        return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
        return JSONResponse(status_code=503, content={"detail": "Task store unavailable"})


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """Build the application around *store*.

    Without a store, one is created at start-up from *settings* (read from the
    environment when omitted) and its engine is disposed at shutdown.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is not None:
            app.state.store = store
            yield
            return
        engine = build_engine(settings.resolve_database_url())
        create_db_and_tables(engine)
        app.state.store = TaskStore(engine)
        logger.info("Task store ready")
        try:
            yield
        finally:
            dispose_engine(engine)

    app = FastAPI(title="Task Tracker", lifespan=lifespan)
    if store is not None:
        app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    _register_error_handlers(app)
    app.include_router(tasks_router)

    @app.get("/api/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "task-tracker-api"}

    return app
