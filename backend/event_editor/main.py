"""FastAPI application entrypoint.

Responsibilities kept minimal:
  * Wiring: settings, event store, HTTP host/surface and the one workflow controller
  * Router registration (workflow, events)
  * Cross-cutting concerns: metrics middleware & exception handlers
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from .adapters.http_host import HttpCalendarHost
from .adapters.http_surface import HttpRenderingSurface
from .api.events import router as events_router
from .api.workflow import router as workflow_router
from .config import EditorSettings
from .db.session import create_session_factory
from .errors import BaseAppException
from .metrics import REQUEST_COUNT, REQUEST_LATENCY
from .ports.event_store import EventStore
from .repositories.event_repository import SqlAlchemyEventStore
from .services.workflow_controller import WorkflowController

logger = logging.getLogger(__name__)


def create_app(settings: Optional[EditorSettings] = None, store: Optional[EventStore] = None) -> FastAPI:
    settings = settings or EditorSettings.from_env()
    app = FastAPI(title="Event Editor API", version="0.1.0")

    host = HttpCalendarHost()
    surface = HttpRenderingSurface()
    if store is None:
        store = SqlAlchemyEventStore(
            create_session_factory(settings.database_url),
            user_provider=lambda: host.current_user,
        )

    on_auth_required = None
    if settings.auth_redirect_url:
        redirect_url = settings.auth_redirect_url

        def on_auth_required() -> None:
            surface.redirect(redirect_url)

    app.state.settings = settings
    app.state.host = host
    app.state.surface = surface
    app.state.store = store
    app.state.controller = WorkflowController(
        host, store, surface, settings=settings, on_auth_required=on_auth_required
    )

    # --- CORS (for local frontend dev) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(workflow_router)
    app.include_router(events_router)

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        path = request.url.path
        method = request.method
        with REQUEST_LATENCY.labels(method=method, path=path).time():
            response: Response = await call_next(request)
        REQUEST_COUNT.labels(method=method, path=path, status=str(response.status_code)).inc()
        return response

    @app.get("/metrics")
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException):
        return JSONResponse(
            status_code=exc.http_status,
            content={"detail": {"code": exc.code, "message": exc.message}},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):  # pragma: no cover
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": {"code": "INTERNAL_ERROR", "message": "unexpected error"}},
        )

    @app.get("/healthz")
    async def health():
        return {
            "status": "ok",
            "auth": "required" if settings.use_auth else "disabled",
            "store": type(store).__name__,
        }

    return app


app = create_app()
