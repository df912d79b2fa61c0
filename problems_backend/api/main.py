import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from problems_backend import __version__
from problems_backend.api.routes import build_router, get_store
from problems_backend.config import Settings, normalize_api_prefix
from problems_backend.db import build_engine, create_tables
from problems_backend.store import ProblemStore, SqlAlchemyProblemStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Service health and readiness endpoints."},
    {"name": "Problems", "description": "CRUD operations for tracked practice problems."},
]


async def _unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Log unexpected errors (storage failures included) and answer a bare 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# PUBLIC_INTERFACE
def health_check() -> Dict[str, str]:
    """Health check endpoint used by previews/monitoring."""
    return {"message": "Healthy"}


# PUBLIC_INTERFACE
def health_check_db(store: ProblemStore = Depends(get_store)) -> Dict[str, Any]:
    """Database readiness endpoint used to verify DB connectivity."""
    try:
        return {"status": "up", "query": "SELECT 1", "result": store.ping()}
    except Exception as exc:
        # Readiness is reported, not raised.
        return {"status": "down", "error": str(exc)}


def _make_lifespan(settings: Settings, store: ProblemStore | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            app.state.store = store
            yield
            return

        engine = build_engine(settings.database_url)
        try:
            create_tables(engine)
        except Exception:
            # Keep serving; /health/db reports the database as down.
            logger.exception("Database initialization failed during startup (tables not created).")

        app.state.store = SqlAlchemyProblemStore(engine)
        logger.info("Problem store ready on %s", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            engine.dispose()

    return lifespan


# PUBLIC_INTERFACE
def create_app(settings: Settings | None = None, store: ProblemStore | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    The store is created once per application lifespan from the configured
    database URL and released on shutdown. Passing `store` skips that and
    uses the given instance as is.

    Nothing is built at import time; serve with
    `uvicorn --factory problems_backend.api.main:create_app` or
    `python -m problems_backend`.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="AlgoTracker API",
        description="Backend API for tracking practice problems and their review metadata.",
        version=__version__,
        openapi_tags=openapi_tags,
        lifespan=_make_lifespan(settings, store),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    app.add_api_route(
        "/",
        health_check,
        methods=["GET"],
        tags=["Health"],
        summary="Health check",
        description="Returns a simple health payload.",
    )
    app.add_api_route(
        "/health/db",
        health_check_db,
        methods=["GET"],
        tags=["Health"],
        summary="Database health check",
        description=(
            "Verifies database connectivity by running a lightweight read-only query (SELECT 1). "
            "Returns status=up when the query succeeds, otherwise status=down with error details."
        ),
    )
    app.include_router(build_router(normalize_api_prefix(settings.api_prefix)))
    return app
