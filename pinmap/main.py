import asyncio
import os
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from pinmap import db
from pinmap.api import errors
from pinmap.api.routers.healthz import router as healthz_router
from pinmap.api.routers.pins import router as pins_router
from pinmap.api.routers.readyz import router as readyz_router
from pinmap.api.routers.search import router as search_router
from pinmap.core.config import Settings, get_settings
from pinmap.core.startup import run_database_migrations
from pinmap.logging import setup_logging
from pinmap.middleware.rate_limit import rate_limit_middleware
from pinmap.middleware.request_id import request_id_middleware
from pinmap.middleware.security_headers import security_headers_middleware
from pinmap.repositories import InMemoryPinRepository, PinRepository
from pinmap.repositories.sqlalchemy import SqlAlchemyPinRepository
from pinmap.services.catalog import CatalogSearchIndex, load_catalog
from pinmap.services.pin_store import PinStore
from pinmap.services.spatial_index import GridSpatialIndex


def _init_sentry(env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


def _build_repository(app: FastAPI, settings: Settings) -> PinRepository:
    if not settings.database_url:
        app.state.engine = None
        return InMemoryPinRepository()
    engine = db.create_engine(settings.database_url)
    app.state.engine = engine
    return SqlAlchemyPinRepository(db.create_session_factory(engine))


@asynccontextmanager
async def _lifespan(app: FastAPI):
    logger = structlog.get_logger(__name__)
    settings: Settings = app.state.settings
    store: PinStore = app.state.pin_store

    migrated = True
    if settings.database_url:
        migrated = await asyncio.to_thread(run_database_migrations)
    if migrated:
        await store.load()
    else:
        logger.error("pin_index_not_loaded", reason="migrations_failed")

    try:
        yield
    finally:
        if app.state.engine is not None:
            await app.state.engine.dispose()
        logger.info("app_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    # Initialize structured logging first
    setup_logging(level=settings.log_level, log_format=settings.log_format, app_env=settings.app_env)
    _init_sentry(settings.app_env)

    app = FastAPI(title="Pinmap", version="0.1.0", lifespan=_lifespan)
    app.state.settings = settings
    app.state.pin_store = PinStore(
        _build_repository(app, settings),
        GridSpatialIndex(cell_size_deg=settings.spatial_cell_deg),
    )
    app.state.catalog = CatalogSearchIndex(load_catalog(settings.catalog_path))

    errors.install(app)
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(rate_limit_middleware)

    # CORS: ALLOW_ORIGINS (comma-separated) or any origin without credentials
    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins or ["*"],
        allow_credentials=bool(allow_origins),
        allow_methods=["GET", "POST", "OPTIONS", "HEAD"],
        allow_headers=["*"],
    )

    app.include_router(pins_router)
    app.include_router(search_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok", "env": settings.app_env}

    structlog.get_logger(__name__).info(
        "app_startup",
        env=settings.app_env,
        storage="postgres" if settings.database_url else "memory",
        catalog_entries=len(app.state.catalog),
    )
    return app


app = create_app()
