"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from fxdeals.api.v1.router import api_router
from fxdeals.api.v1.endpoints.health import get_health
from fxdeals.core.config import settings
from fxdeals.core.exceptions import setup_exception_handlers
from fxdeals.core.integrations.observability import setup_observability
from fxdeals.core.logging import setup_logging, get_logger
from fxdeals.db.init_db import create_tables
from fxdeals.db.session import init_db, close_db
from fxdeals.deps.di_container import Container, set_container
from fxdeals.schemas.common import HealthResponse

logger = get_logger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Initializes logging, observability, the database and the DI container.
    """
    # Startup
    setup_logging()
    setup_observability()

    await init_db()
    if settings.DB_CREATE_TABLES:
        await create_tables()

    container = Container()
    app.state.container = container
    set_container(container)

    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")

    yield

    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Foreign-exchange deal recording and query API",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health", response_model=HealthResponse, include_in_schema=False)
    async def root_health() -> HealthResponse:
        """Root-level health check endpoint."""
        return await get_health()

    setup_exception_handlers(app)

    return app


app = create_app()
