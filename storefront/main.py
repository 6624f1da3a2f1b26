"""Main FastAPI application with all middleware"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
import logging

from storefront.core.config import settings
from storefront.core.database import init_db, close_db, get_db_context
from storefront.core.exceptions import register_exception_handlers
from storefront.core.logging import setup_logging
from storefront.core.middleware import RequestIDMiddleware, LoggingMiddleware
from storefront.core.security import build_admin_account
from storefront.core.session_store import SessionStore
from storefront.db.seed import seed_products
from storefront.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from storefront.middleware.security import SecurityMiddleware
from storefront.middleware.session import SessionMiddleware
from storefront.api.v1 import api_router
from storefront.api.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info(f"Starting up {settings.APP_NAME}...")
    await init_db()

    if settings.SEED_DEMO_DATA:
        async with get_db_context() as db:
            await seed_products(db)

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


def create_app() -> FastAPI:
    """Build the application; the administrative account and session store are created here, once"""
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Watch storefront API: catalog, accounts, carts and orders",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )

    app.state.admin_account = build_admin_account(settings)
    app.state.session_store = SessionStore(max_age=settings.SESSION_MAX_AGE)

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    register_exception_handlers(app)

    # Add middleware (last added runs first)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(
        SessionMiddleware,
        store=app.state.session_store,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=settings.SESSION_SECURE,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Include routers
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "docs": "/api/docs",
            "health": "/health"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "storefront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
