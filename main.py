# main.py

from fastapi import FastAPI
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from slowapi.errors import RateLimitExceeded

from storefront.logging import logger
from storefront.core.config import settings
from storefront.core.error_handlers import setup_error_handlers, add_request_id_middleware
from storefront.core.rate_limiter import limiter, rate_limit_exceeded_handler
from storefront.database.core import Base, DbSession, engine, SessionLocal, ping

# Import models to ensure they are registered with SQLAlchemy
from storefront.database.models import Product, User, SessionRecord

from storefront.pages.controller import router as pages_router
from storefront.products.controller import router as products_router
from storefront.cart.controller import router as cart_router
from storefront.checkout.controller import router as checkout_router
from storefront.auth.controller import router as auth_router
from storefront.products.service import ProductService
from storefront.sessions.store import SessionStore


def init_database(bind=None) -> None:
    """Check settings, create tables, check connectivity and do startup housekeeping.

    Any failure here is fatal: the process must not serve requests without
    its store.
    """
    try:
        settings.validate()
    except ValueError:
        logger.exception("Invalid configuration")
        raise

    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind)
        ping(bind)
        logger.info("Database tables ready")
    except SQLAlchemyError:
        logger.exception("Could not connect to the database")
        raise

    db = SessionLocal(bind=bind)
    try:
        SessionStore(db).purge_expired()
        if settings.SEED_PRODUCTS:
            ProductService.seed_products(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    init_database()
    logger.info(f"{settings.API_TITLE} started")
    yield
    engine.dispose()
    logger.info(f"{settings.API_TITLE} stopped")


def create_app(use_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        lifespan=lifespan if use_lifespan else None,
    )

    # Set up error handlers
    setup_error_handlers(app)

    # Rate limiting for the account forms
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Add request ID middleware for better error tracking
    app.middleware("http")(add_request_id_middleware)

    app.include_router(pages_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(auth_router)

    # Health check endpoint for production monitoring
    @app.get("/health", tags=["Root"])
    async def health_check(db: DbSession):
        """Liveness check that also touches the database."""
        db.execute(text("SELECT 1"))
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
