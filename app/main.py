"""Main FastAPI application with all middleware"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import settings
from app.core.events import lifespan
from app.core.exceptions import register_exception_handlers
from app.core.middleware import setup_middleware
from app.core.monitoring import setup_monitoring_middleware, setup_metrics_endpoint
from app.middleware.rate_limit import limiter, custom_rate_limit_handler
from app.api.health import router as health_router
from app.api.v1 import api_router

def create_app() -> FastAPI:
    """Build the FastAPI application"""
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Manages per-user wishlists of product references and moves "
            "wishlist items into the cart service.\n\n"
            f"All wishlist endpoints expect the authenticated user id in the "
            f"`{settings.USER_ID_HEADER}` header."
        ),
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, custom_rate_limit_handler)
    register_exception_handlers(app)

    # Add middleware
    app.add_middleware(SlowAPIMiddleware)
    setup_monitoring_middleware(app)
    setup_middleware(app)

    # Include routers
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(health_router)
    setup_metrics_endpoint(app)

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
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else settings.WORKERS
    )
