# idp/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from idp.core.config import settings
from idp.core.exception_handlers import register_exception_handlers
from idp.core.logging_config import configure_logging
from idp.middleware.request_logging import RequestLoggingMiddleware
from idp.routers.collaborate import router as collaborate_router
from idp.routers.health import router as health_router
from idp.routers.reference import router as reference_router
from idp.routers.responses import router as responses_router
from idp.routers.shares import router as shares_router

configure_logging()

ROUTERS = (health_router, reference_router, responses_router, shares_router, collaborate_router)


def cors_origins() -> list[str]:
    """CORS_ALLOW_ORIGINS (comma separated) or just the front-end origin."""
    configured = [o.strip() for o in (settings.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
    return configured or [settings.APP_ORIGIN.rstrip("/")]


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
        expose_headers=["Content-Disposition", "X-Request-Id"],
    )

    register_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()
