from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from salon.core.config import get_settings
from salon.core.logging_config import setup_logging
from salon.repositories.factory import build_repository
from salon.routers import customers as customers_router
from salon.services.customer_service import CustomerService

BASE = os.path.dirname(__file__)
WEB = os.path.join(BASE, "..", "web")

logger = logging.getLogger(__name__)


def create_app(customer_service: CustomerService | None = None) -> FastAPI:
    """Build the API.

    Without an explicit ``customer_service`` the storage backend is selected
    once, when the app starts up.
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "customer_service", None) is None:
            app.state.customer_service = CustomerService(build_repository(settings))
        logger.info("Customer storage backend: %s", app.state.customer_service.backend_name)
        yield

    app = FastAPI(title="Salon Customer API", lifespan=lifespan)
    app.state.customer_service = customer_service

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:8000",
                "http://127.0.0.1:8000",
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            }
        )
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.get("/health")
    def health(request: Request):
        svc = request.app.state.customer_service
        return {"ok": True, "backend": svc.backend_name if svc else None}

    app.include_router(customers_router.router)

    # Mounted last so the API routes above take precedence.
    if os.path.isdir(WEB):
        app.mount("/", StaticFiles(directory=WEB, html=True), name="web")
    return app
