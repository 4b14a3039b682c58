"""
Checkout Backend - FastAPI Application

Creates Mercado Pago payment preferences for the storefront and receives
payment-status notifications.

Usage:
    uvicorn checkout_backend.api.main:app --reload --host 0.0.0.0 --port 3001

Docs:
    http://localhost:3001/docs (Swagger UI)
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from checkout_backend.core.config import Settings, load_settings
from checkout_backend.core.exceptions import (
    CheckoutError,
    NotificationProcessingError,
    checkout_error_handler,
    internal_error_handler,
    notification_error_handler,
    request_validation_handler,
)
from checkout_backend.core.lifespan import lifespan
from checkout_backend.core.logging import setup_logger
from checkout_backend.core.middleware import origin_gate, request_logger, request_timeout
from checkout_backend.core.services.notification_dispatcher import NotificationDispatcher
from checkout_backend.database.repositories.order_store import InMemoryOrderStore, OrderStore
from checkout_backend.payments import build_payment_provider
from checkout_backend.payments.base import PaymentProvider

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    payment_provider: Optional[PaymentProvider] = None,
    order_store: Optional[OrderStore] = None,
) -> FastAPI:
    """
    Build the application with its collaborators.

    Args:
        settings: defaults to load_settings() (environment + .env)
        payment_provider: defaults to the Mercado Pago provider when a token is configured
        order_store: defaults to an empty InMemoryOrderStore
    """
    settings = settings or load_settings()
    if payment_provider is None:
        payment_provider = build_payment_provider(settings)
    if order_store is None:
        order_store = InMemoryOrderStore()

    app = FastAPI(
        title="Checkout Backend",
        description="Mercado Pago checkout preferences and payment webhooks for the storefront.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.payment_provider = payment_provider
    app.state.order_store = order_store
    app.state.dispatcher = NotificationDispatcher(payment_provider, order_store)

    # Registered innermost first: the request logger ends up outermost
    app.middleware("http")(request_timeout(settings.request_timeout_seconds))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.middleware("http")(origin_gate(settings.cors_origins))
    app.middleware("http")(request_logger)

    app.add_exception_handler(NotificationProcessingError, notification_error_handler)
    app.add_exception_handler(CheckoutError, checkout_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    from checkout_backend.api.routers import preferences, status, webhooks

    app.include_router(preferences.router, prefix="/api", tags=["Preferences"])
    app.include_router(webhooks.router, prefix="/api", tags=["Webhooks"])
    app.include_router(status.router, prefix="/api", tags=["Health"])

    return app


_settings = load_settings()
setup_logger(_settings.log_level)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("checkout_backend.api.main:app", host="0.0.0.0", port=_settings.port, reload=True)
