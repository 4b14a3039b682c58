"""
FastAPI dependencies - collaborators injected per request from app.state.

create_app() places settings, provider, order store and dispatcher on
app.state; tests pass their own fakes to create_app().
"""

from fastapi import Request

from checkout_backend.core.config import Settings
from checkout_backend.core.exceptions import ProviderNotConfiguredError
from checkout_backend.core.services.notification_dispatcher import NotificationDispatcher
from checkout_backend.payments.base import PaymentProvider


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_payment_provider(request: Request) -> PaymentProvider:
    provider = request.app.state.payment_provider
    if provider is None:
        raise ProviderNotConfiguredError(
            "MERCADOPAGO_ACCESS_TOKEN não configurado",
            details="Payment provider credentials are not configured",
        )
    return provider


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher
