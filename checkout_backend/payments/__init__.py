"""
Payment providers - abstraction for payment gateways.

Usage:
    from checkout_backend.payments import build_payment_provider

    provider = build_payment_provider(settings)
    result = provider.create_preference(build_preference(request, settings))

Returns None when MERCADOPAGO_ACCESS_TOKEN is not configured.
"""

import logging
from typing import Optional

from checkout_backend.core.config import Settings
from checkout_backend.payments.base import (
    Address,
    Buyer,
    CartItem,
    PaymentProvider,
    PaymentRecord,
    PreferenceRequest,
    PreferenceResult,
)
from checkout_backend.payments.mercadopago_provider import MercadoPagoProvider
from checkout_backend.payments.preference_builder import build_preference

logger = logging.getLogger(__name__)


def build_payment_provider(settings: Settings) -> Optional[PaymentProvider]:
    """Return the configured payment provider instance, or None without credentials."""
    if not settings.mercadopago_access_token:
        logger.warning("MERCADOPAGO_ACCESS_TOKEN não configurado; criação de preferências desabilitada")
        return None
    return MercadoPagoProvider(
        access_token=settings.mercadopago_access_token,
        timeout_seconds=settings.mercadopago_timeout_seconds,
        use_sandbox=settings.mercadopago_use_sandbox,
    )


__all__ = [
    "build_payment_provider",
    "build_preference",
    "PaymentProvider",
    "MercadoPagoProvider",
    "Address",
    "Buyer",
    "CartItem",
    "PaymentRecord",
    "PreferenceRequest",
    "PreferenceResult",
]
