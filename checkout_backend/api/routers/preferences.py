"""
Preferences Router - creates a Mercado Pago checkout for the storefront cart.
"""

import logging

from fastapi import APIRouter, Depends

from checkout_backend.api.dependencies import get_payment_provider, get_settings
from checkout_backend.api.schemas.preference import PreferenceCreate, PreferenceResponse
from checkout_backend.core.config import Settings
from checkout_backend.payments.base import PaymentProvider
from checkout_backend.payments.preference_builder import build_preference

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/preference", response_model=PreferenceResponse)
@router.post("/mercadopago-preferencia", response_model=PreferenceResponse, include_in_schema=False)
def create_preference(
    body: PreferenceCreate,
    settings: Settings = Depends(get_settings),
    provider: PaymentProvider = Depends(get_payment_provider),
):
    """Build the preference from the cart and return the hosted checkout URL."""
    preference = build_preference(body.to_domain(), settings)
    logger.info(
        f"Criando preferência: ref={preference['external_reference']} "
        f"itens={len(preference['items'])}"
    )
    result = provider.create_preference(preference)
    return PreferenceResponse(
        id=result.id,
        checkoutUrl=result.checkout_url,
        externalReference=result.external_reference or preference["external_reference"],
    )
