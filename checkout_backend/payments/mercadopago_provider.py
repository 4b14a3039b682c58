"""
Mercado Pago Provider - preferences (hosted checkout) and payment lookups.

Uses the official `mercadopago` SDK. The SDK never raises on HTTP errors; it
returns {"status": <http status>, "response": <json>} and we translate
anything outside 2xx into ProviderError.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import mercadopago
from mercadopago.config import RequestOptions

from checkout_backend.core.exceptions import ProviderError
from checkout_backend.payments.base import PaymentProvider, PaymentRecord, PreferenceResult

logger = logging.getLogger(__name__)


class MercadoPagoProvider(PaymentProvider):

    def __init__(
        self,
        access_token: str,
        timeout_seconds: float = 5.0,
        use_sandbox: bool = False,
        sdk: Optional[Any] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.use_sandbox = use_sandbox
        if sdk is None:
            # No SDK-level retries: the provider's own webhook retries are the only resilience.
            options = RequestOptions(connection_timeout=timeout_seconds, max_retries=0)
            sdk = mercadopago.SDK(access_token, request_options=options)
        self._sdk = sdk

    def get_name(self) -> str:
        return "mercadopago"

    def create_preference(self, body: Dict[str, Any]) -> PreferenceResult:
        response = self._call("criar preferência", lambda: self._sdk.preference().create(body))
        data = response.get("response") or {}
        pref_id = data.get("id")
        url_key = "sandbox_init_point" if self.use_sandbox else "init_point"
        checkout_url = data.get(url_key) or data.get("init_point")
        if not pref_id or not checkout_url:
            raise ProviderError(
                "Resposta do Mercado Pago sem id/init_point",
                details=data,
            )
        logger.info(f"Preferência criada: id={pref_id} ref={data.get('external_reference')}")
        return PreferenceResult(
            id=str(pref_id),
            checkout_url=checkout_url,
            external_reference=data.get("external_reference"),
            raw=data,
        )

    def get_payment(self, payment_id: str) -> PaymentRecord:
        response = self._call(
            f"consultar pagamento {payment_id}",
            lambda: self._sdk.payment().get(payment_id),
        )
        data = response.get("response") or {}
        if not data.get("status"):
            raise ProviderError(f"Pagamento {payment_id} sem status na resposta", details=data)
        return PaymentRecord(
            id=str(data.get("id", payment_id)),
            status=data["status"],
            external_reference=data.get("external_reference"),
            status_detail=data.get("status_detail"),
            amount=_to_decimal(data.get("transaction_amount")),
            currency=data.get("currency_id"),
        )

    def _call(self, action: str, fn) -> Dict[str, Any]:
        try:
            response = fn()
        except Exception as e:
            # requests timeouts/connection errors surface here
            raise ProviderError(f"Falha ao {action} no Mercado Pago: {e}") from e

        status = response.get("status") if isinstance(response, dict) else None
        if not isinstance(status, int) or not 200 <= status < 300:
            body = response.get("response") if isinstance(response, dict) else response
            message = body.get("message") if isinstance(body, dict) else None
            raise ProviderError(
                f"Mercado Pago retornou status {status} ao {action}"
                + (f": {message}" if message else ""),
                details=body,
                provider_status=status if isinstance(status, int) else None,
            )
        return response


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None
