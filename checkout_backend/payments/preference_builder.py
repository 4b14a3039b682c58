"""
Preference Builder - maps a storefront checkout into Mercado Pago's preference schema.

Pure transformation: nothing is sent anywhere until the result is handed to a
PaymentProvider.
"""

import re
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from checkout_backend.core.config import Settings
from checkout_backend.core.exceptions import ValidationError
from checkout_backend.payments.base import Buyer, CartItem, PreferenceRequest

BACK_URL_PATHS = {
    "success": "/pagamento/sucesso.html",
    "failure": "/pagamento/falha.html",
    "pending": "/pagamento/pendente.html",
}


def new_external_reference() -> str:
    return f"pedido-{uuid.uuid4().hex}"


def build_preference(request: PreferenceRequest, settings: Settings) -> Dict[str, Any]:
    """
    Build the preference body for a checkout attempt.

    Raises:
        ValidationError: empty cart, or a quantity/price that is not a positive number.
    """
    if not request.items:
        raise ValidationError("O carrinho está vazio", details="items must not be empty")

    items = [_map_item(index, item, settings.currency_id) for index, item in enumerate(request.items)]

    return {
        "items": items,
        "payer": _map_payer(request.buyer),
        "back_urls": {
            key: f"{settings.frontend_base_url}{path}" for key, path in BACK_URL_PATHS.items()
        },
        "auto_return": "approved",
        "notification_url": settings.webhook_url,
        "external_reference": request.external_reference or new_external_reference(),
    }


def preference_total(body: Dict[str, Any]) -> Decimal:
    """Sum of quantity x unit_price over the mapped items."""
    return sum(
        (Decimal(str(i["unit_price"])) * i["quantity"] for i in body.get("items", [])),
        Decimal("0"),
    )


def _map_item(index: int, item: CartItem, currency_id: str) -> Dict[str, Any]:
    name = (item.name or "").strip() if isinstance(item.name, str) else ""
    if not name:
        raise ValidationError(f"Item {index} sem nome", details=f"items[{index}].name is required")

    quantity = _positive_int(item.quantity)
    if quantity is None:
        raise ValidationError(
            f"Quantidade inválida no item {index}",
            details=f"items[{index}].qty must be a positive integer, got {item.quantity!r}",
        )

    unit_price = _positive_cents(item.unit_price)
    if unit_price is None:
        raise ValidationError(
            f"Preço inválido no item {index}",
            details=f"items[{index}].price must be a positive amount of at least 0.01, got {item.unit_price!r}",
        )

    return {
        "title": name,
        "quantity": quantity,
        "currency_id": (item.currency_id or currency_id).upper(),
        # the API takes a JSON number; two decimal places keeps cents exact
        "unit_price": float(unit_price),
    }


def _map_payer(buyer: Buyer) -> Dict[str, Any]:
    email = (buyer.email or "").strip()
    if not email or "@" not in email:
        raise ValidationError("E-mail do comprador inválido", details="payerEmail must be a valid e-mail")

    payer: Dict[str, Any] = {"email": email}
    if buyer.name:
        payer["first_name"] = buyer.name
    if buyer.surname:
        payer["last_name"] = buyer.surname

    if buyer.tax_id:
        digits = re.sub(r"\D", "", buyer.tax_id)
        if len(digits) == 11:
            payer["identification"] = {"type": "CPF", "number": digits}
        elif len(digits) == 14:
            payer["identification"] = {"type": "CNPJ", "number": digits}
        else:
            raise ValidationError(
                "CPF/CNPJ inválido",
                details="payerTaxId must have 11 (CPF) or 14 (CNPJ) digits",
            )

    if buyer.address:
        address = {
            k: v
            for k, v in (
                ("zip_code", buyer.address.zip_code),
                ("street_name", buyer.address.street_name),
                ("street_number", buyer.address.street_number),
            )
            if v
        }
        if address:
            payer["address"] = address

    return payer


def _positive_int(value: Any):
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number <= 0 or number != number.to_integral_value():
        return None
    return int(number)


def _positive_cents(value: Any):
    """Price rounded to cents, or None unless it is at least one cent."""
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip().replace(",", "."))
        if not number.is_finite():
            return None
        # more digits than the context precision raises InvalidOperation
        cents = number.quantize(Decimal("0.01"))
    except (InvalidOperation, ValueError):
        return None
    if cents <= 0:
        return None
    return cents
