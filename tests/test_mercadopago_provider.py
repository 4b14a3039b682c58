"""
Tests for the Mercado Pago adapter with a fake SDK object (no network).

The SDK answers {"status": <http status>, "response": <json>} for every call.
"""

from decimal import Decimal
from dataclasses import replace

import pytest

from checkout_backend.core.exceptions import ProviderError
from checkout_backend.payments import build_payment_provider
from checkout_backend.payments.mercadopago_provider import MercadoPagoProvider


class _Resource:
    def __init__(self, answer):
        self.answer = answer
        self.calls = []

    def _reply(self, arg):
        self.calls.append(arg)
        if isinstance(self.answer, Exception):
            raise self.answer
        return self.answer

    def create(self, body):
        return self._reply(body)

    def get(self, payment_id):
        return self._reply(payment_id)


class FakeSDK:
    def __init__(self, preference_answer=None, payment_answer=None):
        self._preference = _Resource(preference_answer)
        self._payment = _Resource(payment_answer)

    def preference(self):
        return self._preference

    def payment(self):
        return self._payment


PREFERENCE_OK = {
    "status": 201,
    "response": {
        "id": "123456-abc",
        "init_point": "https://www.mercadopago.com.br/checkout/v1/redirect?pref_id=123456-abc",
        "sandbox_init_point": "https://sandbox.mercadopago.com.br/checkout/v1/redirect?pref_id=123456-abc",
        "external_reference": "order-1",
    },
}

PAYMENT_OK = {
    "status": 200,
    "response": {
        "id": 1001,
        "status": "approved",
        "status_detail": "accredited",
        "external_reference": "order-1",
        "transaction_amount": 99.8,
        "currency_id": "BRL",
    },
}


class TestCreatePreference:

    def test_returns_id_and_init_point(self):
        sdk = FakeSDK(preference_answer=PREFERENCE_OK)
        provider = MercadoPagoProvider("TEST-token", sdk=sdk)

        result = provider.create_preference({"items": [], "external_reference": "order-1"})
        assert result.id == "123456-abc"
        assert result.checkout_url.startswith("https://www.mercadopago.com.br")
        assert result.external_reference == "order-1"
        assert sdk.preference().calls == [{"items": [], "external_reference": "order-1"}]

    def test_sandbox_uses_sandbox_init_point(self):
        provider = MercadoPagoProvider("TEST-token", use_sandbox=True, sdk=FakeSDK(preference_answer=PREFERENCE_OK))
        result = provider.create_preference({})
        assert result.checkout_url.startswith("https://sandbox.mercadopago.com.br")

    def test_error_status_raises_provider_error(self):
        answer = {"status": 400, "response": {"message": "invalid items", "error": "bad_request"}}
        provider = MercadoPagoProvider("TEST-token", sdk=FakeSDK(preference_answer=answer))
        with pytest.raises(ProviderError) as exc:
            provider.create_preference({})
        assert exc.value.provider_status == 400
        assert "invalid items" in exc.value.message

    def test_sdk_exception_raises_provider_error(self):
        provider = MercadoPagoProvider("TEST-token", sdk=FakeSDK(preference_answer=TimeoutError("read timed out")))
        with pytest.raises(ProviderError):
            provider.create_preference({})

    def test_response_without_init_point_raises(self):
        answer = {"status": 201, "response": {"id": "x"}}
        provider = MercadoPagoProvider("TEST-token", sdk=FakeSDK(preference_answer=answer))
        with pytest.raises(ProviderError):
            provider.create_preference({})


class TestGetPayment:

    def test_maps_payment_fields(self):
        sdk = FakeSDK(payment_answer=PAYMENT_OK)
        provider = MercadoPagoProvider("TEST-token", sdk=sdk)

        record = provider.get_payment("1001")
        assert record.id == "1001"
        assert record.status == "approved"
        assert record.external_reference == "order-1"
        assert record.status_detail == "accredited"
        assert record.amount == Decimal("99.8")
        assert sdk.payment().calls == ["1001"]

    def test_not_found_raises_provider_error(self):
        answer = {"status": 404, "response": {"message": "Payment not found"}}
        provider = MercadoPagoProvider("TEST-token", sdk=FakeSDK(payment_answer=answer))
        with pytest.raises(ProviderError) as exc:
            provider.get_payment("999")
        assert exc.value.provider_status == 404

    def test_payment_without_status_raises(self):
        answer = {"status": 200, "response": {"id": 1}}
        provider = MercadoPagoProvider("TEST-token", sdk=FakeSDK(payment_answer=answer))
        with pytest.raises(ProviderError):
            provider.get_payment("1")


class TestBuildPaymentProvider:

    def test_without_token_returns_none(self, settings):
        assert build_payment_provider(replace(settings, mercadopago_access_token=None)) is None

    def test_with_token_returns_mercadopago(self, settings):
        provider = build_payment_provider(replace(settings, mercadopago_timeout_seconds=2.5))
        assert isinstance(provider, MercadoPagoProvider)
        assert provider.get_name() == "mercadopago"
        assert provider.timeout_seconds == 2.5
