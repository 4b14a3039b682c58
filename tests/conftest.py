"""
Pytest global configuration for the checkout backend.

- Builds the FastAPI app through create_app() with in-process fakes
- FakePaymentProvider stands in for Mercado Pago (no network)
- InMemoryOrderStore holds the merchant's orders
"""

import itertools
import threading
import time

import pytest
from fastapi.testclient import TestClient

from checkout_backend.api.main import create_app
from checkout_backend.core.config import Settings
from checkout_backend.core.exceptions import ProviderError
from checkout_backend.database.repositories.order_store import InMemoryOrderStore
from checkout_backend.payments.base import PaymentProvider, PaymentRecord, PreferenceResult

CHECKOUT_DOMAIN = "https://www.mercadopago.com.br"


class FakePaymentProvider(PaymentProvider):
    """Records every call; payments are registered by the test."""

    def __init__(self):
        self.preferences = []
        self.payments = {}
        self.delays = {}
        self.get_payment_calls = []
        self.fail_create = None
        self.fail_get = None
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_name(self) -> str:
        return "fake"

    def create_preference(self, body):
        if self.fail_create is not None:
            raise self.fail_create
        pref_id = f"123456-pref-{next(self._ids)}"
        self.preferences.append(body)
        return PreferenceResult(
            id=pref_id,
            checkout_url=f"{CHECKOUT_DOMAIN}/checkout/v1/redirect?pref_id={pref_id}",
            external_reference=body.get("external_reference"),
        )

    def add_payment(self, payment_id, status, external_reference, delay=0.0):
        self.payments[str(payment_id)] = PaymentRecord(
            id=str(payment_id),
            status=status,
            external_reference=external_reference,
        )
        self.delays[str(payment_id)] = delay

    def get_payment(self, payment_id):
        with self._lock:
            self.get_payment_calls.append(payment_id)
        if self.fail_get is not None:
            raise self.fail_get
        if payment_id not in self.payments:
            raise ProviderError(f"payment {payment_id} not found", provider_status=404)
        delay = self.delays.get(payment_id, 0.0)
        if delay:
            time.sleep(delay)
        return self.payments[payment_id]


# ============================================================================
# APP FIXTURES
# ============================================================================

@pytest.fixture
def settings():
    return Settings(
        mercadopago_access_token="TEST-token",
        backend_base_url="https://api.telhas.test",
        frontend_base_url="https://www.telhas.test",
        cors_origins=["https://www.telhas.test", "http://localhost:5173"],
        store_name="Loja Teste",
    )


@pytest.fixture
def fake_provider():
    return FakePaymentProvider()


@pytest.fixture
def order_store():
    return InMemoryOrderStore()


@pytest.fixture
def test_app(settings, fake_provider, order_store):
    return create_app(settings, fake_provider, order_store)


@pytest.fixture
def test_client(test_app):
    client = TestClient(test_app)
    yield client


# ============================================================================
# PAYLOADS
# ============================================================================

@pytest.fixture
def sample_preference_payload():
    """Cart as the storefront posts it."""
    return {
        "items": [{"name": "Tile A", "qty": 2, "price": 49.90}],
        "payerEmail": "a@b.com",
        "externalReference": "order-1",
    }
