"""
Payment Provider - Abstract base for payment gateways, plus the checkout data model.

Implementations: MercadoPagoProvider. Tests plug in their own fakes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass
class Address:
    zip_code: Optional[str] = None
    street_name: Optional[str] = None
    street_number: Optional[str] = None


@dataclass
class Buyer:
    email: str
    name: Optional[str] = None
    surname: Optional[str] = None
    tax_id: Optional[str] = None  # CPF or CNPJ, digits only after normalization
    address: Optional[Address] = None


@dataclass
class CartItem:
    name: str
    quantity: Any  # coerced to a positive int by the preference builder
    unit_price: Any  # coerced to a positive Decimal by the preference builder
    currency_id: Optional[str] = None  # None -> configured currency


@dataclass
class PreferenceRequest:
    """One checkout attempt submitted by the storefront. Not persisted."""
    items: List[CartItem]
    buyer: Buyer
    external_reference: Optional[str] = None


@dataclass
class PreferenceResult:
    """Preference created on the provider side."""
    id: str
    checkout_url: str
    external_reference: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class PaymentRecord:
    """Read-only view of a payment fetched from the provider."""
    id: str
    status: str  # approved, pending, rejected, ...
    external_reference: Optional[str] = None
    status_detail: Optional[str] = None
    amount: Optional[Decimal] = None
    currency: Optional[str] = None


class PaymentProvider(ABC):
    """Abstract payment provider. Every call must bound its wait on the remote API."""

    @abstractmethod
    def get_name(self) -> str:
        """Provider display name."""
        pass

    @abstractmethod
    def create_preference(self, body: Dict[str, Any]) -> PreferenceResult:
        """Create a preference from a provider-schema body. Raises ProviderError."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: str) -> PaymentRecord:
        """Fetch full payment details by provider payment ID. Raises ProviderError."""
        pass
