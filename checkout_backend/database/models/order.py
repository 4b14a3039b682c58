"""Order model - the merchant's order as seen by the webhook intake."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Order:
    external_reference: str
    payment_status: Optional[str] = None  # pending, approved, rejected, ... (see PaymentStatus)
    payment_id: Optional[str] = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<Order ref={self.external_reference} status={self.payment_status}>"
