"""Database models package."""

from checkout_backend.database.models.order import Order

__all__ = [
    "Order",
]
