"""
Order Store

Interface the webhook intake uses to reach the merchant's orders, keyed by
external reference. The production store lives outside this service; the
in-memory implementation backs tests and local development.
"""

import copy
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from checkout_backend.database.models.order import Order


class OrderStore(ABC):
    """
    Two operations are all the notification flow needs.

    Example:
        order = store.find_by_external_reference("pedido-42")
        if order:
            order.payment_status = "approved"
            store.update(order)
    """

    @abstractmethod
    def find_by_external_reference(self, external_reference: str) -> Optional[Order]:
        """Return the order for this reference, or None if unknown."""
        pass

    @abstractmethod
    def update(self, order: Order) -> None:
        """Persist the order's current state."""
        pass


class InMemoryOrderStore(OrderStore):
    """Thread-safe dict-backed store. Returns copies so callers cannot mutate state without update()."""

    def __init__(self, orders: Optional[List[Order]] = None):
        self._orders: Dict[str, Order] = {}
        self._lock = threading.Lock()
        self.update_calls = 0
        for order in orders or []:
            self.add(order)

    def add(self, order: Order) -> Order:
        with self._lock:
            self._orders[order.external_reference] = copy.copy(order)
        return order

    def find_by_external_reference(self, external_reference: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(external_reference)
            return copy.copy(order) if order else None

    def update(self, order: Order) -> None:
        if not order.external_reference:
            raise ValueError("Order without external_reference cannot be stored")
        with self._lock:
            stored = copy.copy(order)
            stored.updated_at = datetime.now(timezone.utc)
            self._orders[order.external_reference] = stored
            self.update_calls += 1

    def count(self) -> int:
        with self._lock:
            return len(self._orders)
