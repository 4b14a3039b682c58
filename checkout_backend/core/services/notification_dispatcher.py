"""
Notification Dispatcher - payment-status webhooks from the payment provider.

Classifies events by type. For payment events the full payment is fetched
from the provider and its status applied to the matching order. Status
changes only move forward (see PaymentStatus.RANKS), and lookup/compare/update
for one external reference is serialized, so duplicate, concurrent or
out-of-order deliveries converge to the same final state.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from checkout_backend.core.exceptions import NotificationProcessingError
from checkout_backend.database.repositories.order_store import OrderStore
from checkout_backend.payments.base import PaymentProvider
from checkout_backend.utils.enums import NotificationType, PaymentStatus

logger = logging.getLogger(__name__)


@dataclass
class PaymentNotification:
    type: str
    event_id: Optional[str] = None
    raw_type: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, raw_type: Optional[str], data: Optional[Dict[str, Any]]) -> "PaymentNotification":
        event_id = None
        raw_id = data.get("id") if isinstance(data, dict) else None
        # only scalar ids name a payment
        if isinstance(raw_id, (str, int)) and not isinstance(raw_id, bool):
            event_id = str(raw_id).strip() or None
        return cls(
            type=NotificationType.classify(raw_type),
            event_id=event_id,
            raw_type=raw_type,
            data=data,
        )


@dataclass
class DispatchResult:
    type: str
    payment_id: Optional[str] = None
    external_reference: Optional[str] = None
    status: Optional[str] = None
    applied: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class KeyedLock:
    """One lock per key, dropped once nobody holds or waits on it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, list] = {}  # key -> [lock, users]

    @contextmanager
    def hold(self, key: str):
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


class NotificationDispatcher:

    def __init__(self, provider: Optional[PaymentProvider], order_store: OrderStore):
        self.provider = provider
        self.order_store = order_store
        self._locks = KeyedLock()

    def dispatch(self, notification: PaymentNotification) -> DispatchResult:
        logger.info(f"Webhook recebido - Tipo: {notification.raw_type}")

        if notification.type == NotificationType.PAYMENT:
            return self._handle_payment(notification)

        if notification.type == NotificationType.PLAN:
            logger.info(f"Webhook de plano recebido: {notification.data}")
            return DispatchResult(type=notification.type, reason="plan notifications are not handled")

        if notification.type == NotificationType.INVOICE:
            logger.info(f"Webhook de fatura recebido: {notification.data}")
            return DispatchResult(type=notification.type, reason="invoice notifications are not handled")

        # Always ack unknown types, otherwise the provider keeps retrying them
        logger.info(f"Webhook de tipo desconhecido recebido: {notification.raw_type} {notification.data}")
        return DispatchResult(type=NotificationType.OTHER, reason="unknown notification type")

    def _handle_payment(self, notification: PaymentNotification) -> DispatchResult:
        payment_id = notification.event_id
        if not payment_id:
            logger.warning(f"Webhook de pagamento sem data.id: {notification.data}")
            return DispatchResult(type=notification.type, reason="missing payment id")

        if self.provider is None:
            raise NotificationProcessingError("Provedor de pagamento não configurado")

        try:
            payment = self.provider.get_payment(payment_id)
        except Exception as e:
            raise NotificationProcessingError(
                f"Erro ao consultar pagamento {payment_id}: {e}"
            ) from e

        logger.info(
            f"Webhook: Pagamento ID: {payment_id}, Status: {payment.status}, "
            f"Ref Externa: {payment.external_reference}"
        )
        result = DispatchResult(
            type=notification.type,
            payment_id=payment_id,
            external_reference=payment.external_reference,
            status=payment.status,
        )

        if not payment.external_reference:
            result.reason = "payment without external reference"
            return result

        try:
            with self._locks.hold(payment.external_reference):
                result.applied, result.reason = self._apply_status(
                    payment.external_reference, payment.status, payment_id
                )
        except Exception as e:
            raise NotificationProcessingError(
                f"Erro ao atualizar pedido {payment.external_reference}: {e}"
            ) from e

        if result.applied:
            _log_status(payment.status)
        return result

    def _apply_status(self, external_reference: str, status: str, payment_id: str):
        order = self.order_store.find_by_external_reference(external_reference)
        if order is None:
            logger.warning(f"Pedido não encontrado para referência {external_reference}")
            return False, "order not found"

        if order.payment_status == status:
            return False, "status unchanged"

        if not PaymentStatus.can_transition(order.payment_status, status):
            logger.info(
                f"Ignorando regressão de status do pedido {external_reference}: "
                f"{order.payment_status} -> {status}"
            )
            return False, "stale status"

        order.payment_status = status
        order.payment_id = payment_id
        self.order_store.update(order)
        return True, None


def _log_status(status: str):
    if status == PaymentStatus.APPROVED:
        logger.info("Pagamento aprovado! Pedido pronto para processamento.")
    elif status == PaymentStatus.PENDING:
        logger.info("Pagamento pendente. Aguardando confirmação.")
    elif status == PaymentStatus.REJECTED:
        logger.info("Pagamento rejeitado. Informar cliente.")
