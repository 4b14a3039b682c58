"""
String constants for payment notifications and statuses.
Plain strings (not Enums) so values coming from the provider pass through untouched.
"""

from typing import Optional


class NotificationType:
    PAYMENT = "payment"
    PLAN = "plan"
    INVOICE = "invoice"
    OTHER = "other"

    KNOWN = (PAYMENT, PLAN, INVOICE)

    @classmethod
    def classify(cls, raw: Optional[str]) -> str:
        value = (raw or "").strip().lower()
        return value if value in cls.KNOWN else cls.OTHER


class PaymentStatus:
    PENDING = "pending"
    IN_PROCESS = "in_process"
    IN_MEDIATION = "in_mediation"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    AUTHORIZED = "authorized"
    APPROVED = "approved"
    REFUNDED = "refunded"
    CHARGED_BACK = "charged_back"

    # A notification may only move an order forward along these ranks.
    # Rejected sits below approved because a second payment attempt on the
    # same external reference can still be approved.
    RANKS = {
        PENDING: 0,
        IN_PROCESS: 1,
        IN_MEDIATION: 1,
        REJECTED: 2,
        CANCELLED: 2,
        AUTHORIZED: 3,
        APPROVED: 4,
        REFUNDED: 5,
        CHARGED_BACK: 5,
    }
    UNKNOWN_RANK = -1

    @classmethod
    def rank(cls, status: Optional[str]) -> int:
        if status is None:
            return cls.UNKNOWN_RANK
        return cls.RANKS.get(status.strip().lower(), cls.UNKNOWN_RANK)

    @classmethod
    def can_transition(cls, current: Optional[str], new: Optional[str]) -> bool:
        return cls.rank(new) >= cls.rank(current)
