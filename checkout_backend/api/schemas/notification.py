from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class WebhookPayload(BaseModel):
    """
    Body Mercado Pago posts to the notification_url.

    Fields are loose on purpose: whatever arrives is acknowledged, and only
    a `data` object with an `id` leads to a payment lookup.
    """
    type: Any = None
    topic: Any = None  # legacy IPN name for `type`
    action: Any = None
    data: Any = None
    id: Any = None
    model_config = ConfigDict(extra="allow")

    def event_type(self) -> Optional[str]:
        raw = self.type if self.type is not None else self.topic
        if raw is None:
            return None
        return str(raw).strip() or None

    def event_data(self) -> Optional[dict]:
        if isinstance(self.data, dict) and self.data:
            return dict(self.data)
        if self.id is not None and not isinstance(self.id, (dict, list)):
            return {"id": self.id}
        return None


class WebhookAck(BaseModel):
    received: bool
    type: Optional[str] = None
    payment_id: Optional[str] = None
    external_reference: Optional[str] = None
    status: Optional[str] = None
    applied: Optional[bool] = None
    reason: Optional[str] = None


class StatusResponse(BaseModel):
    status: str
    message: str
