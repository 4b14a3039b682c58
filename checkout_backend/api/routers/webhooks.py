"""
Webhooks Router - payment notifications from Mercado Pago.

Answers 200 for everything it does not need the provider to resend and 500
only when fetching or applying a payment failed, so Mercado Pago retries.
The body is read by hand: a payload that is not a JSON object is still
acknowledged (as an "other" notification) instead of being rejected.
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from checkout_backend.api.dependencies import get_dispatcher
from checkout_backend.api.schemas.notification import WebhookAck, WebhookPayload
from checkout_backend.core.services.notification_dispatcher import (
    NotificationDispatcher,
    PaymentNotification,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/payment-webhook", response_model=WebhookAck, response_model_exclude_none=True)
@router.post("/mercadopago-webhook", response_model=WebhookAck, response_model_exclude_none=True, include_in_schema=False)
async def payment_webhook(
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """Receive a notification (JSON body, or IPN-style query string)."""
    body = await _read_body(request)
    payload = WebhookPayload.model_validate(body) if isinstance(body, dict) else None
    if body is not None and payload is None:
        logger.warning("Webhook body is not a JSON object (%s), ignoring it", type(body).__name__)

    notification = _to_notification(payload, request)
    # provider fetch and store update block; keep them off the event loop
    result = await run_in_threadpool(dispatcher.dispatch, notification)
    return WebhookAck(received=True, **result.to_dict())


async def _read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Webhook body is not valid JSON (%d bytes), ignoring it", len(raw))
        return None


def _to_notification(payload: Optional[WebhookPayload], request: Request) -> PaymentNotification:
    query = request.query_params
    raw_type = None
    data = None
    if payload is not None:
        raw_type = payload.event_type()
        data = payload.event_data()

    raw_type = raw_type or query.get("type") or query.get("topic")
    if data is None:
        query_id = query.get("data.id") or query.get("id")
        if query_id:
            data = {"id": query_id}

    return PaymentNotification.from_payload(raw_type, data)
