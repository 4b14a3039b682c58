from checkout_backend.api.schemas.notification import (
    StatusResponse,
    WebhookAck,
    WebhookPayload,
)
from checkout_backend.api.schemas.preference import (
    CartItemIn,
    PayerAddressIn,
    PreferenceCreate,
    PreferenceResponse,
)

__all__ = [
    "CartItemIn",
    "PayerAddressIn",
    "PreferenceCreate",
    "PreferenceResponse",
    "StatusResponse",
    "WebhookAck",
    "WebhookPayload",
]
