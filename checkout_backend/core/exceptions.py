from typing import Any, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Base class for errors raised by the checkout backend."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else message


class ValidationError(CheckoutError):
    """Malformed cart or payer input."""

    status_code = 400
    error = "Dados do pedido inválidos"


class ProviderError(CheckoutError):
    """The payment provider call failed or returned an unexpected answer."""

    status_code = 500
    error = "Erro ao comunicar com o provedor de pagamento"

    def __init__(self, message: str, details: Optional[Any] = None, provider_status: Optional[int] = None):
        super().__init__(message, details)
        self.provider_status = provider_status


class ProviderNotConfiguredError(CheckoutError):
    status_code = 503
    error = "Provedor de pagamento não configurado"


class NotificationProcessingError(CheckoutError):
    """Fetching or applying a payment notification failed; the provider must retry."""

    status_code = 500
    error = "Erro ao processar webhook de pagamento"


async def checkout_error_handler(request: Request, exc: CheckoutError):
    if exc.status_code >= 500:
        logger.error(f"{exc.error}: {exc.message}")
    else:
        logger.warning(f"{exc.error}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "details": exc.details},
    )


async def notification_error_handler(request: Request, exc: NotificationProcessingError):
    logger.error(f"Webhook não processado, provedor fará nova tentativa: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"received": False})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    logger.warning(f"Requisição inválida em {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.error, "details": errors},
    )


async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "details": "Check server logs."},
    )
