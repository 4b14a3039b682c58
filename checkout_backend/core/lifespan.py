from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    provider = app.state.payment_provider

    logger.info(f"🚀 Backend da {settings.store_name} iniciando...")
    if provider is not None:
        logger.info(
            f"✅ Provedor de pagamento: {provider.get_name()} "
            f"(timeout {settings.mercadopago_timeout_seconds:.1f}s)"
        )
    else:
        logger.warning("⚠️ Nenhum provedor de pagamento configurado; /api/preference responderá 503")
    logger.info(f"Webhook: {settings.webhook_url}")
    logger.info(f"Retorno do checkout: {settings.frontend_base_url}")
    logger.info(f"CORS: {', '.join(settings.cors_origins) or '(nenhuma origem)'}")

    yield

    logger.info(f"🛑 Backend da {settings.store_name} encerrando...")
