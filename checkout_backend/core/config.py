"""
Runtime configuration, read once from the environment at startup.

A `.env` file in the working directory is loaded first (python-dotenv), so
local development only needs:

    MERCADOPAGO_ACCESS_TOKEN=TEST-...
    BACKEND_BASE_URL=https://your-backend.onrender.com
    FRONTEND_BASE_URL=https://www.telhasindustrial.com
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

_DEFAULT_CORS = (
    "https://www.telhasindustrial.com,"
    "http://localhost:3000,"
    "http://localhost:5173,"
    "http://127.0.0.1:5500,"
    "http://127.0.0.1:52360"
)


@dataclass(frozen=True)
class Settings:
    mercadopago_access_token: Optional[str] = None
    mercadopago_timeout_seconds: float = 5.0
    mercadopago_use_sandbox: bool = False
    port: int = 3001
    backend_base_url: str = "http://localhost:3001"
    frontend_base_url: str = "http://localhost:3000"
    cors_origins: List[str] = field(default_factory=lambda: _split_csv(_DEFAULT_CORS))
    request_timeout_seconds: float = 30.0
    currency_id: str = "BRL"
    store_name: str = "Industrial Telhas"
    log_level: str = "INFO"

    @property
    def webhook_url(self) -> str:
        return f"{self.backend_base_url}/api/payment-webhook"


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Build Settings from the process environment (after loading .env)."""
    load_dotenv()

    port = int(os.getenv("PORT", "3001"))
    token = (os.getenv("MERCADOPAGO_ACCESS_TOKEN") or "").strip() or None

    return Settings(
        mercadopago_access_token=token,
        mercadopago_timeout_seconds=float(os.getenv("MERCADOPAGO_TIMEOUT_SECONDS", "5.0")),
        mercadopago_use_sandbox=_env_bool("MERCADOPAGO_USE_SANDBOX"),
        port=port,
        backend_base_url=os.getenv("BACKEND_BASE_URL", f"http://localhost:{port}").rstrip("/"),
        frontend_base_url=os.getenv("FRONTEND_BASE_URL", "http://localhost:3000").rstrip("/"),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS", _DEFAULT_CORS)),
        request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30")),
        currency_id=os.getenv("CURRENCY_ID", "BRL").strip().upper(),
        store_name=os.getenv("STORE_NAME", "Industrial Telhas"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
