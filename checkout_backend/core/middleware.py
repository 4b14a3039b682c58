import asyncio
import logging
import time
from typing import Iterable

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def request_logger(request: Request, call_next):
    start = time.time()
    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    elapsed = time.time() - start
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({elapsed:.3f}s)"
    )

    response.headers["X-Process-Time"] = str(elapsed)
    return response


def origin_gate(allowed_origins: Iterable[str]):
    """Reject browser requests from origins outside the allow-list. No Origin header passes."""
    allowed = set(allowed_origins)

    async def check_origin(request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and origin not in allowed:
            logger.warning(f"Origem bloqueada pelo CORS: {origin} ({request.method} {request.url.path})")
            return JSONResponse(
                status_code=403,
                content={
                    "error": "Origin not allowed",
                    "details": "The CORS policy for this site does not allow access from the specified Origin.",
                },
            )
        return await call_next(request)

    return check_origin


def request_timeout(seconds: float):
    async def enforce_timeout(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=seconds)
        except asyncio.TimeoutError:
            logger.error(f"Timeout de {seconds:.1f}s em {request.method} {request.url.path}")
            return JSONResponse(
                status_code=504,
                content={"error": "Request timeout", "details": f"Request exceeded {seconds:.1f}s"},
            )

    return enforce_timeout
