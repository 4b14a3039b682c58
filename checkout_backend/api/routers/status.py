from fastapi import APIRouter, Depends

from checkout_backend.api.dependencies import get_settings
from checkout_backend.api.schemas.notification import StatusResponse
from checkout_backend.core.config import Settings

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
def status(settings: Settings = Depends(get_settings)):
    """Liveness probe."""
    return StatusResponse(status="online", message=f"Backend da {settings.store_name} funcionando!")
