from datetime import datetime, timezone

from fastapi import APIRouter

from app.config import get_settings
from app.schemas.item import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
def health_check():
    settings = get_settings()
    return HealthStatus(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        app=settings.APP_NAME,
    )
