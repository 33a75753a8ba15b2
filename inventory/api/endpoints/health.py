from fastapi import APIRouter
from datetime import datetime, timezone
from pydantic import BaseModel

from inventory.core.logging_config import get_request_logs_status, set_request_logs_enabled

router = APIRouter()


class RequestLogsToggle(BaseModel):
    enabled: bool


@router.get("/", tags=["health"])
async def health() -> dict[str, object]:
    """Lightweight health endpoint for liveness checks."""
    return {
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/request-logs/status")
async def request_logs_status() -> dict[str, object]:
    return get_request_logs_status()


@router.post("/request-logs/status")
async def request_logs_toggle(body: RequestLogsToggle) -> dict[str, object]:
    return set_request_logs_enabled(body.enabled)
