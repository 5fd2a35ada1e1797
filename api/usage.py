"""Anonymous daily usage counters."""

from fastapi import APIRouter, HTTPException

from api.deps import get_usage_tracker
from services.errors import ContentValidationError

router = APIRouter(prefix="/api/usage", tags=["usage"])


@router.get("/{client_id}")
async def get_usage(client_id: str):
    """Returns {used, limit, remaining} for today."""
    try:
        return await get_usage_tracker().get_status(client_id)
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{client_id}/increment")
async def increment_usage(client_id: str):
    """Record one transformation for the client and return the new status."""
    try:
        return await get_usage_tracker().increment(client_id)
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
