"""Transformation history endpoints.

Signed-in callers send ``Authorization: Bearer <jwt>`` and read the
``transformations`` table; anonymous callers send ``X-Session-Id`` and read
the local file store.
"""

from typing import List, Optional

from fastapi import APIRouter, Header, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from api.auth import require_owner
from services.errors import AuthenticationError, ContentValidationError, StorageError
from services.exporters import content_disposition, export_history

router = APIRouter(prefix="/api/history", tags=["history"])


class SaveTransformationRequest(BaseModel):
    """A transformation result to record in the caller's history."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    transformation_type: str = Field(alias="transformationType")
    transformed_content: str = Field(alias="transformedContent")
    url: Optional[str] = None
    content: Optional[str] = None
    related_questions: List[str] = Field(default_factory=list, alias="relatedQuestions")


async def _owner(authorization: Optional[str], session_id: Optional[str]):
    try:
        return await require_owner(authorization, session_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("")
async def list_history(
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    """List the caller's transformations, newest first."""
    store, owner_id = await _owner(authorization, x_session_id)
    try:
        return await store.list_transformations(owner_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/export")
async def export_transformations(
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    """Download the full history as mindloom-transformations-<date>.json."""
    store, owner_id = await _owner(authorization, x_session_id)
    try:
        records = await store.list_transformations(owner_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    exported = export_history(records)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": content_disposition(exported.filename)}
    )


@router.get("/{transformation_id}")
async def get_transformation(
    transformation_id: str,
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    store, owner_id = await _owner(authorization, x_session_id)
    try:
        record = await store.get_transformation(owner_id, transformation_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if record is None:
        raise HTTPException(status_code=404, detail="Transformation not found")
    return record


@router.delete("/{transformation_id}")
async def delete_transformation(
    transformation_id: str,
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    store, owner_id = await _owner(authorization, x_session_id)
    try:
        deleted = await store.delete_transformation(owner_id, transformation_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Transformation not found")
    return {"success": True}


@router.delete("")
async def clear_history(
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    """Delete every transformation the caller owns."""
    store, owner_id = await _owner(authorization, x_session_id)
    try:
        await store.clear_history(owner_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True}


@router.post("")
async def save_transformation(
    request: SaveTransformationRequest,
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    """Record a result produced elsewhere (e.g. by /api/transform)."""
    store, owner_id = await _owner(authorization, x_session_id)
    try:
        return await store.add_transformation(
            owner_id,
            title=request.title,
            transformation_type=request.transformation_type,
            transformed_content=request.transformed_content,
            content=request.content,
            url=request.url,
            related_questions=request.related_questions,
        )
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
