"""Content transformation endpoints."""

from typing import Optional

from fastapi import APIRouter, Header
from pydantic import BaseModel, ConfigDict, Field

from api.auth import error_response, resolve_owner
from api.deps import get_transformer
from config import DEFAULT_TRANSFORMATION_TYPE, DIRECT_TEXT_TITLE
from services.content_fetcher import fetch_url_content, validate_text_input
from services.errors import (
    AuthenticationError, ContentFetchError, ContentValidationError, ProviderError, StorageError
)
from services.history_store import build_result_record

router = APIRouter(prefix="/api/transform", tags=["transform"])


class TransformRequest(BaseModel):
    """Request body matching the content-transformer function."""
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = None
    transformation_type: Optional[str] = Field(default=None, alias="transformationType")
    title: Optional[str] = None


class TextTransformRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    transformation_type: str = Field(default=DEFAULT_TRANSFORMATION_TYPE, alias="transformationType")


class UrlTransformRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    transformation_type: str = Field(default=DEFAULT_TRANSFORMATION_TYPE, alias="transformationType")


@router.post("")
async def transform_content(request: TransformRequest):
    """
    Transform content with the template for the requested type.

    Returns {success, transformedContent, originalTitle, transformationType}.
    """
    try:
        return await get_transformer().transform(
            request.content, request.transformation_type, request.title
        )
    except ContentValidationError as e:
        return error_response(400, str(e))
    except ProviderError as e:
        print(f"[TRANSFORM] Error in content-transformer: {e}")
        return error_response(500, str(e))


async def _transform_and_save(
    content: str,
    title: str,
    transformation_type: str,
    store,
    owner_id: Optional[str],
    url: Optional[str] = None
):
    """Run a transformation and record it for the caller when one is known."""
    result = await get_transformer().transform(content, transformation_type, title)
    transformed = result["transformedContent"]

    record = None
    saved = False
    if store is not None:
        try:
            record = await store.add_transformation(
                owner_id,
                title=title,
                transformation_type=transformation_type,
                transformed_content=transformed,
                content=content,
                url=url,
            )
            saved = True
        except StorageError as e:
            # History is best effort; the caller still gets the result
            print(f"[TRANSFORM] Failed to save transformation: {e}")

    if record is None:
        record = build_result_record(title, transformation_type, transformed, content=content, url=url)

    return {"success": True, "result": record, "saved": saved}


@router.post("/text")
async def transform_text(
    request: TextTransformRequest,
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    """Transform pasted text titled "Direct Text Input"."""
    try:
        store, owner_id = await resolve_owner(authorization, x_session_id)
        text = validate_text_input(request.text)
        return await _transform_and_save(
            text, DIRECT_TEXT_TITLE, request.transformation_type, store, owner_id
        )
    except ContentValidationError as e:
        return error_response(400, str(e))
    except AuthenticationError as e:
        return error_response(401, str(e))
    except (ProviderError, StorageError) as e:
        print(f"[TRANSFORM] Text transformation failed: {e}")
        return error_response(500, str(e))


@router.post("/url")
async def transform_url(
    request: UrlTransformRequest,
    authorization: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    """Fetch a page, transform its text and record the result."""
    try:
        store, owner_id = await resolve_owner(authorization, x_session_id)
        title, content = await fetch_url_content(request.url)
        return await _transform_and_save(
            content, title, request.transformation_type, store, owner_id, url=request.url
        )
    except ContentValidationError as e:
        return error_response(400, str(e))
    except AuthenticationError as e:
        return error_response(401, str(e))
    except (ContentFetchError, ProviderError, StorageError) as e:
        print(f"[TRANSFORM] URL transformation failed: {e}")
        return error_response(500, str(e))
