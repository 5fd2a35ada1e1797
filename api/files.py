"""File upload and file transformation endpoints."""

import time
import uuid
from typing import List, Optional

from fastapi import APIRouter, UploadFile, File, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from api.deps import get_gateway, get_supabase_history, get_transformer
from config import DEFAULT_TRANSFORMATION_TYPE, MAX_FILES_PER_UPLOAD
from services.errors import AuthenticationError, ContentValidationError, ProviderError, StorageError
from services.file_processor import FileProcessor
from services.supabase_gateway import bearer_token

router = APIRouter(prefix="/api/files", tags=["files"])

processor = FileProcessor()

SECURITY_RESOURCE = "file_processor"


class ProcessFileRequest(BaseModel):
    """Request to transform a previously uploaded file."""
    model_config = ConfigDict(populate_by_name=True)

    file_id: str = Field(alias="fileId")
    transformation_type: str = Field(default=DEFAULT_TRANSFORMATION_TYPE, alias="transformationType")
    custom_prompt: Optional[str] = Field(default=None, alias="customPrompt")


def _client_metadata(request: Request) -> dict:
    headers = request.headers
    return {
        "ip_address": headers.get("x-forwarded-for") or headers.get("x-real-ip") or "unknown",
        "user_agent": headers.get("user-agent") or "unknown",
    }


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _temporary_file_id() -> str:
    return f"temp_{_epoch_ms()}_{uuid.uuid4().hex[:9]}"


def _storage_path(user_id: str, filename: str) -> str:
    """Storage key <user_id>/<epoch_ms>.<ext>."""
    extension = filename.rsplit(".", 1)[-1]
    return f"{user_id}/{_epoch_ms()}.{extension}"


@router.post("/process")
async def process_file(
    body: ProcessFileRequest,
    request: Request,
    authorization: Optional[str] = Header(default=None)
):
    """
    Transform an uploaded file and record the result for its owner.

    Returns {success, transformedContent, transformationType, title, transformationId}.
    """
    gateway = get_gateway()
    metadata = _client_metadata(request)
    print(f"[FILES] Processing file: file_id={body.file_id} type={body.transformation_type}")

    token = bearer_token(authorization)
    if not token:
        print("[FILES] Authentication required - no auth header")
        return JSONResponse(status_code=401, content={"error": "Authentication required"})

    try:
        user = await gateway.get_user(token)
    except (AuthenticationError, StorageError) as e:
        print(f"[FILES] Authentication failed: {e}")
        await gateway.log_security_event(
            "failed_authentication", SECURITY_RESOURCE, {**metadata, "error": str(e)}
        )
        return JSONResponse(status_code=401, content={"error": "Invalid authentication"})

    await gateway.log_security_event(
        "file_processing_requested", SECURITY_RESOURCE, {**metadata, "file_id": body.file_id}, token=token
    )

    try:
        file_record = await gateway.get_file_record(body.file_id)
        if file_record.get("user_id") not in (None, user["id"]):
            raise StorageError("File not found")

        file_name = file_record.get("file_name", "unknown")
        content = await gateway.download_file(file_record["storage_path"])
        extracted = processor.extract_text(file_name, content, file_record.get("file_type") or "")

        transformed = await get_transformer().transform_file_content(
            extracted, body.transformation_type, body.custom_prompt
        )
        print("[FILES] Transformation complete")
    except (StorageError, ProviderError) as e:
        print(f"[FILES] Error in file-processor: {e}")
        return JSONResponse(status_code=500, content={"error": str(e), "success": False})

    title = f"{body.transformation_type} of {file_name}"
    transformation_id = None
    try:
        saved = await get_supabase_history().add_transformation(
            user["id"],
            title=title,
            transformation_type=body.transformation_type,
            transformed_content=transformed,
            content=extracted,
            file_upload_id=body.file_id,
        )
        transformation_id = saved["id"]
    except StorageError as e:
        print(f"[FILES] Failed to save transformation: {e}")

    return {
        "success": True,
        "transformedContent": transformed,
        "transformationType": body.transformation_type,
        "title": title,
        "transformationId": transformation_id,
    }


@router.post("/upload-multiple")
async def upload_multiple_files(
    files: List[UploadFile] = File(...),
    authorization: Optional[str] = Header(default=None)
):
    """
    Validate, extract and (for signed-in users) store up to five files.

    Returns {results, errors}. Invalid files are reported in errors and the
    rest continue.
    """
    if len(files) > MAX_FILES_PER_UPLOAD:
        raise HTTPException(status_code=400, detail=f"Maximum {MAX_FILES_PER_UPLOAD} files allowed at once")

    uploads = [(file.filename or "unknown", file.content_type, await file.read()) for file in files]

    gateway = get_gateway()
    token = bearer_token(authorization)
    user = None
    if token:
        try:
            user = await gateway.get_user(token)
        except AuthenticationError as e:
            raise HTTPException(status_code=401, detail=str(e))
        except StorageError as e:
            raise HTTPException(status_code=500, detail=str(e))

        total_size = sum(len(content) for _, _, content in uploads)
        try:
            allowed = await gateway.check_upload_limits(token, total_size)
        except StorageError as e:
            print(f"[FILES] Error checking upload limits: {e}")
            allowed = True
        if not allowed:
            raise HTTPException(
                status_code=429,
                detail="You have reached your daily upload limit. Please try again tomorrow."
            )

    results = []
    errors = []

    for filename, content_type, content in uploads:
        try:
            processed = processor.process_file(filename=filename, content=content, content_type=content_type)
        except ContentValidationError as e:
            errors.append({"filename": filename, "error": str(e)})
            continue

        storage_path = None
        if user:
            try:
                storage_path = await gateway.upload_file(
                    _storage_path(user["id"], filename), content, processed["mimeType"]
                )
                row = await gateway.insert_file_record({
                    "user_id": user["id"],
                    "file_name": filename,
                    "file_type": processed["mimeType"],
                    "file_size": processed["size"],
                    "storage_path": storage_path,
                    "content_preview": processed["contentPreview"],
                })
                file_id = row["id"]
            except StorageError as e:
                print(f"[FILES] Upload failed for {filename}: {e}")
                errors.append({"filename": filename, "error": f"Failed to save {filename} to database"})
                continue
        else:
            file_id = _temporary_file_id()

        results.append({"id": file_id, "storagePath": storage_path, **processed})

    print(f"[FILES] Processed {len(results)} file(s), {len(errors)} rejected")
    return {
        "results": results,
        "errors": errors,
        "persisted": user is not None,
    }


@router.delete("/{file_id}")
async def delete_file(file_id: str, authorization: Optional[str] = Header(default=None)):
    """Delete a signed-in user's upload and its storage object."""
    gateway = get_gateway()
    try:
        user = await gateway.get_user(bearer_token(authorization))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    try:
        deleted = await gateway.delete_file(user["id"], file_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=404, detail="File not found")
    return {"success": True}
