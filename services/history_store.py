"""Transformation history storage.

Two stores share one interface, keyed by an owner id:

- SupabaseHistoryStore: signed-in users, rows in the ``transformations``
  table scoped by ``user_id``.
- FileHistoryStore: anonymous sessions, one JSON file per session id under
  ``data/history``, newest first and capped at MAX_ANONYMOUS_HISTORY entries.

Records are never updated after they are written; they are only listed,
read, deleted one by one or cleared.
"""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Dict, Any, Optional

from config import HISTORY_PATH, MAX_ANONYMOUS_HISTORY, ORIGINAL_CONTENT_CHARS
from services.supabase_gateway import SupabaseGateway
from services.usage_tracker import validate_client_id


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_result_record(
    title: str,
    transformation_type: str,
    transformed_content: str,
    content: Optional[str] = None,
    url: Optional[str] = None,
    related_questions: Optional[List[str]] = None,
    record_id: Optional[str] = None,
    created_at: Optional[str] = None
) -> Dict[str, Any]:
    """Build a TransformationResult in its wire shape."""
    return {
        "id": record_id or str(uuid.uuid4()),
        "url": url,
        "title": title,
        "transformationType": transformation_type,
        "transformedContent": transformed_content,
        "createdAt": created_at or utc_now(),
        "originalContentPreview": content[:ORIGINAL_CONTENT_CHARS] if content else None,
        "relatedQuestions": related_questions or [],
    }


class FileHistoryStore:
    """File-based history for anonymous sessions."""

    def __init__(self, base_path: str = HISTORY_PATH, max_entries: int = MAX_ANONYMOUS_HISTORY):
        self.base_path = Path(base_path)
        self.max_entries = max_entries

    async def initialize(self):
        """Initialize the storage directory."""
        self.base_path.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # File Operations
    # =========================================================================

    def _get_history_path(self, session_id: str) -> Path:
        return self.base_path / f"{validate_client_id(session_id)}.json"

    async def _read_entries(self, session_id: str) -> List[Dict[str, Any]]:
        try:
            with open(self._get_history_path(session_id), 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return []
        return data.get("transformations", []) if isinstance(data, dict) else []

    async def _write_entries(self, session_id: str, entries: List[Dict[str, Any]]):
        path = self._get_history_path(session_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({"transformations": entries}, f, indent=2, ensure_ascii=False)

    # =========================================================================
    # History CRUD
    # =========================================================================

    async def add_transformation(
        self,
        owner_id: str,
        title: str,
        transformation_type: str,
        transformed_content: str,
        content: Optional[str] = None,
        url: Optional[str] = None,
        related_questions: Optional[List[str]] = None,
        file_upload_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Prepend a new result, dropping the oldest beyond the cap."""
        record = build_result_record(
            title, transformation_type, transformed_content,
            content=content, url=url, related_questions=related_questions
        )
        entries = await self._read_entries(owner_id)
        entries = [record] + entries[:self.max_entries - 1]
        await self._write_entries(owner_id, entries)
        return record

    async def list_transformations(self, owner_id: str) -> List[Dict[str, Any]]:
        return await self._read_entries(owner_id)

    async def get_transformation(self, owner_id: str, transformation_id: str) -> Optional[Dict[str, Any]]:
        for entry in await self._read_entries(owner_id):
            if entry.get("id") == transformation_id:
                return entry
        return None

    async def delete_transformation(self, owner_id: str, transformation_id: str) -> bool:
        entries = await self._read_entries(owner_id)
        remaining = [entry for entry in entries if entry.get("id") != transformation_id]
        if len(remaining) == len(entries):
            return False
        await self._write_entries(owner_id, remaining)
        return True

    async def clear_history(self, owner_id: str):
        path = self._get_history_path(owner_id)
        if path.exists():
            path.unlink()


class SupabaseHistoryStore:
    """History for signed-in users, stored in the transformations table."""

    def __init__(self, gateway: SupabaseGateway):
        self.gateway = gateway

    @staticmethod
    def _row_to_record(row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": row.get("id"),
            "url": row.get("url"),
            "title": row.get("title"),
            "transformationType": row.get("transformation_type"),
            "transformedContent": row.get("transformed_content"),
            "createdAt": row.get("created_at"),
            "originalContentPreview": row.get("original_content") or None,
            "relatedQuestions": [],
            "fileUploadId": row.get("file_upload_id"),
        }

    async def add_transformation(
        self,
        owner_id: str,
        title: str,
        transformation_type: str,
        transformed_content: str,
        content: Optional[str] = None,
        url: Optional[str] = None,
        related_questions: Optional[List[str]] = None,
        file_upload_id: Optional[str] = None
    ) -> Dict[str, Any]:
        row = {
            "user_id": owner_id,
            "title": title,
            "transformation_type": transformation_type,
            "original_content": (content or "")[:ORIGINAL_CONTENT_CHARS],
            "transformed_content": transformed_content,
        }
        if file_upload_id:
            row["file_upload_id"] = file_upload_id

        saved = await self.gateway.insert_transformation(row)
        record = self._row_to_record(saved)
        record["url"] = url
        record["relatedQuestions"] = related_questions or []
        return record

    async def list_transformations(self, owner_id: str) -> List[Dict[str, Any]]:
        rows = await self.gateway.list_transformations(owner_id)
        return [self._row_to_record(row) for row in rows]

    async def get_transformation(self, owner_id: str, transformation_id: str) -> Optional[Dict[str, Any]]:
        row = await self.gateway.get_transformation(owner_id, transformation_id)
        return self._row_to_record(row) if row else None

    async def delete_transformation(self, owner_id: str, transformation_id: str) -> bool:
        return await self.gateway.delete_transformation(owner_id, transformation_id)

    async def clear_history(self, owner_id: str):
        await self.gateway.clear_transformations(owner_id)
