"""Supabase access: auth, tables, storage and RPC functions.

The supabase-py client is synchronous, so every call is pushed to a worker
thread with ``asyncio.to_thread`` to keep the FastAPI event loop free.
"""

import asyncio
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from supabase import Client, create_client

from config import SUPABASE_UPLOADS_BUCKET, TRANSFORMATIONS_TABLE, FILE_UPLOADS_TABLE
from services.errors import AuthenticationError, StorageError

load_dotenv()


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    token = authorization.replace("Bearer ", "", 1).strip()
    return token or None


class SupabaseGateway:
    """Typed wrapper around the Supabase client."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        client: Optional[Client] = None
    ):
        self.url = url or os.getenv("SUPABASE_URL")
        self.key = key or os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")
        if client is not None:
            self.client = client
        elif self.url and self.key:
            self.client = create_client(self.url, self.key)
        else:
            self.client = None

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def _require_client(self) -> Client:
        if self.client is None:
            raise StorageError("Supabase is not configured")
        return self.client

    # =========================================================================
    # Auth
    # =========================================================================

    async def get_user(self, token: Optional[str]) -> Dict[str, Any]:
        """Resolve a bearer token to the Supabase user.

        Returns {"id", "email"}. Raises AuthenticationError for a missing or
        rejected token.
        """
        if not token:
            raise AuthenticationError("Authentication required")
        client = self._require_client()

        try:
            response = await asyncio.to_thread(client.auth.get_user, token)
        except Exception as e:
            raise AuthenticationError(f"Invalid authentication: {e}") from e

        user = getattr(response, "user", None)
        if user is None:
            raise AuthenticationError("Invalid authentication")
        return {"id": user.id, "email": getattr(user, "email", None)}

    # =========================================================================
    # RPC
    # =========================================================================

    def _user_client(self, token: str) -> Client:
        """A fresh client whose database calls run as the token's user."""
        if not (self.url and self.key):
            return self._require_client()
        client = create_client(self.url, self.key)
        client.postgrest.auth(token)
        return client

    async def check_upload_limits(self, token: str, total_size: int) -> bool:
        """Ask the ``check_upload_limits`` RPC whether the user may upload."""
        def _call():
            client = self._user_client(token)
            return client.rpc("check_upload_limits", {"p_file_size": total_size}).execute()

        try:
            response = await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Failed to check upload limits: {e}") from e
        return bool(response.data)

    async def log_security_event(
        self,
        action: str,
        resource_type: str,
        metadata: Dict[str, Any],
        token: Optional[str] = None
    ):
        """Record a security event; failures are logged and swallowed."""
        def _call():
            client = self._user_client(token) if token else self._require_client()
            return client.rpc("log_security_event", {
                "p_action": action,
                "p_resource_type": resource_type,
                "p_metadata": metadata,
            }).execute()

        try:
            await asyncio.to_thread(_call)
        except Exception as e:
            print(f"[SUPABASE] Failed to log security event {action}: {e}")

    # =========================================================================
    # File uploads
    # =========================================================================

    async def get_file_record(self, file_id: str) -> Dict[str, Any]:
        client = self._require_client()

        def _call():
            return client.table(FILE_UPLOADS_TABLE).select("*").eq("id", file_id).single().execute()

        try:
            response = await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError("File not found") from e
        if not response.data:
            raise StorageError("File not found")
        return response.data

    async def download_file(self, storage_path: str) -> bytes:
        client = self._require_client()
        try:
            return await asyncio.to_thread(client.storage.from_(SUPABASE_UPLOADS_BUCKET).download, storage_path)
        except Exception as e:
            raise StorageError("Failed to download file") from e

    async def upload_file(self, storage_path: str, content: bytes, mime_type: str) -> str:
        client = self._require_client()

        def _call():
            return client.storage.from_(SUPABASE_UPLOADS_BUCKET).upload(
                storage_path, content, {"content-type": mime_type}
            )

        try:
            await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Storage upload error: {e}") from e
        return storage_path

    async def insert_file_record(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self._insert(FILE_UPLOADS_TABLE, record)

    async def delete_file(self, user_id: str, file_id: str) -> bool:
        """Delete an upload row owned by the user and its storage object."""
        client = self._require_client()

        def _call():
            found = client.table(FILE_UPLOADS_TABLE).select("*").eq("id", file_id).eq("user_id", user_id).execute()
            if not found.data:
                return False
            storage_path = found.data[0].get("storage_path")
            if storage_path:
                client.storage.from_(SUPABASE_UPLOADS_BUCKET).remove([storage_path])
            client.table(FILE_UPLOADS_TABLE).delete().eq("id", file_id).eq("user_id", user_id).execute()
            return True

        try:
            return await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Failed to delete file: {e}") from e

    # =========================================================================
    # Transformations
    # =========================================================================

    async def insert_transformation(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self._insert(TRANSFORMATIONS_TABLE, record)

    async def list_transformations(self, user_id: str) -> List[Dict[str, Any]]:
        client = self._require_client()

        def _call():
            return (
                client.table(TRANSFORMATIONS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )

        try:
            response = await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Failed to load transformations: {e}") from e
        return response.data or []

    async def get_transformation(self, user_id: str, transformation_id: str) -> Optional[Dict[str, Any]]:
        client = self._require_client()

        def _call():
            return (
                client.table(TRANSFORMATIONS_TABLE)
                .select("*")
                .eq("id", transformation_id)
                .eq("user_id", user_id)
                .execute()
            )

        try:
            response = await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Failed to load transformation: {e}") from e
        return response.data[0] if response.data else None

    async def delete_transformation(self, user_id: str, transformation_id: str) -> bool:
        client = self._require_client()

        def _call():
            return (
                client.table(TRANSFORMATIONS_TABLE)
                .delete()
                .eq("id", transformation_id)
                .eq("user_id", user_id)
                .execute()
            )

        try:
            response = await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Failed to delete transformation: {e}") from e
        return bool(response.data)

    async def clear_transformations(self, user_id: str):
        client = self._require_client()

        def _call():
            return client.table(TRANSFORMATIONS_TABLE).delete().eq("user_id", user_id).execute()

        try:
            await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Failed to clear transformation history: {e}") from e

    async def _insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        client = self._require_client()

        def _call():
            return client.table(table).insert(record).execute()

        try:
            response = await asyncio.to_thread(_call)
        except Exception as e:
            raise StorageError(f"Failed to save to {table}: {e}") from e
        if not response.data:
            raise StorageError(f"Failed to save to {table}")
        return response.data[0]
