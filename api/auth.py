"""Caller identity: Supabase users by bearer token, anonymous sessions by header."""

from typing import Optional, Tuple, Union

from fastapi.responses import JSONResponse

from api.deps import get_gateway, get_file_history, get_supabase_history
from services.errors import AuthenticationError
from services.history_store import FileHistoryStore, SupabaseHistoryStore
from services.supabase_gateway import bearer_token
from services.usage_tracker import validate_client_id

HistoryStore = Union[FileHistoryStore, SupabaseHistoryStore]


def error_response(status_code: int, message: str) -> JSONResponse:
    """The {success: false, error} body shared by the transformation endpoints."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def resolve_owner(
    authorization: Optional[str],
    session_id: Optional[str]
) -> Tuple[Optional[HistoryStore], Optional[str]]:
    """Pick the history store and owner id for a request.

    A bearer token wins and is verified against Supabase Auth; otherwise an
    X-Session-Id selects the anonymous file store. Returns (None, None) when
    the caller sent neither. Raises AuthenticationError for a rejected token.
    """
    token = bearer_token(authorization)
    if token:
        user = await get_gateway().get_user(token)
        return get_supabase_history(), user["id"]
    if session_id:
        return get_file_history(), validate_client_id(session_id)
    return None, None


async def require_owner(
    authorization: Optional[str],
    session_id: Optional[str]
) -> Tuple[HistoryStore, str]:
    store, owner_id = await resolve_owner(authorization, session_id)
    if store is None:
        raise AuthenticationError("Authentication or X-Session-Id header required")
    return store, owner_id
