"""Pytest configuration and fixtures."""

import asyncio
import os
import sys
import tempfile
import uuid
import pytest
from typing import Any, Dict, Generator, List, Optional

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from services.errors import AuthenticationError, StorageError  # noqa: E402

VALID_TOKEN = "valid-token"
TEST_USER = {"id": "user-1", "email": "reader@example.com"}


class FakeGateway:
    """In-memory stand-in for SupabaseGateway."""

    def __init__(self):
        self.users = {VALID_TOKEN: dict(TEST_USER)}
        self.transformations: List[Dict[str, Any]] = []
        self.file_uploads: Dict[str, Dict[str, Any]] = {}
        self.storage: Dict[str, bytes] = {}
        self.security_events: List[Dict[str, Any]] = []
        self.allow_uploads = True
        self.fail_inserts = False

    @property
    def is_configured(self) -> bool:
        return True

    async def get_user(self, token: Optional[str]) -> Dict[str, Any]:
        if not token:
            raise AuthenticationError("Authentication required")
        if token not in self.users:
            raise AuthenticationError("Invalid authentication")
        return self.users[token]

    async def check_upload_limits(self, token: str, total_size: int) -> bool:
        return self.allow_uploads

    async def log_security_event(self, action, resource_type, metadata, token=None):
        self.security_events.append({"action": action, "resource_type": resource_type, "metadata": metadata})

    async def get_file_record(self, file_id: str) -> Dict[str, Any]:
        if file_id not in self.file_uploads:
            raise StorageError("File not found")
        return self.file_uploads[file_id]

    async def download_file(self, storage_path: str) -> bytes:
        if storage_path not in self.storage:
            raise StorageError("Failed to download file")
        return self.storage[storage_path]

    async def upload_file(self, storage_path: str, content: bytes, mime_type: str) -> str:
        self.storage[storage_path] = content
        return storage_path

    async def insert_file_record(self, record: Dict[str, Any]) -> Dict[str, Any]:
        row = {"id": str(uuid.uuid4()), **record}
        self.file_uploads[row["id"]] = row
        return row

    async def delete_file(self, user_id: str, file_id: str) -> bool:
        row = self.file_uploads.get(file_id)
        if not row or row.get("user_id") != user_id:
            return False
        self.storage.pop(row.get("storage_path"), None)
        del self.file_uploads[file_id]
        return True

    async def insert_transformation(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if self.fail_inserts:
            raise StorageError("Failed to save to transformations")
        row = {
            "id": str(uuid.uuid4()),
            "created_at": f"2026-10-17T00:00:{len(self.transformations):02d}+00:00",
            **record,
        }
        self.transformations.append(row)
        return row

    async def list_transformations(self, user_id: str) -> List[Dict[str, Any]]:
        rows = [row for row in self.transformations if row["user_id"] == user_id]
        return sorted(rows, key=lambda row: row["created_at"], reverse=True)

    async def get_transformation(self, user_id: str, transformation_id: str) -> Optional[Dict[str, Any]]:
        for row in self.transformations:
            if row["id"] == transformation_id and row["user_id"] == user_id:
                return row
        return None

    async def delete_transformation(self, user_id: str, transformation_id: str) -> bool:
        before = len(self.transformations)
        self.transformations = [
            row for row in self.transformations
            if not (row["id"] == transformation_id and row["user_id"] == user_id)
        ]
        return len(self.transformations) < before

    async def clear_transformations(self, user_id: str):
        self.transformations = [row for row in self.transformations if row["user_id"] != user_id]


@pytest.fixture
def temp_data_dir() -> Generator[str, None, None]:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def mock_env(monkeypatch):
    """Set up mock environment variables."""
    monkeypatch.setenv("MOCK_LLM", "1")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("PERPLEXITY_API_KEY", raising=False)
    return monkeypatch


@pytest.fixture
def live_env(monkeypatch):
    """Make sure mock mode is off so provider failures surface."""
    monkeypatch.delenv("MOCK_LLM", raising=False)
    return monkeypatch


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
async def history_store(temp_data_dir):
    """Create a file history store with temporary directory."""
    from services.history_store import FileHistoryStore

    store = FileHistoryStore(base_path=os.path.join(temp_data_dir, "history"))
    await store.initialize()
    return store


@pytest.fixture
def usage_tracker(temp_data_dir):
    """Create a usage tracker with a controllable date."""
    from services.usage_tracker import UsageTracker

    clock = {"today": "2026-10-17"}
    tracker = UsageTracker(base_path=os.path.join(temp_data_dir, "usage"), today=lambda: clock["today"])
    tracker.clock = clock
    return tracker


@pytest.fixture
def api_client(mock_env, temp_data_dir, fake_gateway):
    """TestClient with mock LLMs, a fake Supabase and temporary stores."""
    from fastapi.testclient import TestClient

    from api import deps
    from app import app
    from services.history_store import FileHistoryStore
    from services.usage_tracker import UsageTracker

    asyncio.run(deps.override_all(
        gateway=fake_gateway,
        file_history=FileHistoryStore(base_path=os.path.join(temp_data_dir, "history")),
        usage_tracker=UsageTracker(base_path=os.path.join(temp_data_dir, "usage")),
    ))

    with TestClient(app) as client:
        client.gateway = fake_gateway
        yield client

    deps.reset()


@pytest.fixture
def unconfigured_api_client(mock_env, temp_data_dir):
    """TestClient whose Supabase gateway has no URL or key."""
    from fastapi.testclient import TestClient

    from api import deps
    from app import app
    from services.history_store import FileHistoryStore
    from services.supabase_gateway import SupabaseGateway
    from services.usage_tracker import UsageTracker

    for name in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_ANON_KEY"):
        mock_env.delenv(name, raising=False)

    asyncio.run(deps.override_all(
        gateway=SupabaseGateway(),
        file_history=FileHistoryStore(base_path=os.path.join(temp_data_dir, "history")),
        usage_tracker=UsageTracker(base_path=os.path.join(temp_data_dir, "usage")),
    ))

    with TestClient(app) as client:
        yield client

    deps.reset()
