"""Anonymous daily usage counter.

Each client gets a small JSON object keyed by date, e.g.
``{"2026-10-17": 3}``. Only today's key is read, so a new date starts again
at zero. The limit is advisory: the counter lives with the client id the
caller chooses and is not a security boundary.
"""

import json
import re
from datetime import date
from pathlib import Path
from typing import Callable, Dict, Optional

from config import DAILY_USAGE_LIMIT, USAGE_PATH
from services.errors import ContentValidationError

CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def validate_client_id(client_id: str) -> str:
    """Client and session ids double as file names; keep them path-safe."""
    if not client_id or not CLIENT_ID_PATTERN.match(client_id):
        raise ContentValidationError("Invalid client id")
    return client_id


def today_key() -> str:
    return date.today().isoformat()


def usage_for_day(usage: Dict[str, int], day: str) -> int:
    return int(usage.get(day, 0))


def remaining_uses(count: int, limit: int = DAILY_USAGE_LIMIT) -> int:
    return max(0, limit - count)


def increment_usage(usage: Dict[str, int], day: str) -> Dict[str, int]:
    """Return a new usage object with today's count bumped.

    Past days are dropped; they are never read again.
    """
    return {day: usage_for_day(usage, day) + 1}


class UsageTracker:
    """File-backed daily usage counters, one JSON file per client."""

    def __init__(
        self,
        base_path: str = USAGE_PATH,
        limit: int = DAILY_USAGE_LIMIT,
        today: Optional[Callable[[], str]] = None
    ):
        self.base_path = Path(base_path)
        self.limit = limit
        self._today = today or today_key

    async def initialize(self):
        """Initialize the storage directory."""
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_path(self, client_id: str) -> Path:
        return self.base_path / f"{validate_client_id(client_id)}.json"

    async def _read(self, client_id: str) -> Dict[str, int]:
        try:
            with open(self._get_path(client_id), 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    async def _write(self, client_id: str, usage: Dict[str, int]):
        path = self._get_path(client_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(usage, f, indent=2)

    async def get_usage_count(self, client_id: str) -> int:
        """Uses recorded for the client today."""
        return usage_for_day(await self._read(client_id), self._today())

    async def increment(self, client_id: str) -> Dict[str, int]:
        """Record one use and return the updated status."""
        usage = increment_usage(await self._read(client_id), self._today())
        await self._write(client_id, usage)
        return await self.get_status(client_id)

    async def get_status(self, client_id: str) -> Dict[str, int]:
        count = await self.get_usage_count(client_id)
        return {
            "used": count,
            "limit": self.limit,
            "remaining": remaining_uses(count, self.limit),
        }
