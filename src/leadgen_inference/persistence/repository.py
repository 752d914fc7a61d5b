"""
Repository for decision-maker records.

The orchestration core never writes to storage; callers persist cleaned
candidates through this interface after a successful orchestration.

Storage Strategy:
- Natural key: (requirement_id, role_title)
- upsert_by_key creates the record or overwrites its fields in place
- The in-memory implementation backs the API by default and the tests
"""

import asyncio
import itertools
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)

NaturalKey = tuple[str, str]


@runtime_checkable
class DecisionMakerRepository(Protocol):
    """Persistence collaborator for decision-maker records."""

    async def upsert_by_key(self, key: NaturalKey, fields: dict[str, Any]) -> dict[str, Any]:
        """Create or update the record identified by key; returns the stored record."""
        ...

    async def list_for_requirement(self, requirement_id: str) -> list[dict[str, Any]]:
        ...


class InMemoryDecisionMakerRepository:
    """
    Process-local repository.

    Keys are matched case-insensitively on the role title, mirroring the
    validator's duplicate rule. Safe for concurrent coroutines.
    """

    def __init__(self):
        self._records: dict[NaturalKey, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    @staticmethod
    def _normalize_key(key: NaturalKey) -> NaturalKey:
        requirement_id, role_title = key
        return str(requirement_id), role_title.strip().lower()

    async def upsert_by_key(self, key: NaturalKey, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Create or update a record.

        Args:
            key: (requirement_id, role_title)
            fields: Column values to store

        Returns:
            Copy of the stored record including id and timestamps
        """
        storage_key = self._normalize_key(key)
        now = datetime.now(timezone.utc)

        async with self._lock:
            record = self._records.get(storage_key)
            created = record is None
            if created:
                record = {
                    "id": next(self._ids),
                    "requirement_id": str(key[0]),
                    "created_at": now,
                }
                self._records[storage_key] = record
            record.update(fields)
            record["updated_at"] = now

        logger.debug(
            "Upserted decision maker",
            requirement_id=storage_key[0],
            role_title=fields.get("role_title", key[1]),
            created=created,
        )
        return dict(record)

    async def list_for_requirement(self, requirement_id: str) -> list[dict[str, Any]]:
        records = [
            dict(record)
            for (stored_requirement, _), record in self._records.items()
            if stored_requirement == str(requirement_id)
        ]
        return sorted(records, key=lambda record: record.get("priority") or 0)

    async def get(self, requirement_id: str, role_title: str) -> Optional[dict[str, Any]]:
        record = self._records.get(self._normalize_key((requirement_id, role_title)))
        return dict(record) if record else None

    def __len__(self) -> int:
        return len(self._records)
