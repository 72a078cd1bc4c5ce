"""
Docmost API Keys - Repository.

Storage for API-key records, indexed by id and by key hash.
"""

from datetime import datetime, timezone

from docmost.modules.api_keys.schemas import ApiKeyRecord


class ApiKeyRepository:
    """In-memory repository for API keys."""

    def __init__(self):
        self._records: dict[str, ApiKeyRecord] = {}
        self._by_hash: dict[str, str] = {}

    async def create(self, record: ApiKeyRecord) -> ApiKeyRecord:
        self._records[record.id] = record
        self._by_hash[record.hashed_key] = record.id
        return record

    async def get_by_hashed_key(self, hashed_key: str) -> ApiKeyRecord | None:
        key_id = self._by_hash.get(hashed_key)
        return self._records.get(key_id) if key_id else None

    async def list_by_user(self, user_id: str, workspace_id: str) -> list[ApiKeyRecord]:
        records = [
            r for r in self._records.values()
            if r.user_id == user_id and r.workspace_id == workspace_id
        ]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    async def touch(self, key_id: str) -> None:
        """Update ``last_used_at``."""
        record = self._records.get(key_id)
        if record is not None:
            self._records[key_id] = record.model_copy(
                update={"last_used_at": datetime.now(timezone.utc)}
            )

    async def delete(self, key_id: str) -> bool:
        record = self._records.pop(key_id, None)
        if record is None:
            return False
        self._by_hash.pop(record.hashed_key, None)
        return True

    def clear(self) -> None:
        self._records.clear()
        self._by_hash.clear()
