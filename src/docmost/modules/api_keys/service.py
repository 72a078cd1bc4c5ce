"""
Docmost API Keys - Service.

Key generation, authentication and revocation.

Keys have the form ``mcp_`` followed by 64 hex characters. The raw key is
handed out once; storage holds its SHA-256 hash, so a leaked store cannot be
replayed against the gateway.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timezone
from uuid import uuid4

from docmost.auth.schemas import Principal, User
from docmost.exceptions import NotFoundException, UnauthorizedException
from docmost.modules.api_keys.repository import ApiKeyRepository
from docmost.modules.api_keys.schemas import ApiKeyRecord
from docmost.modules.workspace.service import get_workspace_service

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "mcp_"
API_KEY_BYTES = 32


def generate_raw_key() -> str:
    return API_KEY_PREFIX + secrets.token_hex(API_KEY_BYTES)


def hash_api_key(raw_key: str) -> str:
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def verify_registration_token(token: str | None, secret: str) -> None:
    """
    Check the bootstrap shared secret.

    Raises:
        UnauthorizedException: token missing, registration disabled, or mismatch
    """
    if not token:
        raise UnauthorizedException("Registration token is required")
    if not secret or not hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8")):
        raise UnauthorizedException("Invalid registration token")


class ApiKeyService:
    """Service for API key operations."""

    def __init__(self, repository: ApiKeyRepository | None = None):
        self.repository = repository or ApiKeyRepository()

    async def generate_api_key(self, user: User, name: str) -> tuple[str, ApiKeyRecord]:
        """Create a key for ``user``. Returns the raw key and the stored record."""
        raw_key = generate_raw_key()
        record = ApiKeyRecord(
            id=str(uuid4()),
            name=name,
            user_id=user.id,
            workspace_id=user.workspace_id,
            hashed_key=hash_api_key(raw_key),
            key_prefix=raw_key[: len(API_KEY_PREFIX) + 4],
            created_at=datetime.now(timezone.utc),
        )
        await self.repository.create(record)
        logger.info(f"API key {record.key_prefix}... created for user {user.id} in workspace {user.workspace_id}")
        return raw_key, record

    async def authenticate(self, raw_key: str) -> Principal | None:
        """Resolve a bearer token to a principal, or None if it is not a live key."""
        if not raw_key.startswith(API_KEY_PREFIX):
            return None

        record = await self.repository.get_by_hashed_key(hash_api_key(raw_key))
        if record is None:
            logger.info(f"Rejected unknown API key {raw_key[:8]}...")
            return None

        user = await get_workspace_service().find_user(record.user_id, record.workspace_id)
        if user is None:
            logger.warning(f"API key {record.id} belongs to a missing user; ignoring")
            return None

        await self.repository.touch(record.id)
        return Principal(user=user, workspace_id=record.workspace_id, api_key_id=record.id)

    async def list_api_keys(self, user: User) -> list[ApiKeyRecord]:
        return await self.repository.list_by_user(user.id, user.workspace_id)

    async def revoke_api_key(self, key_id: str, user: User) -> None:
        """Delete one of the caller's keys; admins may revoke any key in their workspace."""
        record = next(
            (r for r in await self.repository.list_by_user(user.id, user.workspace_id) if r.id == key_id),
            None,
        )
        if record is None and user.is_admin:
            for member in await get_workspace_service().list_users(user.workspace_id):
                records = await self.repository.list_by_user(member.id, user.workspace_id)
                record = next((r for r in records if r.id == key_id), None)
                if record is not None:
                    break
        if record is None:
            raise NotFoundException("API key", key_id)

        await self.repository.delete(record.id)
        logger.info(f"API key {record.key_prefix}... revoked by user {user.id}")


# Singleton
_api_keys_service: ApiKeyService | None = None


def get_api_keys_service() -> ApiKeyService:
    """Get the API key service singleton."""
    global _api_keys_service
    if _api_keys_service is None:
        _api_keys_service = ApiKeyService()
    return _api_keys_service
