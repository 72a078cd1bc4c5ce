"""Docmost API Keys Module - Machine credentials and bootstrap registration.

The router is imported from ``docmost.modules.api_keys.router`` directly;
it depends on ``docmost.deps``, which in turn needs the service below.
"""

from docmost.modules.api_keys.repository import ApiKeyRepository
from docmost.modules.api_keys.service import ApiKeyService, get_api_keys_service

__all__ = ["ApiKeyService", "ApiKeyRepository", "get_api_keys_service"]
