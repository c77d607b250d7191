"""
Storage backends for the event journal.

``get_storage(config)`` picks the backend named by ``config.storage_backend``:

    memory  InMemoryStorage, lost on exit
    redis   RedisStorage at ``config.redis_url``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from feeledger.core.exceptions import ConfigurationError
from feeledger.storage.base import StorageBackend
from feeledger.storage.memory import InMemoryStorage
from feeledger.storage.redis import RedisStorage

if TYPE_CHECKING:
    from feeledger.core.config import Config


def get_storage(config: Config) -> StorageBackend:
    """
    Build the storage backend a Config asks for.

    Raises:
        ConfigurationError: If the backend name is unknown
    """
    if config.storage_backend == "memory":
        return InMemoryStorage()
    if config.storage_backend == "redis":
        return RedisStorage(redis_url=config.redis_url)
    raise ConfigurationError(f"Unknown storage backend: '{config.storage_backend}'")


__all__ = [
    "StorageBackend",
    "InMemoryStorage",
    "RedisStorage",
    "get_storage",
]
