"""
Event log storage interface.

A backend keeps any number of named logs. Each log holds JSON-compatible
documents addressed by a non-negative integer index and is always read back
in index order. Indexes may arrive out of order or with gaps; writing an
index that already exists replaces its document.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StorageBackend(ABC):
    """Abstract index-ordered document log."""

    name: str = "abstract"

    @abstractmethod
    async def save(self, log: str, index: int, document: dict[str, Any]) -> None:
        """Store ``document`` at ``index`` in ``log``."""
        ...

    @abstractmethod
    async def get(self, log: str, index: int) -> dict[str, Any] | None:
        """Document at ``index``, or None when nothing is stored there."""
        ...

    @abstractmethod
    async def query(
        self,
        log: str,
        start: int = 0,
        stop: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Documents with ``start <= index < stop``, lowest index first.

        Args:
            log: Log name
            start: First index to include
            stop: First index to exclude (None reads to the end)
            limit: Maximum number of documents
        """
        ...

    @abstractmethod
    async def last_index(self, log: str) -> int | None:
        """Highest index stored in ``log``, or None when it is empty."""
        ...

    @abstractmethod
    async def count(self, log: str) -> int:
        ...

    @abstractmethod
    async def clear(self, log: str) -> int:
        """Drop every document in ``log`` and return how many there were."""
        ...
