"""
In-process event log storage, for tests and single-process use.
"""

from __future__ import annotations

import bisect
from copy import deepcopy
from typing import Any

from feeledger.storage.base import StorageBackend


class _Log:
    """Documents keyed by index plus a sorted list of the indexes."""

    __slots__ = ("documents", "indexes")

    def __init__(self) -> None:
        self.documents: dict[int, dict[str, Any]] = {}
        self.indexes: list[int] = []


class InMemoryStorage(StorageBackend):
    """
    Event logs held in memory.

    Documents are deep-copied on the way in and out so callers can never
    mutate what is stored. Contents are lost when the process exits.
    """

    name = "memory"

    def __init__(self) -> None:
        self._logs: dict[str, _Log] = {}

    async def save(self, log: str, index: int, document: dict[str, Any]) -> None:
        entries = self._logs.setdefault(log, _Log())
        if index not in entries.documents:
            bisect.insort(entries.indexes, index)
        entries.documents[index] = deepcopy(document)

    async def get(self, log: str, index: int) -> dict[str, Any] | None:
        entries = self._logs.get(log)
        if entries is None or index not in entries.documents:
            return None
        return deepcopy(entries.documents[index])

    async def query(
        self,
        log: str,
        start: int = 0,
        stop: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        entries = self._logs.get(log)
        if entries is None:
            return []

        lo = bisect.bisect_left(entries.indexes, start)
        hi = len(entries.indexes) if stop is None else bisect.bisect_left(entries.indexes, stop)
        selected = entries.indexes[lo:hi]
        if limit is not None:
            selected = selected[:limit]
        return [deepcopy(entries.documents[i]) for i in selected]

    async def last_index(self, log: str) -> int | None:
        entries = self._logs.get(log)
        if entries is None or not entries.indexes:
            return None
        return entries.indexes[-1]

    async def count(self, log: str) -> int:
        entries = self._logs.get(log)
        return len(entries.indexes) if entries else 0

    async def clear(self, log: str) -> int:
        entries = self._logs.pop(log, None)
        return len(entries.indexes) if entries else 0
