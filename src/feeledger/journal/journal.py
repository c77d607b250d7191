"""
Event journal.

Persists events emitted by a FeeToken to a StorageBackend so the ordered log
survives the process. The token itself never waits on storage; the journal
catches up with ``sync``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tenacity import AsyncRetrying

from feeledger.core.exceptions import StorageError
from feeledger.core.logging import get_logger
from feeledger.core.types import AddressLike, to_address
from feeledger.resilience.retry import TRANSIENT_ERRORS, execute_with_retry, retry_policy
from feeledger.storage import get_storage
from feeledger.token.events import EventType, TokenEvent

if TYPE_CHECKING:
    from feeledger.core.config import Config
    from feeledger.storage.base import StorageBackend
    from feeledger.token.token import FeeToken

logger = get_logger("journal")


class EventJournal:
    """
    Event journal over a StorageBackend.

    Events are stored under their log index, so reads come back in the
    order the token emitted them.
    """

    LOG = "token_events"

    def __init__(
        self,
        storage: StorageBackend,
        policy: AsyncRetrying | None = None,
    ) -> None:
        """
        Args:
            storage: Backend holding the log (InMemoryStorage, RedisStorage)
            policy: Retry policy for writes (defaults to the standard policy)
        """
        self._storage = storage
        self._policy = policy or retry_policy()

    @classmethod
    def from_config(cls, config: Config, policy: AsyncRetrying | None = None) -> EventJournal:
        """Journal on the backend named by ``config.storage_backend``."""
        storage = get_storage(config)
        logger.info(f"Journaling events to {storage.name} storage")
        return cls(storage, policy=policy)

    @property
    def storage(self) -> StorageBackend:
        return self._storage

    async def record(self, event: TokenEvent) -> int:
        """
        Record a single event under its index.

        Returns:
            The event's index

        Raises:
            StorageError: If the write keeps failing with transient errors
        """
        try:
            await execute_with_retry(
                self._storage.save,
                self.LOG,
                event.index,
                event.to_dict(),
                policy=self._policy.copy(),
            )
        except TRANSIENT_ERRORS as e:
            raise StorageError(
                f"Failed to journal event {event.index}",
                backend=self._storage.name,
                details={"error": str(e)},
            ) from e
        return event.index

    async def _pending(self, token: FeeToken) -> list[TokenEvent]:
        last = await self._storage.last_index(self.LOG)
        if last is None:
            return list(token.events)

        stored = await self._storage.count(self.LOG)
        if stored == last + 1:
            # Contiguous from 0, resume after the highest index
            return list(token.events_since(last + 1))

        present = {doc["index"] for doc in await self._storage.query(self.LOG)}
        return [e for e in token.events if e.index not in present]

    async def sync(self, token: FeeToken) -> int:
        """
        Persist every event the token emitted that is not yet journaled.

        Events recorded individually beforehand are not written twice, and
        any index missing below them is filled in.

        Returns:
            Number of events written
        """
        pending = await self._pending(token)
        for event in pending:
            await self.record(event)
        if pending:
            logger.debug(
                f"Journaled {len(pending)} events ({pending[0].index}..{pending[-1].index})"
            )
        return len(pending)

    async def get(self, index: int) -> TokenEvent | None:
        """Get event by log index, or None if not journaled."""
        data = await self._storage.get(self.LOG, index)
        if not data:
            return None
        return TokenEvent.from_dict(data)

    async def query(
        self,
        event_type: EventType | None = None,
        address: AddressLike | None = None,
        since: int = 0,
        limit: int = 100,
    ) -> list[TokenEvent]:
        """
        Query journaled events in log order.

        Args:
            event_type: Filter by type
            address: Only events naming this address in any argument
            since: Lowest index to consider
            limit: Maximum events to return
        """
        if event_type is None and address is None:
            documents = await self._storage.query(self.LOG, start=since, limit=limit)
            return [TokenEvent.from_dict(d) for d in documents]

        events = [TokenEvent.from_dict(d) for d in await self._storage.query(self.LOG, start=since)]
        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]
        if address is not None:
            addr = to_address(address)
            events = [e for e in events if e.involves(addr)]
        return events[:limit]

    async def last_index(self) -> int | None:
        """Highest journaled index, or None if nothing is journaled."""
        return await self._storage.last_index(self.LOG)

    async def count(self) -> int:
        return await self._storage.count(self.LOG)

    async def clear(self) -> int:
        """
        Clear all journaled events.

        Returns:
            Number of events cleared
        """
        return await self._storage.clear(self.LOG)
