from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import asyncio
import logging

from firestore_model.storage.firestore_path import PathLike
from firestore_model.storage.firestore_store import resolve_reference


LOGGER = logging.getLogger(__name__)

ORDER_DIRECTIONS = ("ASCENDING", "DESCENDING")


@dataclass(frozen=True)
class SnapshotDocument:
    id: str
    data: dict[str, Any]

    @classmethod
    def from_snapshot(cls, snapshot: Any) -> SnapshotDocument:
        return cls(id=snapshot.id, data=snapshot.to_dict() or {})


SnapshotCallback = Callable[[list[SnapshotDocument]], None]


def ordered_collection(client: Any, path: PathLike, field: str, direction: str = "ASCENDING") -> Any:
    """Build a query over a collection path ordered by one field."""

    normalized_direction = direction.strip().upper()
    if normalized_direction not in ORDER_DIRECTIONS:
        raise ValueError(f"direction must be ASCENDING or DESCENDING: {direction}")
    collection_ref = resolve_reference(client, path, as_collection=True)
    return collection_ref.order_by(field, direction=normalized_direction)


class Subscription:
    """Handle for a live on_snapshot listener.

    Every delivery carries the full result set of the query; it replaces
    whatever the callback received before.
    """

    def __init__(self, query: Any, callback: SnapshotCallback) -> None:
        self._callback = callback
        self._active = True
        self._watch = query.on_snapshot(self._on_snapshot)

    @property
    def active(self) -> bool:
        return self._active

    def _on_snapshot(self, snapshots: list[Any], changes: Any, read_time: Any) -> None:
        _ = (changes, read_time)
        if not self._active:
            return
        documents = [SnapshotDocument.from_snapshot(snapshot) for snapshot in snapshots]
        LOGGER.debug("snapshot delivered: documents=%s", len(documents))
        self._callback(documents)

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._watch.unsubscribe()


def subscribe(query: Any, callback: SnapshotCallback) -> Subscription:
    return Subscription(query, callback)


_CLOSED = object()


class SnapshotStream:
    """Async iterator over query snapshots.

    Listener callbacks arrive on the client's background thread and are handed
    to the event loop through a queue. `cancel()` (or leaving `async with`)
    detaches the listener and ends iteration.
    """

    def __init__(self, query: Any, *, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._query = query
        self._loop = loop
        self._queue: asyncio.Queue[Any] | None = None
        self._subscription: Subscription | None = None
        self._closed = False

    def _start(self) -> None:
        if self._subscription is not None or self._closed:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._subscription = subscribe(self._query, self._deliver)

    def _deliver(self, documents: list[SnapshotDocument]) -> None:
        if self._closed or self._loop is None or self._queue is None:
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, documents)

    def cancel(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._subscription is not None:
            self._subscription.cancel()
        if self._loop is not None and self._queue is not None:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, _CLOSED)

    def __aiter__(self) -> SnapshotStream:
        self._start()
        return self

    async def __anext__(self) -> list[SnapshotDocument]:
        self._start()
        if self._closed or self._queue is None:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED or self._closed:
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> SnapshotStream:
        self._start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.cancel()
