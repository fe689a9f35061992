from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable
import logging

from firestore_model.storage.firestore_listener import (
    SnapshotDocument,
    SnapshotStream,
    Subscription,
    ordered_collection,
    subscribe,
)
from firestore_model.storage.firestore_path import COLLECTION_INFOS
from firestore_model.storage.firestore_store import FirestorePathStore, server_timestamp


LOGGER = logging.getLogger(__name__)

FIELD_TEXT = "text"
FIELD_CREATED_AT = "createdAt"
EMPTY_BOARD_MESSAGE = "No information yet. Add one!"


class InfoBoardError(ValueError):
    """Raised when an info item cannot be accepted."""


@dataclass(frozen=True)
class InfoItem:
    id: str
    text: str
    created_at: datetime | None = None

    @classmethod
    def from_document(cls, document_id: str, data: dict[str, Any]) -> InfoItem:
        created_at = data.get(FIELD_CREATED_AT)
        # A pending server timestamp is reported as None by local snapshots.
        if not isinstance(created_at, datetime):
            created_at = None
        return cls(id=document_id, text=str(data.get(FIELD_TEXT, "")), created_at=created_at)

    @classmethod
    def from_snapshot_document(cls, document: SnapshotDocument) -> InfoItem:
        return cls.from_document(document.id, document.data)


def items_from_documents(documents: Iterable[SnapshotDocument]) -> list[InfoItem]:
    return [InfoItem.from_snapshot_document(document) for document in documents]


def render_infos(items: list[InfoItem]) -> str:
    """Render the whole board as text; each call replaces the previous output."""

    if not items:
        return EMPTY_BOARD_MESSAGE
    lines = []
    for item in items:
        created = item.created_at.isoformat() if item.created_at is not None else "pending"
        lines.append(f"[{item.id}] {item.text} ({created})")
    return "\n".join(lines)


class InfoBoard:
    """Short text notes kept in one collection, newest first."""

    def __init__(
        self,
        client: Any,
        *,
        collection: str = COLLECTION_INFOS,
        timestamp_factory: Callable[[], Any] = server_timestamp,
    ) -> None:
        self._client = client
        self._store = FirestorePathStore(client)
        self._collection = collection
        self._timestamp_factory = timestamp_factory

    @property
    def collection(self) -> str:
        return self._collection

    async def add_info(self, text: str) -> str:
        normalized = text.strip()
        if not normalized:
            raise InfoBoardError("text must not be empty.")
        info_id = await self._store.add_entry(
            [self._collection],
            {
                FIELD_TEXT: normalized,
                FIELD_CREATED_AT: self._timestamp_factory(),
            },
        )
        LOGGER.info("info added: collection=%s id=%s", self._collection, info_id)
        return info_id

    async def delete_info(self, info_id: str) -> None:
        await self._store.delete_entry([self._collection, info_id])
        LOGGER.info("info deleted: collection=%s id=%s", self._collection, info_id)

    async def list_infos(self) -> list[InfoItem]:
        query = self.newest_first(self._client)
        return [
            InfoItem.from_document(snapshot.id, snapshot.to_dict() or {})
            async for snapshot in query.stream()
        ]

    def newest_first(self, client: Any) -> Any:
        return ordered_collection(client, [self._collection], FIELD_CREATED_AT, "DESCENDING")

    def watch(self, listen_client: Any, render: Callable[[list[InfoItem]], None]) -> Subscription:
        """Call `render` with the full board on every change until cancelled."""

        query = self.newest_first(listen_client)
        return subscribe(query, lambda documents: render(items_from_documents(documents)))

    def snapshots(self, listen_client: Any) -> SnapshotStream:
        return SnapshotStream(self.newest_first(listen_client))
