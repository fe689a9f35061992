from __future__ import annotations

from typing import Any, Mapping
import logging

from firestore_model.settings import AppSettings
from firestore_model.storage.firestore_path import (
    PathError,
    PathLike,
    format_path,
    is_collection_path,
    normalize_path,
)


LOGGER = logging.getLogger(__name__)


def resolve_reference(client: Any, path: PathLike, *, as_collection: bool) -> Any:
    """Walk the path from the client root, alternating collection and document descents."""

    segments = normalize_path(path)
    if is_collection_path(segments) != as_collection:
        expected = "odd" if as_collection else "even"
        kind = "Collection" if as_collection else "Document"
        raise PathError(f"{kind} path must have {expected} segments: {format_path(segments)}")

    ref: Any = client
    for index, segment in enumerate(segments):
        if index % 2 == 0:
            ref = ref.collection(segment)
        else:
            ref = ref.document(segment)
    return ref


class FirestorePathStore:
    """Path-addressed CRUD accessor over an async Firestore client.

    Even path positions name collections, odd positions name documents, so the
    path length decides whether an operation targets a collection or a document.
    References are rebuilt on every call and never cached.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def resolve(self, path: PathLike, *, as_collection: bool) -> Any:
        return resolve_reference(self._client, path, as_collection=as_collection)

    async def add_entry(self, path: PathLike, entry: Mapping[str, Any]) -> str:
        segments = normalize_path(path)
        collection_ref = self.resolve(segments, as_collection=True)
        LOGGER.debug("add_entry: path=%s", format_path(segments))
        _, document_ref = await collection_ref.add(dict(entry))
        return document_ref.id

    async def read_entry(self, path: PathLike) -> dict[str, Any] | None:
        segments = normalize_path(path)
        document_ref = self.resolve(segments, as_collection=False)
        LOGGER.debug("read_entry: path=%s", format_path(segments))
        snapshot = await document_ref.get()
        if not snapshot.exists:
            return None
        data = snapshot.to_dict()
        return data if data is not None else {}

    async def update_entry(self, path: PathLike, partial_entry: Mapping[str, Any]) -> None:
        # update() fails with NotFound on a missing document; it is not an upsert.
        segments = normalize_path(path)
        document_ref = self.resolve(segments, as_collection=False)
        LOGGER.debug("update_entry: path=%s fields=%s", format_path(segments), sorted(partial_entry))
        await document_ref.update(dict(partial_entry))

    async def delete_entry(self, path: PathLike) -> None:
        # Nested collections under the document are left in place.
        segments = normalize_path(path)
        document_ref = self.resolve(segments, as_collection=False)
        LOGGER.debug("delete_entry: path=%s", format_path(segments))
        await document_ref.delete()

    async def exists(self, path: PathLike) -> bool:
        segments = normalize_path(path)
        document_ref = self.resolve(segments, as_collection=False)
        LOGGER.debug("exists: path=%s", format_path(segments))
        snapshot = await document_ref.get()
        return bool(snapshot.exists)

    async def get_keys(self, path: PathLike) -> list[str]:
        segments = normalize_path(path)
        collection_ref = self.resolve(segments, as_collection=True)
        LOGGER.debug("get_keys: path=%s", format_path(segments))
        return [snapshot.id async for snapshot in collection_ref.stream()]


def _import_firestore() -> Any:
    try:
        from google.cloud import firestore
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "google-cloud-firestore is not installed. Install with: pip install -e ."
        ) from exc
    return firestore


def server_timestamp() -> Any:
    """Sentinel telling Firestore to fill the field with its own commit time."""

    return _import_firestore().SERVER_TIMESTAMP


def create_async_client(settings: AppSettings) -> Any:
    firestore = _import_firestore()
    return firestore.AsyncClient(
        project=settings.firestore_project_id or None,
        database=settings.firestore_database,
    )


def create_client(settings: AppSettings) -> Any:
    """Synchronous client, needed for on_snapshot listeners."""

    firestore = _import_firestore()
    return firestore.Client(
        project=settings.firestore_project_id or None,
        database=settings.firestore_database,
    )
