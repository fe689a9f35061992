from __future__ import annotations

from typing import Any, Union

from fastapi import APIRouter, Body, Depends, Response, status

from firestore_model.api.dependencies import get_path_store
from firestore_model.api.errors import BadRequestError, NotFoundError, is_store_not_found
from firestore_model.api.openapi import error_responses
from firestore_model.api.schemas import EntryCreatedResponse, EntryKeysResponse, EntryResponse
from firestore_model.storage.firestore_path import (
    collection_segments,
    document_segments,
    format_path,
    is_collection_path,
    normalize_path,
)
from firestore_model.storage.firestore_store import FirestorePathStore

router = APIRouter(
    prefix="/entries",
    tags=["entries"],
)


@router.head(
    "/{path:path}",
    responses=error_responses(404, 422, 500),
)
async def head_entry(
    path: str,
    store: FirestorePathStore = Depends(get_path_store),
) -> Response:
    segments = document_segments(path)
    if not await store.exists(segments):
        raise NotFoundError(f"Document not found: {format_path(segments)}")
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/{path:path}",
    response_model=Union[EntryResponse, EntryKeysResponse],
    responses=error_responses(404, 422, 500),
)
async def get_entry_or_keys(
    path: str,
    store: FirestorePathStore = Depends(get_path_store),
) -> EntryResponse | EntryKeysResponse:
    segments = normalize_path(path)
    if is_collection_path(segments):
        keys = await store.get_keys(segments)
        return EntryKeysResponse(path=format_path(segments), keys=keys)

    data = await store.read_entry(segments)
    if data is None:
        raise NotFoundError(f"Document not found: {format_path(segments)}")
    return EntryResponse.from_document(segments, data)


@router.post(
    "/{path:path}",
    response_model=EntryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(422, 500),
)
async def add_entry(
    path: str,
    entry: dict[str, Any] = Body(...),
    store: FirestorePathStore = Depends(get_path_store),
) -> EntryCreatedResponse:
    segments = collection_segments(path)
    entry_id = await store.add_entry(segments, entry)
    return EntryCreatedResponse(id=entry_id, path=format_path((*segments, entry_id)))


@router.patch(
    "/{path:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=error_responses(400, 404, 422, 500),
)
async def update_entry(
    path: str,
    partial_entry: dict[str, Any] = Body(...),
    store: FirestorePathStore = Depends(get_path_store),
) -> Response:
    segments = document_segments(path)
    if not partial_entry:
        raise BadRequestError("Specify at least one field to update.")
    try:
        await store.update_entry(segments, partial_entry)
    except Exception as exc:
        if is_store_not_found(exc):
            raise NotFoundError(f"Document not found: {format_path(segments)}") from exc
        raise
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{path:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=error_responses(422, 500),
)
async def delete_entry(
    path: str,
    store: FirestorePathStore = Depends(get_path_store),
) -> Response:
    segments = document_segments(path)
    await store.delete_entry(segments)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
