from __future__ import annotations

from typing import Any, Callable, TypeVar

from fastapi import Request

from firestore_model.info_board import InfoBoard
from firestore_model.settings import load_settings
from firestore_model.storage.firestore_store import FirestorePathStore, create_async_client


DependencyT = TypeVar("DependencyT")


def create_firestore_client() -> Any:
    return create_async_client(load_settings())


def create_path_store() -> FirestorePathStore:
    return FirestorePathStore(create_firestore_client())


def create_info_board() -> InfoBoard:
    settings = load_settings()
    return InfoBoard(create_async_client(settings), collection=settings.info_collection)


def _resolve_dependency(
    request: Request,
    *,
    value_key: str,
    factory_key: str,
    missing_message: str,
) -> DependencyT:
    dependency = getattr(request.app.state, value_key, None)
    if dependency is not None:
        return dependency

    factory: Callable[[], DependencyT] | None = getattr(request.app.state, factory_key, None)
    if factory is None:
        raise RuntimeError(missing_message)
    dependency = factory()
    setattr(request.app.state, value_key, dependency)
    return dependency


def get_path_store(request: Request) -> FirestorePathStore:
    return _resolve_dependency(
        request,
        value_key="path_store",
        factory_key="path_store_factory",
        missing_message="path_store is not initialized.",
    )


def get_info_board(request: Request) -> InfoBoard:
    return _resolve_dependency(
        request,
        value_key="info_board",
        factory_key="info_board_factory",
        missing_message="info_board is not initialized.",
    )
