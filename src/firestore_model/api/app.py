from __future__ import annotations

from fastapi import FastAPI

from firestore_model.api.dependencies import create_info_board, create_path_store
from firestore_model.api.errors import install_exception_handlers
from firestore_model.api.routes import api_router
from firestore_model.info_board import InfoBoard
from firestore_model.storage.firestore_store import FirestorePathStore


def create_app(
    *,
    path_store: FirestorePathStore | None = None,
    info_board: InfoBoard | None = None,
) -> FastAPI:
    app = FastAPI(
        title="firestore_model Web API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    install_exception_handlers(app)

    app.state.path_store = path_store
    app.state.path_store_factory = create_path_store

    app.state.info_board = info_board
    app.state.info_board_factory = create_info_board

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
