from fastapi import APIRouter

from firestore_model.api.routes.entries import router as entries_router
from firestore_model.api.routes.healthz import router as healthz_router
from firestore_model.api.routes.infos import router as infos_router

api_router = APIRouter()
api_router.include_router(healthz_router)
api_router.include_router(infos_router)
api_router.include_router(entries_router)
