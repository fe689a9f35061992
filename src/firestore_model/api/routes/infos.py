from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from firestore_model.api.dependencies import get_info_board
from firestore_model.api.errors import UnprocessableEntityError
from firestore_model.api.openapi import error_responses
from firestore_model.api.schemas import (
    InfoCreatedResponse,
    InfoCreateRequest,
    InfoItemResponse,
    InfoListResponse,
)
from firestore_model.info_board import InfoBoard, InfoBoardError

router = APIRouter(
    prefix="/infos",
    tags=["infos"],
)


@router.get(
    "",
    response_model=InfoListResponse,
    responses=error_responses(500),
)
async def list_infos(board: InfoBoard = Depends(get_info_board)) -> InfoListResponse:
    items = await board.list_infos()
    return InfoListResponse(items=[InfoItemResponse.from_domain(item) for item in items], total=len(items))


@router.post(
    "",
    response_model=InfoCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(422, 500),
)
async def add_info(
    payload: InfoCreateRequest,
    board: InfoBoard = Depends(get_info_board),
) -> InfoCreatedResponse:
    try:
        info_id = await board.add_info(payload.text)
    except InfoBoardError as exc:
        raise UnprocessableEntityError(str(exc)) from exc
    return InfoCreatedResponse(id=info_id)


@router.delete(
    "/{info_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=error_responses(422, 500),
)
async def delete_info(
    info_id: str,
    board: InfoBoard = Depends(get_info_board),
) -> Response:
    await board.delete_info(info_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
