"""bl_ranking REST API: public board (anonymized)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_ranking.application.service import RankingQueryService

router = APIRouter(prefix="/ranking", tags=["ranking"])

_service = RankingQueryService()


def get_ranking_service() -> RankingQueryService:
    return _service


@router.get("")
async def get_public_ranking(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[RankingQueryService, Depends(get_ranking_service)],
    request: Request,
) -> ApiResponse:
    data = await service.get_public_ranking(db)
    return success_response(data.model_dump(), request)
