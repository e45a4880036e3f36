"""bl_draw REST API: read-only draw listing. Mutations live under /admin."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_draw.application.service import DrawService

router = APIRouter(prefix="/draws", tags=["draws"])

_service = DrawService()


@router.get("")
async def list_draws(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_draws(db)
    return success_response(data.model_dump(), request)
