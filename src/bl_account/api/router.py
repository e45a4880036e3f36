"""bl_account REST API: balance, ledger and seller history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_account.application.service import AccountApplicationService
from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_cycle.application.service import CycleService

router = APIRouter(prefix="/accounts", tags=["accounts"])

_service = AccountApplicationService()
_cycle_service = CycleService()


def get_account_service() -> AccountApplicationService:
    return _service


@router.get("/{account_id}")
async def get_account(
    account_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[AccountApplicationService, Depends(get_account_service)],
    request: Request,
) -> ApiResponse:
    data = await service.get_account(db, account_id)
    return success_response(data.model_dump(), request)


@router.get("/{account_id}/ledger")
async def list_ledger(
    account_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[AccountApplicationService, Depends(get_account_service)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = await service.list_ledger(db, account_id, cursor, limit)
    return success_response(data.model_dump(), request)


@router.get("/{account_id}/history")
async def list_seller_history(
    account_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    data = await _cycle_service.list_seller_history(db, account_id, limit)
    return success_response(data.model_dump(), request)
