"""Admin REST API: draws, credits, configuration, holds and cycle control.

Authentication sits in front of this service (reverse proxy); these routes
assume the caller is already an administrator.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_account.application.schemas import CreateAccountRequest, CreditAdjustmentRequest
from src.bl_account.application.service import AccountApplicationService
from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_cycle.application.service import CycleService
from src.bl_draw.application.schemas import AddDrawRequest
from src.bl_draw.application.service import DrawService
from src.bl_lottery.application.schemas import UpdateLotteryConfigRequest
from src.bl_lottery.application.service import LotteryConfigService
from src.bl_ranking.application.service import RankingQueryService
from src.bl_ticket.application.service import TicketService

router = APIRouter(prefix="/admin", tags=["admin"])

_accounts = AccountApplicationService()
_draws = DrawService()
_config = LotteryConfigService()
_cycle = CycleService()
_ranking = RankingQueryService()
_tickets = TicketService()


def get_draw_service() -> DrawService:
    return _draws


def get_cycle_service() -> CycleService:
    return _cycle


DbSession = Annotated[AsyncSession, Depends(get_db_session)]


# --- Accounts ---

@router.post("/accounts")
async def create_account(body: CreateAccountRequest, db: DbSession, request: Request) -> ApiResponse:
    data = await _accounts.create_account(db, body.username, body.role, body.initial_balance_cents)
    return success_response(data.model_dump(), request)


@router.post("/accounts/{account_id}/credits")
async def adjust_credits(
    account_id: str, body: CreditAdjustmentRequest, db: DbSession, request: Request
) -> ApiResponse:
    data = await _accounts.adjust_credits(db, account_id, body.amount_cents, body.description)
    return success_response(data.model_dump(), request)


# --- Draws ---

@router.post("/draws")
async def add_draw(
    body: AddDrawRequest,
    db: DbSession,
    service: Annotated[DrawService, Depends(get_draw_service)],
    request: Request,
) -> ApiResponse:
    data = await service.add_draw(db, body.numbers, body.name)
    return success_response(data.model_dump(), request)


@router.delete("/draws/{draw_id}")
async def delete_draw(
    draw_id: str,
    db: DbSession,
    service: Annotated[DrawService, Depends(get_draw_service)],
    request: Request,
) -> ApiResponse:
    data = await service.delete_draw(db, draw_id)
    return success_response(data.model_dump(), request)


# --- Lottery config ---

@router.get("/config")
async def get_config(db: DbSession, request: Request) -> ApiResponse:
    data = await _config.get_config(db)
    return success_response(data.model_dump(), request)


@router.put("/config")
async def update_config(
    body: UpdateLotteryConfigRequest, db: DbSession, request: Request
) -> ApiResponse:
    data = await _config.update_config(db, body)
    return success_response(data.model_dump(), request)


# --- Tickets ---

@router.post("/tickets/{ticket_id}/hold")
async def hold_ticket(ticket_id: str, db: DbSession, request: Request) -> ApiResponse:
    data = await _tickets.hold_ticket(db, ticket_id)
    return success_response(data.model_dump(), request)


@router.post("/tickets/{ticket_id}/release")
async def release_ticket(ticket_id: str, db: DbSession, request: Request) -> ApiResponse:
    data = await _tickets.release_ticket(db, ticket_id)
    return success_response(data.model_dump(), request)


# --- Cycle ---

@router.get("/ranking")
async def get_cycle_ranking(db: DbSession, request: Request) -> ApiResponse:
    data = await _ranking.get_cycle_ranking(db)
    return success_response(data.model_dump(), request)


@router.get("/report")
async def get_financial_report(
    db: DbSession,
    service: Annotated[CycleService, Depends(get_cycle_service)],
    request: Request,
) -> ApiResponse:
    data = await service.get_financial_report(db)
    return success_response(data.model_dump(), request)


@router.post("/cycle/reset")
async def reset_cycle(
    db: DbSession,
    service: Annotated[CycleService, Depends(get_cycle_service)],
    request: Request,
) -> ApiResponse:
    data = await service.reset_cycle(db)
    return success_response(data.model_dump(), request)


@router.get("/history/sellers")
async def list_seller_history(
    db: DbSession,
    service: Annotated[CycleService, Depends(get_cycle_service)],
    request: Request,
    seller_id: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    data = await service.list_seller_history(db, seller_id, limit)
    return success_response(data.model_dump(), request)


@router.get("/history/admin")
async def list_admin_history(
    db: DbSession,
    service: Annotated[CycleService, Depends(get_cycle_service)],
    request: Request,
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    data = await service.list_admin_history(db, limit)
    return success_response(data.model_dump(), request)
