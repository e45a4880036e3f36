"""bl_ticket REST API: ticket lookup with live match scoring."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_ticket.application.service import TicketService

router = APIRouter(prefix="/tickets", tags=["tickets"])

_service = TicketService()


def get_ticket_service() -> TicketService:
    return _service


@router.get("/{ticket_id}")
async def get_ticket(
    ticket_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[TicketService, Depends(get_ticket_service)],
    request: Request,
) -> ApiResponse:
    data = await service.get_ticket(db, ticket_id)
    return success_response(data.model_dump(), request)


@router.get("")
async def list_tickets(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[TicketService, Depends(get_ticket_service)],
    request: Request,
    account_id: str = Query(..., description="Buyer (client) or seller account id"),
    limit: int = Query(100, ge=1, le=500),
) -> ApiResponse:
    data = await service.list_tickets(db, account_id, limit)
    return success_response(data.model_dump(), request)
