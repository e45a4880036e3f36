"""bl_settlement REST API: ticket purchase."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import get_db_session
from src.bl_common.response import ApiResponse, success_response
from src.bl_gateway.rate_limit import purchase_rate_limit
from src.bl_settlement.application.schemas import PurchaseRequest, PurchaseResponse
from src.bl_settlement.application.transactor import SettlementTransactor
from src.bl_ticket.application.schemas import TicketResponse

router = APIRouter(prefix="/purchases", tags=["purchases"])

_transactor = SettlementTransactor()


def get_transactor() -> SettlementTransactor:
    return _transactor


@router.post("", dependencies=[Depends(purchase_rate_limit)])
async def purchase_tickets(
    body: PurchaseRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    transactor: Annotated[SettlementTransactor, Depends(get_transactor)],
    request: Request,
) -> ApiResponse:
    result = await transactor.purchase(
        db, body.account_id, body.tickets, body.buyer_name, body.buyer_phone
    )
    data = PurchaseResponse.from_result(
        [TicketResponse.from_domain(t) for t in result.tickets],
        result.total_cost,
        result.new_balance,
    )
    return success_response(data.model_dump(), request)
