from pydantic import BaseModel, Field

from src.bl_common.cents import cents_to_display
from src.bl_lottery.domain.models import LotteryConfig


class UpdateLotteryConfigRequest(BaseModel):
    """Partial update: omitted fields keep their current value."""

    ticket_price_cents: int | None = Field(None, gt=0)
    seller_commission_bps: int | None = Field(None, ge=0, le=10000)
    owner_commission_bps: int | None = Field(None, ge=0, le=10000)
    client_sales_commission_bps: int | None = Field(None, ge=0, le=10000)


class LotteryConfigResponse(BaseModel):
    ticket_price_cents: int
    ticket_price_display: str
    seller_commission_bps: int
    owner_commission_bps: int
    client_sales_commission_bps: int

    @classmethod
    def from_domain(cls, config: LotteryConfig) -> "LotteryConfigResponse":
        return cls(
            ticket_price_cents=config.ticket_price_cents,
            ticket_price_display=cents_to_display(config.ticket_price_cents),
            seller_commission_bps=config.seller_commission_bps,
            owner_commission_bps=config.owner_commission_bps,
            client_sales_commission_bps=config.client_sales_commission_bps,
        )
