"""Lottery-wide pricing and commission settings."""

from dataclasses import dataclass

from config.settings import settings
from src.bl_common.cents import validate_bps
from src.bl_common.errors import InvalidLotteryConfigError

_FULL_BPS = 10000


@dataclass(frozen=True)
class LotteryConfig:
    ticket_price_cents: int
    seller_commission_bps: int
    owner_commission_bps: int
    # Extra owner share taken from client (app) sales only
    client_sales_commission_bps: int

    def __post_init__(self) -> None:
        if self.ticket_price_cents <= 0:
            raise InvalidLotteryConfigError(
                f"ticket price must be positive, got {self.ticket_price_cents}"
            )
        try:
            validate_bps(self.seller_commission_bps)
            validate_bps(self.owner_commission_bps)
            validate_bps(self.client_sales_commission_bps)
        except ValueError as exc:
            raise InvalidLotteryConfigError(str(exc)) from exc
        # A seller sale pays seller + owner, a client sale pays owner + client
        # share; either may not exceed the ticket, or the prize pool goes negative.
        worst = self.owner_commission_bps + max(
            self.seller_commission_bps, self.client_sales_commission_bps
        )
        if worst > _FULL_BPS:
            raise InvalidLotteryConfigError(
                f"commissions take {worst} bps of a sale, more than {_FULL_BPS}"
            )

    @classmethod
    def defaults(cls) -> "LotteryConfig":
        return cls(
            ticket_price_cents=settings.DEFAULT_TICKET_PRICE_CENTS,
            seller_commission_bps=settings.DEFAULT_SELLER_COMMISSION_BPS,
            owner_commission_bps=settings.DEFAULT_OWNER_COMMISSION_BPS,
            client_sales_commission_bps=settings.DEFAULT_CLIENT_SALES_COMMISSION_BPS,
        )
