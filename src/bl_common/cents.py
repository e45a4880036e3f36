"""Integer money arithmetic.

All prices, balances and commissions are int cents; percentages are int
basis points (1000 bps = 10%). No float, no Decimal.
"""


def cents_to_display(cents: int) -> str:
    """Format cents as Brazilian reais: 123456 -> 'R$ 1.234,56', -200 -> '-R$ 2,00'."""
    sign = "-" if cents < 0 else ""
    abs_cents = abs(cents)
    reais = f"{abs_cents // 100:,}".replace(",", ".")
    return f"{sign}R$ {reais},{abs_cents % 100:02d}"


def apply_bps(amount: int, bps: int) -> int:
    """Share of `amount` at `bps` basis points, rounded down to the cent.

    Commissions round down so the prize pool never ends up short.
    """
    if amount == 0 or bps == 0:
        return 0
    return amount * bps // 10000


def validate_bps(bps: int) -> None:
    if not (0 <= bps <= 10000):
        raise ValueError(f"Basis points must be between 0 and 10000, got {bps}")
