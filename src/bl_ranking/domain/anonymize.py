"""Buyer identity reduction for the public board."""

from src.bl_ticket.domain.constants import PUBLIC_TICKET_ID_LENGTH


def initials_of(name: str | None) -> str:
    """'maria da silva' -> 'MS', 'joao' -> 'JO', 'j' -> 'J', ''/None -> '?'."""
    if not name or not name.strip():
        return "?"
    parts = name.split()
    if len(parts) > 1:
        return f"{parts[0][0]}{parts[-1][0]}".upper()
    return parts[0][:2].upper()


def public_ticket_id(ticket_id: str) -> str:
    return ticket_id[:PUBLIC_TICKET_ID_LENGTH]
