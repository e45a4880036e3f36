"""Numeric domain constants for tickets and draws."""

PICKS_PER_TICKET = 10
MIN_NUMBER = 1
MAX_NUMBER = 25
MAX_REPEATS_PER_TICKET = 4
DRAW_SIZES = (5, 10)
PUBLIC_TICKET_ID_LENGTH = 4
