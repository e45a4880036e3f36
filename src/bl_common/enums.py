"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class TicketStatus(str, Enum):
    ACTIVE = "active"
    WINNING = "winning"
    UNPAID = "unpaid"
    EXPIRED = "expired"


class AccountRole(str, Enum):
    CLIENT = "cliente"
    SELLER = "vendedor"
    ADMIN = "admin"


class LedgerEntryType(str, Enum):
    TICKET_PURCHASE = "TICKET_PURCHASE"
    CREDIT_ADJUSTMENT = "CREDIT_ADJUSTMENT"
