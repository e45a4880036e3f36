"""Unified error codes and custom exceptions.

Error code ranges:
  2xxx: Account
  3xxx: Draw
  4xxx: Ticket
  5xxx: Lottery configuration
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 2xxx: Account ---

class InsufficientFundsError(AppError):
    """Distinct from generic failures: callers offer a credit top-up flow."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            2001,
            f"Insufficient funds: required {required} cents, available {available} cents",
            422,
        )


class AccountNotFoundError(AppError):
    def __init__(self, account_id: str) -> None:
        super().__init__(2002, f"Account not found: {account_id}", 404)


class UsernameExistsError(AppError):
    def __init__(self, username: str) -> None:
        super().__init__(2003, f"Username already exists: {username}", 409)


# --- 3xxx: Draw ---

class DrawNotFoundError(AppError):
    def __init__(self, draw_id: str) -> None:
        super().__init__(3001, f"Draw not found: {draw_id}", 404)


class MalformedDrawError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3002, f"Malformed draw: {detail}", 422)


# --- 4xxx: Ticket ---

class MalformedTicketError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Malformed ticket input: {detail}", 422)


class TicketNotFoundError(AppError):
    def __init__(self, ticket_id: str) -> None:
        super().__init__(4002, f"Ticket not found: {ticket_id}", 404)


class InvalidTicketTransitionError(AppError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            4003, f"Ticket in status {current} cannot move to {target}", 422
        )


# --- 5xxx: Lottery configuration ---

class InvalidLotteryConfigError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5001, f"Invalid lottery configuration: {detail}", 422)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class TransactionConflictError(AppError):
    def __init__(self, attempts: int) -> None:
        super().__init__(
            9003, f"Transaction conflict persisted after {attempts} attempts, try again", 503
        )
