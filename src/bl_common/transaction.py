"""Transaction unit runner with whole-unit retry on write conflicts.

A unit is an async callable that performs reads and writes on the session.
The runner owns commit/rollback. A serialization failure or deadlock rolls
the unit back and re-runs it from scratch (never resumed mid-way); once the
retry budget is spent the caller gets TransactionConflictError.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bl_common.errors import TransactionConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# serialization_failure, deadlock_detected
_RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def is_retryable_conflict(exc: BaseException) -> bool:
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return sqlstate in _RETRYABLE_SQLSTATES


async def run_in_transaction(
    db: AsyncSession,
    unit: Callable[[AsyncSession], Awaitable[T]],
    *,
    max_attempts: int | None = None,
    backoff_ms: int | None = None,
) -> T:
    attempts = max_attempts or settings.TX_MAX_RETRIES
    backoff = settings.TX_RETRY_BACKOFF_MS if backoff_ms is None else backoff_ms
    for attempt in range(1, attempts + 1):
        try:
            result = await unit(db)
            await db.commit()
            return result
        except DBAPIError as exc:
            await db.rollback()
            if not is_retryable_conflict(exc):
                raise
            logger.warning(
                "Transaction conflict (attempt %d/%d): %s", attempt, attempts, exc.orig
            )
            if attempt < attempts and backoff > 0:
                await asyncio.sleep(backoff * attempt / 1000)
        except Exception:
            await db.rollback()
            raise
    raise TransactionConflictError(attempts)
