"""Purchase rate limiting: Redis fixed-window counter.

Key pattern: "ratelimit:{client_ip}:{group}", one window per minute.
The client IP comes from X-Forwarded-For when behind a reverse proxy.
"""

import logging

from fastapi import Request

from config.settings import settings
from src.bl_common.errors import RateLimitError
from src.bl_common.redis_client import get_redis

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def hit(key: str, limit: int) -> int:
    """Count one hit in the current window; raise RateLimitError past the limit."""
    redis = await get_redis()
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, _WINDOW_SECONDS)
    if count > limit:
        logger.warning("Rate limit exceeded: key=%s count=%d", key, count)
        raise RateLimitError()
    return count


async def purchase_rate_limit(request: Request) -> None:
    """FastAPI dependency guarding the purchase endpoint."""
    await hit(
        f"ratelimit:{client_ip(request)}:purchase",
        settings.PURCHASE_RATE_LIMIT_PER_MINUTE,
    )
