"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.bl_account.api.router import router as account_router
from src.bl_admin.api.router import router as admin_router
from src.bl_common.database import engine
from src.bl_common.errors import AppError
from src.bl_common.logging_config import configure_logging
from src.bl_common.redis_client import close_redis, get_redis
from src.bl_common.response import error_response
from src.bl_draw.api.router import router as draw_router
from src.bl_gateway.middleware.request_log import RequestLogMiddleware
from src.bl_ranking.api.router import router as ranking_router
from src.bl_settlement.api.router import get_transactor
from src.bl_settlement.api.router import router as purchase_router
from src.bl_ticket.api.router import router as ticket_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: flush exports, dispose."""
    configure_logging()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    logger.info("%s started", settings.APP_NAME)
    yield
    await get_transactor().exporter.drain()
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(account_router, prefix="/api/v1")
app.include_router(ticket_router, prefix="/api/v1")
app.include_router(purchase_router, prefix="/api/v1")
app.include_router(draw_router, prefix="/api/v1")
app.include_router(ranking_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
