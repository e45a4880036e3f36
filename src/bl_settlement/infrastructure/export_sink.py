"""Ticket export sink: best-effort row append to an external spreadsheet.

Rows are POSTed as JSON to a webhook (e.g. a spreadsheet Apps Script or a
sheets proxy). Export runs after the sale has committed and never feeds
back into it: failures are logged, not raised to the purchaser.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

import httpx

from config.settings import settings
from src.bl_ticket.domain.models import Ticket

logger = logging.getLogger(__name__)

CLIENT_SALE_LABEL = "Cliente (App)"


class NotificationSinkError(Exception):
    """The export sink could not deliver a batch of rows."""


def ticket_export_row(ticket: Ticket) -> list[str | int]:
    """Flattened row: timestamp, id, buyer, seller-or-client label, the 10 numbers, status."""
    return [
        ticket.created_at.strftime("%d/%m/%Y %H:%M:%S"),
        ticket.id,
        ticket.buyer_name or "",
        ticket.seller_username or CLIENT_SALE_LABEL,
        *ticket.numbers,
        ticket.status.value,
    ]


class TicketExportSink(Protocol):
    async def export(self, tickets: Sequence[Ticket]) -> None: ...


class WebhookExportSink:
    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url if url is not None else settings.EXPORT_WEBHOOK_URL
        self._timeout = timeout if timeout is not None else settings.EXPORT_TIMEOUT_SECONDS
        self._transport = transport

    async def export(self, tickets: Sequence[Ticket]) -> None:
        if not self._url:
            logger.debug("Export webhook not configured; skipped %d ticket(s)", len(tickets))
            return
        rows = [ticket_export_row(t) for t in tickets]
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self._url, json={"values": rows})
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise NotificationSinkError(f"export of {len(rows)} row(s) failed: {exc}") from exc
        logger.info("Exported %d ticket row(s)", len(rows))


class BackgroundExporter:
    """Schedules exports as detached tasks so the purchaser never waits on them."""

    def __init__(self, sink: TicketExportSink | None = None) -> None:
        self._sink: TicketExportSink = sink or WebhookExportSink()
        self._tasks: set[asyncio.Task[None]] = set()

    def dispatch(self, tickets: Sequence[Ticket]) -> None:
        if not tickets:
            return
        task = asyncio.create_task(self._run(list(tickets)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, tickets: list[Ticket]) -> None:
        try:
            await self._sink.export(tickets)
        except Exception:
            logger.exception(
                "Ticket export failed (sale already committed): ids=%s",
                [t.id for t in tickets],
            )

    async def drain(self) -> None:
        """Wait for in-flight exports (shutdown and tests)."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
