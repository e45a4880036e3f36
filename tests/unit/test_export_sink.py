"""Unit tests for the ticket export sink and the background exporter."""

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import httpx
import pytest

from src.bl_common.enums import TicketStatus
from src.bl_settlement.infrastructure.export_sink import (
    CLIENT_SALE_LABEL,
    BackgroundExporter,
    NotificationSinkError,
    WebhookExportSink,
    ticket_export_row,
)
from src.bl_ticket.domain.models import Ticket


def _ticket(seller_username: str | None = None) -> Ticket:
    return Ticket(
        id="9f1c2a7e-aaaa",
        numbers=[1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
        status=TicketStatus.ACTIVE,
        created_at=datetime(2026, 5, 4, 13, 7, 9, tzinfo=UTC),
        buyer_name="Ana Souza",
        seller_username=seller_username,
    )


class TestExportRow:
    def test_client_sale_row(self) -> None:
        row = ticket_export_row(_ticket())
        assert row[:4] == ["04/05/2026 13:07:09", "9f1c2a7e-aaaa", "Ana Souza", CLIENT_SALE_LABEL]
        assert row[4:14] == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
        assert row[-1] == "active"

    def test_seller_sale_row(self) -> None:
        assert ticket_export_row(_ticket("vend01"))[3] == "vend01"


class TestWebhookExportSink:
    async def test_posts_rows_as_json(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"ok": True})

        sink = WebhookExportSink(
            url="https://sheets.example/hook", transport=httpx.MockTransport(handler)
        )
        await sink.export([_ticket(), _ticket("vend01")])

        assert len(captured) == 1
        body = json.loads(captured[0].content)
        assert len(body["values"]) == 2
        assert body["values"][1][3] == "vend01"

    async def test_http_error_raises_sink_error(self) -> None:
        sink = WebhookExportSink(
            url="https://sheets.example/hook",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with pytest.raises(NotificationSinkError):
            await sink.export([_ticket()])

    async def test_unconfigured_sink_is_a_no_op(self) -> None:
        calls: list[httpx.Request] = []
        sink = WebhookExportSink(
            url="",
            transport=httpx.MockTransport(lambda r: calls.append(r) or httpx.Response(200)),
        )
        await sink.export([_ticket()])
        assert calls == []


class TestBackgroundExporter:
    async def test_dispatch_runs_sink(self) -> None:
        sink = AsyncMock()
        exporter = BackgroundExporter(sink=sink)

        exporter.dispatch([_ticket()])
        await exporter.drain()

        sink.export.assert_awaited_once()

    async def test_sink_failure_is_swallowed_and_logged(self, caplog) -> None:
        sink = AsyncMock()
        sink.export.side_effect = NotificationSinkError("down")
        exporter = BackgroundExporter(sink=sink)

        exporter.dispatch([_ticket()])
        await exporter.drain()

        assert "Ticket export failed" in caplog.text

    async def test_empty_batch_not_dispatched(self) -> None:
        sink = AsyncMock()
        exporter = BackgroundExporter(sink=sink)
        exporter.dispatch([])
        await exporter.drain()
        sink.export.assert_not_awaited()
