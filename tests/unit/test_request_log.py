"""Tests for the request access-log middleware."""

import logging
from unittest.mock import MagicMock

from httpx import AsyncClient

from src.bl_gateway.middleware.request_log import _level_for, resolve_request_id


def _request(headers: dict[str, str]) -> MagicMock:
    request = MagicMock()
    request.headers = headers
    return request


class TestResolveRequestId:
    def test_upstream_id_reused(self) -> None:
        request = _request({"X-Request-ID": "lb-7f3a9c21e0"})
        assert resolve_request_id(request) == "lb-7f3a9c21e0"

    def test_garbage_upstream_id_replaced(self) -> None:
        request = _request({"X-Request-ID": "bad id\nwith newline"})
        assert resolve_request_id(request).startswith("req_")

    def test_generated_when_missing(self) -> None:
        rid = resolve_request_id(_request({}))
        assert rid.startswith("req_")
        assert len(rid) == 16


class TestLevel:
    def test_health_is_quiet(self) -> None:
        assert _level_for("/health", 200) == logging.DEBUG

    def test_server_errors_warn(self) -> None:
        assert _level_for("/api/v1/purchases", 503) == logging.WARNING

    def test_normal_request_info(self) -> None:
        assert _level_for("/api/v1/ranking", 200) == logging.INFO


class TestMiddleware:
    async def test_echoes_upstream_request_id(self, client: AsyncClient) -> None:
        resp = await client.get("/health", headers={"X-Request-ID": "admin-panel-0001"})
        assert resp.headers["X-Request-ID"] == "admin-panel-0001"

    async def test_logs_client_ip(self, client: AsyncClient, caplog) -> None:
        caplog.set_level(logging.INFO, logger="bl.request")

        await client.get("/api/v1/unknown", headers={"X-Forwarded-For": "203.0.113.9"})

        assert "ip=203.0.113.9" in caplog.text
        assert "/api/v1/unknown 404" in caplog.text
