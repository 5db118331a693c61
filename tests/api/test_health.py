"""Tests for the probe, health and cross-cutting HTTP behaviour."""

from unittest.mock import AsyncMock, patch

import pytest
from loguru import logger

from shortify.core.logging import REQUEST_LEVEL
from shortify.db.base import DatabaseHealthCheck


@pytest.mark.api
class TestProbes:

    @pytest.mark.asyncio
    async def test_test_probe(self, client):
        response = await client.get("/test")

        assert response.status_code == 200
        assert response.json() == {"message": "test request"}

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "testing"
        assert body["components"]["database"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_check_database_down(self, client):
        unhealthy = {"status": "unhealthy", "latency_ms": 0, "error": "connection refused"}

        with patch.object(DatabaseHealthCheck, "check_connection", AsyncMock(return_value=unhealthy)):
            response = await client.get("/api/v1/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


@pytest.mark.api
class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_cors_preflight(self, client):
        response = await client.options(
            "/api/v1/shorten",
            headers={
                "Origin": "https://frontend.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_cors_on_error_response(self, client):
        response = await client.get("/missing", headers={"Origin": "https://frontend.example"})

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/test")

        assert response.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get("/test", headers={"X-Request-ID": "req-42"})

        assert response.headers["x-request-id"] == "req-42"

    @pytest.mark.asyncio
    async def test_request_log_carries_request_id(self, client):
        records = []
        sink_id = logger.add(lambda message: records.append(message.record), level=REQUEST_LEVEL)
        try:
            await client.get("/test", headers={"X-Request-ID": "req-7"})
        finally:
            logger.remove(sink_id)

        request_lines = [r for r in records if r["level"].name == REQUEST_LEVEL]
        assert request_lines
        assert request_lines[-1]["extra"]["request_id"] == "req-7"
        assert request_lines[-1]["extra"]["status_code"] == 200
