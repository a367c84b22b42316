"""Tests for the HTTP middleware stack."""

from unittest.mock import AsyncMock, patch

import pytest

from devfolio import middleware
from devfolio.middleware import RATE_LIMIT_MESSAGE, rate_limit_key


@pytest.fixture
def rate_limited():
    """Enable the limiter with a limit of 2 against an in-memory counter."""
    counts: dict[str, int] = {}

    async def incr(key):
        counts[key] = counts.get(key, 0) + 1
        return counts[key]

    redis_client = AsyncMock()
    redis_client.incr.side_effect = incr
    with (
        patch.object(middleware.settings, "rate_limit_enabled", True),
        patch.object(middleware.settings, "rate_limit_requests", 2),
        patch("devfolio.middleware.get_async_redis", return_value=redis_client),
    ):
        yield redis_client


def test_security_headers(client):
    response = client.get("/api/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert "Strict-Transport-Security" not in response.headers


def test_rate_limit_key_uses_fixed_window():
    window = middleware.settings.rate_limit_window_seconds
    assert rate_limit_key("1.2.3.4", now=0) == "ratelimit:1.2.3.4:0"
    assert rate_limit_key("1.2.3.4", now=window - 1) == "ratelimit:1.2.3.4:0"
    assert rate_limit_key("1.2.3.4", now=window) == "ratelimit:1.2.3.4:1"


def test_rate_limit_rejects_after_limit(client, rate_limited):
    first = client.get("/api/health")
    assert first.status_code == 200
    assert first.headers["X-RateLimit-Remaining"] == "1"

    client.get("/api/health")
    blocked = client.get("/api/health")
    assert blocked.status_code == 429
    assert blocked.json() == {"success": False, "message": RATE_LIMIT_MESSAGE}
    assert blocked.headers["X-RateLimit-Remaining"] == "0"

    # Expiry is only set when the window opens
    rate_limited.expire.assert_awaited_once()


def test_rate_limit_ignores_non_api_routes(client, rate_limited):
    for _ in range(3):
        assert client.get("/").status_code == 200
    rate_limited.incr.assert_not_awaited()


def test_rate_limit_fails_open(client, rate_limited):
    rate_limited.incr.side_effect = ConnectionError("redis down")

    for _ in range(3):
        assert client.get("/api/health").status_code == 200


def test_body_size_limit(client):
    with patch.object(middleware.settings, "max_request_bytes", 10):
        response = client.post("/api/auth/login", content=b"x" * 100)

    assert response.status_code == 413
    assert response.json() == {"success": False, "message": "Request entity too large"}
