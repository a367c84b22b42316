"""Tests for the async API client."""

import httpx
import pytest

from devfolio.client import ApiClient, ApiError, Devfolio, LoadingState, ResponseCache
from devfolio.client import api as api_module

BASE_URL = "http://testserver/api"


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def make_client(handler, **kwargs) -> ApiClient:
    return ApiClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


class TestResponseCache:
    def test_entries_expire_after_ttl(self):
        clock = FakeClock()
        cache = ResponseCache(clock=clock)
        cache.set("GET /skills", {"data": []})

        clock.now += 299
        assert cache.get("GET /skills") == {"data": []}

        clock.now += 1
        assert cache.get("GET /skills") is None
        assert len(cache) == 0

    def test_set_prunes_expired_entries(self):
        clock = FakeClock()
        cache = ResponseCache(clock=clock)
        cache.set("GET /skills", {"data": []})

        clock.now += 300
        cache.set("GET /courses", {"data": []})
        assert len(cache) == 1
        assert cache.get("GET /courses") == {"data": []}

    def test_clear(self):
        cache = ResponseCache()
        cache.set("a", 1)
        cache.clear()
        assert cache.get("a") is None


class TestLoadingState:
    def test_listeners_see_transitions(self):
        state = LoadingState()
        seen = []
        unsubscribe = state.subscribe(seen.append)

        first = state.begin()
        second = state.begin()
        assert state.active_count == 2
        state.end(first)
        assert state.is_loading
        state.end(second)
        assert seen == [True, True, True, False]

        unsubscribe()
        with state.track():
            pass
        assert len(seen) == 4

    def test_failing_listener_does_not_break_others(self):
        state = LoadingState()
        seen = []

        def broken(_):
            raise RuntimeError("boom")

        state.subscribe(broken)
        state.subscribe(seen.append)
        with state.track():
            pass
        assert seen == [True, False]


def test_cache_key_sorts_params():
    assert ApiClient.cache_key("/skills") == "GET /skills"
    assert (
        ApiClient.cache_key("/skills", {"level": "Expert", "category": "Backend", "page": None})
        == "GET /skills?category=Backend&level=Expert"
    )


@pytest.mark.asyncio
async def test_sends_bearer_token_and_json():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"success": True})

    async with make_client(handler, token="abc") as client:
        assert await client.get("/projects", params={"page": 2, "search": None}) == {"success": True}

    assert seen["auth"] == "Bearer abc"
    assert seen["url"] == "http://testserver/api/projects?page=2"


@pytest.mark.asyncio
async def test_cached_get_skips_network():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json={"data": len(calls)})

    async with make_client(handler) as client:
        first = await client.get("/skills", use_cache=True)
        second = await client.get("/skills", use_cache=True)
        uncached = await client.get("/skills")

        assert first == second == {"data": 1}
        assert uncached == {"data": 2}

        client.token = "new-identity"
        assert await client.get("/skills", use_cache=True) == {"data": 3}


@pytest.mark.asyncio
async def test_unauthorized_clears_token():
    expired = []

    def handler(request):
        return httpx.Response(401, json={"success": False, "message": "Not authorized"})

    async with make_client(handler, token="stale", on_unauthorized=lambda: expired.append(True)) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get("/auth/me")

        assert exc_info.value.message == api_module.SESSION_EXPIRED
        assert exc_info.value.status_code == 401
        assert client.token is None
        assert expired == [True]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,expected",
    [(403, api_module.FORBIDDEN), (500, api_module.SERVER_ERROR), (503, api_module.SERVER_ERROR)],
)
async def test_status_messages(status_code, expected):
    def handler(request):
        return httpx.Response(status_code, json={"message": "internal detail"})

    async with make_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get("/students")

    assert exc_info.value.message == expected


@pytest.mark.asyncio
async def test_server_message_and_errors_passed_through():
    body = {
        "success": False,
        "message": "Validation failed",
        "errors": [{"field": "email", "message": "Please provide a valid email"}],
    }

    def handler(request):
        return httpx.Response(400, json=body)

    async with make_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.post("/auth/signup", json={})

    assert exc_info.value.message == "Validation failed"
    assert exc_info.value.errors == body["errors"]


@pytest.mark.asyncio
async def test_non_json_error_uses_status_line():
    def handler(request):
        return httpx.Response(404, text="nope")

    async with make_client(handler) as client:
        with pytest.raises(ApiError, match="HTTP 404: Not Found"):
            await client.get("/missing")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error,expected",
    [
        (httpx.ReadTimeout("slow"), api_module.TIMEOUT),
        (httpx.ConnectError("refused"), api_module.OFFLINE),
        (httpx.RemoteProtocolError("bad frame"), api_module.NETWORK_ERROR),
    ],
)
async def test_transport_failures(error, expected):
    loading = LoadingState()

    def handler(request):
        raise error

    async with make_client(handler, loading=loading) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get("/projects")

    assert exc_info.value.message == expected
    assert exc_info.value.status_code is None
    assert not loading.is_loading


def test_notifications_url():
    client = ApiClient("https://devfolio.example.com/api", token="t0k")
    assert client.notifications_url() == "wss://devfolio.example.com/api/ws/notifications?token=t0k"


@pytest.mark.asyncio
async def test_login_stores_token():
    def handler(request):
        return httpx.Response(200, json={"success": True, "token": "fresh", "user": {"id": 1}})

    async with make_client(handler) as client:
        sdk = Devfolio(client)
        await sdk.auth.login("jane@example.com", "Password1")
        assert client.token == "fresh"

        sdk.auth.logout()
        assert client.token is None


@pytest.mark.asyncio
async def test_client_side_validation():
    def handler(request):
        raise AssertionError("request should not be sent")

    async with make_client(handler) as client:
        sdk = Devfolio(client)
        with pytest.raises(ApiError, match="Passwords do not match"):
            await sdk.auth.signup("Jane", "jane@example.com", "Password1", "Password2")
        with pytest.raises(ApiError, match="Percentage must be between 0 and 100"):
            await sdk.skills.create({"name": "Go", "category": "Backend", "level": "Expert", "percentage": 150})
