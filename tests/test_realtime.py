"""Tests for real-time notification delivery."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from starlette.websockets import WebSocketDisconnect

import devfolio.services.realtime as realtime_module
from devfolio.services.auth import create_access_token
from devfolio.services.realtime import (
    RealtimeService,
    UserEventType,
    get_async_redis,
    get_sync_redis,
    publish_user_event,
    user_channel,
)


class TestUserEventType:
    """Tests for UserEventType enum."""

    def test_notification_event_exists(self):
        assert UserEventType.NEW_NOTIFICATION == "new_notification"

    def test_user_channel(self):
        assert user_channel(42) == "user:42"


class TestGetRedisClients:
    """Tests for the shared Redis client getters."""

    def test_sync_client_created_once(self):
        with (
            patch.object(realtime_module, "_sync_redis", None),
            patch("devfolio.services.realtime.redis.from_url") as mock_from_url,
        ):
            first = get_sync_redis()
            second = get_sync_redis()

            assert first is second is mock_from_url.return_value
            mock_from_url.assert_called_once()

    def test_sync_client_reused(self):
        existing = MagicMock()
        with (
            patch.object(realtime_module, "_sync_redis", existing),
            patch("devfolio.services.realtime.redis.from_url") as mock_from_url,
        ):
            assert get_sync_redis() is existing
            mock_from_url.assert_not_called()

    def test_async_client_created_once(self):
        with (
            patch.object(realtime_module, "_async_redis", None),
            patch("devfolio.services.realtime.aioredis.from_url") as mock_from_url,
        ):
            first = get_async_redis()
            second = get_async_redis()

            assert first is second is mock_from_url.return_value
            mock_from_url.assert_called_once()


class TestPublishUserEvent:
    """Tests for publish_user_event; `mock_redis` stands in for the sync client."""

    def test_publishes_to_user_channel(self, mock_redis):
        assert publish_user_event(7, UserEventType.NEW_NOTIFICATION, {"id": 3}) is True

        mock_redis.publish.assert_called_once()
        channel, raw = mock_redis.publish.call_args[0]
        assert channel == "user:7"

        message = json.loads(raw)
        assert message["type"] == "new_notification"
        assert message["user_id"] == 7
        assert message["data"] == {"id": 3}
        assert "timestamp" in message

    def test_publishes_without_data(self, mock_redis):
        publish_user_event(7, UserEventType.NEW_NOTIFICATION)

        message = json.loads(mock_redis.publish.call_args[0][1])
        assert message["data"] == {}

    def test_redis_error_reported_not_raised(self, mock_redis):
        mock_redis.publish.side_effect = Exception("Redis connection failed")

        assert publish_user_event(7, UserEventType.NEW_NOTIFICATION) is False


def _pubsub_with(*messages):
    """Mock Redis connection whose pubsub yields `messages`."""
    mock_redis = MagicMock()
    mock_pubsub = MagicMock()

    async def mock_listen():
        for message in messages:
            yield message

    mock_pubsub.listen = mock_listen
    mock_pubsub.subscribe = AsyncMock()
    mock_pubsub.unsubscribe = AsyncMock()
    mock_redis.pubsub.return_value = mock_pubsub
    return mock_redis, mock_pubsub


class TestRealtimeService:
    """Tests for RealtimeService class."""

    def test_init(self):
        service = RealtimeService()
        assert service._redis is None
        assert service._pubsub is None

    @pytest.mark.asyncio
    async def test_get_redis_creates_connection(self):
        service = RealtimeService()

        with patch("devfolio.services.realtime.aioredis.from_url") as mock_from_url:
            mock_from_url.return_value = AsyncMock()

            result = await service._get_redis()

            assert result is mock_from_url.return_value
            mock_from_url.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_closes_connections(self):
        service = RealtimeService()
        service._redis = AsyncMock()
        service._pubsub = AsyncMock()

        await service.cleanup()

        service._pubsub.close.assert_called_once()
        service._redis.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_handles_no_connections(self):
        await RealtimeService().cleanup()

    @pytest.mark.asyncio
    async def test_subscribe_yields_parsed_messages(self):
        event = {"type": "new_notification", "user_id": 1}
        service = RealtimeService()
        service._redis, pubsub = _pubsub_with(
            {"type": "subscribe", "data": 1},
            {"type": "message", "data": "not valid json"},
            {"type": "message", "data": json.dumps(event)},
        )

        messages = [msg async for msg in service.subscribe("user:1")]

        assert messages == [event]
        pubsub.subscribe.assert_awaited_once_with("user:1")
        pubsub.unsubscribe.assert_awaited_once_with("user:1")


class FakeRealtimeService:
    """Stands in for RealtimeService: emits one event, then idles until cancelled."""

    channels: list[str] = []

    async def subscribe(self, channel):
        self.channels.append(channel)
        yield {"type": "new_notification", "data": {"title": "Hello"}}
        await asyncio.Event().wait()

    async def cleanup(self):
        pass


class TestNotificationSocket:
    """Tests for the notification WebSocket endpoint."""

    def test_requires_token(self, client):
        with pytest.raises(WebSocketDisconnect), client.websocket_connect("/api/ws/notifications"):
            pass

    def test_rejects_invalid_token(self, client):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/api/ws/notifications?token=invalid_token"):
                pass
        assert exc_info.value.code == 4001

    def test_rejects_nonexistent_user(self, client):
        token = create_access_token(user_id=99999, role="student")
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect(f"/api/ws/notifications?token={token}"):
                pass
        assert exc_info.value.code == 4001

    def test_forwards_user_events(self, client, auth_headers):
        token = auth_headers["Authorization"].removeprefix("Bearer ")
        FakeRealtimeService.channels = []

        with (
            patch("devfolio.api.websocket.RealtimeService", FakeRealtimeService),
            client.websocket_connect(f"/api/ws/notifications?token={token}") as websocket,
        ):
            message = websocket.receive_json()

        assert message == {"type": "new_notification", "data": {"title": "Hello"}}
        assert FakeRealtimeService.channels == [f"user:{auth_headers.user_id}"]
