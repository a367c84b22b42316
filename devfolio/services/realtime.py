"""Real-time delivery of user events using Redis pub/sub."""

import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

import redis
import redis.asyncio as aioredis

from devfolio.config import get_settings

if TYPE_CHECKING:
    from redis.asyncio.client import PubSub

logger = logging.getLogger(__name__)
settings = get_settings()


class UserEventType(StrEnum):
    """Event types pushed to a user's channel."""

    NEW_NOTIFICATION = "new_notification"


# Synchronous Redis client for use in API endpoints
_sync_redis: redis.Redis | None = None


def get_sync_redis() -> redis.Redis:
    """Get synchronous Redis client for publishing from API endpoints."""
    global _sync_redis
    if _sync_redis is None:
        _sync_redis = redis.from_url(settings.redis_url)
    return _sync_redis


_async_redis: aioredis.Redis | None = None


def get_async_redis() -> aioredis.Redis:
    """Get the shared async Redis client used by request middleware."""
    global _async_redis
    if _async_redis is None:
        _async_redis = aioredis.from_url(settings.redis_url)
    return _async_redis


def user_channel(user_id: int) -> str:
    """Name of the channel (room) a user's sessions subscribe to."""
    return f"user:{user_id}"


def publish_user_event(user_id: int, event_type: UserEventType, data: dict | None = None) -> bool:
    """Publish an event to a user's Redis channel.

    Delivery is best-effort: failures are logged and reported through the
    return value, never raised.

    Args:
        user_id: Recipient user ID
        event_type: Type of event (new_notification)
        data: Optional event payload

    Returns:
        True if the message was handed to Redis.
    """
    try:
        redis_client = get_sync_redis()
        channel = user_channel(user_id)
        message = {
            "type": event_type,
            "user_id": user_id,
            "timestamp": datetime.now(UTC).isoformat(),
            "data": data or {},
        }
        redis_client.publish(channel, json.dumps(message, default=str))
        logger.debug(f"Published {event_type} to {channel}")
        return True
    except Exception as e:
        # Don't fail the request if pub/sub fails
        logger.error(f"Failed to publish user event: {e}")
        return False


class RealtimeService:
    """Async Redis pub/sub service for WebSocket connections."""

    def __init__(self) -> None:
        self._redis: aioredis.Redis | None = None
        self._pubsub: PubSub | None = None

    async def _get_redis(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = aioredis.from_url(settings.redis_url)
        return self._redis

    async def subscribe(self, channel: str) -> AsyncIterator[dict]:
        """Subscribe to a Redis channel and yield messages."""
        redis_conn = await self._get_redis()
        self._pubsub = redis_conn.pubsub()
        await self._pubsub.subscribe(channel)

        try:
            async for message in self._pubsub.listen():
                if message["type"] == "message":
                    try:
                        data = json.loads(message["data"])
                        yield data
                    except json.JSONDecodeError:
                        logger.warning(f"Invalid JSON in pub/sub message: {message['data']}")
        finally:
            if self._pubsub:
                await self._pubsub.unsubscribe(channel)

    async def cleanup(self) -> None:
        """Clean up Redis connections."""
        if self._pubsub:
            await self._pubsub.close()
        if self._redis:
            await self._redis.close()
