"""WebSocket endpoint for real-time notification delivery."""

import asyncio
import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from devfolio.database import SessionLocal
from devfolio.models.user import User
from devfolio.services.auth import decode_access_token
from devfolio.services.realtime import RealtimeService, user_channel

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/ws", tags=["websocket"])

PING_INTERVAL_SECONDS = 30


def authenticate_socket(token: str) -> int | None:
    """Resolve a token to an existing user id, or None."""
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return None
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None

    # Manual DB session for WebSocket (can't use Depends normally)
    db = SessionLocal()
    try:
        exists = db.query(User.id).filter(User.id == user_id).first() is not None
    finally:
        db.close()
    return user_id if exists else None


@router.websocket("/notifications")
async def websocket_notifications(
    websocket: WebSocket,
    token: str = Query(...),
) -> None:
    """Push the caller's notifications as they are created.

    Authentication via token query parameter (WebSocket doesn't support headers).
    The socket is bound to the user's own Redis channel.
    """
    user_id = authenticate_socket(token)
    if user_id is None:
        await websocket.close(code=4001, reason="Invalid token")
        return

    realtime_service = RealtimeService()
    try:
        await websocket.accept()
        logger.info(f"WebSocket connected: user={user_id}")

        async def handle_messages() -> None:
            """Receive events from Redis and forward to WebSocket."""
            async for message in realtime_service.subscribe(user_channel(user_id)):
                try:
                    await websocket.send_json(message)
                except WebSocketDisconnect:
                    break
                except Exception as e:
                    logger.error(f"Error sending WebSocket message: {e}")
                    break

        async def handle_ping() -> None:
            """Send periodic pings to keep connection alive."""
            while True:
                try:
                    await asyncio.sleep(PING_INTERVAL_SECONDS)
                    await websocket.send_json({"type": "ping"})
                except Exception:
                    break

        async def handle_client() -> None:
            """Drain client frames (pong responses) until disconnect."""
            while True:
                try:
                    data = await websocket.receive_json()
                    if data.get("type") == "pong":
                        continue
                except Exception:
                    break

        # First handler to finish ends the session
        tasks = [
            asyncio.create_task(handle_messages()),
            asyncio.create_task(handle_ping()),
            asyncio.create_task(handle_client()),
        ]
        _, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: user={user_id}")
    except Exception as e:
        logger.error(f"WebSocket error: {e}", exc_info=True)
    finally:
        await realtime_service.cleanup()
        logger.info(f"WebSocket closed: user={user_id}")
