"""WebSocket connection registry for real-time notifications."""

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)

# Per-client send timeout so one slow socket cannot stall a broadcast
SEND_TIMEOUT = 5.0


class NotificationHub:
    """Keeps track of connected clients and fans events out to all of them."""

    def __init__(self, send_timeout: float = SEND_TIMEOUT) -> None:
        """Initialize an empty hub."""
        self._connections: set[WebSocket] = set()
        self._send_timeout = send_timeout

    @property
    def connection_count(self) -> int:
        """Number of currently connected clients."""
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a WebSocket and register it for broadcasts."""
        await websocket.accept()
        self._connections.add(websocket)
        logger.info(f"Notification client connected ({self.connection_count} connected)")

    def disconnect(self, websocket: WebSocket) -> None:
        """Forget a WebSocket. Unknown sockets are ignored."""
        if websocket in self._connections:
            self._connections.discard(websocket)
            logger.info(f"Notification client disconnected ({self.connection_count} connected)")

    async def broadcast(self, event: str, data: dict[str, Any]) -> int:
        """Send an event frame to every connected client.

        Clients that fail to receive the frame are dropped.

        Args:
            event: Event name, e.g. ``ContractUpdated``
            data: JSON-serializable payload

        Returns:
            Number of clients the frame was delivered to
        """
        frame = {"event": event, "data": data}
        delivered = 0
        dead: list[WebSocket] = []

        for websocket in list(self._connections):
            try:
                await asyncio.wait_for(websocket.send_json(frame), timeout=self._send_timeout)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping notification client after failed send: {type(e).__name__}")
                dead.append(websocket)

        for websocket in dead:
            self.disconnect(websocket)

        return delivered
