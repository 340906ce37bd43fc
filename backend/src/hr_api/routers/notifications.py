"""Notification hub WebSocket endpoint."""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from hr_api.services.notification_hub import NotificationHub

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/notifications")
async def notifications_socket(websocket: WebSocket) -> None:
    """Push HR events to the client until it disconnects.

    Frames are JSON objects ``{"event": <name>, "data": <payload>}``.
    Messages sent by the client are ignored.
    """
    hub: NotificationHub = websocket.app.state.hub
    await hub.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
