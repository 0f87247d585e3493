"""
ws.py
WebSocket connection manager for telling dashboards to re-fetch.
Messages carry only a type, never data.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Dict

from fastapi import WebSocket

logger = logging.getLogger(__name__)

BOT_UPDATE = "bot_update"


class ConnectionManager:
    def __init__(self):
        self._connections: Dict[WebSocket, str] = {}

    def __len__(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        conn_id = uuid.uuid4().hex
        self._connections[websocket] = conn_id
        logger.info("Dashboard connected: %s", conn_id)
        return conn_id

    def disconnect(self, websocket: WebSocket) -> None:
        conn_id = self._connections.pop(websocket, None)
        if conn_id is not None:
            logger.info("Dashboard disconnected: %s", conn_id)

    async def broadcast(self, event: str = BOT_UPDATE) -> None:
        targets = list(self._connections)
        results = await asyncio.gather(
            *(ws.send_json({"type": event}) for ws in targets),
            return_exceptions=True,
        )
        for ws, result in zip(targets, results):
            if isinstance(result, Exception):
                self.disconnect(ws)
