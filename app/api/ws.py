"""
WebSocket manager for real-time layout updates
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.models import LayoutStatistics

logger = logging.getLogger(__name__)

class WebSocketManager:
    """Keeps layout viewers connected and pushes change notices to them"""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        """Accept WebSocket connection"""
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"WebSocket connected to layout. Total connections: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        """Forget a WebSocket connection"""
        try:
            self.active_connections.remove(websocket)
            logger.info(f"WebSocket disconnected from layout. Remaining connections: {len(self.active_connections)}")
        except ValueError:
            pass

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast(self, message: dict):
        """Send a message to every connected viewer"""
        if not self.active_connections:
            logger.debug("No active layout connections")
            return

        # Copy so disconnects during the loop are safe
        connections = self.active_connections.copy()

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)

    async def broadcast_layout_update(
        self,
        action: str,
        statistics: LayoutStatistics,
        table_id: Optional[str] = None
    ):
        """Tell viewers the layout changed so they can refetch it"""
        await self.broadcast({
            "type": "layout_update",
            "action": action,
            "table_id": table_id,
            "statistics": statistics.to_dict(),
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    def get_connection_count(self) -> int:
        return len(self.active_connections)

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

# Router for WebSocket endpoints
router = APIRouter()

@router.websocket("/layout")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for real-time layout updates"""
    await websocket_manager.connect(websocket)

    try:
        welcome_message: Dict = {
            "type": "connection",
            "message": "Connected to seating layout",
            "connection_count": websocket_manager.get_connection_count()
        }
        await websocket_manager.send_personal_message(welcome_message, websocket)

        while True:
            data = await websocket.receive_text()

            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            if isinstance(client_message, dict) and client_message.get("type") == "ping":
                pong_message = {
                    "type": "pong",
                    "timestamp": client_message.get("timestamp")
                }
                await websocket_manager.send_personal_message(pong_message, websocket)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        websocket_manager.disconnect(websocket)

@router.get("/stats")
async def websocket_stats():
    """Get WebSocket connection statistics (for debugging)"""
    return {
        "total_connections": websocket_manager.get_connection_count()
    }
