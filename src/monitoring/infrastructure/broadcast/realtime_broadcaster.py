import asyncio
from typing import Dict, Set
from datetime import datetime

from ....common.logging import setup_logger


class RealtimeBroadcaster:
    """
    Pub/sub system to transmit engine snapshots to connected clients.
    Channels are keyed by zone id.
    """

    def __init__(self):
        # Subscribers per zone
        self._subscribers: Dict[str, Set[asyncio.Queue]] = {}
        self._lock = asyncio.Lock()
        self.logger = setup_logger(__name__)

        # Cache latest state per zone (for new subscribers)
        self._latest_state: Dict[str, dict] = {}

    async def subscribe(self, zone_id: str, queue_size: int = 50) -> asyncio.Queue:
        """
        Subscribes a client to updates for a specific zone.
        Returns an async queue that will receive the data.
        """
        queue = asyncio.Queue(maxsize=queue_size)

        async with self._lock:
            if zone_id not in self._subscribers:
                self._subscribers[zone_id] = set()
            self._subscribers[zone_id].add(queue)

        # Send latest known state immediately
        if zone_id in self._latest_state:
            queue.put_nowait(self._latest_state[zone_id])

        return queue

    async def unsubscribe(self, zone_id: str, queue: asyncio.Queue):
        """Removes a subscriber."""
        async with self._lock:
            if zone_id in self._subscribers:
                self._subscribers[zone_id].discard(queue)
                if not self._subscribers[zone_id]:
                    del self._subscribers[zone_id]

    async def broadcast(self, zone_id: str, data: dict):
        """
        Transmits a snapshot to all subscribers of a zone.
        Non-blocking: if a client is slow, it is skipped.
        """
        self._latest_state[zone_id] = data

        async with self._lock:
            subscribers = self._subscribers.get(zone_id, set()).copy()

        for queue in subscribers:
            try:
                queue.put_nowait(data)
            except asyncio.QueueFull:
                self.logger.warning(f"Skipping slow client for {zone_id}")

    def latest(self, zone_id: str):
        return self._latest_state.get(zone_id)

    def serialize_snapshot(self, engine) -> dict:
        """
        Converts the engine's read-only views to a JSON-serializable dict.
        """
        status = engine.status()
        return {
            "zone_id": status["cycle_zone"] or status["current_zone"],
            "timestamp": datetime.now().isoformat(),
            "state": status["state"],
            "latest": status["latest"],
            "last_failure": status["last_failure"],
            "history": [r.to_dict() for r in engine.history_snapshot()],
            "alerts": [a.to_dict() for a in engine.alerts()],
            "critical_alerts": status["critical_alerts"]
        }

    async def publish(self, engine):
        """Engine listener: broadcasts the snapshot on the channel of the zone the cycle ran for."""
        data = self.serialize_snapshot(engine)
        await self.broadcast(data["zone_id"], data)
