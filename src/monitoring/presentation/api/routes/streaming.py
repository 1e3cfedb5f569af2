"""
Endpoints for realtime streaming.
"""
from fastapi import FastAPI, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse
from typing import Optional
import asyncio
import json
from ....infrastructure.broadcast.realtime_broadcaster import RealtimeBroadcaster

app = FastAPI()

# Singleton broadcaster
_broadcaster: Optional[RealtimeBroadcaster] = None

def init_broadcaster(broadcaster: RealtimeBroadcaster):
    global _broadcaster
    _broadcaster = broadcaster

def get_broadcaster() -> RealtimeBroadcaster:
    if _broadcaster is None:
        raise HTTPException(status_code=503, detail="Broadcaster not initialized")
    return _broadcaster

@app.get("/stream/{zone_id}")
async def stream_zone(zone_id: str, broadcaster: RealtimeBroadcaster = Depends(get_broadcaster)):
    """
    Server-Sent Events endpoint pushing an engine snapshot after every cycle.

    Frontend usage:
    ```javascript
    const eventSource = new EventSource('/stream/' + encodeURIComponent('Primary Node A1'));
    eventSource.addEventListener('snapshot', (event) => {
        const data = JSON.parse(event.data);
        console.log('Risk:', data.latest && data.latest.risk_score);
    });
    ```
    """
    queue = await broadcaster.subscribe(zone_id)

    async def event_generator():
        try:
            while True:
                data = await queue.get()
                yield {
                    "event": "snapshot",
                    "data": json.dumps(data)
                }
        except asyncio.CancelledError:
            await broadcaster.unsubscribe(zone_id, queue)
            raise

    return EventSourceResponse(event_generator())

@app.get("/snapshot/{zone_id}")
async def get_snapshot(zone_id: str, broadcaster: RealtimeBroadcaster = Depends(get_broadcaster)):
    """Gets latest broadcast snapshot of a zone (polling fallback)."""
    data = broadcaster.latest(zone_id)
    if data is None:
        raise HTTPException(404, "No snapshot for zone")
    return data
