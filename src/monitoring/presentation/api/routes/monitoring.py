"""
Read-only views over history, alerts and zones.
"""
from fastapi import FastAPI, Depends, HTTPException
from .engine import get_engine
from ....application.engine import MonitoringEngine
from .....common.exceptions import ConfigurationError

app = FastAPI()

@app.get("/history")
async def get_history(engine: MonitoringEngine = Depends(get_engine)):
    """Accepted results, oldest first."""
    return [result.to_dict() for result in engine.history_snapshot()]

@app.get("/history/latest")
async def get_latest(engine: MonitoringEngine = Depends(get_engine)):
    latest = engine.latest()
    if latest is None:
        raise HTTPException(404, "No analysis available yet")
    return latest.to_dict()

@app.get("/alerts")
async def get_alerts(engine: MonitoringEngine = Depends(get_engine)):
    """Alerts, newest first."""
    return [alert.to_dict() for alert in engine.alerts()]

@app.get("/zones")
async def list_zones(engine: MonitoringEngine = Depends(get_engine)):
    return {"zones": engine.zones.zones()}

@app.get("/zones/{zone_id}")
async def get_zone(zone_id: str, engine: MonitoringEngine = Depends(get_engine)):
    try:
        return engine.zone_data(zone_id).to_dict()
    except ConfigurationError as e:
        raise HTTPException(404, str(e))

@app.post("/zones/{zone_id}/select")
async def select_zone(zone_id: str, engine: MonitoringEngine = Depends(get_engine)):
    """Attributes subsequent samples and alerts to this zone."""
    try:
        engine.select_zone(zone_id)
    except ConfigurationError as e:
        raise HTTPException(404, str(e))
    return {"status": "selected", "zone_id": zone_id}
