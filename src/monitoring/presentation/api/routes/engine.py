"""
API for controlling the monitoring engine lifecycle.
"""
from fastapi import FastAPI, Depends, HTTPException
from typing import Optional
from ....application.engine import MonitoringEngine

app = FastAPI()

# Singleton
_engine: Optional[MonitoringEngine] = None

def init_engine(engine: MonitoringEngine):
    global _engine
    _engine = engine

def get_engine() -> MonitoringEngine:
    if _engine is None:
        raise HTTPException(status_code=503, detail="Monitoring engine not initialized")
    return _engine

@app.post("/engine/start")
async def start_engine(engine: MonitoringEngine = Depends(get_engine)):
    """Starts periodic sampling (no-op if already running)."""
    started = engine.start()
    return {"status": "started" if started else "already_running", "state": engine.state.value}

@app.post("/engine/stop")
async def stop_engine(engine: MonitoringEngine = Depends(get_engine)):
    """Stops periodic sampling (no-op if already idle)."""
    stopped = engine.stop()
    return {"status": "stopped" if stopped else "already_idle", "state": engine.state.value}

@app.get("/engine/status")
async def engine_status(engine: MonitoringEngine = Depends(get_engine)):
    """Engine state, store sizes and the most recent failure, if any."""
    return engine.status()

@app.get("/metrics")
async def get_metrics(engine: MonitoringEngine = Depends(get_engine)):
    metrics = engine.metrics_collector.get_metrics().to_dict()
    counts = getattr(engine.reporter, "counts", None)
    metrics["failures_by_kind"] = counts() if callable(counts) else {}
    return metrics
