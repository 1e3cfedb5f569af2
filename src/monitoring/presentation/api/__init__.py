"""
API package.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routes import engine, monitoring, streaming
from ...application.engine import MonitoringEngine
from ...infrastructure.broadcast.realtime_broadcaster import RealtimeBroadcaster

# Initialize main app
app = FastAPI(title="Zone Monitor API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(engine.app.router, tags=["engine"])
app.include_router(monitoring.app.router, tags=["monitoring"])
app.include_router(streaming.app.router, tags=["streaming"])


def configure(monitoring_engine: MonitoringEngine, broadcaster: RealtimeBroadcaster):
    """Injects the shared engine and broadcaster into the routers."""
    engine.init_engine(monitoring_engine)
    streaming.init_broadcaster(broadcaster)
