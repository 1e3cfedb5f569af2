"""
Application layer: bounded stores, zone registry, scheduler and engine.
"""
from .stores import HistoryStore, AlertStore
from .zones import ZoneRegistry
from .scheduler import AnalysisScheduler
from .engine import MonitoringEngine
