"""HTTP trigger for the feed sync (FastAPI)."""

from .app import app, get_orchestrator

__all__ = ["app", "get_orchestrator"]
