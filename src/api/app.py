"""
FastAPI application exposing the sync trigger.

Routes:
    GET /api/rss-update   Run one sync, answer with the number of inserted entries
    GET /health           Database connectivity check
"""

import json
import logging

from fastapi import Depends, FastAPI, HTTPException, Request

from src.db import check_database_connection, get_session_factory
from src.ingestion.config import SyncConfig
from src.ingestion.errors import SyncError
from src.ingestion.sync_entries import SyncOrchestrator, build_orchestrator
from src.logger import setup_logging


logger = setup_logging(logger_name="api", log_file="logs/api.log")

app = FastAPI(title="RSS Mendable Sync", version="0.1.0")


def get_orchestrator() -> SyncOrchestrator:
    """Build the orchestrator for one request from the environment."""
    try:
        return build_orchestrator(SyncConfig.from_env())
    except SyncError as e:
        logger.error(f"Cannot build sync orchestrator: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/rss-update")
def rss_update(
    request: Request, orchestrator: SyncOrchestrator = Depends(get_orchestrator)
):
    """Ingest every feed entry not yet recorded and report how many were inserted."""
    logger.info("Sync triggered over HTTP")
    try:
        result = orchestrator.sync()
    except SyncError as e:
        logger.error(f"Sync failed: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(result.message)
    query = request.url.query
    return {
        "body": json.dumps({"message": result.message}),
        "path": request.url.path,
        "query": f"?{query}" if query else "",
        "cookies": [
            {"name": name, "value": value} for name, value in request.cookies.items()
        ],
    }


@app.get("/health")
def health():
    try:
        session_factory = get_session_factory(SyncConfig.from_env().database_url)
    except ValueError as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="database misconfigured")
    database_ok = check_database_connection(session_factory)
    if not database_ok:
        raise HTTPException(status_code=503, detail="database unreachable")
    return {"status": "ok", "database": database_ok}
