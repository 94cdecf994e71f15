import logging

from fastapi import APIRouter, HTTPException, Query

import store
from behavior.engine import recompute
from errors import InvalidRange, SessionNotFound
from models.report import Report

router = APIRouter(tags=["metrics"])
logger = logging.getLogger(__name__)


@router.get("/session/{session_id}/metrics", response_model=Report)
async def range_metrics(
    session_id: str,
    start: int = Query(..., description="Range start, ms"),
    end: int = Query(..., description="Range end, ms (inclusive)"),
):
    """
    Recomputes the report over [start, end] of a session, active or ended.
    An active session is bounded at the current time for the range check.
    session_id "current" addresses the current session.
    """
    try:
        snapshot = store.sessions.snapshot(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")

    try:
        return recompute(snapshot, start, end)
    except InvalidRange as e:
        logger.warning("Rejected range for %s: %s", session_id, e)
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "range": [e.range_start, e.range_end],
                "session_bounds": [e.session_start, e.session_end],
            },
        )
