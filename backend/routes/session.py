import logging
import uuid
from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, ValidationError

import store
from behavior.engine import finalize
from errors import InvalidRange, SessionClosed, SessionExists, SessionNotFound
from models.event import parse_event
from models.report import Report

router = APIRouter(tags=["session"])
logger = logging.getLogger(__name__)


# ---------- Request / Response schemas ----------

class StartSessionRequest(BaseModel):
    session_id: Optional[str] = None
    start_time: Optional[int] = None    # ms; defaults to now


class StartSessionResponse(BaseModel):
    session_id: str


class LogEventRequest(BaseModel):
    session_id: str                     # or "current"
    event_id: Optional[str] = None
    timestamp: int      # ms
    type: str           # "tap" | "scroll" | "swipe" | "typing" | "notification" | "call" | "app_switch" | "clipboard"
    metrics: dict[str, Any] = {}


class EndSessionRequest(BaseModel):
    session_id: str                     # or "current"
    end_time: Optional[int] = None      # ms; defaults to now


# ---------- Endpoints ----------

@router.post("/session/start", response_model=StartSessionResponse)
async def start_session(body: Optional[StartSessionRequest] = Body(default=None)):
    """
    Creates a new session and makes it the current one for ingestion.
    A previous current session that is still active is ended at this start time.
    Returns the session_id producers attach to every subsequent event.
    """
    session_id = (body.session_id if body else None) or f"cadence_{uuid.uuid4().hex[:8]}"
    start_time = body.start_time if body else None

    try:
        store.sessions.start(session_id, start_time)
    except SessionExists:
        raise HTTPException(status_code=409, detail="Session already exists")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return StartSessionResponse(session_id=session_id)


@router.post("/session/event", status_code=200)
async def log_event(body: LogEventRequest):
    """
    Appends one typed event to an active session.
    session_id "current" routes the event to the current session.
    Events are consumed later by the metrics engine at session end or on a range query.
    """
    payload = body.model_dump(exclude_none=True)
    try:
        event = parse_event(payload)
    except ValidationError as e:
        logger.debug("Rejected %s event for %s: %s", body.type, body.session_id, e)
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    try:
        store.sessions.append(body.session_id, event)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except SessionClosed:
        raise HTTPException(status_code=409, detail="Session already ended")

    return {}


@router.post("/session/end", response_model=Report)
async def end_session(body: EndSessionRequest):
    """
    Closes the session and returns its full behavioral report.
    The report is cached on the session; repeated calls return the same result.
    """
    try:
        session = store.sessions.get(body.session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")

    if session.report is not None:
        # Already finalized, return cached result
        return session.report

    try:
        snapshot = store.sessions.end(session.session_id, body.end_time)
    except InvalidRange as e:
        logger.warning("Rejected end time for %s: %s", session.session_id, e)
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "range": [e.range_start, e.range_end],
            },
        )

    report = finalize(snapshot)
    session.report = report
    return report
