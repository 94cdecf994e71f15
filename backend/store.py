"""
In-memory session store shared across all routes.

The store is the single writer for sessions: every mutation goes through it
under one lock, and the engine only ever sees the frozen snapshots it hands out.

Exactly one session is current for ingestion. Starting a new session closes
the previous current one if it is still active, and any method taking a
session id also accepts the alias "current".
"""

import logging
import threading
import time
from typing import Optional

from errors import InvalidRange, SessionClosed, SessionExists, SessionNotFound
from models.event import Event
from models.session import Session, SessionSnapshot

logger = logging.getLogger(__name__)

CURRENT = "current"


def now_ms() -> int:
    return int(time.time() * 1000)


class SessionStore:
    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()
        self.current_session_id: Optional[str] = None
        self.last_end_time: Optional[int] = None    # feeds session_spacing

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def _require(self, session_id: str) -> Session:
        if session_id == CURRENT:
            if self.current_session_id is None:
                raise SessionNotFound(CURRENT)
            session_id = self.current_session_id
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def _close(self, session: Session, end_time: int) -> None:
        if end_time < session.start_time:
            raise InvalidRange(session.start_time, end_time)
        session.end_time = end_time
        self.last_end_time = end_time
        if self.current_session_id == session.session_id:
            self.current_session_id = None
        logger.info(
            "Session %s ended: %d events over %dms",
            session.session_id, session.event_count, end_time - session.start_time,
        )

    def start(self, session_id: str, start_time: Optional[int] = None) -> Session:
        if session_id == CURRENT:
            raise ValueError(f"{CURRENT!r} is reserved and cannot be used as a session id")
        start_time = start_time if start_time is not None else now_ms()
        with self._lock:
            if session_id in self._sessions:
                raise SessionExists(session_id)

            previous = self._sessions.get(self.current_session_id) if self.current_session_id else None
            if previous is not None and previous.active:
                self._close(previous, max(start_time, previous.start_time))

            spacing = 0
            if self.last_end_time is not None:
                spacing = max(0, start_time - self.last_end_time)

            session = Session(session_id=session_id, start_time=start_time, session_spacing=spacing)
            self._sessions[session_id] = session
            self.current_session_id = session_id
        logger.info("Session %s started at %d", session_id, session.start_time)
        return session

    def get(self, session_id: str) -> Session:
        with self._lock:
            return self._require(session_id)

    def append(self, session_id: str, event: Event) -> Event:
        """
        Appends event to the session and returns it as stored. An event tagged
        with the "current" session id is rebound to the resolved session.
        """
        with self._lock:
            session = self._require(session_id)
            if event.session_id == CURRENT:
                event = event.model_copy(update={"session_id": session.session_id})
            elif event.session_id != session.session_id:
                raise ValueError(
                    f"Event {event.event_id} belongs to {event.session_id!r}, not {session.session_id!r}"
                )
            if not session.active:
                raise SessionClosed(session.session_id)
            session.events.append(event)
            session.event_count += 1
            if event.type == "app_switch":
                session.app_switch_count += 1
        return event

    def end(self, session_id: str, end_time: Optional[int] = None) -> SessionSnapshot:
        """
        Ends the session and returns its snapshot. Idempotent: an ended
        session keeps its first end_time. Raises InvalidRange if end_time
        precedes start_time.
        """
        with self._lock:
            session = self._require(session_id)
            if session.active:
                self._close(session, end_time if end_time is not None else now_ms())
            return self._snapshot(session, session.end_time)

    def snapshot(self, session_id: str, as_of: Optional[int] = None) -> SessionSnapshot:
        """Frozen copy; an active session is bounded at as_of (default: now)."""
        with self._lock:
            session = self._require(session_id)
            if session.active:
                end = as_of if as_of is not None else now_ms()
            else:
                end = session.end_time
            return self._snapshot(session, end)

    def discard(self, session_id: str) -> None:
        with self._lock:
            session = self._require(session_id)
            del self._sessions[session.session_id]
            if self.current_session_id == session.session_id:
                self.current_session_id = None

    @staticmethod
    def _snapshot(session: Session, end_time: int) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=session.session_id,
            start_time=session.start_time,
            end_time=end_time,
            session_spacing=session.session_spacing,
            events=tuple(session.events),
        )


sessions = SessionStore()
