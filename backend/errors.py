"""
Error kinds raised by the store and the report assembler.
Routes translate them into HTTPException responses.
"""

from typing import Optional


class MetricsError(Exception):
    """Base class for all engine and store errors."""


class InvalidRange(MetricsError):
    def __init__(
        self,
        range_start: int,
        range_end: int,
        session_start: Optional[int] = None,
        session_end: Optional[int] = None,
        tolerance_ms: int = 0,
    ):
        self.range_start = range_start
        self.range_end = range_end
        self.session_start = session_start
        self.session_end = session_end
        self.tolerance_ms = tolerance_ms

        if session_start is None or session_end is None:
            msg = f"Time range [{range_start}, {range_end}] is invalid: end precedes start"
        else:
            msg = (
                f"Time range [{range_start}, {range_end}] is out of session bounds "
                f"[{session_start}, {session_end}]. "
                f"Session duration: {session_end - session_start}ms. "
                f"Allowed tolerance: {tolerance_ms}ms"
            )
        super().__init__(msg)


class SessionNotFound(MetricsError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class SessionClosed(MetricsError):
    """Raised when an event is appended to a session that has already ended."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session already ended: {session_id}")


class SessionExists(MetricsError):
    """Raised when a session is started under an id the store already holds."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session already exists: {session_id}")
