"""
Deep-focus segmentation: continuous engagement of at least 120 s with no
notification, call or app switch and no gap longer than the idle threshold.

A block opens at the session start when the first event arrives within the
idle threshold, or at the end of the previous block when the current event is
close enough to it; otherwise at the event itself. A block still open at the
end of the scan runs on to the session end if its last event is recent.
"""

from typing import Optional, Sequence

from config import DEEP_FOCUS_MIN_MS, IDLE_THRESHOLD_MS, INTERRUPTION_TYPES
from models.event import Event
from models.report import DeepFocusBlock


def _block(start: int, end: int) -> Optional[DeepFocusBlock]:
    duration = end - start
    if duration < DEEP_FOCUS_MIN_MS:
        return None
    return DeepFocusBlock(start_at=start, end_at=end, duration_ms=duration)


def deep_focus_blocks(
    events: Sequence[Event],
    session_start: int,
    session_end: int,
) -> list[DeepFocusBlock]:
    blocks: list[DeepFocusBlock] = []
    if len(events) < 2:
        return blocks

    block_start: Optional[int] = None
    block_end: Optional[int] = None
    last_block_end: Optional[int] = None

    for i, event in enumerate(events):
        ts = event.timestamp
        prev_ts = events[i - 1].timestamp if i > 0 else session_start
        gap = ts - prev_ts
        is_interruption = event.type in INTERRUPTION_TYPES

        if is_interruption or gap > IDLE_THRESHOLD_MS:
            if block_start is not None and block_end is not None:
                closed = _block(block_start, block_end)
                if closed is not None:
                    blocks.append(closed)
            last_block_end = ts if is_interruption else block_end
            block_start = None
            block_end = None
            continue

        if block_start is None:
            if i == 0:
                block_start = session_start
            elif last_block_end is not None and ts - last_block_end <= IDLE_THRESHOLD_MS:
                block_start = last_block_end
            else:
                block_start = ts
        block_end = ts

    if block_start is not None and block_end is not None:
        final_end = session_end if session_end - block_end <= IDLE_THRESHOLD_MS else block_end
        closed = _block(block_start, final_end)
        if closed is not None:
            blocks.append(closed)

    return blocks
