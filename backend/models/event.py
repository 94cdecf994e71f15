import uuid
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def _event_id() -> str:
    return f"evt_{uuid.uuid4().hex[:12]}"


# ---------- Per-type payloads ----------

class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class TapMetrics(_Payload):
    long_press: bool = False


class ScrollMetrics(_Payload):
    velocity: float = 0.0
    direction: Literal["up", "down", "left", "right"]


class SwipeMetrics(_Payload):
    pass


class TypingMetrics(_Payload):
    """One completed typing session, pre-aggregated by the text-field collector.

    Unknown keys are rejected so a misnamed counter fails validation instead
    of reading as zero.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    tap_count: int = 0
    typing_speed: float = 0.0           # taps per second
    duration_seconds: float = 0.0
    mean_inter_tap_interval_ms: float = 0.0
    cadence_stability: float = 0.0
    gap_count: int = 0
    gap_ratio: float = 0.0
    burstiness: float = 0.0
    deep_typing: bool = False
    backspace_count: int = 0
    copy_count: int = 0
    paste_count: int = 0
    cut_count: int = 0
    start_at: Optional[int] = None
    end_at: Optional[int] = None
    cadence_variability: float = 0.0
    activity_ratio: float = 0.0
    interaction_intensity: float = 0.0


class InterruptionMetrics(_Payload):
    action: Literal["received", "opened", "answered", "ignored"]


class AppSwitchMetrics(_Payload):
    pass


class ClipboardMetrics(_Payload):
    action: Literal["copy", "paste", "cut"]


# ---------- Events ----------

class _BaseEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=_event_id)
    session_id: str
    timestamp: int      # milliseconds, monotonic session clock


class TapEvent(_BaseEvent):
    type: Literal["tap"] = "tap"
    metrics: TapMetrics = TapMetrics()


class ScrollEvent(_BaseEvent):
    type: Literal["scroll"] = "scroll"
    metrics: ScrollMetrics


class SwipeEvent(_BaseEvent):
    type: Literal["swipe"] = "swipe"
    metrics: SwipeMetrics = SwipeMetrics()


class TypingEvent(_BaseEvent):
    type: Literal["typing"] = "typing"
    metrics: TypingMetrics = TypingMetrics()


class NotificationEvent(_BaseEvent):
    type: Literal["notification"] = "notification"
    metrics: InterruptionMetrics


class CallEvent(_BaseEvent):
    type: Literal["call"] = "call"
    metrics: InterruptionMetrics


class AppSwitchEvent(_BaseEvent):
    type: Literal["app_switch"] = "app_switch"
    metrics: AppSwitchMetrics = AppSwitchMetrics()


class ClipboardEvent(_BaseEvent):
    type: Literal["clipboard"] = "clipboard"
    metrics: ClipboardMetrics


Event = Annotated[
    Union[
        TapEvent,
        ScrollEvent,
        SwipeEvent,
        TypingEvent,
        NotificationEvent,
        CallEvent,
        AppSwitchEvent,
        ClipboardEvent,
    ],
    Field(discriminator="type"),
]

_event_adapter = TypeAdapter(Event)


def parse_event(data: dict) -> Event:
    """Validate a raw producer dict into the matching event variant."""
    return _event_adapter.validate_python(data)
