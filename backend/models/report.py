from pydantic import BaseModel

from models.event import TypingMetrics


class DeepFocusBlock(BaseModel):
    start_at: int       # ms
    end_at: int         # ms
    duration_ms: int


class BehavioralMetrics(BaseModel):
    interaction_intensity: float
    task_switch_rate: float
    task_switch_cost: int               # ms
    idle_time_ratio: float
    active_time_ratio: float
    notification_load: float
    burstiness: float
    behavioral_distraction_score: float
    focus_hint: float
    fragmented_idle_ratio: float
    scroll_jitter_rate: float
    deep_focus_blocks: list[DeepFocusBlock] = []


class TypingSessionSummary(BaseModel):
    typing_session_count: int = 0
    average_keystrokes_per_session: float = 0.0
    average_typing_session_duration: float = 0.0    # seconds
    average_typing_speed: float = 0.0
    average_typing_gap: float = 0.0
    average_inter_tap_interval: float = 0.0
    typing_cadence_stability: float = 0.0
    burstiness_of_typing: float = 0.0
    total_typing_duration: float = 0.0              # seconds
    active_typing_ratio: float = 0.0
    typing_contribution_to_interaction_intensity: float = 0.0
    deep_typing_blocks: int = 0
    typing_fragmentation: float = 0.0
    correction_rate: float = 0.0
    clipboard_activity_rate: float = 0.0
    typing_metrics: list[TypingMetrics] = []


class NotificationSummary(BaseModel):
    notification_count: int = 0
    notification_ignored: int = 0
    notification_ignore_rate: float = 0.0
    notification_clustering_index: float = 0.0
    call_count: int = 0
    call_ignored: int = 0
    call_ignore_rate: float = 0.0


class ActivitySummary(BaseModel):
    total_events: int = 0
    app_switch_count: int = 0


class ClipboardSummary(BaseModel):
    clipboard_count: int = 0
    clipboard_copy_count: int = 0
    clipboard_paste_count: int = 0
    clipboard_cut_count: int = 0


class Report(BaseModel):
    session_id: str
    start_at: int
    end_at: int
    duration_ms: int
    micro_session: bool
    session_spacing: int                # ms since the previous session ended, 0 for the first
    activity_summary: ActivitySummary
    behavioral_metrics: BehavioralMetrics
    typing_session_summary: TypingSessionSummary
    notification_summary: NotificationSummary
    clipboard_summary: ClipboardSummary
