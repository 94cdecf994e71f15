"""
Unit tests for the per-analyzer functions: gaps/idle, burstiness,
interruptions, scroll jitter and the composite indices.
"""

import math

import pytest

from behavior import composite, gaps
from behavior.interruptions import clustering_index, ignore_rate, summarize_interruptions
from behavior.scroll import direction_reversals, scroll_jitter_rate
from models.event import parse_event


def _ev(kind: str, ts: int, **metrics):
    return parse_event({"session_id": "s1", "timestamp": ts, "type": kind, "metrics": metrics})


def _taps(*timestamps):
    return [_ev("tap", ts) for ts in timestamps]


def _expected_burstiness(values):
    mu = sum(values) / len(values)
    sigma = math.sqrt(sum((v - mu) ** 2 for v in values) / len(values))
    return ((sigma - mu) / (sigma + mu) + 1) / 2


# ── Idle / fragmentation ──────────────────────────────────────────────────


class TestIdle:

    def test_idle_time_ratio_counts_only_excess_over_threshold(self):
        events = _taps(0, 1000, 41000)      # one 40 s gap → 10 s idle
        assert gaps.idle_time_ratio(events, 100_000) == pytest.approx(0.1)

    def test_fragmented_idle_ratio_is_segments_per_second(self):
        events = _taps(0, 40_000, 80_000, 81_000)
        assert gaps.fragmented_idle_ratio(events, 100_000) == pytest.approx(2 / 100)

    def test_fragmented_idle_ratio_not_upper_clamped(self):
        events = _taps(0, 31_000, 62_000)
        # 2 idle segments in a 1 s "duration" → density 2.0
        assert gaps.fragmented_idle_ratio(events, 1000) == pytest.approx(2.0)

    def test_idle_time_ratio_clamped_to_one(self):
        events = _taps(0, 500_000)
        assert gaps.idle_time_ratio(events, 100_000) == 1.0

    def test_single_event_is_zero(self):
        events = _taps(50_000)
        assert gaps.idle_time_ratio(events, 100_000) == 0.0
        assert gaps.fragmented_idle_ratio(events, 100_000) == 0.0

    def test_zero_duration_is_zero(self):
        events = _taps(0, 60_000)
        assert gaps.idle_time_ratio(events, 0) == 0.0
        assert gaps.fragmented_idle_ratio(events, 0) == 0.0

    def test_gap_at_threshold_is_not_idle(self):
        events = _taps(0, 30_000)
        assert gaps.idle_time_ratio(events, 100_000) == 0.0
        assert gaps.fragmented_idle_ratio(events, 100_000) == 0.0

    def test_unsorted_input_is_sorted_first(self):
        ordered = _taps(0, 1000, 41000)
        shuffled = [ordered[2], ordered[0], ordered[1]]
        assert gaps.idle_time_ratio(shuffled, 100_000) == gaps.idle_time_ratio(ordered, 100_000)


class TestActiveTime:

    def test_subtracts_idle_and_switch_cost(self):
        assert gaps.active_time_ratio(100_000, 0.1, 5000) == pytest.approx(0.85)

    def test_clamped_at_zero(self):
        assert gaps.active_time_ratio(10_000, 0.5, 10_000) == 0.0

    def test_zero_duration(self):
        assert gaps.active_time_ratio(0, 0.0, 0) == 0.0

    def test_no_idle_no_switches_is_fully_active(self):
        assert gaps.active_time_ratio(60_000, 0.0, 0) == 1.0


# ── Burstiness ────────────────────────────────────────────────────────────


class TestBurstiness:

    def test_fewer_than_two_events(self):
        assert gaps.burstiness([]) == 0.0
        assert gaps.burstiness(_taps(10)) == 0.0

    def test_regular_spacing_has_zero_stddev(self):
        assert gaps.burstiness(_taps(0, 1000, 2000, 3000)) == 0.0

    def test_identical_timestamps_have_zero_mean(self):
        assert gaps.burstiness(_taps(5000, 5000, 5000)) == 0.0

    def test_irregular_spacing(self):
        events = _taps(0, 1000, 2000, 3000, 12_000)
        expected = _expected_burstiness([1000, 1000, 1000, 9000])
        assert gaps.burstiness(events) == pytest.approx(expected)
        assert 0.5 < gaps.burstiness(events) < 1.0

    def test_typing_gap_capped_at_largest_plain_gap(self):
        events = _taps(0, 1000, 3000) + [_ev("typing", 100_000, duration_seconds=12)]
        # 97 s gap into the typing event is capped at the 2 s plain-gap maximum
        expected = _expected_burstiness([1000, 2000, 2000])
        assert gaps.burstiness(events) == pytest.approx(expected)

        uncapped = _expected_burstiness([1000, 2000, 97_000])
        assert gaps.burstiness(events) < uncapped

    def test_all_typing_gaps_left_unmodified(self):
        events = [_ev("typing", ts) for ts in (0, 1000, 5000)]
        # gaps [1000, 4000]: mean 2500, σ 1500 → raw -0.25 → 0.375
        assert gaps.burstiness(events) == pytest.approx(0.375)

    def test_bounded(self):
        events = _taps(0, 1, 2, 3, 4, 5, 1_000_000)
        assert 0.0 <= gaps.burstiness(events) <= 1.0


# ── Interruptions ─────────────────────────────────────────────────────────


class TestInterruptions:

    def test_tight_cluster_ignore_rate_and_index(self):
        events = [
            _ev("notification", 0, action="ignored"),
            _ev("notification", 5000, action="ignored"),
            _ev("notification", 10_000, action="opened"),
        ]
        summary = summarize_interruptions(events)
        assert summary.notification_count == 3
        assert summary.notification_ignored == 2
        assert summary.notification_ignore_rate == pytest.approx(0.667, abs=1e-3)
        assert summary.notification_clustering_index == 1.0

    def test_erratic_spacing_scores_lower(self):
        regular = [_ev("notification", ts, action="received") for ts in (0, 5000, 10_000)]
        offsets = [0, 1000, 2000, 3000, 4000, 5000, 6000, 7000, 8000, 200_000]
        erratic = [_ev("notification", ts, action="received") for ts in offsets]
        assert clustering_index(erratic) < clustering_index(regular)
        assert 0.0 <= clustering_index(erratic) <= 1.0

    def test_clustering_needs_two_notifications(self):
        assert clustering_index([_ev("notification", 0, action="received")]) == 0.0

    def test_clustering_zero_mean_interval(self):
        events = [_ev("notification", 7000, action="received") for _ in range(3)]
        assert clustering_index(events) == 0.0

    def test_ignore_rate_empty(self):
        assert ignore_rate([]) == 0.0

    def test_calls_summarized_separately(self):
        events = [
            _ev("call", 0, action="ignored"),
            _ev("call", 60_000, action="answered"),
            _ev("notification", 1000, action="opened"),
            _ev("tap", 2000),
        ]
        summary = summarize_interruptions(events)
        assert summary.call_count == 2
        assert summary.call_ignored == 1
        assert summary.call_ignore_rate == 0.5
        assert summary.notification_count == 1
        assert summary.notification_clustering_index == 0.0


# ── Scroll jitter ─────────────────────────────────────────────────────────


class TestScrollJitter:

    def test_alternating_directions(self):
        scrolls = [
            _ev("scroll", i * 500, velocity=300.0, direction="up" if i % 2 == 0 else "down")
            for i in range(10)
        ]
        assert direction_reversals(scrolls) == 9
        assert scroll_jitter_rate(scrolls) == 1.0

    def test_same_direction(self):
        scrolls = [_ev("scroll", i * 500, direction="down") for i in range(10)]
        assert direction_reversals(scrolls) == 0
        assert scroll_jitter_rate(scrolls) == 0.0

    def test_single_scroll(self):
        assert scroll_jitter_rate([_ev("scroll", 0, direction="left")]) == 0.0

    def test_other_events_ignored(self):
        events = [
            _ev("scroll", 0, direction="up"),
            _ev("tap", 100),
            _ev("scroll", 200, direction="down"),
            _ev("swipe", 300),
            _ev("scroll", 400, direction="down"),
        ]
        assert scroll_jitter_rate(events) == pytest.approx(0.5)


# ── Composite ─────────────────────────────────────────────────────────────


class TestComposite:

    def test_notification_load(self):
        assert composite.notification_load(0, 100.0) == 0.0
        assert composite.notification_load(5, 0.0) == 0.0
        # one notification per minute → rate/λ == 1
        assert composite.notification_load(1, 60.0) == pytest.approx(1 - math.exp(-1))

    def test_task_switch_rate(self):
        assert composite.task_switch_rate(0, 100.0) == 0.0
        assert composite.task_switch_rate(1, 30.0) == pytest.approx(1 - math.exp(-1))
        assert composite.task_switch_rate(3, 0.0) == 0.0

    def test_task_switch_cost(self):
        assert composite.task_switch_cost(20_000, 4) == 5000
        assert composite.task_switch_cost(200_000, 4) == 10_000
        assert composite.task_switch_cost(10_001, 2) == 5000
        assert composite.task_switch_cost(50_000, 0) == 0

    def test_distraction_weights(self):
        assert composite.distraction_score(1.0, 0.0, 0.0, 0.0) == pytest.approx(0.35)
        assert composite.distraction_score(0.0, 1.0, 0.0, 0.0) == pytest.approx(0.30)
        assert composite.distraction_score(0.0, 0.0, 1.0, 0.0) == pytest.approx(0.20)
        assert composite.distraction_score(0.0, 0.0, 0.0, 1.0) == pytest.approx(0.15)

    def test_distraction_clamped(self):
        # fragmented_idle_ratio is a density and may exceed 1
        assert composite.distraction_score(1.0, 1.0, 8.0, 1.0) == 1.0

    def test_focus_hint_complements_score(self):
        score = composite.distraction_score(0.4, 0.2, 0.1, 0.3)
        assert score + composite.focus_hint(score) == pytest.approx(1.0)

    def test_interaction_intensity(self):
        value = composite.interaction_intensity(
            total_event_count=20,
            interruption_count=5,
            typing_event_count=2,
            total_typing_duration_seconds=30.0,
            duration_seconds=100.0,
        )
        assert value == pytest.approx((13 + 3) / 100)

    def test_interaction_intensity_edges(self):
        assert composite.interaction_intensity(10, 0, 0, 0.0, 0.0) == 0.0
        assert composite.interaction_intensity(1, 5, 0, 0.0, 10.0) == 0.0
