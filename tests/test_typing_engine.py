"""Tests for services.typing_engine – counters, ticker and completion."""

from __future__ import annotations

import pytest

from services.rendering import expand
from services.diffing import diff
from services.typing_engine import TypingEngine


def feed(engine: TypingEngine, raw: str, tab_width: int = 4):
    rendered = expand(raw, tab_width)
    engine.record_edit(raw, rendered, diff(rendered, engine.rendered_target).correct_prefix_length)


@pytest.fixture
def engine(clock):
    return TypingEngine("ab\ncd", 4, clock=clock)


@pytest.fixture
def signals(engine):
    out = {"progress": [], "stats": [], "completed": []}
    engine.progressChanged.connect(out["progress"].append)
    engine.statsChanged.connect(out["stats"].append)
    engine.completed.connect(out["completed"].append)
    return out


# ---------------------------------------------------------------------------
# Start and progress
# ---------------------------------------------------------------------------

class TestStart:
    def test_not_started_before_first_edit(self, engine):
        assert engine.state.started_at is None
        assert engine.ticker is None

    def test_empty_edit_does_not_start(self, engine):
        feed(engine, "")
        assert engine.state.started_at is None

    def test_first_non_empty_edit_starts_once(self, engine, clock):
        feed(engine, "a")
        first = engine.state.started_at
        assert first == clock.now
        assert engine.ticker.running
        clock.advance(500)
        feed(engine, "ab")
        assert engine.state.started_at == first

    def test_progress_emitted_on_every_edit(self, engine, signals):
        feed(engine, "a")
        feed(engine, "ax")
        feed(engine, "")
        assert signals["progress"] == [20.0, 20.0, 0.0]


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------

class TestCounters:
    def test_growth_counts_each_new_index(self, engine):
        feed(engine, "a")
        feed(engine, "ax")
        assert (engine.counters.correct, engine.counters.wrong) == (1, 1)

    def test_deletion_does_not_change_counters(self, engine):
        feed(engine, "ax")
        feed(engine, "a")
        assert (engine.counters.correct, engine.counters.wrong) == (1, 1)

    def test_retyping_wrong_char_counts_again(self, engine):
        feed(engine, "ax")
        feed(engine, "a")
        feed(engine, "ax")
        assert engine.counters.wrong == 2

    def test_same_length_replacement_ignored(self, engine):
        feed(engine, "ax")
        feed(engine, "ab")
        assert (engine.counters.correct, engine.counters.wrong) == (1, 1)

    def test_past_end_counts_as_wrong(self, clock):
        e = TypingEngine("a", clock=clock)
        feed(e, "az")
        assert (e.counters.correct, e.counters.wrong) == (1, 1)

    def test_tab_counts_rendered_width(self, clock):
        e = TypingEngine("\tx", 4, clock=clock)
        feed(e, "\t")
        assert e.counters.correct == 4


# ---------------------------------------------------------------------------
# Ticker
# ---------------------------------------------------------------------------

class TestTick:
    def test_tick_before_start_is_silent(self, engine, signals):
        engine.tick()
        assert signals["stats"] == []

    def test_periodic_snapshot(self, engine, signals, clock):
        feed(engine, "a")
        feed(engine, "ax")
        clock.advance(30_000)
        engine.tick()
        snap = signals["stats"][-1]
        assert snap.finished is False
        assert snap.elapsed_ms == 30_000
        assert snap.net_wpm == pytest.approx((1 / 5) / 0.5)
        assert snap.wpm == snap.net_wpm
        assert snap.gross_wpm == pytest.approx((2 / 5) / 0.5)
        assert snap.accuracy == 50.0
        assert (snap.correct, snap.typed) == (1, 2)

    def test_elapsed_floored_at_one_ms(self, engine):
        feed(engine, "a")
        assert engine.snapshot().elapsed_ms == 1

    def test_accuracy_defaults_to_100(self, engine):
        assert engine.snapshot().accuracy == 100.0

    def test_ticker_interval_is_one_second(self, engine):
        feed(engine, "a")
        assert engine.ticker.interval() == 1000


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------

class TestCompletion:
    def test_exact_match_completes_once(self, engine, signals, clock):
        feed(engine, "a")
        clock.advance(60_000)
        feed(engine, "ab\ncd")
        feed(engine, "ab\ncdx")
        feed(engine, "ab\ncd")
        assert len(signals["completed"]) == 1
        final = signals["completed"][0]
        assert final.finished is True
        assert (final.typed, final.correct) == (5, 5)
        assert final.gross_wpm == final.net_wpm == final.wpm == pytest.approx(1.0)
        assert final.elapsed_ms == 60_000
        assert signals["stats"][-1] == final

    def test_ticker_stopped_on_completion(self, engine):
        feed(engine, "ab\ncd")
        assert engine.finished
        assert not engine.ticker.running
        engine.stop()
        engine.stop()
        assert not engine.ticker.running

    def test_edits_after_completion_ignored(self, engine, signals):
        feed(engine, "ab\ncd")
        progress = list(signals["progress"])
        feed(engine, "zzz")
        assert signals["progress"] == progress
        assert engine.counters.wrong == 0

    def test_final_accuracy_uses_cumulative_counters(self, engine, signals):
        feed(engine, "ax")
        feed(engine, "a")
        feed(engine, "ab\ncd")
        assert signals["completed"][0].accuracy == pytest.approx(100 * 5 / 6)

    def test_tick_after_completion_is_silent(self, engine, signals):
        feed(engine, "ab\ncd")
        count = len(signals["stats"])
        engine.tick()
        assert len(signals["stats"]) == count

    def test_snapshot_is_frozen_after_completion(self, engine, signals, clock):
        feed(engine, "ab\ncd")
        clock.advance(5000)
        assert engine.snapshot() is signals["completed"][0]
        assert not hasattr(engine, "final_stats")


class TestEmptyTarget:
    def test_never_completes(self, clock):
        e = TypingEngine("", clock=clock)
        completed = []
        e.completed.connect(completed.append)
        feed(e, "")
        feed(e, "abc")
        feed(e, "")
        assert completed == []
        assert not e.finished

    def test_defaults(self, clock):
        e = TypingEngine("", clock=clock)
        progress = []
        e.progressChanged.connect(progress.append)
        snap = e.snapshot()
        assert (snap.wpm, snap.accuracy) == (0.0, 100.0)
        feed(e, "abc")
        assert progress == [0.0]
        assert e.snapshot().wpm == 0.0

    def test_typing_is_not_scored(self, clock):
        e = TypingEngine("", clock=clock)
        feed(e, "abc")
        clock.advance(1000)
        snap = e.snapshot()
        assert (e.counters.correct, e.counters.wrong) == (0, 0)
        assert snap.accuracy == 100.0
        assert snap.gross_wpm == snap.wpm == 0.0
