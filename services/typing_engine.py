# services/typing_engine.py
from __future__ import annotations
import logging
import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from app.calculation import StatsSnapshot, final_snapshot, periodic_snapshot, progress_percent
from app.state import KeystrokeCounters, SessionState
from core.chrono import Ticker
from services.rendering import expand

log = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TypingEngine(QObject):
    """
    Timing, keystroke counters and completion for one session.

    Feed it every edit through ``record_edit``; it emits ``progressChanged`` on
    each edit, ``statsChanged`` once a second while running and once more at
    completion, and ``completed`` exactly once.
    """

    progressChanged = Signal(float)
    statsChanged = Signal(object)
    completed = Signal(object)

    def __init__(self, target_text: str = "", tab_width: int = 4,
                 clock: Optional[Callable[[], float]] = None, parent=None):
        super().__init__(parent)
        self.target = target_text or ""
        self.rendered_target = expand(self.target, tab_width)
        self.state = SessionState()
        self._clock = clock or _monotonic_ms
        self._ticker: Optional[Ticker] = None
        self._final: Optional[StatsSnapshot] = None

    # ---------- properties ----------
    @property
    def counters(self) -> KeystrokeCounters:
        return self.state.counters

    @property
    def finished(self) -> bool:
        return self.state.finished

    @property
    def ticker(self) -> Optional[Ticker]:
        return self._ticker

    # ---------- edits ----------
    def record_edit(self, raw_buffer: str, rendered_buffer: str, correct_prefix_length: int):
        if self.state.finished:
            return

        self.progressChanged.emit(progress_percent(raw_buffer, self.target))

        if not self.state.started and raw_buffer:
            self.state.start(self._clock())
            self._start_ticker()
            log.info("Session started (%d chars to type)", len(self.rendered_target))

        previous = self.state.rendered_buffer
        # nothing to type against an empty target, so nothing is scored
        if self.rendered_target and len(rendered_buffer) > len(previous):
            for i in range(len(previous), len(rendered_buffer)):
                ok = i < len(self.rendered_target) and rendered_buffer[i] == self.rendered_target[i]
                self.state.counters.mark(ok)

        self.state.rendered_buffer = rendered_buffer
        self.state.correct_prefix_length = correct_prefix_length

        if rendered_buffer and rendered_buffer == self.rendered_target:
            self._complete()

    def _complete(self):
        self.state.finish(self._clock())
        self.stop()
        c = self.state.counters
        self._final = final_snapshot(
            typed=len(self.state.rendered_buffer),
            correct=c.correct,
            wrong=c.wrong,
            elapsed_ms=self.state.elapsed_ms(self.state.finished_at),
        )
        log.info("Session finished: %.1f WPM, %.1f%% accuracy", self._final.wpm, self._final.accuracy)
        self.statsChanged.emit(self._final)
        self.completed.emit(self._final)

    # ---------- ticker ----------
    def _start_ticker(self):
        if self._ticker is None:
            self._ticker = Ticker(1000, parent=self)
            self._ticker.ticked.connect(self.tick)
        self._ticker.start()

    def snapshot(self) -> StatsSnapshot:
        if self._final is not None:
            return self._final
        c = self.state.counters
        return periodic_snapshot(
            correct_prefix_length=self.state.correct_prefix_length,
            typed=len(self.state.rendered_buffer) if self.rendered_target else 0,
            correct=c.correct,
            wrong=c.wrong,
            elapsed_ms=self.state.elapsed_ms(self._clock()),
        )

    def tick(self):
        if not self.state.is_running:
            return
        snap = self.snapshot()
        log.debug("tick: %.0f ms, %.1f WPM", snap.elapsed_ms, snap.wpm)
        self.statsChanged.emit(snap)

    def stop(self):
        if self._ticker is not None:
            self._ticker.stop()
