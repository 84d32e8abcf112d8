# services/session.py
from __future__ import annotations
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from app.config import SessionConfig
from app.state import KeystrokeCounters
from services.diffing import DiffResult, diff
from services.geometry import Geometry, LayoutMetrics, compute_geometry
from services.rendering import expand, locate
from services.smart_editor import EditResult, apply_key
from services.typing_engine import TypingEngine


class TypingSession(QObject):
    """
    One practice run over a fixed target text.

    Every edit, whether a whole new buffer value or a key routed through the
    smart editor, goes through the same path: render, diff, locate, geometry,
    then the metrics engine. Start a new snippet by creating a new session.
    """

    geometryChanged = Signal(object)
    progressChanged = Signal(float)
    statsChanged = Signal(object)
    completed = Signal(object)

    def __init__(self, target_text: str = "", config: Optional[SessionConfig] = None,
                 clock: Optional[Callable[[], float]] = None, parent=None):
        super().__init__(parent)
        self.config = config or SessionConfig()
        self._target = target_text or ""
        self._rendered_target = expand(self._target, self.config.tab_width)
        self._metrics = LayoutMetrics(
            line_height=self.config.line_height,
            padding_x=self.config.padding_x,
            padding_y=self.config.padding_y,
        )
        self._buffer = ""
        self._cursor = 0
        self._rendered_buffer = ""
        self._diff = DiffResult(None, 0)
        self._geometry = self._compute_geometry()
        self._closed = False

        self.engine = TypingEngine(self._target, self.config.tab_width, clock=clock, parent=self)
        self.engine.progressChanged.connect(self.progressChanged)
        self.engine.statsChanged.connect(self.statsChanged)
        self.engine.completed.connect(self.completed)

    # ---------- read-only state ----------
    @property
    def target(self) -> str:
        return self._target

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def rendered_target(self) -> str:
        return self._rendered_target

    @property
    def rendered_buffer(self) -> str:
        return self._rendered_buffer

    @property
    def diff(self) -> DiffResult:
        return self._diff

    @property
    def geometry(self) -> Geometry:
        return self._geometry

    @property
    def layout_metrics(self) -> LayoutMetrics:
        return self._metrics

    @property
    def finished(self) -> bool:
        return self.engine.finished

    @property
    def counters(self) -> KeystrokeCounters:
        return self.engine.counters

    # ---------- edits ----------
    def replace(self, new_value: str, cursor: Optional[int] = None) -> Geometry:
        """Take ``new_value`` as the whole buffer, as a plain text field would."""
        if self.finished or self._closed:
            return self._geometry
        self._buffer = new_value or ""
        self._cursor = len(self._buffer) if cursor is None else max(0, min(cursor, len(self._buffer)))
        self._process()
        return self._geometry

    def press_key(self, key: str, start: Optional[int] = None, end: Optional[int] = None) -> EditResult:
        """Apply a key through the smart editor; ``start``/``end`` default to the current cursor."""
        if self.finished or self._closed:
            return EditResult(self._buffer, self._cursor)
        if start is None:
            start = self._cursor
        result = apply_key(self._buffer, key, start, end, self.config.tab_width)
        self.replace(result.buffer, result.cursor)
        return result

    def _process(self):
        self._rendered_buffer = expand(self._buffer, self.config.tab_width)
        self._diff = diff(self._rendered_buffer, self._rendered_target)
        self._geometry = self._compute_geometry()
        self.geometryChanged.emit(self._geometry)
        self.engine.record_edit(self._buffer, self._rendered_buffer, self._diff.correct_prefix_length)

    def _compute_geometry(self) -> Geometry:
        hole = locate(self._rendered_target, self._diff.correct_prefix_length)
        caret = locate(self._rendered_buffer, len(self._rendered_buffer))
        return compute_geometry(hole, caret, self._metrics)

    # ---------- teardown ----------
    def close(self):
        self._closed = True
        self.engine.stop()
