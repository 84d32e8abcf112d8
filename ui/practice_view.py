from __future__ import annotations
import logging

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import QWidget, QLabel, QVBoxLayout, QHBoxLayout, QProgressBar

from app.calculation import StatsSnapshot
from app.config import SessionConfig
from services.session import TypingSession
from ui.session_summary import SessionSummary
from ui.widgets.code_block import CodeBlock
from ui.widgets.typing_area import TypingArea

log = logging.getLogger(__name__)


class PracticeView(QWidget):
    """Snippet with reveal overlay, progress bar, live stats and the input editor."""

    finished = Signal(object)

    def __init__(self, config: SessionConfig | None = None, parent=None, show_summary: bool = True):
        super().__init__(parent)
        self.config = config or SessionConfig()
        self._show_summary = show_summary

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 30, 0, 30)
        root.setSpacing(20)

        stats = QHBoxLayout()
        stats.setSpacing(40)

        self.lblTimer = QLabel("0.0 s", self)
        self.lblTimer.setObjectName("lblTimer")
        self.lblWPM = QLabel("0.0 WPM", self)
        self.lblWPM.setObjectName("lblWPM")
        self.lblAcc = QLabel("100.0 %", self)
        self.lblAcc.setObjectName("lblAcc")
        for lab in (self.lblTimer, self.lblWPM, self.lblAcc):
            lab.setAlignment(Qt.AlignCenter)
            stats.addWidget(lab)
        root.addLayout(stats)

        self.progress = QProgressBar(self)
        self.progress.setRange(0, 1000)
        self.progress.setTextVisible(False)
        self.progress.setFixedHeight(8)
        root.addWidget(self.progress)

        self.codeBlock = CodeBlock(self, font_size=18)
        self.codeBlock.setMinimumHeight(240)
        root.addWidget(self.codeBlock, stretch=2)

        self.typingArea = TypingArea(self, font_size=14)
        self.typingArea.setMinimumHeight(160)
        root.addWidget(self.typingArea, stretch=1)

        self.session: TypingSession | None = None
        self._history: list[StatsSnapshot] = []

    # ---------- session lifecycle ----------
    def start_session(self, text: str) -> TypingSession:
        """Tear down the current session (if any) and start a fresh one on ``text``."""
        self.end_session()
        session = TypingSession(text, self.config, parent=self)
        session.geometryChanged.connect(self.codeBlock.set_geometry)
        session.progressChanged.connect(self.on_progress)
        session.statsChanged.connect(self.on_stats)
        session.completed.connect(self.on_completed)
        self.session = session
        self._history = []

        self.codeBlock.set_code(session.rendered_target, session.geometry, session.layout_metrics)
        self.typingArea.bind(session)
        self._show_stats(session.engine.snapshot())
        self.progress.setValue(0)
        self.typingArea.setFocus()
        log.info("New session (%d chars)", len(text))
        return session

    def end_session(self):
        if self.session is None:
            return
        self.session.close()
        self.session.deleteLater()
        self.session = None

    # ---------- slots ----------
    @Slot(float)
    def on_progress(self, percent: float):
        self.progress.setValue(int(round(percent * 10)))

    @Slot(object)
    def on_stats(self, snap: StatsSnapshot):
        if not snap.finished:
            self._history.append(snap)
        self._show_stats(snap)

    @Slot(object)
    def on_completed(self, snap: StatsSnapshot):
        self.codeBlock.set_finished(True)
        self.finished.emit(snap)
        if self._show_summary:
            SessionSummary(snap, self._history, parent=self).exec()

    def _show_stats(self, snap: StatsSnapshot):
        secs = snap.elapsed_ms / 1000.0 if self.session and self.session.engine.state.started else 0.0
        self.lblTimer.setText(f"{secs:0.1f} s")
        self.lblWPM.setText(f"{snap.wpm:0.1f} WPM")
        self.lblAcc.setText(f"{snap.accuracy:0.1f} %")
