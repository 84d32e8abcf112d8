# ui/session_summary.py
from __future__ import annotations
from PySide6.QtWidgets import QDialog, QVBoxLayout, QLabel, QPushButton
import pyqtgraph as pg
from typing import Sequence

from app.calculation import StatsSnapshot


def wpm_series(snapshots: Sequence[StatsSnapshot]) -> tuple[list[float], list[float]]:
    """(seconds, net wpm) pairs from the periodic snapshots, in emission order."""
    times = [s.elapsed_ms / 1000.0 for s in snapshots]
    wpms = [s.net_wpm for s in snapshots]
    return times, wpms


class SessionSummary(QDialog):
    """Final stats plus the per-second WPM curve."""

    def __init__(self, final: StatsSnapshot, history: Sequence[StatsSnapshot], parent=None):
        super().__init__(parent)
        self.setWindowTitle("Session Summary")
        self.resize(720, 420)

        root = QVBoxLayout(self)
        root.addWidget(QLabel(f"WPM: {final.wpm:.1f}"))
        root.addWidget(QLabel(f"Accuracy: {final.accuracy:.1f}%"))
        root.addWidget(QLabel(f"Time: {final.elapsed_ms / 1000.0:.1f}s"))
        root.addWidget(QLabel(f"Characters: {final.typed}"))

        plot = pg.PlotWidget()
        plot.setBackground(None)
        plot.setMenuEnabled(False)
        plot.setMouseEnabled(x=False, y=False)
        plot.hideButtons()
        plot.showGrid(x=False, y=True, alpha=0.08)
        plot.setLabel("left", "WPM")
        plot.setLabel("bottom", "Time (s)")

        times, wpms = wpm_series(list(history) + [final])
        plot.plot(times, wpms, pen=pg.mkPen(color=(200, 200, 255), width=2), symbol=None)
        root.addWidget(plot, stretch=1)

        btn = QPushButton("OK", self)
        btn.clicked.connect(self.accept)
        root.addWidget(btn)
