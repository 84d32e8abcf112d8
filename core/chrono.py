# core/chrono.py
from PySide6.QtCore import QObject, QTimer, Signal


class Ticker(QObject):
    """Fires ``ticked`` every ``interval_ms`` while running."""

    ticked = Signal()
    started = Signal()
    stopped = Signal()

    def __init__(self, interval_ms: int = 1000, parent=None):
        super().__init__(parent)
        self._running = False

        self._tick = QTimer(self)
        self._tick.setInterval(interval_ms)
        self._tick.timeout.connect(self._on_tick)

    @property
    def running(self) -> bool:
        return self._running

    def interval(self) -> int:
        return self._tick.interval()

    def start(self):
        if self._running:
            return
        self._running = True
        self._tick.start()
        self.started.emit()

    def stop(self):
        # safe to call any number of times
        if self._running:
            self._running = False
            self._tick.stop()
            self.stopped.emit()

    def _on_tick(self):
        if self._running:
            self.ticked.emit()
