# core/threads.py
import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

log = logging.getLogger(__name__)


def normalize_snippet(data: str) -> str:
    text = (data or "").replace("\r\n", "\n").replace("\r", "\n")
    return text.strip("\n")


class SnippetLoadWorkerSignals(QObject):
    loaded = Signal(str)
    failed = Signal(str)


class SnippetLoadWorker(QRunnable):
    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.signals = SnippetLoadWorkerSignals()

    def run(self):
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                data = f.read()
        except OSError as e:
            log.warning("Failed to load snippet %s: %s", self.path, e)
            self.signals.failed.emit(str(e))
            return
        self.signals.loaded.emit(normalize_snippet(data))


class Workers:
    pool = QThreadPool.globalInstance()
