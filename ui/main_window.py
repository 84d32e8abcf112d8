# ui/main_window.py
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFileDialog, QMessageBox, QPushButton, QLabel
)
from PySide6.QtCore import Qt

from app.config import SessionConfig
from core.threads import SnippetLoadWorker, Workers
from ui.practice_view import PracticeView

DEFAULT_SNIPPET = """function helloWorld() {
  console.log("Hello, world!");
}"""


class MainWindow(QMainWindow):
    def __init__(self, config: SessionConfig | None = None):
        super().__init__()
        self.setWindowTitle("CodeType")
        self.resize(1100, 760)
        self.snippet = DEFAULT_SNIPPET

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 24, 16, 16)
        root_v.setSpacing(16)
        self._build_top_bar(root_v)

        self.practice = PracticeView(config, self)
        self.practice.finished.connect(self._on_finished)
        root_v.addWidget(self.practice, 1)

        self.lblPrompt = QLabel("Type the snippet above. Tab, Enter and } indent for you.", self)
        self.lblPrompt.setObjectName("lblPrompt")
        self.lblPrompt.setAlignment(Qt.AlignCenter)
        root_v.addWidget(self.lblPrompt)

        self.setCentralWidget(root)
        self.setStyleSheet(
            """
            QWidget { background: #0f1115; color: #e5e7eb; }
            QLabel#lblWPM { color: #eab308; font-size: 22px; }
            QLabel#lblTimer, QLabel#lblAcc { color: #9aa1a9; font-size: 22px; }
            QLabel#lblPrompt { color: #6b7280; }
            QProgressBar { background: #374151; border: none; border-radius: 4px; }
            QProgressBar::chunk { background: #22c55e; border-radius: 4px; }
            QPushButton#TopBtn {
                background: transparent;
                border: 1px solid rgba(255,255,255,0.10);
                border-radius: 9px;
                padding: 6px 12px;
            }
            """
        )
        self.practice.start_session(self.snippet)

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 8, 14, 8)
        h.setSpacing(10)

        btn_load = QPushButton("Load snippet…", bar)
        btn_load.clicked.connect(self._on_load)
        btn_restart = QPushButton("Restart", bar)
        btn_restart.clicked.connect(self._restart)
        for button in (btn_load, btn_restart):
            button.setObjectName("TopBtn")
            button.setFocusPolicy(Qt.NoFocus)
            h.addWidget(button)
        h.addStretch(1)
        parent_layout.addWidget(bar)

    # ---------------- Session ----------------
    def _restart(self):
        self.setWindowTitle("CodeType")
        self.practice.start_session(self.snippet)

    def _on_finished(self, snap):
        self.setWindowTitle(f"CodeType — {snap.wpm:.1f} WPM, {snap.accuracy:.1f}%")

    # ---------------- Snippet Loading ----------------
    def _on_load(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open snippet", "", "Source (*.*)")
        if not path:
            return
        worker = SnippetLoadWorker(path)
        worker.signals.loaded.connect(self._on_loaded_snippet)
        worker.signals.failed.connect(self._on_load_failed)
        Workers.pool.start(worker)

    def _on_loaded_snippet(self, text: str):
        self.snippet = text
        self._restart()

    def _on_load_failed(self, msg: str):
        QMessageBox.warning(self, "Load snippet", msg)
