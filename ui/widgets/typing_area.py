# ui/widgets/typing_area.py
from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtGui import QFont, QTextCursor
from PySide6.QtCore import Qt

from services.session import TypingSession
from services.smart_editor import CLOSE_BRACE, ENTER, TAB


class TypingArea(QPlainTextEdit):
    """
    Plain-text input bound to a TypingSession.
    Ordinary edits are forwarded as whole-buffer replacements; Tab, Enter and
    ``}`` are handed to the session's smart editor and the result written back.
    """

    def __init__(self, parent=None, font_size: int = 14):
        super().__init__(parent)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setTabChangesFocus(False)
        self.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.setPlaceholderText("Start typing here...")

        font = QFont("Courier New", font_size)
        font.setStyleHint(QFont.Monospace)
        font.setFixedPitch(True)
        self.setFont(font)

        self._session: TypingSession | None = None
        self._syncing = False
        self.textChanged.connect(self._on_text_changed)

    @property
    def session(self) -> TypingSession | None:
        return self._session

    def bind(self, session: TypingSession):
        self._session = session
        self.setTabStopDistance(session.config.tab_width * self.fontMetrics().horizontalAdvance(" "))
        self._write(session.buffer, session.cursor)
        self.setReadOnly(False)
        session.completed.connect(self._on_completed)

    # ---------- keys ----------
    @staticmethod
    def smart_key(ev) -> str | None:
        if ev.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return None
        key = ev.key()
        if key == Qt.Key_Tab:
            return TAB
        if key in (Qt.Key_Return, Qt.Key_Enter):
            return ENTER
        if ev.text() == CLOSE_BRACE:
            return CLOSE_BRACE
        return None

    def keyPressEvent(self, ev):
        key = self.smart_key(ev)
        if key is None or self._session is None or self.isReadOnly():
            return super().keyPressEvent(ev)

        c = self.textCursor()
        result = self._session.press_key(key, c.selectionStart(), c.selectionEnd())
        self._write(result.buffer, result.cursor)
        ev.accept()

    # ---------- sync ----------
    def _write(self, text: str, cursor: int):
        self._syncing = True
        try:
            if self.toPlainText() != text:
                self.setPlainText(text)
            c = self.textCursor()
            c.setPosition(max(0, min(cursor, len(text))))
            self.setTextCursor(c)
        finally:
            self._syncing = False

    def _on_text_changed(self):
        if self._syncing or self._session is None:
            return
        self._session.replace(self.toPlainText(), self.textCursor().position())

    def _on_completed(self, _snapshot):
        self.setReadOnly(True)
        self.moveCursor(QTextCursor.End)
