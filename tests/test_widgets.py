"""Tests for the input editor and practice view wiring (offscreen)."""

from __future__ import annotations

import pytest
from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent

from services.session import TypingSession
from ui.practice_view import PracticeView
from ui.widgets.typing_area import TypingArea


def key(code, text=""):
    return QKeyEvent(QEvent.KeyPress, code, Qt.NoModifier, text)


@pytest.fixture
def area(clock):
    w = TypingArea()
    session = TypingSession("if (a) {\n    b;\n}", clock=clock)
    w.bind(session)
    yield w
    session.close()
    w.deleteLater()


def test_plain_typing_forwards_buffer(area):
    area.insertPlainText("if")
    assert area.session.buffer == "if"
    assert area.session.diff.correct_prefix_length == 2


def test_tab_goes_through_smart_editor(area):
    area.keyPressEvent(key(Qt.Key_Tab, "\t"))
    assert area.session.buffer == "\t"
    assert area.toPlainText() == "\t"
    assert area.textCursor().position() == 1


def test_enter_and_brace(area):
    area.insertPlainText("if (a) {")
    area.keyPressEvent(key(Qt.Key_Return, "\r"))
    assert area.toPlainText() == "if (a) {\n    "
    area.insertPlainText("b;")
    area.keyPressEvent(key(Qt.Key_Return, "\r"))
    area.keyPressEvent(key(Qt.Key_BraceRight, "}"))
    assert area.toPlainText() == "if (a) {\n    b;\n}"
    assert area.session.finished
    assert area.isReadOnly()


def test_smart_key_ignores_modified_keys():
    ev = QKeyEvent(QEvent.KeyPress, Qt.Key_Tab, Qt.ControlModifier, "\t")
    assert TypingArea.smart_key(ev) is None


def test_practice_view_replaces_session(qapp):
    view = PracticeView(show_summary=False)
    first = view.start_session("ab")
    view.typingArea.insertPlainText("a")
    assert view.progress.value() == 500

    second = view.start_session("cd")
    assert second is not first
    assert view.session is second
    assert view.progress.value() == 0
    assert view.typingArea.toPlainText() == ""

    finished = []
    view.finished.connect(finished.append)
    view.typingArea.insertPlainText("cd")
    assert len(finished) == 1
    assert finished[0].typed == 2
    view.end_session()
    view.deleteLater()
