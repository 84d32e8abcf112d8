from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QFont, QColor, QPainter, QPolygonF, QFontMetricsF
from PySide6.QtCore import Qt, QPointF, QRectF, QSize, QTimer

from services.geometry import Geometry, LayoutMetrics


def _monospace_font(size: int) -> QFont:
    for family in ("JetBrains Mono", "Consolas", "Courier New", "Monaco"):
        font = QFont(family, size)
        if font.exactMatch():
            break
    font.setStyleHint(QFont.Monospace)
    font.setFixedPitch(True)
    return font


class CodeBlock(QWidget):
    """
    Paints the target snippet at full brightness, then dims everything past
    the reveal boundary and draws a caret bar. Geometry arrives in character
    cells and lines; this widget turns it into pixels with its own font.
    """

    def __init__(self, parent=None, font_size: int = 16):
        super().__init__(parent)
        self.setFocusPolicy(Qt.NoFocus)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self._font = _monospace_font(font_size)

        self._lines: list[str] = []
        self._geometry: Geometry | None = None
        self._metrics = LayoutMetrics()
        self._finished = False

        self._color_bg = QColor("#0f1115")
        self._color_text = QColor("#e5e7eb")
        self._color_dim = QColor(15, 17, 21, 190)
        self._color_caret = QColor("#eab308")

        self._blink_state = True
        self._blink_timer = QTimer(self)
        self._blink_timer.timeout.connect(self._blink_caret)
        self._blink_timer.start(500)

    # ---------- units ----------
    def cell_width(self) -> float:
        return QFontMetricsF(self._font).horizontalAdvance(" ")

    def em(self) -> float:
        return QFontMetricsF(self._font).height()

    def to_pixels(self, x: float, y: float) -> QPointF:
        return QPointF(x * self.cell_width(), y * self.em())

    # ---------- state ----------
    def set_code(self, rendered_target: str, geometry: Geometry, metrics: LayoutMetrics):
        self._lines = rendered_target.split("\n")
        self._metrics = metrics
        self._geometry = geometry
        self._finished = False
        self.updateGeometry()
        self.update()

    def set_geometry(self, geometry: Geometry):
        self._geometry = geometry
        self._blink_state = True
        self.update()

    def set_finished(self, finished: bool = True):
        self._finished = finished
        self.update()

    def _blink_caret(self):
        if not self._finished:
            self._blink_state = not self._blink_state
            self.update()

    def sizeHint(self) -> QSize:
        m = self._metrics
        lh, pad_x, pad_y = m.line_height, m.padding_x, m.padding_y
        cols = max((len(ln) for ln in self._lines), default=0)
        w = (2 * pad_x + cols + 1) * self.cell_width()
        h = (2 * pad_y + max(1, len(self._lines)) * lh) * self.em()
        return QSize(int(w), int(h))

    # ---------- painting ----------
    def paintEvent(self, event):
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing)
        p.fillRect(self.rect(), self._color_bg)
        p.setFont(self._font)

        g = self._geometry
        if g is None:
            p.end()
            return

        fm = QFontMetricsF(self._font)
        m = self._metrics
        lh, pad_x, pad_y = m.line_height, m.padding_x, m.padding_y
        em = self.em()

        p.setPen(self._color_text)
        for row, line in enumerate(self._lines):
            top = (pad_y + row * lh) * em
            baseline = top + (lh * em - fm.height()) / 2.0 + fm.ascent()
            p.drawText(QPointF(pad_x * self.cell_width(), baseline), line)

        if not self._finished:
            width = self.width() / self.cell_width()
            height = self.height() / em
            poly = QPolygonF([self.to_pixels(x, y) for x, y in g.mask.hidden_polygon(width, height)])
            p.setPen(Qt.NoPen)
            p.setBrush(self._color_dim)
            p.drawPolygon(poly)

            if self._blink_state:
                c = g.caret
                top_left = self.to_pixels(c.left, c.top)
                p.fillRect(QRectF(top_left.x(), top_left.y(), max(2.0, self.cell_width() * 0.15),
                                  c.height * em), self._color_caret)
        p.end()
