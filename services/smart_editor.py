# services/smart_editor.py
from typing import NamedTuple, Optional

TAB = "\t"
ENTER = "\n"
CLOSE_BRACE = "}"

_WS = " \t"


class EditResult(NamedTuple):
    buffer: str
    cursor: int


def _line_start(buffer: str, pos: int) -> int:
    return buffer.rfind("\n", 0, pos) + 1


def _leading_indent(buffer: str, line_start: int, cursor: int) -> str:
    i = line_start
    while i < cursor and buffer[i] in _WS:
        i += 1
    return buffer[line_start:i]


def indent_unit(indent: str, tab_width: int) -> str:
    return TAB if TAB in indent else " " * tab_width


def prev_char(buffer: str, pos: int) -> Optional[str]:
    """Nearest non-whitespace character before ``pos`` on the same line."""
    i = pos - 1
    while i >= 0 and buffer[i] != "\n":
        if buffer[i] not in _WS:
            return buffer[i]
        i -= 1
    return None


def next_char(buffer: str, pos: int) -> Optional[str]:
    """Nearest non-whitespace character at or after ``pos`` on the same line."""
    i = pos
    while i < len(buffer) and buffer[i] != "\n":
        if buffer[i] not in _WS:
            return buffer[i]
        i += 1
    return None


def _clamp_selection(buffer: str, start: int, end: Optional[int]):
    start = max(0, min(start, len(buffer)))
    end = start if end is None else max(0, min(end, len(buffer)))
    return min(start, end), max(start, end)


def insert_text(buffer: str, text: str, start: int, end: Optional[int] = None) -> EditResult:
    start, end = _clamp_selection(buffer, start, end)
    return EditResult(buffer[:start] + text + buffer[end:], start + len(text))


def insert_tab(buffer: str, start: int, end: Optional[int] = None) -> EditResult:
    # one raw character, so a single backspace removes the whole tab
    return insert_text(buffer, TAB, start, end)


def insert_newline(buffer: str, start: int, end: Optional[int] = None,
                   tab_width: int = 4) -> EditResult:
    start, end = _clamp_selection(buffer, start, end)
    line_start = _line_start(buffer, start)
    indent = _leading_indent(buffer, line_start, start)
    unit = indent_unit(indent, tab_width)
    before = prev_char(buffer, start)
    after = next_char(buffer, end)
    rest = buffer[end:]

    if before == "{" and after == "}":
        first = "\n" + indent + unit
        text = first + "\n" + indent
        cursor = start + len(first)
        rest = rest.lstrip(_WS)
    elif before == "{":
        text = "\n" + indent + unit
        cursor = start + len(text)
    else:
        text = "\n" + indent
        cursor = start + len(text)
    return EditResult(buffer[:start] + text + rest, cursor)


def _dedent(indent: str, tab_width: int) -> str:
    if indent.endswith(TAB):
        return indent[:-1]
    if indent.endswith(" " * tab_width):
        return indent[:-tab_width]
    trailing = len(indent) - len(indent.rstrip(" "))
    return indent[:len(indent) - min(trailing, tab_width)]


def insert_closing_brace(buffer: str, start: int, end: Optional[int] = None,
                         tab_width: int = 4) -> EditResult:
    start, end = _clamp_selection(buffer, start, end)
    line_start = _line_start(buffer, start)
    head = buffer[line_start:start]
    if not head or head.strip(_WS):
        return insert_text(buffer, CLOSE_BRACE, start, end)

    shortened = _dedent(head, tab_width)
    new_buffer = buffer[:line_start] + shortened + CLOSE_BRACE + buffer[end:]
    return EditResult(new_buffer, line_start + len(shortened) + 1)


def apply_key(buffer: str, key: str, start: int, end: Optional[int] = None,
              tab_width: int = 4) -> EditResult:
    """
    Compute the buffer and cursor after pressing ``key`` with the selection
    ``start..end``. Tab, Enter and ``}`` follow the indentation rules; any other
    string is inserted as-is.
    """
    if key == TAB:
        return insert_tab(buffer, start, end)
    if key in (ENTER, "\r", "\r\n"):
        return insert_newline(buffer, start, end, tab_width)
    if key == CLOSE_BRACE:
        return insert_closing_brace(buffer, start, end, tab_width)
    return insert_text(buffer, key, start, end)
