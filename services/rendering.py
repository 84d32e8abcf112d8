# services/rendering.py
from typing import NamedTuple


class Position(NamedTuple):
    row: int
    col: int


def expand(raw: str, tab_width: int = 4) -> str:
    """Replace every tab with exactly ``tab_width`` spaces (no tab stops)."""
    if "\t" not in raw:
        return raw
    return raw.replace("\t", " " * tab_width)


def locate(text: str, prefix_len: int) -> Position:
    """Row/column reached after walking the first ``prefix_len`` characters."""
    prefix_len = max(0, min(prefix_len, len(text)))
    row = col = 0
    for ch in text[:prefix_len]:
        if ch == "\n":
            row += 1
            col = 0
        else:
            col += 1
    return Position(row, col)
