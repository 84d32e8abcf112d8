# services/diffing.py
from typing import NamedTuple, Optional


class DiffResult(NamedTuple):
    mismatch_index: Optional[int]
    correct_prefix_length: int


def first_mismatch(a: str, b: str) -> Optional[int]:
    """Index of the first differing character, or None when one string is a prefix of the other."""
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return i
    return None


def diff(rendered_buffer: str, rendered_target: str) -> DiffResult:
    mismatch = first_mismatch(rendered_buffer, rendered_target)
    # a buffer running past the end of the target is capped at the target length
    if mismatch is None:
        correct = min(len(rendered_buffer), len(rendered_target))
    else:
        correct = min(mismatch, len(rendered_target))
    return DiffResult(mismatch, correct)
