from dataclasses import dataclass

CHARS_PER_WORD = 5.0


@dataclass(frozen=True)
class StatsSnapshot:
    wpm: float
    accuracy: float
    gross_wpm: float
    net_wpm: float
    elapsed_ms: float
    correct: int
    typed: int
    finished: bool


def words_per_minute(chars: int, elapsed_ms: float) -> float:
    # WPM = (chars / 5) / minutes
    minutes = max(1.0, elapsed_ms) / 60000.0
    return (chars / CHARS_PER_WORD) / minutes


def accuracy(correct: int, wrong: int) -> float:
    total = correct + wrong
    if total == 0:
        return 100.0
    return 100.0 * correct / total


def matching_prefix(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def progress_percent(raw_buffer: str, raw_target: str) -> float:
    """Share of the raw target already matched one-for-one, in [0, 100]."""
    if not raw_target:
        return 0.0
    pct = 100.0 * matching_prefix(raw_buffer, raw_target) / len(raw_target)
    return max(0.0, min(100.0, pct))


def periodic_snapshot(correct_prefix_length: int, typed: int, correct: int,
                      wrong: int, elapsed_ms: float) -> StatsSnapshot:
    elapsed_ms = max(1.0, elapsed_ms)
    net = words_per_minute(correct_prefix_length, elapsed_ms)
    return StatsSnapshot(
        wpm=net,
        accuracy=accuracy(correct, wrong),
        gross_wpm=words_per_minute(typed, elapsed_ms),
        net_wpm=net,
        elapsed_ms=elapsed_ms,
        correct=correct_prefix_length,
        typed=typed,
        finished=False,
    )


def final_snapshot(typed: int, correct: int, wrong: int, elapsed_ms: float) -> StatsSnapshot:
    # an exact match means every rendered character is correct
    elapsed_ms = max(1.0, elapsed_ms)
    wpm = words_per_minute(typed, elapsed_ms)
    return StatsSnapshot(
        wpm=wpm,
        accuracy=accuracy(correct, wrong),
        gross_wpm=wpm,
        net_wpm=wpm,
        elapsed_ms=elapsed_ms,
        correct=typed,
        typed=typed,
        finished=True,
    )
