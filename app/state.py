from dataclasses import dataclass, field
from typing import Optional


@dataclass
class KeystrokeCounters:
    correct: int = 0
    wrong: int = 0

    def mark(self, correct: bool):
        if correct:
            self.correct += 1
        else:
            self.wrong += 1


@dataclass
class SessionState:
    """Mutable per-session record. Timestamps are in milliseconds."""
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    counters: KeystrokeCounters = field(default_factory=KeystrokeCounters)
    rendered_buffer: str = ""
    correct_prefix_length: int = 0

    @property
    def started(self) -> bool:
        return self.started_at is not None

    @property
    def finished(self) -> bool:
        return self.finished_at is not None

    @property
    def is_running(self) -> bool:
        return self.started and not self.finished

    def start(self, now: float):
        if self.started_at is None:
            self.started_at = now

    def finish(self, now: float):
        if self.finished_at is None:
            self.finished_at = now

    def elapsed_ms(self, now: float) -> float:
        if self.started_at is None:
            return 1.0
        end = self.finished_at if self.finished_at is not None else now
        return max(1.0, end - self.started_at)
