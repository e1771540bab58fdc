from __future__ import annotations

import enum
import logging
import time
from typing import Callable

logger = logging.getLogger("wordfind")


class RoundState(str, enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


class Round:
    """One timed play session bound to one board.

    ``clock`` returns seconds (monotonic); ``duration_ms`` is in milliseconds.
    While running, every ``tick`` asks ``schedule`` for the next one, the
    way a UI requests its next display refresh.
    """

    def __init__(
        self,
        duration_ms: int,
        clock: Callable[[], float] = time.monotonic,
        on_start: Callable | None = None,
        on_end: Callable | None = None,
        schedule: Callable | None = None,
    ):
        self.duration_ms = duration_ms
        self.clock = clock
        self.on_start = on_start
        self.on_end = on_end
        self.schedule = schedule
        self.state = RoundState.NOT_STARTED
        self.words_found: set[str] = set()
        self.start_time: float | None = None
        self.time_remaining = duration_ms
        self.minutes = 0
        self.seconds = "00"

    @property
    def is_running(self) -> bool:
        return self.state is RoundState.RUNNING

    @property
    def is_over(self) -> bool:
        return self.state is RoundState.ENDED

    def start(self):
        if self.state is not RoundState.NOT_STARTED:
            raise RuntimeError(f"Cannot start a round that is {self.state.value}")
        self.start_time = self.clock()
        self.state = RoundState.RUNNING
        logger.info("Round started (%d ms)", self.duration_ms)
        if self.on_start is not None:
            self.on_start(self)
        self.tick()

    def tick(self):
        self.refresh()
        if self.is_running and self.schedule is not None:
            self.schedule(self.tick)

    def refresh(self):
        """Recompute the remaining time, ending the round once it runs out."""
        if self.state is not RoundState.RUNNING:
            return
        elapsed_ms = (self.clock() - self.start_time) * 1000
        self.time_remaining = self.duration_ms - elapsed_ms
        if self.time_remaining <= 0:
            total_seconds = 0
        else:
            total_seconds = int(self.time_remaining // 1000)
        self.minutes, seconds = divmod(total_seconds, 60)
        self.seconds = f"{seconds:02d}"
        if self.time_remaining <= 0:
            self.end()

    def end(self, notify: bool = True):
        """Finish the round; ``notify=False`` skips on_end for an abandoned round."""
        if self.state is RoundState.ENDED:
            return
        self.state = RoundState.ENDED
        self.time_remaining = 0
        logger.info("Round ended with %d words found", len(self.words_found))
        if notify and self.on_end is not None:
            self.on_end(self)

    def record(self, word: str) -> bool:
        """Credit ``word`` once; only while the round is running."""
        if self.state is not RoundState.RUNNING or word in self.words_found:
            return False
        self.words_found.add(word)
        return True

    @property
    def clock_display(self) -> str:
        return f"{self.minutes}:{self.seconds}"
