import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordfind")


class StageTimer:
    """Per-stage timings for one board, tagged with its letters in the log."""

    def __init__(self, board: str = "-"):
        self.board = board
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)  # ms
            logger.info("board=%s stage=%s elapsed=%.1fms", self.board, name, self.timings[name])

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {"board": self.board, **self.timings, "total_ms": self.total_ms}
