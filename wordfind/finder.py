from __future__ import annotations

import logging
from concurrent.futures import BrokenExecutor, Future, ProcessPoolExecutor
from typing import Callable, Iterable

from wordfind.board import Board
from wordfind.metrics import StageTimer
from wordfind.tracer import trace

logger = logging.getLogger("wordfind")

# Word list loaded once into each worker process by _init_worker.
_worker_words: tuple[str, ...] = ()


def find_all(board: Board, words: Iterable[str]) -> list[str]:
    """Words (in the given order) that can be traced on ``board``."""
    return [word for word in words if trace(board, word) is not None]


def _init_worker(words: tuple[str, ...]):
    global _worker_words
    _worker_words = words


def find_words_task(rows: list[list[str]]) -> list[str]:
    """Worker entry point: rows of letters in, findable words out."""
    board = Board.from_letters(rows)
    timer = StageTimer(board=str(board))
    with timer.stage("find_words"):
        words = find_all(board, _worker_words)
    logger.info("board=%s found=%d of %d words", board, len(words), len(_worker_words))
    return words


class FindRequest:
    """Subscription to the result of one submitted board."""

    def __init__(self, on_result: Callable, on_error: Callable | None):
        self.on_result = on_result
        self.on_error = on_error
        self.future: Future | None = None
        self.executor = None
        self.cancelled = False
        self.delivered = False

    def cancel(self):
        self.cancelled = True
        if self.future is not None:
            self.future.cancel()


class BatchFinder:
    """Runs find_all for whole boards in an isolated worker pool.

    Only the most recent request is subscribed; results for superseded or
    cancelled requests are dropped. ``dispatch`` moves callbacks into the
    caller's context (``loop.call_soon_threadsafe`` for an asyncio loop) and
    defaults to calling them directly from the pool's callback thread.
    A pool broken by a dead worker is replaced on the next submit.
    """

    def __init__(
        self,
        words: Iterable[str],
        max_workers: int = 1,
        executor_factory=ProcessPoolExecutor,
        dispatch: Callable | None = None,
    ):
        self.words = tuple(words)
        self.max_workers = max_workers
        self.executor_factory = executor_factory
        self._executor = self._start_pool()
        self._dispatch = dispatch or (lambda fn, *args: fn(*args))
        self._latest: FindRequest | None = None

    def _start_pool(self):
        return self.executor_factory(
            max_workers=self.max_workers, initializer=_init_worker, initargs=(self.words,)
        )

    def _restart_pool(self):
        logger.warning("Board search pool is broken; starting a new one")
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._executor = self._start_pool()

    def is_latest(self, request: FindRequest) -> bool:
        return request is self._latest

    def submit(self, board: Board, on_result: Callable, on_error: Callable | None = None) -> FindRequest:
        if self._latest is not None and not self._latest.delivered:
            logger.info("Superseding unfinished board search")
            self._latest.cancel()
        request = FindRequest(on_result, on_error)
        self._latest = request
        rows = board.letters()
        try:
            future = self._executor.submit(find_words_task, rows)
        except BrokenExecutor:
            self._restart_pool()
            future = self._executor.submit(find_words_task, rows)
        request.future = future
        request.executor = self._executor
        future.add_done_callback(lambda f: self._on_done(request, f))
        return request

    def _on_done(self, request: FindRequest, future: Future):
        # Runs on a pool thread; cancelled requests never reach the caller.
        if request.cancelled:
            return
        self._dispatch(self._deliver, request, future)

    def _deliver(self, request: FindRequest, future: Future):
        if request.cancelled or request.delivered or not self.is_latest(request):
            logger.debug("Discarding stale board search result")
            return
        request.delivered = True
        try:
            words = future.result()
        except Exception as e:
            logger.error("Board search failed: %s", e)
            if isinstance(e, BrokenExecutor) and request.executor is self._executor:
                self._restart_pool()
            if request.on_error is not None:
                request.on_error(e)
            return
        request.on_result(words)

    def shutdown(self, wait: bool = True):
        """Stop the pool; ``wait=True`` lets queued boards finish and deliver."""
        if not wait and self._latest is not None:
            self._latest.cancel()
        self._executor.shutdown(wait=wait, cancel_futures=not wait)
