from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Callable, Sequence

from wordfind.board import Board, Cell
from wordfind.dictionary import Dictionary
from wordfind.round import Round
from wordfind.sampler import weighted_choice
from wordfind.tracer import Path, trace

logger = logging.getLogger("wordfind")


class ConfigError(ValueError):
    """Raised when a game is configured with unusable options."""


@dataclass
class GameConfig:
    alphabet: Sequence[str]
    letter_frequencies: Sequence[float]
    board_width: int
    board_height: int
    round_duration: int  # ms
    dictionary: Dictionary
    on_round_start: Callable | None = None
    on_round_end: Callable | None = None
    find_retries: int = 1

    def __post_init__(self):
        if not self.alphabet:
            raise ConfigError("alphabet must not be empty")
        if len(self.letter_frequencies) != len(self.alphabet):
            raise ConfigError(
                f"letter_frequencies has {len(self.letter_frequencies)} weights "
                f"for {len(self.alphabet)} letters"
            )
        if any(w < 0 for w in self.letter_frequencies):
            raise ConfigError("letter_frequencies must be non-negative")
        total = math.fsum(self.letter_frequencies)
        if abs(total - 1.0) > 1e-3:
            raise ConfigError(f"letter_frequencies must sum to 1, got {total:.4f}")
        for name in ("board_width", "board_height", "round_duration"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if self.dictionary is None:
            raise ConfigError("dictionary is required")
        if self.find_retries < 0:
            raise ConfigError("find_retries must not be negative")


class Game:
    """Application state owned by the interactive context.

    ``finder`` is anything with ``submit(board, on_result, on_error)``,
    normally a BatchFinder whose callbacks arrive in this same context.
    """

    def __init__(self, config: GameConfig, finder, rng=random, clock=time.monotonic, schedule=None):
        self.config = config
        self.finder = finder
        self.rng = rng
        self.clock = clock
        self.schedule = schedule
        self.board: Board | None = None
        self.round: Round | None = None
        self.words: list[str] = []
        self.is_loading = False
        self.error: str | None = None
        self._retries_left = config.find_retries

    def choose_letter(self) -> str:
        return weighted_choice(self.config.alphabet, self.config.letter_frequencies, self.rng)

    def new_board(self) -> Board:
        self.board = Board(
            [[Cell(self.choose_letter()) for _ in range(self.config.board_width)]
             for _ in range(self.config.board_height)]
        )
        return self.board

    def new_round(self, board: Board | None = None):
        """Replace the board and start a round once its word list is known."""
        if self.round is not None:
            self.round.end(notify=False)
        self.round = None
        self.words = []
        self.error = None
        self._retries_left = self.config.find_retries
        if board is None:
            self.new_board()
        else:
            self.board = board
        self._search()

    def _search(self):
        self.is_loading = True
        logger.info("Searching board %s", self.board)
        try:
            self.finder.submit(self.board, self._on_words, self._on_search_error)
        except Exception as e:
            self._on_search_error(e)

    def _on_words(self, words: list[str]):
        self.words = list(words)
        self.is_loading = False
        logger.info("%d findable words on board", len(self.words))
        self.round = Round(
            self.config.round_duration,
            clock=self.clock,
            on_start=self.config.on_round_start,
            on_end=self.config.on_round_end,
            schedule=self.schedule,
        )
        self.round.start()

    def _on_search_error(self, exc: BaseException):
        if self._retries_left > 0:
            self._retries_left -= 1
            logger.warning("Board search failed (%s); retrying with a new board", exc)
            self.new_board()
            self._search()
            return
        self.is_loading = False
        self.error = f"Board search failed: {exc}"
        logger.error(self.error)

    def preview(self, word: str) -> Path | None:
        """Path to highlight for a partially typed word; changes no state."""
        word = word.strip().lower()
        if not word or self.board is None:
            return None
        return trace(self.board, word)

    def submit(self, word: str) -> bool:
        word = word.strip().lower()
        if not word or self.round is None:
            return False
        self.round.refresh()
        if not self.round.is_running or word in self.round.words_found:
            return False
        if trace(self.board, word) is None or not self.config.dictionary.lookup(word):
            return False
        return self.round.record(word)

    def snapshot(self) -> dict:
        rnd = self.round
        if rnd is not None:
            rnd.refresh()
        return {
            "loading": self.is_loading,
            "error": self.error,
            "board": self.board.letters() if self.board is not None else None,
            "state": rnd.state.value if rnd is not None else None,
            "time_remaining_ms": max(0, round(rnd.time_remaining)) if rnd is not None else None,
            "clock": rnd.clock_display if rnd is not None else None,
            "words_found": sorted(rnd.words_found) if rnd is not None else [],
            "findable_count": len(self.words),
        }
