"""
Word finder for a fixed board.

Usage:
    python -m scripts.find_words <row> [<row> ...] [--word WORD] [--dictionary PATH]

Examples:
    python -m scripts.find_words cats repo bone digs
    python -m scripts.find_words ca ts --word cats
    python -m scripts.find_words --random --seed 7

This will:
  1. Build the board from the given rows (or sample one with the configured letter frequencies)
  2. Trace WORD on the board and print its path, if --word is given
  3. Otherwise list every dictionary word that can be traced, longest first
"""
import argparse
import random
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordfind.settings import settings
from wordfind.board import Board, Cell
from wordfind.dictionary import load_dictionary
from wordfind.finder import find_all
from wordfind.metrics import StageTimer
from wordfind.sampler import weighted_choice
from wordfind.tracer import trace


def random_board(width: int, height: int, rng) -> Board:
    return Board([
        [Cell(weighted_choice(settings.ALPHABET, settings.LETTER_FREQUENCIES, rng)) for _ in range(width)]
        for _ in range(height)
    ])


def print_board(board: Board):
    for row in board.cells:
        print("  " + " ".join(cell.letter.upper() if cell.selected else cell.letter for cell in row))


def main():
    parser = argparse.ArgumentParser(description="Wordfind board solver")
    parser.add_argument("rows", nargs="*", help="Board rows, one string of letters per row")
    parser.add_argument("--word", type=str, default=None,
                        help="Trace a single word instead of listing all words")
    parser.add_argument("--random", action="store_true",
                        help="Sample a random board instead of reading rows")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --random")
    parser.add_argument("--dictionary", type=str, default=str(settings.DICTIONARY_PATH),
                        help=f"Word list, one word per line (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Minimum word length (default: {settings.MIN_WORD_LENGTH})")
    args = parser.parse_args()

    if args.random:
        board = random_board(settings.BOARD_WIDTH, settings.BOARD_HEIGHT, random.Random(args.seed))
    elif args.rows:
        try:
            board = Board.from_letters(row.lower() for row in args.rows)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.error("give board rows or --random")

    if args.word:
        path = trace(board, args.word.lower())
        board.highlight(path)
        print_board(board)
        if path is None:
            print(f"\n{args.word!r} cannot be traced on this board")
            sys.exit(1)
        print("\n" + " -> ".join(f"({p.row},{p.column})" for p in path))
        return

    timer = StageTimer(board=str(board))
    with timer.stage("load_dictionary"):
        dictionary = load_dictionary(args.dictionary, args.min_length)
    with timer.stage("find_words"):
        words = find_all(board, dictionary.words)

    print_board(board)
    print(f"\n{len(words)} words ({timer.summary()['find_words']:.1f} ms):")
    for word in sorted(words, key=lambda w: (-len(w), w)):
        print(f"  {word}")


if __name__ == "__main__":
    main()
