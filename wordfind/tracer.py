from __future__ import annotations

from wordfind.board import Board, Position, is_adjacent

Path = list[Position]


def trace(board: Board, word: str) -> Path | None:
    """Find a path of adjacent, non-repeating cells spelling ``word``.

    Starting cells are tried in row-major order and neighbours in the board's
    fixed offset order, so the first path found is deterministic. Returns
    ``None`` when no path exists and an empty path for the empty word.
    """
    if not word:
        return []

    path: Path = []
    # One candidate iterator per depth; the top matches word[len(path)].
    stack = [board.positions()]
    while stack:
        depth = len(path)
        for position in stack[-1]:
            if board.letter(position) != word[depth] or position in path:
                continue
            path.append(position)
            if len(path) == len(word):
                return path
            stack.append(board.adjacent_positions(position))
            break
        else:
            stack.pop()
            if path:
                path.pop()
    return None


def is_valid_path(board: Board, word: str, path: Path) -> bool:
    """Check that ``path`` spells ``word`` on ``board`` without revisits."""
    if len(path) != len(word) or len(set(path)) != len(path):
        return False
    for i, position in enumerate(path):
        if not board.in_bounds(position.row, position.column):
            return False
        if board.letter(position) != word[i]:
            return False
        if i and not is_adjacent(path[i - 1], position):
            return False
    return True
