"""Utility helpers for the engine and its front-ends."""

from __future__ import annotations

from typing import List, Optional

from .board import COLOR_VALUES, HIDDEN_ROWS, Board
from .rotation import occupied_cells
from .tetromino import ActivePiece


# Seconds between gravity steps, indexed by level.
FALL_INTERVALS = (
    1.00000, 0.79300, 0.61780, 0.47273,
    0.35520, 0.26200, 0.18968, 0.13473,
    0.09388, 0.06415, 0.04298, 0.02822, 0.01815,
)

# Seconds between two steps of the line-deletion animation.
DELETE_STEP = 0.05


def fall_interval(level: int) -> float:
    """Return the gravity interval in seconds for ``level``.

    Levels past the end of :data:`FALL_INTERVALS` keep the fastest speed.
    """

    return FALL_INTERVALS[min(level, len(FALL_INTERVALS) - 1)]


def game_over_period(width: int, delete_step: float = DELETE_STEP) -> float:
    """Return how long the game-over screen waits before restarting."""

    return 3 + 2 * delete_step * (width // 2)


def render_grid(
    board: Board,
    active: Optional[ActivePiece] = None,
    *,
    include_hidden: bool = False,
) -> List[List[int]]:
    """Return a copy of the board colours with the active piece overlaid.

    Cells hold :data:`~srs_tetris.board.COLOR_VALUES` codes, ``0`` for empty.
    The hidden spawn rows are dropped unless ``include_hidden`` is set.
    """

    rows = board.occupied.reshape(board.height, board.width)
    colors = board.colors.reshape(board.height, board.width)
    grid = [
        [int(colors[y, x]) if rows[y, x] else 0 for x in range(board.width)]
        for y in range(board.height)
    ]
    if active is not None:
        value = COLOR_VALUES[active.shape.color]
        for dx, dy in occupied_cells(active.shape, active.rotation):
            x = active.position.x + dx
            y = active.position.y + dy
            if 0 <= y < board.height and 0 <= x < board.width:
                grid[y][x] = value
    return grid if include_hidden else grid[HIDDEN_ROWS:]
