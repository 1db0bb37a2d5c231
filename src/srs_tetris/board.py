"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .rotation import occupied_cells
from .tetromino import Color, Rotation, TetrominoShape, Vec2


# Dimensions of the standard board.  The two top rows are hidden and only used
# for spawning; visible play happens in rows ``HIDDEN_ROWS`` to ``HEIGHT - 1``.
WIDTH = 10
HEIGHT = 22
HIDDEN_ROWS = 2

# Mapping from ``Color`` to the integer stored in the colour array.  ``0`` marks
# a cell that has never held a colour.
COLOR_VALUES = {c: i + 1 for i, c in enumerate(Color)}
_VALUE_COLORS = {v: c for c, v in COLOR_VALUES.items()}


class Board:
    """Grid of locked cells plus collision and line handling.

    Cells live in two flat arrays indexed by ``y * width + x``: ``occupied``
    holds the block flags and ``colors`` the :data:`COLOR_VALUES` code of
    each block.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.occupied: NDArray[np.bool_] = np.zeros(width * height, dtype=bool)
        self.colors: NDArray[np.uint8] = np.zeros(width * height, dtype=np.uint8)

    @property
    def visible_rows(self) -> range:
        return range(HIDDEN_ROWS, self.height)

    def _index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError("Cell out of bounds")

    def _rows(self, values: NDArray) -> NDArray:
        return values.reshape(self.height, self.width)

    # Cell access -------------------------------------------------------
    def set_cell(self, x: int, y: int, color: Color) -> None:
        """Mark ``(x, y)`` as occupied with ``color``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        idx = self._index(x, y)
        self.occupied[idx] = True
        self.colors[idx] = COLOR_VALUES[color]

    def clear_cell(self, x: int, y: int) -> None:
        """Empty the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        idx = self._index(x, y)
        self.occupied[idx] = False
        self.colors[idx] = 0

    def is_occupied(self, x: int, y: int) -> bool:
        return bool(self.occupied[self._index(x, y)])

    def color_at(self, x: int, y: int) -> Optional[Color]:
        """Return the colour of ``(x, y)`` or ``None`` for an empty cell."""

        return _VALUE_COLORS.get(int(self.colors[self._index(x, y)]))

    # Lines -------------------------------------------------------------
    def full_row_indices(self) -> List[int]:
        """Return the indices of completely filled rows in ascending order."""

        full = self._rows(self.occupied).all(axis=1)
        return [int(y) for y in np.flatnonzero(full)]

    def _top_occupied_row(self) -> int:
        filled = np.flatnonzero(self._rows(self.occupied).any(axis=1))
        return int(filled[0]) if filled.size else -1

    def delete_rows(self, rows: Iterable[int]) -> None:
        """Remove ``rows`` and compact everything above them downwards.

        For every deleted row the block between the topmost occupied row and
        the deleted row moves down by one, then the topmost row is cleared.
        Rows are processed in ascending order whatever order they arrive in.
        The rows may already have been emptied (by the deletion animation), so
        the boundary never starts below the first deleted row.
        """

        rows = sorted(rows)
        if not rows:
            return
        if rows[0] < 0 or rows[-1] >= self.height:
            raise IndexError("Row out of bounds")
        top = self._top_occupied_row()
        upper = rows[0] if top < 0 else min(top, rows[0])
        occupied = self._rows(self.occupied)
        colors = self._rows(self.colors)
        for row in rows:
            if row > upper:
                occupied[upper + 1 : row + 1] = occupied[upper:row].copy()
                colors[upper + 1 : row + 1] = colors[upper:row].copy()
            occupied[upper] = False
            colors[upper] = 0
            upper += 1

    def reset_all(self) -> None:
        """Clear every cell."""

        self.occupied[:] = False
        self.colors[:] = 0

    # Pieces ------------------------------------------------------------
    def collides(self, shape: TetrominoShape, position: Vec2, rotation: Rotation) -> bool:
        """Return ``True`` if ``shape`` cannot occupy ``position`` at ``rotation``.

        Only the shape's occupied cells are tested, so an empty part of the
        bounding box may hang over a wall, the floor or the ceiling.  Cells
        outside the grid count as collisions.
        """

        for dx, dy in occupied_cells(shape, rotation):
            x = position.x + dx
            y = position.y + dy
            if not (0 <= x < self.width and 0 <= y < self.height):
                return True
            if self.occupied[y * self.width + x]:
                return True
        return False

    def bake(self, shape: TetrominoShape, position: Vec2, rotation: Rotation) -> None:
        """Write the piece's cells into the grid using its colour."""

        for dx, dy in occupied_cells(shape, rotation):
            self.set_cell(position.x + dx, position.y + dy, shape.color)

    def drop_position(self, shape: TetrominoShape, position: Vec2, rotation: Rotation) -> Vec2:
        """Return where the piece would rest if dropped straight down."""

        landing = position
        while not self.collides(shape, landing, rotation):
            landing = landing + Vec2(0, 1)
        return landing - Vec2(0, 1)
