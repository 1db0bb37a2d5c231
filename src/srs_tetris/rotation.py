"""Super Rotation System: rotated occupancy and wall kicks.

Rotated shapes are never stored.  :func:`occupancy_at` maps a cell of the
piece's local frame back onto the spawn-orientation grid, and the two
wall-kick tables list the five positional offsets tried, in order, for every
legal rotation transition.  Offsets use board coordinates, so a positive ``y``
moves the piece down.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Tuple

from .tetromino import Rotation, TetrominoShape, TetrominoType, Vec2

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


KickTable = Mapping[Tuple[Rotation, Rotation], Tuple[Vec2, ...]]

_CYCLE = (Rotation.SPAWN, Rotation.RIGHT, Rotation.TWO, Rotation.LEFT)


def next_rotation(state: Rotation, clockwise: bool) -> Rotation:
    """Return the state reached by rotating ``state`` a quarter turn."""

    step = 1 if clockwise else -1
    return _CYCLE[(_CYCLE.index(state) + step) % len(_CYCLE)]


def occupancy_at(shape: TetrominoShape, x: int, y: int, rotation: Rotation) -> int:
    """Return ``1`` if local cell ``(x, y)`` is filled when ``shape`` is at ``rotation``."""

    last = shape.dim - 1
    if rotation is Rotation.SPAWN:
        src_x, src_y = x, y
    elif rotation is Rotation.RIGHT:
        src_x, src_y = y, last - x
    elif rotation is Rotation.TWO:
        src_x, src_y = last - x, last - y
    else:
        src_x, src_y = last - y, x
    return shape.cells[src_y * shape.dim + src_x]


@lru_cache(maxsize=None)
def occupied_cells(shape: TetrominoShape, rotation: Rotation) -> Tuple[Tuple[int, int], ...]:
    """Return the occupied local ``(x, y)`` cells of ``shape`` at ``rotation``."""

    return tuple(
        (x, y)
        for y in range(shape.dim)
        for x in range(shape.dim)
        if occupancy_at(shape, x, y, rotation)
    )


def _kicks(*pairs: Tuple[int, int]) -> Tuple[Vec2, ...]:
    return tuple(Vec2(dx, dy) for dx, dy in pairs)


_R0, _RR, _R2, _RL = _CYCLE

# J, L, S, T, Z (and O, which never collides differently after rotating).
OTHER_KICKS: KickTable = MappingProxyType(
    {
        (_R0, _RR): _kicks((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
        (_R0, _RL): _kicks((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
        (_RR, _R2): _kicks((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
        (_RR, _R0): _kicks((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
        (_R2, _RL): _kicks((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
        (_R2, _RR): _kicks((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
        (_RL, _R0): _kicks((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
        (_RL, _R2): _kicks((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    }
)

I_KICKS: KickTable = MappingProxyType(
    {
        (_R0, _RR): _kicks((0, 0), (-2, 0), (1, 0), (-2, 1), (1, -2)),
        (_R0, _RL): _kicks((0, 0), (-1, 0), (2, 0), (-1, -2), (2, 1)),
        (_RR, _R2): _kicks((0, 0), (-1, 0), (2, 0), (-1, -2), (2, 1)),
        (_RR, _R0): _kicks((0, 0), (2, 0), (-1, 0), (2, -1), (-1, 2)),
        (_R2, _RL): _kicks((0, 0), (2, 0), (-1, 0), (2, -1), (-1, 2)),
        (_R2, _RR): _kicks((0, 0), (1, 0), (-2, 0), (1, 2), (-2, -1)),
        (_RL, _R0): _kicks((0, 0), (1, 0), (-2, 0), (1, 2), (-2, -1)),
        (_RL, _R2): _kicks((0, 0), (-2, 0), (1, 0), (-2, 1), (1, -2)),
    }
)


def kick_offsets(shape: TetrominoShape, old: Rotation, new: Rotation) -> Tuple[Vec2, ...]:
    """Return the five candidate offsets for rotating ``shape`` from ``old`` to ``new``."""

    table = I_KICKS if shape.kind is TetrominoType.I else OTHER_KICKS
    return table[(old, new)]


def resolve_rotation(
    board: "Board",
    shape: TetrominoShape,
    position: Vec2,
    old: Rotation,
    new: Rotation,
) -> Optional[Vec2]:
    """Return the position the piece occupies after rotating, or ``None``.

    Each kick offset is tried in order and the first translated position that
    does not collide at ``new`` wins.  ``None`` means every candidate collided
    and the rotation must be discarded.
    """

    for offset in kick_offsets(shape, old, new):
        candidate = position + offset
        if not board.collides(shape, candidate, new):
            return candidate
    return None


__all__ = [
    "I_KICKS",
    "OTHER_KICKS",
    "kick_offsets",
    "next_rotation",
    "occupancy_at",
    "occupied_cells",
    "resolve_rotation",
]
