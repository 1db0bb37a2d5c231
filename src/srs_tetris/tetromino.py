"""Tetromino definitions and the active falling piece.

Shapes are immutable and shared by every piece of the same kind.  Each shape
stores its occupancy for rotation state ``0`` as a flat ``dim * dim`` tuple;
the other rotation states are derived on demand by
:func:`srs_tetris.rotation.occupancy_at`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Vec2:
    """Integer 2D offset or grid position (``y`` grows downwards)."""

    x: int = 0
    y: int = 0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)


class Color(str, Enum):
    """Colour tags used for pieces and baked cells."""

    PURPLE = "purple"
    BLUE = "blue"
    ORANGE = "orange"
    MAGENTA = "magenta"
    CYAN = "cyan"
    RED = "red"
    GREEN = "green"

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return COLOR_RGB[self]


COLOR_RGB: Dict[Color, Tuple[int, int, int]] = {
    Color.PURPLE: (160, 32, 240),
    Color.BLUE: (25, 64, 255),
    Color.ORANGE: (255, 126, 0),
    Color.MAGENTA: (255, 77, 196),
    Color.CYAN: (0, 183, 235),
    Color.RED: (255, 51, 51),
    Color.GREEN: (0, 255, 42),
}


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes.

    The declaration order is significant: the bag randomizer emits indices
    into this sequence.
    """

    T = "T"
    J = "J"
    L = "L"
    O = "O"
    I = "I"
    Z = "Z"
    S = "S"


class Rotation(str, Enum):
    """SRS rotation states relative to the spawn orientation."""

    SPAWN = "0"
    RIGHT = "R"
    TWO = "2"
    LEFT = "L"


@dataclass(frozen=True)
class TetrominoShape:
    """Immutable description of one piece kind."""

    kind: Optional[TetrominoType]
    cells: Tuple[int, ...]
    dim: int
    color: Optional[Color]
    spawn: Vec2

    @property
    def is_none(self) -> bool:
        """``True`` for the :data:`NO_SHAPE` sentinel."""

        return self.kind is None


def _shape(kind: TetrominoType, rows: Tuple[str, ...], color: Color, spawn: Vec2) -> TetrominoShape:
    cells = tuple(1 if ch == "#" else 0 for row in rows for ch in row)
    return TetrominoShape(kind=kind, cells=cells, dim=len(rows), color=color, spawn=spawn)


# Spawn orientations.  Positions are the top-left corner of the bounding box in
# board coordinates, which include the two hidden rows at the top.
SHAPES: Dict[TetrominoType, TetrominoShape] = {
    TetrominoType.T: _shape(TetrominoType.T, (".#.", "###", "..."), Color.PURPLE, Vec2(4, 0)),
    TetrominoType.J: _shape(TetrominoType.J, ("#..", "###", "..."), Color.BLUE, Vec2(4, 0)),
    TetrominoType.L: _shape(TetrominoType.L, ("..#", "###", "..."), Color.ORANGE, Vec2(4, 0)),
    TetrominoType.O: _shape(TetrominoType.O, ("##", "##"), Color.MAGENTA, Vec2(4, 0)),
    TetrominoType.I: _shape(
        TetrominoType.I, ("....", "####", "....", "...."), Color.CYAN, Vec2(3, 0)
    ),
    TetrominoType.Z: _shape(TetrominoType.Z, ("##.", ".##", "..."), Color.RED, Vec2(4, 0)),
    TetrominoType.S: _shape(TetrominoType.S, (".##", "##.", "..."), Color.GREEN, Vec2(4, 0)),
}

# Ordered so that ``PIECE_ORDER[index]`` matches randomizer output.
PIECE_ORDER: Tuple[TetrominoShape, ...] = tuple(SHAPES[t] for t in TetrominoType)

# Placeholder for the hold slot before anything has been held.
NO_SHAPE = TetrominoShape(kind=None, cells=(), dim=0, color=None, spawn=Vec2(0, 0))


def shape_for_index(index: int) -> TetrominoShape:
    """Return the shape for a randomizer index."""

    return PIECE_ORDER[index]


@dataclass
class ActivePiece:
    """The piece currently controlled by the player."""

    shape: TetrominoShape
    position: Vec2
    rotation: Rotation = Rotation.SPAWN

    @classmethod
    def spawn(cls, shape: TetrominoShape) -> "ActivePiece":
        """Return a piece of ``shape`` at its spawn position and rotation."""

        return cls(shape=shape, position=shape.spawn, rotation=Rotation.SPAWN)

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given offsets.

        ``dx`` moves horizontally (columns) and ``dy`` moves vertically
        (rows, downwards positive).
        """

        self.position = self.position + Vec2(dx, dy)
