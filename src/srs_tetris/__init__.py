"""Falling-block puzzle engine following the Super Rotation System."""

from .board import Board
from .tetromino import (
    NO_SHAPE,
    SHAPES,
    ActivePiece,
    Color,
    Rotation,
    TetrominoShape,
    TetrominoType,
    Vec2,
)
from .rotation import next_rotation, occupancy_at, resolve_rotation
from .randomizer import BagRandomizer
from .game_state import Command, GameMode, GameStateMachine, line_clear_score
from .utils import fall_interval, render_grid

__all__ = [
    "Board",
    "ActivePiece",
    "BagRandomizer",
    "Color",
    "Command",
    "GameMode",
    "GameStateMachine",
    "NO_SHAPE",
    "Rotation",
    "SHAPES",
    "TetrominoShape",
    "TetrominoType",
    "Vec2",
    "fall_interval",
    "line_clear_score",
    "next_rotation",
    "occupancy_at",
    "render_grid",
    "resolve_rotation",
]
