"""High level game state machine.

The machine owns the board, the randomizer and every piece slot.  An external
driver calls :meth:`GameStateMachine.advance` once per frame with the elapsed
time and forwards player commands in between; renderers read the public
attributes directly.

Modes:

``FALLING``
    Gravity moves the active piece down every :attr:`fall_interval` seconds.
    A piece that cannot move down is locked on the next update.
``LINE_DELETION``
    Full rows are cleared two columns at a time, then removed from the board.
``GAME_OVER``
    The board is wiped two columns at a time and, after a grace period, the
    game restarts from level 0.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from .board import Board
from .randomizer import BagRandomizer
from .rotation import next_rotation, resolve_rotation
from .tetromino import NO_SHAPE, ActivePiece, Rotation, TetrominoShape, Vec2, shape_for_index
from .utils import DELETE_STEP, fall_interval, game_over_period


LOGGER = logging.getLogger(__name__)

LINES_PER_LEVEL = 10

# Base points per number of rows cleared at once, multiplied by ``level + 1``.
LINE_SCORES = {1: 100, 2: 300, 3: 500, 4: 800}

SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2


class GameMode(str, Enum):
    FALLING = "falling"
    LINE_DELETION = "line_deletion"
    GAME_OVER = "game_over"


class Command(str, Enum):
    """Player actions accepted by :meth:`GameStateMachine.apply`."""

    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    HOLD = "hold"


def line_clear_score(lines: int, level: int) -> int:
    """Return the points for clearing ``lines`` rows at ``level``."""

    return LINE_SCORES.get(lines, 0) * (level + 1)


class GameStateMachine:
    """Mutable state for a game session."""

    def __init__(
        self,
        *,
        board: Optional[Board] = None,
        randomizer: Optional[BagRandomizer] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.board = board if board is not None else Board()
        self.randomizer = randomizer if randomizer is not None else BagRandomizer(seed)
        self.mode = GameMode.FALLING
        self.score = 0
        self.level = 0
        self.lines_cleared_this_level = 0
        self.fall_interval = fall_interval(0)
        self.timer = 0.0
        self.current: TetrominoShape = self._draw_shape()
        self.next: TetrominoShape = self._draw_shape()
        self.held: TetrominoShape = NO_SHAPE
        self.piece = ActivePiece.spawn(self.current)
        self.hold_lock = False
        self.lock_requested = False
        self.pending_rows: List[int] = []
        self.delete_counter = self.board.width // 2

    def _draw_shape(self) -> TetrominoShape:
        return shape_for_index(self.randomizer.next())

    # Queries -----------------------------------------------------------
    @property
    def accepting_commands(self) -> bool:
        """``True`` while player commands have an effect."""

        return self.mode is GameMode.FALLING and not self.lock_requested

    @property
    def ghost_position(self) -> Vec2:
        """Landing position of the active piece if it were dropped now."""

        piece = self.piece
        return self.board.drop_position(piece.shape, piece.position, piece.rotation)

    def _collides(self, position: Vec2) -> bool:
        return self.board.collides(self.piece.shape, position, self.piece.rotation)

    # Simulation --------------------------------------------------------
    def advance(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds."""

        if self.mode is GameMode.FALLING:
            self._advance_falling(dt)
        elif self.mode is GameMode.LINE_DELETION:
            self._advance_line_deletion(dt)
        else:
            self._advance_game_over(dt)

    def _advance_falling(self, dt: float) -> None:
        self.timer += dt
        if self.timer >= self.fall_interval:
            self.piece.move(0, 1)
            if self._collides(self.piece.position):
                self.lock_requested = True
                self.piece.move(0, -1)
            self.timer = 0.0

        if self.lock_requested:
            self._lock_piece()

    def _lock_piece(self) -> None:
        piece = self.piece
        self.board.bake(piece.shape, piece.position, piece.rotation)
        LOGGER.debug("Locked %s at %s", piece.shape.kind, piece.position)

        rows = self.board.full_row_indices()
        if rows:
            self._register_cleared_rows(len(rows))
            self.pending_rows = rows
            self.mode = GameMode.LINE_DELETION

        self.current = self.next
        self.next = self._draw_shape()
        self.piece = ActivePiece.spawn(self.current)
        self.lock_requested = False

        # The new piece only ends the game if it cannot even drop one row, and
        # never while rows are about to be removed underneath it.
        if not rows and self._collides(self.piece.position + Vec2(0, 1)):
            LOGGER.info("Game over. Score: %d, level: %d", self.score, self.level)
            self.mode = GameMode.GAME_OVER
            self.timer = 0.0

        self.hold_lock = False

    def _register_cleared_rows(self, count: int) -> None:
        self.lines_cleared_this_level += count
        if self.lines_cleared_this_level >= LINES_PER_LEVEL:
            self.lines_cleared_this_level = 0
            self.level += 1
            LOGGER.info("Level up: %d", self.level)
        self.fall_interval = fall_interval(self.level)
        self.score += line_clear_score(count, self.level)

    def _clear_column_pair(self, rows) -> None:
        left = self.delete_counter - 1
        right = self.board.width - self.delete_counter
        for y in rows:
            self.board.clear_cell(left, y)
            self.board.clear_cell(right, y)
        self.delete_counter -= 1
        self.timer = 0.0

    def _advance_line_deletion(self, dt: float) -> None:
        self.timer += dt
        if self.timer >= DELETE_STEP:
            self._clear_column_pair(self.pending_rows)

        if self.delete_counter == 0:
            self.board.delete_rows(self.pending_rows)
            LOGGER.debug("Deleted rows %s", self.pending_rows)
            self.pending_rows = []
            self.timer = 0.0
            self.mode = GameMode.FALLING
            self.delete_counter = self.board.width // 2

    def _advance_game_over(self, dt: float) -> None:
        self.timer += dt
        if self.timer >= 2 * DELETE_STEP and self.delete_counter != 0:
            self._clear_column_pair(range(self.board.height))

        if self.timer > game_over_period(self.board.width):
            self.restart()

    def restart(self) -> None:
        """Reset score and progression and resume play on an empty board."""

        self.board.reset_all()
        self.mode = GameMode.FALLING
        self.score = 0
        self.level = 0
        self.lines_cleared_this_level = 0
        self.fall_interval = fall_interval(0)
        self.timer = 0.0
        self.delete_counter = self.board.width // 2
        self.pending_rows = []
        self.held = NO_SHAPE
        self.hold_lock = False
        LOGGER.info("Game restarted")

    # Commands ----------------------------------------------------------
    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def _shift(self, dx: int) -> bool:
        if not self.accepting_commands:
            return False
        self.piece.move(dx, 0)
        if self._collides(self.piece.position):
            self.piece.move(-dx, 0)
            return False
        return True

    def soft_drop(self) -> bool:
        """Move the piece down one row, scoring a point if it moved."""

        if not self.accepting_commands:
            return False
        self.piece.move(0, 1)
        if self._collides(self.piece.position):
            self.piece.move(0, -1)
            return False
        self.score += SOFT_DROP_POINTS
        return True

    def hard_drop(self) -> int:
        """Drop the piece as far as it goes and request a lock.

        Returns the number of rows descended; each one is worth
        :data:`HARD_DROP_POINTS`.
        """

        if not self.accepting_commands:
            return 0
        start = self.piece.position.y
        self.piece.move(0, 1)
        while not self._collides(self.piece.position):
            self.piece.move(0, 1)
        self.piece.move(0, -1)
        rows = self.piece.position.y - start
        self.score += HARD_DROP_POINTS * rows
        self.lock_requested = True
        self.timer = 0.0
        return rows

    def rotate(self, clockwise: bool = True) -> bool:
        """Rotate the piece a quarter turn using SRS wall kicks."""

        if not self.accepting_commands:
            return False
        piece = self.piece
        new_rotation = next_rotation(piece.rotation, clockwise)
        position = resolve_rotation(self.board, piece.shape, piece.position, piece.rotation, new_rotation)
        if position is None:
            return False
        piece.position = position
        piece.rotation = new_rotation
        return True

    def rotate_cw(self) -> bool:
        return self.rotate(True)

    def rotate_ccw(self) -> bool:
        return self.rotate(False)

    def hold(self) -> bool:
        """Swap the active piece with the held one.

        The first hold of a game stores the active piece and brings in the
        next one.  Later holds only swap when the held piece fits at its
        spawn position.  A successful hold blocks further holds until the
        next lock.
        """

        if not self.accepting_commands or self.hold_lock:
            return False

        previous = self.held
        if previous.is_none:
            self.held = self.current
            self.current = self.next
            self.next = self._draw_shape()
        elif not self.board.collides(previous, previous.spawn, Rotation.SPAWN):
            self.held = self.current
            self.current = previous
        else:
            return False

        self.piece = ActivePiece.spawn(self.current)
        self.timer = 0.0
        self.hold_lock = True
        return True

    def _hard_drop_command(self) -> bool:
        if not self.accepting_commands:
            return False
        self.hard_drop()
        return True

    def apply(self, command: Command) -> bool:
        """Run ``command``; return whether it changed the game.

        Raises:
            ValueError: If ``command`` is not a :class:`Command`.
        """

        handlers: Dict[Command, Callable[[], bool]] = {
            Command.ROTATE_CW: self.rotate_cw,
            Command.ROTATE_CCW: self.rotate_ccw,
            Command.MOVE_LEFT: self.move_left,
            Command.MOVE_RIGHT: self.move_right,
            Command.SOFT_DROP: self.soft_drop,
            Command.HARD_DROP: self._hard_drop_command,
            Command.HOLD: self.hold,
        }
        try:
            handler = handlers[Command(command)]
        except ValueError:
            raise ValueError(f"Unknown command: {command!r}") from None
        return handler()
