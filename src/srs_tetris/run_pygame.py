"""Simple pygame front-end for the engine.

The front-end owns the clock and the keyboard: every frame it forwards key
presses to :meth:`GameStateMachine.apply`, advances the simulation by the
elapsed time and draws the state it reads back.  No game rules live here.

Controls: left/right arrows rotate, ``A``/``D`` move, ``S`` soft-drops,
``W`` hard-drops and ``F`` holds.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Dict, Optional

import pygame

from .board import HIDDEN_ROWS, Board
from .game_state import Command, GameMode, GameStateMachine
from .rotation import occupied_cells
from .tetromino import Rotation, TetrominoShape, Vec2


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 32
# Frames per second to run the game loop at
FPS = 60
# Board columns reserved on each side for the hold and next previews
SIDE_COLUMNS = 5

BACKGROUND = (255, 255, 224)
STRIPES = ((243, 232, 130), (255, 241, 107))
GHOST_ALPHA = 51

KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_RIGHT: Command.ROTATE_CW,
    pygame.K_LEFT: Command.ROTATE_CCW,
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_s: Command.SOFT_DROP,
    pygame.K_w: Command.HARD_DROP,
    pygame.K_f: Command.HOLD,
}


def command_for_key(key: int) -> Optional[Command]:
    """Return the command bound to ``key`` or ``None``."""

    return KEY_COMMANDS.get(key)


def handle_key(event: pygame.event.Event, game: GameStateMachine) -> bool:
    """Forward a key press to the game; return whether it had an effect."""

    command = command_for_key(event.key)
    if command is None:
        return False
    return game.apply(command)


def _cell_rect(x: int, y: int) -> pygame.Rect:
    left = (x + SIDE_COLUMNS) * CELL_SIZE
    top = (y - HIDDEN_ROWS) * CELL_SIZE
    return pygame.Rect(left, top, CELL_SIZE - 1, CELL_SIZE - 1)


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the background stripes and all locked cells."""

    for x in range(board.width):
        stripe = pygame.Rect(
            (x + SIDE_COLUMNS) * CELL_SIZE, 0, CELL_SIZE - 1, len(board.visible_rows) * CELL_SIZE
        )
        pygame.draw.rect(screen, STRIPES[x % 2], stripe)
    for y in board.visible_rows:
        for x in range(board.width):
            if board.is_occupied(x, y):
                color = board.color_at(x, y)
                pygame.draw.rect(screen, color.rgb, _cell_rect(x, y))


def draw_shape(
    screen: pygame.Surface,
    shape: TetrominoShape,
    position: Vec2,
    rotation: Rotation = Rotation.SPAWN,
    alpha: int = 255,
) -> None:
    """Render ``shape``, skipping cells in the hidden spawn rows."""

    if shape.is_none:
        return
    for dx, dy in occupied_cells(shape, rotation):
        x = position.x + dx
        y = position.y + dy
        if y < HIDDEN_ROWS:
            continue
        rect = _cell_rect(x, y)
        if alpha >= 255:
            pygame.draw.rect(screen, shape.color.rgb, rect)
        else:
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            overlay.fill((*shape.color.rgb, alpha))
            screen.blit(overlay, rect.topleft)


def draw_game(screen: pygame.Surface, game: GameStateMachine) -> None:
    screen.fill(BACKGROUND)
    draw_board(screen, game.board)
    if game.mode is GameMode.FALLING:
        piece = game.piece
        draw_shape(screen, piece.shape, game.ghost_position, piece.rotation, alpha=GHOST_ALPHA)
        draw_shape(screen, piece.shape, piece.position, piece.rotation)
        draw_shape(screen, game.next, Vec2(game.board.width + 1, HIDDEN_ROWS + 4))
        draw_shape(screen, game.held, Vec2(-SIDE_COLUMNS + 1, HIDDEN_ROWS + 4))


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._running = False
        self._paused = False
        self._screen: pygame.Surface | None = None
        self._game: GameStateMachine | None = None
        self._clock: pygame.time.Clock | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    async def _run_loop(self) -> None:
        pygame.init()
        board = Board()
        width_px = (board.width + 2 * SIDE_COLUMNS) * CELL_SIZE
        height_px = len(board.visible_rows) * CELL_SIZE
        self._screen = pygame.display.set_mode((width_px, height_px))
        pygame.display.set_caption("SRS Tetris")
        self._clock = pygame.time.Clock()

        self._game = GameStateMachine(board=board, seed=self._seed)
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            dt = self._clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                self.handle_event(event)

            if not self._paused:
                self._game.advance(dt)

            draw_game(self._screen, self._game)
            pygame.display.set_caption(
                f"SRS Tetris - {'Paused - ' if self._paused else ''}"
                f"Score: {self._game.score}  Level: {self._game.level}"
            )
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route window events: quit, the pause key and game commands."""

        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_p:
                self.toggle_pause()
            elif not self._paused and self._game is not None:
                handle_key(event, self._game)

    def start(self) -> None:
        self._paused = False
        asyncio.run(self._run_loop())

    def pause(self) -> None:
        if not self._running:
            LOGGER.info("Pause ignored: game not running")
            return
        self._paused = True

    def resume(self) -> None:
        if not self._running:
            LOGGER.info("Resume ignored: game not running")
            return
        self._paused = False

    def toggle_pause(self) -> None:
        if self._paused:
            self.resume()
        else:
            self.pause()

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main() -> None:  # pragma: no cover - manual execution only
    parser = argparse.ArgumentParser(description="Play with a pygame window.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (e.g. DEBUG, INFO).")
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    GameRunner(seed=args.seed).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
