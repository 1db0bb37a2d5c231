"""Simple ASCII demo for the engine.

Run with: `python -m srs_tetris`

Plays a seeded game by hard-dropping each piece at a random column and
prints the final frame, which is a quick smoke test for the whole
simulation core.  Pass ``--help`` for options.
"""

from __future__ import annotations

import argparse
import logging
import random

from . import GameMode, GameStateMachine, render_grid
from .utils import DELETE_STEP


LOGGER = logging.getLogger(__name__)

# Long enough to finish any line-deletion animation step.
FRAME = DELETE_STEP


def play(game: GameStateMachine, pieces: int, rng: random.Random) -> None:
    """Drop ``pieces`` pieces, steering each one with random commands."""

    for _ in range(pieces):
        while not game.accepting_commands:
            game.advance(FRAME)
        for _ in range(rng.randrange(4)):
            game.rotate_cw()
        shift = rng.randrange(-5, 6)
        for _ in range(abs(shift)):
            if shift < 0:
                game.move_left()
            else:
                game.move_right()
        game.hard_drop()
        game.advance(0.0)
        if game.mode is GameMode.GAME_OVER:
            LOGGER.info("Topped out")
            break


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=0, help="Seed for pieces and moves.")
    parser.add_argument("--pieces", type=int, default=20, help="Number of pieces to drop.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    game = GameStateMachine(seed=args.seed)
    play(game, args.pieces, random.Random(args.seed))
    _print_grid(render_grid(game.board, game.piece))
    print(f"Score: {game.score}  Level: {game.level}  Mode: {game.mode.value}")


if __name__ == "__main__":
    main()
