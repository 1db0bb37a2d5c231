"""7-bag piece randomizer.

Every bag is a permutation of the seven piece indices, so each kind appears
exactly once per bag.  On top of that:

* the very first piece of a game is never an S or a Z;
* at a bag boundary up to four redraws try to avoid repeating the previous
  piece and the S/Z "snake" pairs.  If all four redraws fail the last draw is
  kept, so sequences such as ``...sz|tzs...`` remain possible.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Optional, Protocol

from .tetromino import TetrominoType


BAG_SIZE = len(TetrominoType)
# Indices 0..4 are T, J, L, O and I.
OPENING_CHOICES = 5
# Z (5) + S (6): the two snake pieces.
SNAKE_PAIR_SUM = 11
BOUNDARY_RETRIES = 4


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class BagRandomizer:
    """Generate piece indices into :class:`~srs_tetris.tetromino.TetrominoType`."""

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[RandomSource] = None) -> None:
        self._random: RandomSource = rng if rng is not None else random.Random(seed)
        self.bag: Deque[int] = deque()
        self.last: Optional[int] = None

    def next(self) -> int:
        """Pop and return the next piece index, refilling the bag if needed."""

        if not self.bag:
            self._fill_bag()
        return self.bag.popleft()

    def _draw(self) -> int:
        return self._random.randrange(BAG_SIZE)

    def _choose_first(self) -> int:
        choice = self._draw()
        if self.last is None:
            while choice >= OPENING_CHOICES:
                choice = self._draw()
            return choice

        tries = BOUNDARY_RETRIES
        while tries > 0 and (choice == self.last or choice + self.last == SNAKE_PAIR_SUM):
            choice = self._draw()
            tries -= 1
        return choice

    def _fill_bag(self) -> None:
        self.bag.append(self._choose_first())
        while len(self.bag) < BAG_SIZE:
            choice = self._draw()
            if choice not in self.bag:
                self.bag.append(choice)
        self.last = self.bag[-1]
