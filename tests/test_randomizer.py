from __future__ import annotations

import pytest

from srs_tetris.randomizer import BAG_SIZE, BagRandomizer
from srs_tetris.tetromino import TetrominoType


S_INDEX = list(TetrominoType).index(TetrominoType.S)
Z_INDEX = list(TetrominoType).index(TetrominoType.Z)


class ScriptedRandom:
    """Random source returning a fixed sequence of draws."""

    def __init__(self, draws):
        self._draws = iter(draws)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        self.calls += 1
        value = next(self._draws)
        assert 0 <= value < stop
        return value


@pytest.mark.parametrize("seed", range(25))
def test_every_bag_is_a_permutation(seed):
    rng = BagRandomizer(seed)
    for _ in range(6):
        bag = [rng.next() for _ in range(BAG_SIZE)]
        assert sorted(bag) == list(range(BAG_SIZE))


@pytest.mark.parametrize("seed", range(200))
def test_first_piece_is_never_s_or_z(seed):
    assert BagRandomizer(seed).next() not in (S_INDEX, Z_INDEX)


def test_same_seed_same_sequence():
    a = BagRandomizer(7)
    b = BagRandomizer(7)
    assert [a.next() for _ in range(21)] == [b.next() for _ in range(21)]


def test_opening_draw_rejects_snake_pieces():
    source = ScriptedRandom([6, 5, 2, 0, 1, 3, 4, 5, 6])
    rng = BagRandomizer(rng=source)
    assert [rng.next() for _ in range(BAG_SIZE)] == [2, 0, 1, 3, 4, 5, 6]
    assert rng.last == 6


def test_fill_skips_indices_already_in_bag():
    source = ScriptedRandom([0, 0, 1, 1, 2, 3, 0, 4, 5, 6])
    rng = BagRandomizer(rng=source)
    assert [rng.next() for _ in range(BAG_SIZE)] == [0, 1, 2, 3, 4, 5, 6]
    assert source.calls == 10


def _randomizer_after_first_bag(last: int, boundary_draws):
    first_bag = [i for i in range(BAG_SIZE) if i != last][:BAG_SIZE - 1] + [last]
    remaining = list(range(BAG_SIZE))
    source = ScriptedRandom(first_bag + list(boundary_draws) + remaining)
    rng = BagRandomizer(rng=source)
    assert [rng.next() for _ in range(BAG_SIZE)] == first_bag
    return rng


def test_boundary_redraws_to_avoid_repeat():
    rng = _randomizer_after_first_bag(last=3, boundary_draws=[3, 1])
    assert rng.next() == 1


def test_boundary_redraws_to_avoid_snake_pair():
    rng = _randomizer_after_first_bag(last=Z_INDEX, boundary_draws=[S_INDEX, 0])
    assert rng.next() == 0


def test_boundary_constraint_gives_up_after_four_redraws():
    rng = _randomizer_after_first_bag(last=Z_INDEX, boundary_draws=[S_INDEX] * 5)
    second_bag = [rng.next() for _ in range(BAG_SIZE)]
    assert second_bag[0] == S_INDEX
    assert sorted(second_bag) == list(range(BAG_SIZE))
