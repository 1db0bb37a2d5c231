from __future__ import annotations

import pytest

from srs_tetris.board import Board
from srs_tetris.rotation import (
    I_KICKS,
    OTHER_KICKS,
    kick_offsets,
    next_rotation,
    occupancy_at,
    occupied_cells,
    resolve_rotation,
)
from srs_tetris.tetromino import SHAPES, Rotation, TetrominoType, Vec2


def _grid(shape, rotation):
    return [
        "".join("#" if occupancy_at(shape, x, y, rotation) else "." for x in range(shape.dim))
        for y in range(shape.dim)
    ]


def _rotate_grid_cw(rows):
    return ["".join(row[x] for row in reversed(rows)) for x in range(len(rows))]


def test_rotation_cycle():
    assert next_rotation(Rotation.SPAWN, True) is Rotation.RIGHT
    assert next_rotation(Rotation.RIGHT, True) is Rotation.TWO
    assert next_rotation(Rotation.TWO, True) is Rotation.LEFT
    assert next_rotation(Rotation.LEFT, True) is Rotation.SPAWN
    assert next_rotation(Rotation.SPAWN, False) is Rotation.LEFT
    assert next_rotation(Rotation.LEFT, False) is Rotation.TWO


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_each_state_is_a_clockwise_quarter_turn_of_the_previous(kind):
    shape = SHAPES[kind]
    state = Rotation.SPAWN
    grid = _grid(shape, state)
    for _ in range(4):
        new_state = next_rotation(state, True)
        assert _grid(shape, new_state) == _rotate_grid_cw(grid)
        state, grid = new_state, _grid(shape, new_state)
    assert state is Rotation.SPAWN
    assert grid == _grid(shape, Rotation.SPAWN)


def test_t_piece_states():
    t = SHAPES[TetrominoType.T]
    assert _grid(t, Rotation.SPAWN) == [".#.", "###", "..."]
    assert _grid(t, Rotation.RIGHT) == [".#.", ".##", ".#."]
    assert _grid(t, Rotation.TWO) == ["...", "###", ".#."]
    assert _grid(t, Rotation.LEFT) == [".#.", "##.", ".#."]


def test_occupied_cells_counts_four_blocks():
    for shape in SHAPES.values():
        for rotation in Rotation:
            assert len(occupied_cells(shape, rotation)) == 4


def test_kick_tables_have_five_offsets_starting_at_origin():
    for table in (I_KICKS, OTHER_KICKS):
        assert len(table) == 8
        for offsets in table.values():
            assert len(offsets) == 5
            assert offsets[0] == Vec2(0, 0)


def test_i_piece_uses_its_own_table():
    i_piece = SHAPES[TetrominoType.I]
    t_piece = SHAPES[TetrominoType.T]
    key = (Rotation.SPAWN, Rotation.RIGHT)
    assert kick_offsets(i_piece, *key) == I_KICKS[key]
    assert kick_offsets(t_piece, *key) == OTHER_KICKS[key]
    assert I_KICKS[key] != OTHER_KICKS[key]


def test_i_piece_rotates_in_open_space_without_kick():
    board = Board()
    i_piece = SHAPES[TetrominoType.I]
    position = Vec2(3, 5)
    result = resolve_rotation(board, i_piece, position, Rotation.SPAWN, Rotation.RIGHT)
    assert result == position


def test_wall_kick_moves_piece_off_left_wall():
    board = Board()
    t = SHAPES[TetrominoType.T]
    # In state R the T's left column is empty, so x == -1 is legal.
    position = Vec2(-1, 10)
    assert not board.collides(t, position, Rotation.RIGHT)
    assert board.collides(t, position, Rotation.TWO)

    result = resolve_rotation(board, t, position, Rotation.RIGHT, Rotation.TWO)
    assert result == Vec2(0, 10)


def test_rotation_rejected_when_every_kick_collides():
    board = Board()
    t = SHAPES[TetrominoType.T]
    position = Vec2(4, 10)
    for y in range(board.height):
        for x in range(board.width):
            board.set_cell(x, y, t.color)
    for dx, dy in occupied_cells(t, Rotation.SPAWN):
        board.clear_cell(position.x + dx, position.y + dy)

    assert not board.collides(t, position, Rotation.SPAWN)
    assert resolve_rotation(board, t, position, Rotation.SPAWN, Rotation.RIGHT) is None
    assert resolve_rotation(board, t, position, Rotation.SPAWN, Rotation.LEFT) is None
