from __future__ import annotations

import logging
import types

import pytest

pygame = pytest.importorskip("pygame")

from srs_tetris.game_state import Command, GameStateMachine
from srs_tetris.run_pygame import GameRunner, command_for_key, draw_game, handle_key
from srs_tetris.tetromino import Vec2


def test_keys_map_to_commands():
    assert command_for_key(pygame.K_RIGHT) is Command.ROTATE_CW
    assert command_for_key(pygame.K_LEFT) is Command.ROTATE_CCW
    assert command_for_key(pygame.K_a) is Command.MOVE_LEFT
    assert command_for_key(pygame.K_d) is Command.MOVE_RIGHT
    assert command_for_key(pygame.K_s) is Command.SOFT_DROP
    assert command_for_key(pygame.K_w) is Command.HARD_DROP
    assert command_for_key(pygame.K_f) is Command.HOLD
    assert command_for_key(pygame.K_q) is None


def test_handle_key_forwards_to_game():
    game = GameStateMachine(seed=0)
    start = game.piece.position
    assert handle_key(types.SimpleNamespace(key=pygame.K_s), game) is True
    assert game.piece.position == start + Vec2(0, 1)
    assert handle_key(types.SimpleNamespace(key=pygame.K_q), game) is False


def test_draw_game_renders_offscreen():
    game = GameStateMachine(seed=0)
    game.hold()
    surface = pygame.Surface((640, 640))
    draw_game(surface, game)


def _key(key):
    return types.SimpleNamespace(type=pygame.KEYDOWN, key=key)


def _running_runner() -> GameRunner:
    runner = GameRunner(seed=0)
    runner._game = GameStateMachine(seed=0)
    runner._running = True
    return runner


def test_pause_key_toggles_pause_and_blocks_commands():
    runner = _running_runner()
    start = runner._game.piece.position

    runner.handle_event(_key(pygame.K_p))
    assert runner.paused
    runner.handle_event(_key(pygame.K_s))
    assert runner._game.piece.position == start

    runner.handle_event(_key(pygame.K_p))
    assert not runner.paused
    runner.handle_event(_key(pygame.K_s))
    assert runner._game.piece.position == start + Vec2(0, 1)


def test_quit_event_stops_runner():
    runner = _running_runner()
    runner.handle_event(types.SimpleNamespace(type=pygame.QUIT))
    assert not runner.running


def test_controls_ignored_when_not_running(caplog):
    runner = GameRunner(seed=0)
    with caplog.at_level(logging.INFO, logger="srs_tetris.run_pygame"):
        runner.pause()
        runner.toggle_pause()
        runner.resume()
        runner.stop()
    assert not runner.paused
    assert not runner.running
    assert "Pause ignored: game not running" in caplog.text
    assert "Resume ignored: game not running" in caplog.text
    assert "Stop ignored: game not running" in caplog.text
