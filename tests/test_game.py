import dataclasses
import random
import time

import pytest

from pongarena.game import Game
from pongarena.physics import Event
from pongarena.rules import rules_for


def _game(variant="dark", seed=7, **overrides):
    rules = rules_for(variant)
    if overrides:
        rules = dataclasses.replace(rules, **overrides)
    return Game(rules, random.Random(seed))


def _drain(game):
    seen = []
    while not game.events.empty():
        seen.append(game.events.get())
    return seen


def _play_until_over(game, limit=50000):
    for _ in range(limit):
        if game.snapshot().game_over:
            return
        game.tick_ball()
    raise AssertionError("the match never finished")


def _finished_game(variant="dark"):
    game = _game(variant, max_score=1, paddle_height=1)
    if variant == "arena":
        assert game.select_mode(True)
    for _ in range(200):
        game.move_left(-1)
    _play_until_over(game)
    return game


def test_dark_game_starts_in_play_at_level_one():
    game = _game("dark")
    state = game.snapshot()
    assert state.mode_selected is True
    assert state.level == 1
    assert (state.left_score, state.right_score) == (0, 0)
    assert state.ball_x == game.rules.screen_width // 2


def test_arena_game_waits_for_mode_selection():
    game = _game("arena")
    before = game.snapshot()
    assert before.mode_selected is False
    assert game.tick_ball() == []
    assert game.snapshot() == before


def test_snapshot_is_a_copy():
    game = _game()
    copy = game.snapshot()
    copy.left_score = 99
    assert game.snapshot().left_score == 0


def test_select_mode_only_once():
    game = _game("arena")
    assert game.select_mode(True) is True
    assert game.snapshot().two_players is True
    assert game.select_mode(False) is False
    assert game.snapshot().two_players is True


def test_select_mode_ignored_without_mode_screen():
    game = _game("dark")
    assert game.select_mode(True) is False
    assert game.snapshot().two_players is False


def test_toggle_pause_freezes_ball():
    game = _game()
    assert game.toggle_pause() is True
    paused = game.snapshot()
    assert paused.paused is True
    assert game.tick_ball() == []
    assert game.tick_ai() is False
    assert game.snapshot() == paused
    game.toggle_pause()
    assert game.snapshot().paused is False


def test_toggle_pause_ignored_on_mode_screen():
    game = _game("arena")
    assert game.toggle_pause() is False
    assert game.snapshot().paused is False


def test_cycle_level_wraps():
    game = _game()
    levels = []
    for _ in range(game.rules.levels):
        assert game.cycle_level() is True
        levels.append(game.snapshot().level)
    assert levels == [2, 3, 1]


def test_cycle_level_ignored_while_paused():
    game = _game()
    game.toggle_pause()
    assert game.cycle_level() is False
    assert game.snapshot().level == 1


def test_tick_ball_moves_by_velocity():
    game = _game()
    before = game.snapshot()
    game.tick_ball()
    after = game.snapshot()
    assert after.ball_x == pytest.approx(before.ball_x + before.ball_vx)
    assert after.ball_y == pytest.approx(before.ball_y + before.ball_vy)


def test_move_left_clamps_to_screen():
    game = _game()
    for _ in range(200):
        game.move_left(-1)
    assert game.snapshot().left_paddle_y == 0.0
    for _ in range(200):
        game.move_left(1)
    lowest = game.rules.screen_height - game.rules.paddle_height
    assert game.snapshot().left_paddle_y == lowest


def test_move_left_steps_by_paddle_speed():
    game = _game()
    start = game.snapshot().left_paddle_y
    assert game.move_left(1) is True
    assert game.snapshot().left_paddle_y == start + game.rules.paddle_speed


@pytest.mark.parametrize("direction", [0, 2, -3])
def test_move_rejects_bad_direction(direction):
    game = _game("arena")
    game.select_mode(True)
    with pytest.raises(ValueError):
        game.move_left(direction)
    with pytest.raises(ValueError):
        game.move_right(direction)


def test_move_right_needs_second_player():
    single = _game("dark")
    start = single.snapshot().right_paddle_y
    assert single.move_right(-1) is False
    assert single.snapshot().right_paddle_y == start

    double = _game("arena")
    double.select_mode(True)
    start = double.snapshot().right_paddle_y
    assert double.move_right(-1) is True
    assert double.snapshot().right_paddle_y == start - double.rules.paddle_speed


def test_tick_ai_only_in_single_player():
    single = _game("arena")
    single.select_mode(False)
    assert single.tick_ai() is True

    double = _game("arena")
    double.select_mode(True)
    assert double.tick_ai() is False


def test_ai_keeps_paddle_on_screen():
    game = _game("dark")
    lowest = game.rules.screen_height - game.rules.paddle_height
    for _ in range(500):
        game.tick_ai()
        game.tick_ball()
        y = game.snapshot().right_paddle_y
        assert 0.0 <= y <= lowest


def test_match_ends_and_events_are_queued():
    game = _finished_game()
    state = game.snapshot()
    assert state.game_over is True
    assert max(state.left_score, state.right_score) == game.rules.max_score
    seen = _drain(game)
    assert Event.SCORE in seen
    assert seen[-1] is Event.GAME_OVER


def test_restart_only_after_game_over():
    game = _game()
    assert game.restart() is False
    finished = _finished_game()
    assert finished.restart() is True
    state = finished.snapshot()
    assert state.game_over is False
    assert (state.left_score, state.right_score) == (0, 0)
    assert state.ball_x == finished.rules.screen_width // 2
    assert state.ball_y == finished.rules.screen_height // 2


def test_restart_keeps_level():
    game = _game(max_score=1, paddle_height=1)
    game.cycle_level()
    for _ in range(200):
        game.move_left(-1)
    _play_until_over(game)
    game.restart()
    assert game.snapshot().level == 2


def test_return_to_mode_select_after_game_over():
    game = _finished_game("arena")
    assert game.return_to_mode_select() is True
    state = game.snapshot()
    centred = (game.rules.screen_height - game.rules.paddle_height) // 2
    assert state.mode_selected is False
    assert state.game_over is False
    assert state.left_paddle_y == centred
    assert state.right_paddle_y == centred
    assert (state.left_score, state.right_score) == (0, 0)


def test_return_to_mode_select_needs_mode_screen():
    game = _finished_game("dark")
    assert game.return_to_mode_select() is False
    assert game.snapshot().game_over is True


def test_return_to_mode_select_ignored_during_play():
    game = _game("arena")
    game.select_mode(False)
    assert game.return_to_mode_select() is False
    assert game.snapshot().mode_selected is True


def test_threads_move_the_ball():
    game = _game()
    before = game.snapshot()
    with game:
        time.sleep(0.2)
    assert game.snapshot() != before


def test_stopped_game_stays_still():
    game = _game()
    with game:
        time.sleep(0.05)
    frozen = game.snapshot()
    time.sleep(0.1)
    assert game.snapshot() == frozen


def test_start_twice_raises():
    game = _game()
    game.start()
    try:
        with pytest.raises(RuntimeError):
            game.start()
    finally:
        game.stop()
    game.stop()
    assert game.snapshot().level == 1


def test_paused_threads_do_not_move_ball():
    game = _game()
    game.toggle_pause()
    before = game.snapshot()
    with game:
        time.sleep(0.1)
    assert game.snapshot() == before