import pygame
import pytest

from pongarena.physics import GameState
from pongarena.render import (
    CENTRE,
    LEFT_LOWER,
    Palette,
    draw_game,
    draw_mode_selection,
    help_lines,
    palette_for,
    trail,
    winner_text,
)
from pongarena.rules import rules_for


def _state(rules, **changes):
    values = dict(
        left_paddle_y=float((rules.screen_height - rules.paddle_height) // 2),
        right_paddle_y=float((rules.screen_height - rules.paddle_height) // 2),
        ball_x=float(rules.screen_width // 2),
        ball_y=float(rules.screen_height // 2),
        ball_vx=1.0,
        ball_vy=1.0,
    )
    values.update(changes)
    return GameState(**values)


def test_dark_palettes_follow_levels():
    rules = rules_for("dark")
    assert palette_for(rules, 1).background == (20, 20, 50)
    assert palette_for(rules, 2).background == (20, 50, 20)
    assert palette_for(rules, 3).ball == (255, 100, 100)


def test_light_palette_keeps_white_paddles():
    rules = rules_for("light")
    palettes = [palette_for(rules, level) for level in (1, 2, 3)]
    assert all(p.paddle == (255, 255, 255) and p.ball == (255, 255, 255) for p in palettes)
    assert len({p.background for p in palettes}) == 3


def test_palette_rejects_unknown_level():
    with pytest.raises(ValueError):
        palette_for(rules_for("arena"), 4)


def test_winner_text_single_player():
    rules = rules_for("dark")
    assert winner_text(_state(rules, left_score=10, right_score=3, game_over=True), rules) == "PLAYER WINS!"
    assert winner_text(_state(rules, left_score=2, right_score=10, game_over=True), rules) == "CPU WINS!"


def test_winner_text_two_players():
    rules = rules_for("arena")
    state = _state(rules, left_score=4, right_score=10, game_over=True, two_players=True)
    assert winner_text(state, rules) == "PLAYER 2 WINS!"


def test_winner_text_requires_finished_match():
    rules = rules_for("light")
    with pytest.raises(ValueError):
        winner_text(_state(rules), rules)


def test_help_lines_hidden_when_paused_or_over():
    rules = rules_for("arena")
    assert help_lines(_state(rules, paused=True), rules) == []
    assert help_lines(_state(rules, game_over=True), rules) == []


def test_help_lines_two_players_show_arrow_keys():
    rules = rules_for("arena")
    lines = help_lines(_state(rules, two_players=True), rules)
    assert ("UP/DOWN (Arrow Keys) - P2 Move", LEFT_LOWER) in lines
    assert ("P - Pause", CENTRE) in lines


def test_help_lines_light():
    rules = rules_for("light")
    texts = [text for text, _ in help_lines(_state(rules), rules)]
    assert texts == ["W/S - Move Paddle", "P - Pause", "L - Change Level"]


def test_trail_light_has_five_fading_circles():
    rules = rules_for("light")
    circles = trail(_state(rules, ball_vx=2.0, ball_vy=-1.0), rules)
    assert len(circles) == 5
    assert circles[0][:3] == (rules.screen_width // 2, rules.screen_height // 2, rules.ball_radius)
    alphas = [alpha for *_, alpha in circles]
    assert alphas == sorted(alphas, reverse=True)
    assert all(alpha > 0 for alpha in alphas)


def test_trail_grows_with_level_in_dark():
    rules = rules_for("dark")
    lengths = [len(trail(_state(rules, level=level), rules)) for level in (1, 2, 3)]
    assert lengths == [5, 7, 9]


def test_trail_points_lie_behind_ball():
    rules = rules_for("dark")
    state = _state(rules, ball_vx=3.0, ball_vy=0.0)
    xs = [x for x, *_ in trail(state, rules)]
    assert all(later < earlier for earlier, later in zip(xs, xs[1:]))


def test_draw_game_fills_background():
    rules = rules_for("arena")
    surface = pygame.Surface((rules.screen_width, rules.screen_height))
    state = _state(rules, level=2)
    draw_game(surface, state, rules)
    assert tuple(surface.get_at((100, 100)))[:3] == palette_for(rules, 2).background
    assert tuple(surface.get_at((rules.screen_width // 2, rules.screen_height // 2)))[:3] == palette_for(rules, 2).ball


def test_draw_game_over_darkens_banner():
    rules = rules_for("dark")
    surface = pygame.Surface((rules.screen_width, rules.screen_height))
    state = _state(rules, game_over=True, left_score=10)
    draw_game(surface, state, rules)
    background = palette_for(rules, 1).background
    banner = tuple(surface.get_at((100, rules.screen_height // 2 + 50)))[:3]
    assert sum(banner) < sum(background)


def test_draw_mode_selection_background():
    rules = rules_for("arena")
    surface = pygame.Surface((rules.screen_width, rules.screen_height))
    draw_mode_selection(surface, rules)
    assert tuple(surface.get_at((10, 10)))[:3] == (20, 20, 50)


def test_palette_is_frozen():
    palette = palette_for(rules_for("light"), 1)
    with pytest.raises(Exception):
        palette.background = (0, 0, 0)
    assert isinstance(palette, Palette) and palette.level_text == (255, 203, 0)