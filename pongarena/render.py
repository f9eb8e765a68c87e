"""Drawing of the mode selection screen and of a match in progress."""

from __future__ import annotations

import math
from dataclasses import dataclass

import pygame

from pongarena.physics import GameState
from pongarena.rules import Rules, Variant

Color = tuple[int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)
GRAY: Color = (130, 130, 130)
GOLD: Color = (255, 203, 0)
YELLOW: Color = (253, 249, 0)
GREEN: Color = (0, 228, 48)
LIME: Color = (0, 158, 47)
RED: Color = (230, 41, 55)
SKYBLUE: Color = (102, 191, 255)
MAGENTA: Color = (255, 0, 255)
DARKBLUE: Color = (0, 82, 172)
DARKGREEN: Color = (0, 117, 44)
DARKPURPLE: Color = (112, 31, 126)

_MIDNIGHT: Color = (20, 20, 50)
_FOREST: Color = (20, 50, 20)
_PLUM: Color = (50, 20, 50)
_SALMON: Color = (255, 100, 100)

# Where a help line sits at the bottom of the screen.
LEFT_UPPER = "left_upper"
LEFT_LOWER = "left_lower"
RIGHT = "right"
CENTRE = "centre"

_HELP_ALPHA = 0.7
_FONTS: dict[int, pygame.font.Font] = {}


@dataclass(frozen=True)
class Palette:
    """Colours used to draw one level."""

    background: Color
    paddle: Color
    ball: Color
    level_text: Color


_LIGHT_BACKGROUNDS = {1: DARKBLUE, 2: DARKGREEN, 3: DARKPURPLE}
_DARK_BACKGROUNDS = {1: _MIDNIGHT, 2: _FOREST, 3: _PLUM}
_DARK_PADDLES = {1: WHITE, 2: LIME, 3: RED}
_DARK_BALLS = {1: WHITE, 2: YELLOW, 3: _SALMON}
_DARK_LEVEL_TEXT = {1: SKYBLUE, 2: GREEN, 3: MAGENTA}


def palette_for(rules: Rules, level: int) -> Palette:
    """Return the colours of a level under the given rules."""
    if not 1 <= level <= rules.levels:
        raise ValueError(f"level must be between 1 and {rules.levels}, got {level}")
    if rules.variant is Variant.LIGHT:
        return Palette(
            background=_LIGHT_BACKGROUNDS.get(level, BLACK),
            paddle=WHITE,
            ball=WHITE,
            level_text=GOLD,
        )
    return Palette(
        background=_DARK_BACKGROUNDS.get(level, BLACK),
        paddle=_DARK_PADDLES.get(level, WHITE),
        ball=_DARK_BALLS.get(level, WHITE),
        level_text=_DARK_LEVEL_TEXT.get(level, GOLD),
    )


def winner_text(state: GameState, rules: Rules) -> str:
    """Banner naming the winner of a finished match."""
    if not state.game_over:
        raise ValueError("the match is not over")
    left_won = state.left_score > state.right_score
    if rules.has_mode_select and state.two_players:
        return "PLAYER 1 WINS!" if left_won else "PLAYER 2 WINS!"
    return "PLAYER WINS!" if left_won else "CPU WINS!"


def help_lines(state: GameState, rules: Rules) -> list[tuple[str, str]]:
    """Control hints shown during play, each with the slot it is drawn in."""
    if state.game_over or state.paused:
        return []
    if not rules.has_mode_select:
        return [
            ("W/S - Move Paddle", LEFT_UPPER),
            ("P - Pause", LEFT_LOWER),
            ("L - Change Level", RIGHT),
        ]
    second = "UP/DOWN (Arrow Keys) - P2 Move" if state.two_players else "P - Pause"
    return [
        ("W/S - P1 Move", LEFT_UPPER),
        (second, LEFT_LOWER),
        ("L - Change Level", RIGHT),
        ("P - Pause", CENTRE),
    ]


def trail(state: GameState, rules: Rules) -> list[tuple[float, float, float, float]]:
    """Fading circles behind the ball as (x, y, radius, alpha), newest first."""
    length = rules.trail_length_base + rules.trail_length_step * state.level
    circles = []
    for i in range(length):
        alpha = rules.trail_alpha_start - i * rules.trail_alpha_step
        if alpha <= 0:
            continue
        x = state.ball_x - state.ball_vx * (i * 1.5)
        y = state.ball_y - state.ball_vy * (i * 1.5)
        radius = rules.ball_radius - i * rules.trail_shrink
        circles.append((x, y, radius, alpha))
    return circles


def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
        _FONTS.clear()
    font = _FONTS.get(size)
    if font is None:
        font = _FONTS[size] = pygame.font.Font(None, size)
    return font


def _measure(text: str, size: int) -> int:
    return _font(size).size(text)[0]


def _text(
    surface: pygame.Surface,
    text: str,
    position: tuple[float, float],
    size: int,
    color: Color,
    alpha: float = 1.0,
) -> None:
    image = _font(size).render(text, True, color)
    if alpha < 1.0:
        image.set_alpha(int(255 * alpha))
    surface.blit(image, (int(position[0]), int(position[1])))


def _centred_text(
    surface: pygame.Surface, text: str, y: float, size: int, color: Color
) -> None:
    x = surface.get_width() // 2 - _measure(text, size) // 2
    _text(surface, text, (x, y), size, color)


def _blend_rect(
    surface: pygame.Surface, rect: tuple[int, int, int, int], color: Color, alpha: float
) -> None:
    x, y, width, height = rect
    if width <= 0 or height <= 0:
        return
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill((*color, int(255 * alpha)))
    surface.blit(overlay, (x, y))


def _blend_circle(
    surface: pygame.Surface,
    centre: tuple[float, float],
    radius: float,
    color: Color,
    alpha: float,
) -> None:
    if radius <= 0:
        return
    size = math.ceil(2 * radius) + 2
    overlay = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(overlay, (*color, int(255 * alpha)), (size / 2, size / 2), radius)
    surface.blit(overlay, (int(centre[0] - size / 2), int(centre[1] - size / 2)))


def draw_mode_selection(surface: pygame.Surface, rules: Rules) -> None:
    """Draw the screen on which one or two players are chosen."""
    width, height = rules.screen_width, rules.screen_height
    surface.fill(_MIDNIGHT)
    _centred_text(surface, rules.title, 100, 40, WHITE)
    _blend_rect(surface, (width // 2 - 200, height // 2 - 60, 400, 60), WHITE, 0.3)
    _blend_rect(surface, (width // 2 - 200, height // 2 + 20, 400, 60), WHITE, 0.3)
    _centred_text(surface, "1 - SINGLE PLAYER", height // 2 - 45, 30, WHITE)
    _centred_text(surface, "2 - TWO PLAYER", height // 2 + 35, 30, WHITE)
    _centred_text(surface, "Press 1 or 2 to select game mode", height - 100, 20, GRAY)


def _draw_paddles(surface: pygame.Surface, state: GameState, rules: Rules, color: Color) -> None:
    pw, ph = rules.paddle_width, rules.paddle_height
    corner = int(0.3 * min(pw, ph) / 2)
    left = pygame.Rect(0, round(state.left_paddle_y), pw, ph)
    right = pygame.Rect(rules.screen_width - pw, round(state.right_paddle_y), pw, ph)
    pygame.draw.rect(surface, color, left, border_radius=corner)
    pygame.draw.rect(surface, color, right, border_radius=corner)
    if rules.has_mode_select:
        _text(surface, "P1", (10, state.left_paddle_y - 25), 20, WHITE)
        if state.two_players:
            _text(surface, "P2", (rules.screen_width - pw - 10, state.right_paddle_y - 25), 20, WHITE)
        else:
            _text(surface, "CPU", (rules.screen_width - pw - 35, state.right_paddle_y - 25), 20, WHITE)


def _draw_scores(surface: pygame.Surface, state: GameState, rules: Rules) -> None:
    width = rules.screen_width
    if rules.has_mode_select:
        _text(surface, "P1", (width // 4 - 50, 30), 30, WHITE)
        if state.two_players:
            _text(surface, "P2", (3 * width // 4 - 70, 30), 30, WHITE)
        else:
            _text(surface, "CPU", (3 * width // 4 - 90, 30), 30, WHITE)
    _text(surface, str(state.left_score), (width // 4, 30), 60, WHITE)
    _text(surface, str(state.right_score), (3 * width // 4 - 20, 30), 60, WHITE)


def _draw_level(surface: pygame.Surface, state: GameState, rules: Rules, color: Color) -> None:
    text = f"Level: {state.level}"
    size = rules.level_text_size
    text_width = _measure(text, size)
    centre = rules.screen_width // 2
    if rules.variant is not Variant.LIGHT:
        _blend_rect(surface, (centre - text_width // 2 - 10, 5, text_width + 20, 30), BLACK, 0.7)
    _text(surface, text, (centre - text_width // 2, 10), size, color)


def _draw_banners(surface: pygame.Surface, state: GameState, rules: Rules) -> None:
    width, middle = rules.screen_width, rules.screen_height // 2
    if state.game_over:
        if rules.has_mode_select:
            _blend_rect(surface, (0, middle - 70, width, 140), BLACK, 0.8)
            _centred_text(surface, "GAME OVER", middle - 60, 40, WHITE)
            _centred_text(surface, winner_text(state, rules), middle - 10, 30, YELLOW)
            _centred_text(surface, "Press R to Restart", middle + 30, 20, GREEN)
            _centred_text(surface, "Press M to Mode Select", middle + 60, 20, GREEN)
        else:
            _blend_rect(surface, (0, middle - 60, width, 120), BLACK, 0.8)
            _centred_text(surface, "GAME OVER", middle - 40, 40, WHITE)
            _centred_text(surface, winner_text(state, rules), middle, 30, YELLOW)
            _centred_text(surface, "Press R to Restart", middle + 40, 20, GREEN)
    elif state.paused:
        _blend_rect(surface, (0, middle - 60, width, 120), BLACK, 0.8)
        _centred_text(surface, "GAME PAUSED", middle - 40, 40, WHITE)
        _centred_text(surface, "Press P to Resume", middle + 20, 20, GREEN)


def _draw_help(surface: pygame.Surface, state: GameState, rules: Rules) -> None:
    width, height = rules.screen_width, rules.screen_height
    for text, slot in help_lines(state, rules):
        if slot == LEFT_UPPER:
            position = (10, height - 60)
        elif slot == LEFT_LOWER:
            position = (10, height - 30)
        elif slot == RIGHT:
            position = (width - _measure(text, 20) - 10, height - 30)
        else:
            position = (width // 2 - 40, height - 30)
        _text(surface, text, position, 20, WHITE, _HELP_ALPHA)


def draw_game(surface: pygame.Surface, state: GameState, rules: Rules) -> None:
    """Draw one frame of a match."""
    palette = palette_for(rules, state.level)
    surface.fill(palette.background)

    centre = rules.screen_width // 2
    for y in range(0, rules.screen_height, 20):
        _blend_rect(surface, (centre - 5, y, 10, 10), WHITE, 0.5)

    _draw_paddles(surface, state, rules, palette.paddle)

    for x, y, radius, alpha in trail(state, rules):
        _blend_circle(surface, (x, y), radius, palette.ball, alpha)
    pygame.draw.circle(surface, palette.ball, (state.ball_x, state.ball_y), rules.ball_radius)

    _draw_scores(surface, state, rules)
    _draw_level(surface, state, rules, palette.level_text)
    _draw_banners(surface, state, rules)
    _draw_help(surface, state, rules)