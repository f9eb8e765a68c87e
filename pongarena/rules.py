"""Game variants and the tuning numbers that set them apart."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Variant(str, Enum):
    """The three flavours of the game."""

    LIGHT = "light"
    DARK = "dark"
    ARENA = "arena"


@dataclass(frozen=True)
class Rules:
    """Every constant and per-level coefficient one variant plays by.

    Level-dependent quantities are linear in the level and are stored as a
    ``*_base`` and a ``*_step`` so that the value at level ``n`` is
    ``base + step * n``.
    """

    variant: Variant
    title: str
    screen_width: int
    screen_height: int
    initial_ball_speed: float
    max_ball_speed: float

    paddle_width: int = 20
    paddle_height: int = 100
    ball_radius: int = 10
    paddle_speed: float = 7.0
    max_score: int = 10
    levels: int = 3
    tick_interval: float = 0.016

    # Mode selection screen and second human player.
    has_mode_select: bool = False

    # Ball leaving a paddle.
    bounce_angle_span: float = 1.5
    bounce_boost: float = 1.05
    bounce_level_bonus: float = 0.0
    bounce_clamped: bool = False
    bounce_floor_step: float = 0.2

    # Serve after a point: horizontal speed factor is base + step * level.
    point_serve_base: float = 1.0
    point_serve_step: float = 0.2
    point_serve_vertical_scaled: bool = False

    # Serve on restart; the opening serve uses the same factor at level 0.
    restart_base: float = 1.0
    restart_step: float = 0.0
    restart_vertical: float = 0.8
    opening_vertical: float | None = None

    # Random vertical share of a serve: min + randint(0, spread) / 100.
    serve_vertical_min: float = 0.6
    serve_vertical_spread: int = 40

    # Computer-controlled right paddle.
    ai_difficulty_base: float = 0.5
    ai_difficulty_step: float = 0.1
    ai_multi_bounce: bool = False
    ai_error_scales_with_difficulty: bool = True
    ai_error_base: float = 4.0
    ai_error_step: float = 25.0
    ai_speed_base: float = 1.0
    ai_speed_step: float = 0.0
    ai_dead_zone: float = 10.0
    ai_center_zone: float = 20.0
    ai_return_factor: float = 0.5
    ai_delay_base: float = 0.08
    ai_delay_step: float = 0.01

    # Ball trail drawn behind the ball.
    trail_length_base: int = 5
    trail_length_step: int = 0
    trail_alpha_start: float = 0.2
    trail_alpha_step: float = 0.04
    trail_shrink: float = 1.0
    level_text_size: int = 20

    def __post_init__(self) -> None:
        if self.screen_width <= 2 * self.paddle_width:
            raise ValueError("screen is too narrow for two paddles")
        if self.screen_height <= self.paddle_height:
            raise ValueError("screen is lower than a paddle")
        if self.paddle_width <= 0 or self.paddle_height <= 0:
            raise ValueError("paddle dimensions must be positive")
        if self.ball_radius <= 0:
            raise ValueError("ball radius must be positive")
        if self.max_score < 1:
            raise ValueError("max score must be at least 1")
        if self.levels < 1:
            raise ValueError("there must be at least one level")
        if self.initial_ball_speed <= 0 or self.max_ball_speed <= 0:
            raise ValueError("ball speeds must be positive")
        if self.tick_interval <= 0:
            raise ValueError("tick interval must be positive")


_LIGHT = Rules(
    variant=Variant.LIGHT,
    title="Pong - Multithreaded",
    screen_width=800,
    screen_height=600,
    initial_ball_speed=5.0,
    max_ball_speed=12.0,
)

_DARK = Rules(
    variant=Variant.DARK,
    title="Pong - Multithreaded",
    screen_width=800,
    screen_height=600,
    initial_ball_speed=7.5,
    max_ball_speed=15.0,
    bounce_boost=1.1,
    bounce_level_bonus=0.3,
    point_serve_base=0.5,
    point_serve_step=0.5,
    point_serve_vertical_scaled=True,
    restart_base=0.5,
    restart_step=0.5,
    ai_difficulty_base=0.4,
    ai_difficulty_step=0.25,
    ai_multi_bounce=True,
    ai_error_scales_with_difficulty=False,
    ai_speed_base=0.8,
    ai_speed_step=0.2,
    ai_delay_base=0.08,
    ai_delay_step=0.025,
    trail_length_base=3,
    trail_length_step=2,
    trail_alpha_start=0.3,
    trail_alpha_step=0.03,
    trail_shrink=0.5,
    level_text_size=24,
)

_ARENA = Rules(
    variant=Variant.ARENA,
    title="PING PONG",
    screen_width=1280,
    screen_height=800,
    initial_ball_speed=7.5,
    max_ball_speed=15.0,
    has_mode_select=True,
    bounce_angle_span=math.pi / 3,
    bounce_boost=1.05,
    bounce_clamped=True,
    bounce_floor_step=0.2,
    point_serve_base=0.5,
    point_serve_step=0.5,
    point_serve_vertical_scaled=True,
    restart_base=1.0,
    restart_step=0.2,
    restart_vertical=0.5,
    opening_vertical=0.5,
    ai_difficulty_base=0.4,
    ai_difficulty_step=0.25,
    ai_multi_bounce=True,
    ai_error_scales_with_difficulty=False,
    ai_speed_base=0.8,
    ai_speed_step=0.2,
    ai_delay_base=0.08,
    ai_delay_step=0.025,
    trail_length_base=3,
    trail_length_step=2,
    trail_alpha_start=0.3,
    trail_alpha_step=0.03,
    trail_shrink=0.5,
    level_text_size=24,
)

_ALL = {rules.variant: rules for rules in (_LIGHT, _DARK, _ARENA)}


def rules_for(variant: Variant | str) -> Rules:
    """Return the rules of a variant, given as a Variant or its name."""
    try:
        key = Variant(variant)
    except ValueError:
        raise ValueError(f"unknown variant: {variant!r}") from None
    return _ALL[key]