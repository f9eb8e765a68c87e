"""Ball movement, scoring and the computer opponent, as pure state updates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from pongarena.rules import Rules


class _RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class Event(str, Enum):
    """Something that happened during one ball step."""

    WALL_HIT = "wall_hit"
    PADDLE_HIT = "paddle_hit"
    SCORE = "score"
    GAME_OVER = "game_over"

    @property
    def sound(self) -> str | None:
        """Name of the sound file played for this event, if any."""
        if self is Event.GAME_OVER:
            return None
        return f"{self.value}.wav"


@dataclass
class GameState:
    """Everything that changes while a match is played."""

    left_paddle_y: float
    right_paddle_y: float
    ball_x: float
    ball_y: float
    ball_vx: float
    ball_vy: float
    left_score: int = 0
    right_score: int = 0
    game_over: bool = False
    paused: bool = False
    level: int = 1
    two_players: bool = False
    mode_selected: bool = True

    @property
    def running(self) -> bool:
        """True while the ball and the opponent should move."""
        return self.mode_selected and not (self.game_over or self.paused)


def _check_level(rules: Rules, level: int) -> None:
    if not 1 <= level <= rules.levels:
        raise ValueError(f"level must be between 1 and {rules.levels}, got {level}")


def _sign(rng: _RandomSource) -> int:
    return 1 if rng.randint(0, 1) else -1


def _vertical_share(rules: Rules, rng: _RandomSource) -> float:
    return rules.serve_vertical_min + rng.randint(0, rules.serve_vertical_spread) / 100.0


def _opening_velocity(rules: Rules, rng: _RandomSource) -> tuple[float, float]:
    factor = rules.restart_base
    speed = rules.initial_ball_speed * factor
    vx = speed * _sign(rng)
    vertical_sign = _sign(rng)
    if rules.opening_vertical is None:
        vy = speed * vertical_sign * _vertical_share(rules, rng)
    else:
        vy = speed * rules.opening_vertical * vertical_sign
    return vx, vy


def new_state(rules: Rules, rng: _RandomSource) -> GameState:
    """Build the state of a fresh match: centred paddles and ball, level 1."""
    paddle_y = float((rules.screen_height - rules.paddle_height) // 2)
    vx, vy = _opening_velocity(rules, rng)
    return GameState(
        left_paddle_y=paddle_y,
        right_paddle_y=paddle_y,
        ball_x=float(rules.screen_width // 2),
        ball_y=float(rules.screen_height // 2),
        ball_vx=vx,
        ball_vy=vy,
        level=1,
        two_players=False,
        mode_selected=not rules.has_mode_select,
    )


def serve_velocity(
    rules: Rules, level: int, direction: int, rng: _RandomSource
) -> tuple[float, float]:
    """Velocity of the ball served after a point; direction is +1 or -1."""
    if direction not in (1, -1):
        raise ValueError(f"direction must be 1 or -1, got {direction}")
    _check_level(rules, level)
    factor = rules.point_serve_base + rules.point_serve_step * level
    vx = direction * rules.initial_ball_speed * factor
    vy = rules.initial_ball_speed * _sign(rng) * _vertical_share(rules, rng)
    if rules.point_serve_vertical_scaled:
        vy *= factor
    return vx, vy


def restart_velocity(
    rules: Rules, level: int, rng: _RandomSource
) -> tuple[float, float]:
    """Velocity of the ball when a finished match is restarted."""
    _check_level(rules, level)
    factor = rules.restart_base + rules.restart_step * level
    speed = rules.initial_ball_speed * factor
    vx = speed * _sign(rng)
    vy = speed * rules.restart_vertical * _sign(rng)
    return vx, vy


def _bounce(state: GameState, rules: Rules, paddle_y: float, direction: int) -> None:
    hit = (state.ball_y - paddle_y) / rules.paddle_height
    angle = (hit - 0.5) * rules.bounce_angle_span
    speed = math.hypot(state.ball_vx, state.ball_vy)
    if rules.bounce_clamped:
        floor = rules.initial_ball_speed * (1.0 + state.level * rules.bounce_floor_step)
        speed = min(max(speed, floor) * rules.bounce_boost, rules.max_ball_speed)
    else:
        if speed < rules.max_ball_speed:
            speed *= rules.bounce_boost
        speed *= 1.0 + (state.level - 1) * rules.bounce_level_bonus
    state.ball_vx = direction * abs(speed * math.cos(angle))
    state.ball_vy = speed * math.sin(angle)


def _recentre_ball(state: GameState, rules: Rules) -> None:
    state.ball_x = float(rules.screen_width // 2)
    state.ball_y = float(rules.screen_height // 2)


def step_ball(state: GameState, rules: Rules, rng: _RandomSource) -> list[Event]:
    """Advance the ball by one tick and return what happened, in order."""
    if not state.running:
        return []

    events: list[Event] = []
    width, height = rules.screen_width, rules.screen_height
    radius = rules.ball_radius

    state.ball_x += state.ball_vx
    state.ball_y += state.ball_vy

    if state.ball_y <= 0 or state.ball_y >= height:
        state.ball_vy = -state.ball_vy
        events.append(Event.WALL_HIT)
        state.ball_y = min(max(state.ball_y, 0.0), float(height))

    if (
        state.ball_x - radius <= rules.paddle_width
        and state.left_paddle_y <= state.ball_y <= state.left_paddle_y + rules.paddle_height
    ):
        _bounce(state, rules, state.left_paddle_y, 1)
        state.ball_x = float(rules.paddle_width + radius + 1)
        events.append(Event.PADDLE_HIT)

    if (
        state.ball_x + radius >= width - rules.paddle_width
        and state.right_paddle_y <= state.ball_y <= state.right_paddle_y + rules.paddle_height
    ):
        _bounce(state, rules, state.right_paddle_y, -1)
        state.ball_x = float(width - rules.paddle_width - radius - 1)
        events.append(Event.PADDLE_HIT)

    if state.ball_x < 0:
        state.right_score += 1
        events.append(Event.SCORE)
        _recentre_ball(state, rules)
        state.ball_vx, state.ball_vy = serve_velocity(rules, state.level, 1, rng)
        if state.right_score >= rules.max_score:
            state.game_over = True
            events.append(Event.GAME_OVER)

    if state.ball_x > width:
        state.left_score += 1
        events.append(Event.SCORE)
        _recentre_ball(state, rules)
        state.ball_vx, state.ball_vy = serve_velocity(rules, state.level, -1, rng)
        if state.left_score >= rules.max_score:
            state.game_over = True
            events.append(Event.GAME_OVER)

    return events


def predict_intercept(state: GameState, rules: Rules) -> float:
    """Height at which the ball will reach the right paddle's face."""
    if state.ball_vx <= 0:
        raise ValueError("the ball is not moving towards the right paddle")
    height = rules.screen_height
    time_to_reach = (rules.screen_width - rules.paddle_width - state.ball_x) / state.ball_vx
    predicted = state.ball_y + state.ball_vy * time_to_reach
    if not math.isfinite(predicted):
        raise ValueError("the ball's path cannot be predicted")
    if rules.ai_multi_bounce:
        folded = predicted % (2 * height)
        return folded if folded <= height else 2 * height - folded
    if predicted < 0:
        predicted = -predicted
    if predicted > height:
        predicted = 2 * height - predicted
    return predicted


def step_ai(state: GameState, rules: Rules, rng: _RandomSource) -> bool:
    """Move the computer paddle by one tick; return whether it was in control."""
    if state.two_players or not state.running:
        return False

    level = state.level
    difficulty = rules.ai_difficulty_base + rules.ai_difficulty_step * level
    paddle_centre = state.right_paddle_y + rules.paddle_height // 2

    if state.ball_vx > 0:
        target = state.ball_y
        if level > 1:
            predicted = predict_intercept(state, rules)
            target = predicted * difficulty + state.ball_y * (1 - difficulty)
        if rules.ai_error_scales_with_difficulty:
            error_range = (1.0 - difficulty) * rules.paddle_height
        else:
            error_range = (rules.ai_error_base - level) * rules.ai_error_step
        target += (rng.randint(-100, 100) / 100.0) * error_range

        ai_speed = rules.paddle_speed * (rules.ai_speed_base + rules.ai_speed_step * level)
        if target < paddle_centre - rules.ai_dead_zone:
            state.right_paddle_y -= ai_speed * difficulty
        elif target > paddle_centre + rules.ai_dead_zone:
            state.right_paddle_y += ai_speed * difficulty
    else:
        screen_centre = rules.screen_height // 2
        drift = rules.paddle_speed * rules.ai_return_factor
        if paddle_centre < screen_centre - rules.ai_center_zone:
            state.right_paddle_y += drift
        elif paddle_centre > screen_centre + rules.ai_center_zone:
            state.right_paddle_y -= drift

    lowest = float(rules.screen_height - rules.paddle_height)
    state.right_paddle_y = min(max(state.right_paddle_y, 0.0), lowest)
    return True


def ai_delay(rules: Rules, level: int) -> float:
    """Extra reaction pause, in seconds, the opponent takes after each move."""
    _check_level(rules, level)
    return max(0.0, rules.ai_delay_base - rules.ai_delay_step * level)