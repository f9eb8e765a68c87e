"""A running match: shared state driven by a ball thread and an opponent thread."""

from __future__ import annotations

import dataclasses
import queue
import random
import threading
from typing import Any

from pongarena.physics import (
    Event,
    GameState,
    ai_delay,
    new_state,
    restart_velocity,
    step_ai,
    step_ball,
)
from pongarena.rules import Rules


class Game:
    """Holds the state of one match and the threads that move it.

    Every change goes through a lock, so input handling, the ball thread,
    the opponent thread and drawing may run concurrently. Events produced by
    the ball are also pushed onto :attr:`events` so a front end can play
    their sounds.
    """

    def __init__(self, rules: Rules, rng: random.Random | None = None) -> None:
        self.rules = rules
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.Lock()
        self._state = new_state(rules, self._rng)
        self._stop_event = threading.Event()
        self._threads: list[threading.Thread] = []
        self.events: queue.SimpleQueue[Event] = queue.SimpleQueue()

    # Thread management -------------------------------------------------

    def start(self) -> None:
        """Start the ball and opponent threads."""
        if self._threads:
            raise RuntimeError("the game is already running")
        self._stop_event.clear()
        self._threads = [
            threading.Thread(target=self._ball_loop, name="ball", daemon=True),
            threading.Thread(target=self._ai_loop, name="opponent", daemon=True),
        ]
        for thread in self._threads:
            thread.start()

    def stop(self) -> None:
        """Stop the threads and wait for them to finish; safe to call twice."""
        self._stop_event.set()
        for thread in self._threads:
            thread.join()
        self._threads = []

    def __enter__(self) -> Game:
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        self.stop()

    def _ball_loop(self) -> None:
        while not self._stop_event.wait(self.rules.tick_interval):
            self.tick_ball()

    def _ai_loop(self) -> None:
        while not self._stop_event.wait(self.rules.tick_interval):
            if self.tick_ai():
                with self._lock:
                    level = self._state.level
                self._stop_event.wait(ai_delay(self.rules, level))

    # Simulation steps --------------------------------------------------

    def tick_ball(self) -> list[Event]:
        """Advance the ball one step; return and queue what happened."""
        with self._lock:
            happened = step_ball(self._state, self.rules, self._rng)
        for event in happened:
            self.events.put(event)
        return happened

    def tick_ai(self) -> bool:
        """Move the computer paddle one step; return whether it moved under control."""
        with self._lock:
            return step_ai(self._state, self.rules, self._rng)

    # Player input ------------------------------------------------------

    def select_mode(self, two_players: bool) -> bool:
        """Choose one or two human players on the mode selection screen."""
        with self._lock:
            if self._state.mode_selected:
                return False
            self._state.two_players = bool(two_players)
            self._state.mode_selected = True
            return True

    def toggle_pause(self) -> bool:
        """Pause or resume play; ignored before a mode is chosen."""
        with self._lock:
            if not self._state.mode_selected:
                return False
            self._state.paused = not self._state.paused
            return True

    def cycle_level(self) -> bool:
        """Move to the next level, wrapping after the last one."""
        with self._lock:
            state = self._state
            if not state.running:
                return False
            state.level = state.level % self.rules.levels + 1
            return True

    def restart(self) -> bool:
        """Start a new match at the same level once the current one is over."""
        with self._lock:
            state = self._state
            if not (state.mode_selected and state.game_over):
                return False
            state.left_score = 0
            state.right_score = 0
            state.game_over = False
            state.ball_x = float(self.rules.screen_width // 2)
            state.ball_y = float(self.rules.screen_height // 2)
            state.ball_vx, state.ball_vy = restart_velocity(self.rules, state.level, self._rng)
            return True

    def return_to_mode_select(self) -> bool:
        """Go back to the mode selection screen after a finished match."""
        with self._lock:
            state = self._state
            if not (self.rules.has_mode_select and state.mode_selected and state.game_over):
                return False
            paddle_y = float((self.rules.screen_height - self.rules.paddle_height) // 2)
            state.mode_selected = False
            state.game_over = False
            state.left_score = 0
            state.right_score = 0
            state.left_paddle_y = paddle_y
            state.right_paddle_y = paddle_y
            state.ball_x = float(self.rules.screen_width // 2)
            state.ball_y = float(self.rules.screen_height // 2)
            return True

    def _move(self, attribute: str, direction: int) -> bool:
        if direction not in (1, -1):
            raise ValueError(f"direction must be 1 or -1, got {direction}")
        state = self._state
        lowest = float(self.rules.screen_height - self.rules.paddle_height)
        moved = getattr(state, attribute) + direction * self.rules.paddle_speed
        setattr(state, attribute, min(max(moved, 0.0), lowest))
        return True

    def move_left(self, direction: int) -> bool:
        """Move the left paddle up (-1) or down (+1) by one step."""
        with self._lock:
            if direction not in (1, -1):
                raise ValueError(f"direction must be 1 or -1, got {direction}")
            if not self._state.running:
                return False
            return self._move("left_paddle_y", direction)

    def move_right(self, direction: int) -> bool:
        """Move the right paddle when a second human player controls it."""
        with self._lock:
            if direction not in (1, -1):
                raise ValueError(f"direction must be 1 or -1, got {direction}")
            if not (self._state.two_players and self._state.running):
                return False
            return self._move("right_paddle_y", direction)

    def snapshot(self) -> GameState:
        """Return a consistent copy of the current state."""
        with self._lock:
            return dataclasses.replace(self._state)