"""Window, input handling and the main loop."""

from __future__ import annotations

import argparse
import queue
from pathlib import Path

import pygame

from pongarena.game import Game
from pongarena.physics import Event
from pongarena.render import draw_game, draw_mode_selection
from pongarena.rules import Rules, Variant, rules_for

FRAMES_PER_SECOND = 60
RESOURCES = Path("resources")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line."""
    parser = argparse.ArgumentParser(prog="pongarena", description="Play pong against the computer or a friend.")
    parser.add_argument(
        "--variant",
        choices=[variant.value for variant in Variant],
        default=Variant.ARENA.value,
        help="which flavour of the game to play (default: %(default)s)",
    )
    return parser.parse_args(argv)


def _load_sounds() -> dict[Event, pygame.mixer.Sound]:
    if pygame.mixer.get_init() is None:
        try:
            pygame.mixer.init()
        except pygame.error:
            return {}
    sounds = {}
    for event in Event:
        if event.sound is None:
            continue
        path = RESOURCES / event.sound
        if not path.is_file():
            continue
        try:
            sounds[event] = pygame.mixer.Sound(str(path))
        except pygame.error:
            continue
    return sounds


def _play_events(game: Game, sounds: dict[Event, pygame.mixer.Sound]) -> None:
    while True:
        try:
            event = game.events.get_nowait()
        except queue.Empty:
            return
        sound = sounds.get(event)
        if sound is not None:
            sound.play()


def _handle_key(game: Game, rules: Rules, key: int) -> None:
    if rules.has_mode_select and not game.snapshot().mode_selected:
        if key == pygame.K_1:
            game.select_mode(False)
        elif key == pygame.K_2:
            game.select_mode(True)
        return
    if key == pygame.K_p:
        game.toggle_pause()
    elif key == pygame.K_l:
        game.cycle_level()
    elif key == pygame.K_r:
        game.restart()
    elif key == pygame.K_m:
        game.return_to_mode_select()


def _handle_input(game: Game, rules: Rules) -> bool:
    """Process pending input; return False once the window should close."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            _handle_key(game, rules, event.key)

    held = pygame.key.get_pressed()
    if held[pygame.K_w]:
        game.move_left(-1)
    if held[pygame.K_s]:
        game.move_left(1)
    if held[pygame.K_UP]:
        game.move_right(-1)
    if held[pygame.K_DOWN]:
        game.move_right(1)
    return True


def run(rules: Rules) -> int:
    """Open the window and play until it is closed; return the exit status."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((rules.screen_width, rules.screen_height))
        pygame.display.set_caption(rules.title)
        sounds = _load_sounds()
        clock = pygame.time.Clock()
        with Game(rules) as game:
            while _handle_input(game, rules):
                _play_events(game, sounds)
                state = game.snapshot()
                if state.mode_selected:
                    draw_game(screen, state, rules)
                else:
                    draw_mode_selection(screen, rules)
                pygame.display.flip()
                clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point of the pongarena command."""
    args = parse_args(argv)
    return run(rules_for(args.variant))


if __name__ == "__main__":
    raise SystemExit(main())