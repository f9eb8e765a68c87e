# pongarena

A Pong game for the desktop. The ball and the computer opponent each run on
their own thread. The window is drawn with pygame.

There are three rule sets:

- **light**: an 800×600 table. The level changes the background colour and
  how well the computer opponent plays.
- **dark**: the same table with a faster ball. Each level is much harder
  than the one before it. Paddles, ball and trail change colour with the
  level, and the trail gets longer.
- **arena**: a 1280×800 table. It opens on a menu where you choose a
  single-player game or a two-player game. This is the default.

## Installing

```
pip install .
```

## Playing

```
pongarena
```

To pick a rule set:

```
pongarena --variant light
pongarena --variant dark
pongarena --variant arena
```

Run `pongarena --help` to list the options.

### Controls

| Key          | Action                                                  |
|--------------|---------------------------------------------------------|
| `W` / `S`    | Move the left paddle up / down                          |
| `↑` / `↓`    | Move the right paddle (arena, two-player game only)     |
| `P`          | Pause or resume                                         |
| `L`          | Go to the next level (1 → 2 → 3 → 1) while playing      |
| `R`          | Start a new game at the same level once one is over     |
| `M`          | Go back to the menu once a game is over (arena only)    |
| `1` / `2`    | Single-player or two-player game (arena menu)           |
| `Esc`        | Close the window                                        |

The first side to reach 10 points wins.

### Sound

No sound files come with the package. The game looks in a `resources`
directory under the current working directory for `wall_hit.wav`,
`paddle_hit.wav` and `score.wav`. Files that are missing are skipped, and if
no audio device can be opened the game plays without sound.

## Using it as a library

The rules and the physics are plain Python and need no window:

```python
import random

from pongarena.rules import Variant, rules_for
from pongarena.physics import new_state, step_ai, step_ball

rules = rules_for(Variant.DARK)
rng = random.Random(1)
state = new_state(rules, rng)
events = step_ball(state, rules, rng)   # list of Event, e.g. Event.WALL_HIT
step_ai(state, rules, rng)              # moves the computer paddle
```

`rules_for` takes a `Variant` or its name (`"light"`, `"dark"`, `"arena"`)
and raises `ValueError` for any other name. `pongarena.physics` also has
`serve_velocity`, `restart_velocity`, `predict_intercept` and `ai_delay`.

`pongarena.game.Game` keeps the state behind a lock and runs the ball and
opponent threads. Use it as a context manager; the threads stop on exit:

```python
from pongarena.game import Game

rules = rules_for(Variant.ARENA)
with Game(rules, rng) as game:
    game.select_mode(two_players=False)
    game.move_left(-1)
    snapshot = game.snapshot()
```

Each input method (`select_mode`, `toggle_pause`, `cycle_level`, `restart`,
`return_to_mode_select`, `move_left`, `move_right`) returns whether it had
any effect. Events produced by the ball are also put on `game.events`.

`pongarena.render` draws onto a pygame surface (`draw_game`,
`draw_mode_selection`) and has helpers that need no surface: `palette_for`,
`winner_text`, `help_lines` and `trail`.

## Running the tests

```
pip install .[test]
pytest
```