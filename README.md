# duelgame

A small 2D duel game built on pygame. A fighter stands on a background and
reacts to the keyboard: it crawls left and right, punches, kicks, blocks and
casts an ice attack, each with its own sprite animation.

## Installing

```
pip install .
```

Tests need the `test` extra:

```
pip install .[test]
pytest
```

## Running

```
duelgame
duelgame --resources path/to/resources
```

The game opens a 1920x720 window titled "geam" and runs at up to 60 frames
a second until the window is closed. The resources directory (default
`resources`, relative to the working directory) holds:

- `assets/bg/bg2.png`: the background image, drawn at the top left; if it
  cannot be loaded the screen is left black
- `assets/sprites/blue_right`, `blue_left`, `red_right`, `red_left`: one PNG
  strip per animation, named after the animation (for example
  `Defensive_Stance.png`, `Crawl.png`, `Punch_1.png`, `Kick.png`,
  `Ise_Strice.png`, `Protect.png`), with frames 384 pixels wide laid out in a
  row

`gameData.data` in the resources directory is read at start and written when
the game exits. Log messages are echoed to the console and written to
`resources/../logs.txt`, which is cleared on the first message of a run.

## Controls

| Key          | Action                          |
|--------------|---------------------------------|
| A / D        | crawl left / right (100 px/s)   |
| Left Shift   | punch                           |
| Left Ctrl    | kick                            |
| Space        | ice attack                      |
| Left Alt     | block                           |

An action key pressed in a frame wins over movement. Punch, kick and the ice
attack cannot be interrupted until their animation ends; block can. When an
animation finishes the fighter returns to `Defensive_Stance`.

## What it does not do

Only one fighter, the blue one, is on screen and controlled. Actions carry
damage, stamina and mana costs and modifiers, but nothing applies them: there
is no opponent, no hit detection and no health change during play. The
gamepad is read into the input state but no action uses it. The profiler
keeps timings and averages but draws nothing.

## Using the pieces

The package also works as a library:

- `duelgame.game`: `Game` (`init`, `logic`, `close`), `GameData`,
  `key_for_event` (pygame key code to `Key`), `best_monitor` (index of the
  monitor a window overlaps most) and `main`
- `duelgame.inputs`: per-frame button state (`InputState`, `Input`, `Button`,
  `Key`, `Controller`, `ControllerButton`, `Stick`), with pressed, held,
  released and auto-repeat "typed" flags; `InputState.snapshot` builds the
  `Input` handed to the game each frame
- `duelgame.player`: `Player`, `Actions`, `Action`, `Sprite`,
  `PlayerRenderer`, `load_sprite` and `load_player_sprites`
- `duelgame.logs`: `LogManager`, `LogType`, `log`, `get_logs_manager`,
  `log_to_file` and `format_log`
- `duelgame.profiler`: `Profiler` and `Timer` for per-frame timing with a
  rolling 80-frame history and per-section averages (`Profiler.averages`)
- `duelgame.files`: `read_entire_file`, `read_entire_text`,
  `write_entire_file`, `append_to_file` and `get_file_size`
- `duelgame.text`: `split`, `strlcpy`, `find_char`, `to_lower` and `to_upper`
- `duelgame.tools`: byte-size helpers (`kb`, `mb`, `gb`, `tb`,
  `bytes_to_kb`, `bytes_to_mb`, `bytes_to_gb`), `perma_assert`, which raises
  `AssertionFailure`, and the `defer` context manager

```python
from duelgame.inputs import InputState, Key

state = InputState()
state.set_button_state(Key.SPACE, True)
state.update_all(1 / 60)
assert state.is_button_pressed(Key.SPACE)
```