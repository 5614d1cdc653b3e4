# veggierun

A small top-down arcade game built on pygame. Walk your character up a
long tile map, crossing lanes of cars that drive left and right at random
speeds. Each hit costs a life; pick up burgers for an extra life and
drumsticks for bonus points. Step onto the goal tile to win.

## Installing

```
pip install .
```

The game needs `pygame`, which is installed with it.

## Playing

```
veggierun [--assets DIR]
```

`--assets` names the directory holding the game's assets (default: the
current directory). The command exits with status 1 and a message on
standard error if a required asset cannot be loaded.

The game looks for these paths inside the asset directory:

- `map/map01.dat` – the level: whitespace-separated tile numbers, 80 rows
  of 16 columns. Missing values count as blank tiles; if the file is
  absent the level is empty. Tile 4 is the goal, tiles 19 and 20 block
  movement.
- `map/<n>.png` – the image for tile number `n` (0–29); tiles without an
  image are not drawn.
- `player/player_idle.png`, `player_left.png`, `player_right.png`,
  `player_back.png`, `player_front.png` – sprite sheets of eight frames
  side by side; `player/heart.png` – the life indicator.
- `threats/car01_left.png` … `car03_left.png` and `car01_right.png` …
  `car03_right.png` – car sheets of eight frames.
- `data/Menu.png`, `how_to_play.png`, `Game_paused.png`, `GameOver.png`,
  `won.png` – screen backgrounds; `data/font.ttf` – the font;
  `data/mcdonald.png` and `data/drumstick.png` – the pick-ups.
- `music/game_theme.mp3`, `play_theme.mp3`, `lost_theme.mp3`,
  `won_theme.mp3` and `sfx/click.wav`, `hit.wav`, `buff.wav`, `move.wav`.

The best score is kept in `data/highscore.txt` inside the asset directory.

### Controls

| Key         | Action          |
|-------------|-----------------|
| W A S D     | Move            |
| Left Shift  | Run             |
| Esc         | Pause           |

Menus are driven with the mouse.

### Rules and scoring

- You start with 3 lives. Touching a car costs one life, followed by one
  second of invincibility.
- A burger gives one extra life; a drumstick adds 100 bonus points.
- When the lives run out, your score is the bonus you collected.
- When you win, the score is `1000 - 10 × seconds` (never below zero),
  plus your bonus, plus 100 for every life left.

## Using the pieces

The game logic can be used without opening a window:

```python
from veggierun.rules import check_collision, won_score, update_high_score
from veggierun.tilemap import parse_tiles

won_score(elapsed_seconds=30, bonus=200, lives=2)   # 1100

level = parse_tiles(open("map/map01.dat").read())
level.tile_at(0, 0)
```

- `veggierun.rules` – `check_collision`, `load_high_score`,
  `save_high_score`, `update_high_score`, `won_score` and
  `item_tile_positions`.
- `veggierun.tilemap` – `parse_tiles` and `GameMap` (`load_map`,
  `load_tiles`, `draw`).
- `veggierun.timer.Timer` – a pausable stopwatch (`start`, `stop`,
  `pause`, `unpause`, `elapsed`) that takes any clock callable returning
  milliseconds, so sessions can be driven by a fake clock.
- `veggierun.player.Player` and `veggierun.threats.Threat` – the moving
  objects; both take an injectable clock or random generator.
- `veggierun.menu` – `Button`, `Screen` and the concrete screens, with
  `Screen.process_events` returning a `ButtonAction` for a list of events.
- `veggierun.audio` – `Music` and `SoundEffect`, raising `AudioError` on
  failure.
- `veggierun.game.Game` – the whole game loop.

## What it does not do

There is a single level (`map/map01.dat`); the package has no level
editor or level selection, and keeps only one high score, not a table of
scores. No assets are shipped with the package.

## Running the tests

```
pip install .[test]
pytest
```