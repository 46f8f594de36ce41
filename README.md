# peasantquest

A small tile-based puzzle game. You play a peasant who must pick up every
collectible on the map and then step onto an exit. Once everything has been
collected, the peasant is drawn as a magical princess and the exits appear.

## Installing

    pip install .

## Playing

    peasantquest maps/level.ber

The single argument is the path of a map file. Tile images are read as XPM
files from a `sets/` directory in the current working directory:

| File                  | Used for                          |
|-----------------------|-----------------------------------|
| `floor.xpm`           | floor, drawn under every tile     |
| `wall.xpm`            | walls                             |
| `collectible.xpm`     | collectibles                      |
| `player_peasant.xpm`  | the player before all are taken   |
| `player_mega.xpm`     | the player after all are taken    |
| `exit-tp.xpm`         | exits, shown once all are taken   |

Tiles are 64 by 64 pixels on screen; the window is sized to the map.

Controls:

- `W`, `A`, `S`, `D` move up, left, down and right
- `Esc` or closing the window quits

Walls block movement. Every step taken prints the running step count to
standard output. Stepping onto an exit after every collectible has been picked
up ends the game.

If the command is not given exactly one argument, it prints
`Error : wrong number of arguments`. An unreadable or empty map file prints
`Error 1: bad map path`, and an invalid map prints `Error : ` followed by the
reason. In these cases the game does not start. If a tile image cannot be read,
the error is printed and the command exits with status 1.

## Map format

A map is a plain-text file, conventionally with the `.ber` extension, one row
per line. Empty lines are ignored.

| Character | Meaning     |
|-----------|-------------|
| `0`       | floor       |
| `1`       | wall        |
| `C`       | collectible |
| `E`       | exit        |
| `P`       | player      |

A valid map:

- holds only the characters above,
- has exactly one `P`, at least one `E` and at least one `C`,
- is rectangular,
- is closed by walls on every side.

The check on the file name is lenient: only names shorter than five
characters are examined, and such a name is rejected only when none of its
last three characters matches `.ber`.

Example:

    1111111
    1P0C0E1
    1111111

## Library use

The pieces can also be used on their own:

- `peasantquest.mapfile`: `read_map(path)` reads a map file into text
  (raising `MapReadError`), `split_rows(text)` splits it into non-empty rows,
  and `iter_lines(stream)` yields the lines of a text or binary stream.
- `peasantquest.parsing`: `validate_map(path, rows)` runs every check and
  returns a `MapInfo` (width, height and element counts), or raises
  `MapError`. The single checks `check_name`, `check_elements`,
  `count_elements`, `check_rectangular` and `check_walls` are also available.
- `peasantquest.game`: `Game(rows)` holds the game state: `player`, `walk`,
  `collectibles`, `powered`, `rows`, `tile(x, y)` and `exit_positions()`.
  `move(dx, dy)` and `handle_key(key_code)` return a `MoveResult` telling
  whether the player moved, collected an item, finished or asked to quit.
  `Key` lists the key codes the game reacts to.
- `peasantquest.xpm`: `load_xpm(path)`, `parse_xpm_text(text)` and
  `parse_xpm(lines)` decode XPM images into an `XpmImage`, whose
  `pixel(x, y)` gives a 0xAARRGGBB value; they raise `XpmError`.
  `strip_comments`, `split_words` and `text_rgb` are the helpers they use.
- `peasantquest.colors`: `lookup_color(name)` resolves an X11 colour name,
  ignoring case.
- `peasantquest.app`: `load_tileset(directory)` loads the tile images,
  `Renderer` draws a `Game` onto a pygame surface, and `main(argv)` is the
  command above.

## What it does not do

The package ships no tile images and no maps: a `sets/` directory with the
XPM files listed above must be supplied. There is no on-screen step counter,
no menu and no saving of progress.

## Running the tests

    pip install .[test]
    pytest