# woodquest

A small tile-based game. Walk a player around a walled map, pick up every
collectible, dodge the patrolling enemy and reach the portal to win.

## Installing

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Playing

    woodquest path/to/level.ber

The command takes exactly one argument, a map file whose name ends in
`.ber`. The map is read and validated before the window opens; a map or
texture problem is reported and the command exits with status 1.

Keys: `W` `A` `S` `D` to move, `Esc` or closing the window to quit. The
number of steps taken is shown in the top-left corner as `Pas: N`.

Walking onto a chest, glove, gelano or potion picks it up. The exit only
opens once every item of every kind has been picked up; stepping on it then
wins the game. If the enemy reaches the player's cell, the game is lost.

## Textures

Textures are XPM images read from a `textures` directory relative to the
working directory. They are not shipped with the package. The expected
files are:

- `Purple_Brick.xpm`, `wood_floor.xpm`, `wood_me.xpm`, `wood_gelano.xpm`,
  `wood_popo.xpm`, `wood_glove.xpm`, `wood_blob.xpm`, `wood_blob1.xpm`
  (all required)
- `wood_chest.xpm` to `wood_chest3.xpm` (chest animation)
- `portal/wood_portal.xpm` to `portal/wood_portal5.xpm` (exit animation)

A missing animation frame is simply not drawn.

## Map format

A map is a rectangle of characters, one row per line:

| Char | Meaning                          |
|------|----------------------------------|
| `1`  | wall                             |
| `0`  | floor                            |
| `P`  | player start (exactly one)       |
| `E`  | exit (at least one)              |
| `C`  | chest (at least one)             |
| `T`  | glove                            |
| `G`  | gelano                           |
| `O`  | potion                           |
| `X`  | enemy, patrols left and right    |

Every row must have the same width, and the border must be made of walls.
Every chest and at least one exit must be reachable from the player without
passing through an exit. Empty lines are skipped.

Example:

    1111111
    1P0C0E1
    10X0T01
    1111111

## Library use

- `woodquest.mapfile.load_map(path)` reads a `.ber` file into a `GameMap`
  (grid, width, height and element counts) without validating it;
  `parse_lines` does the same from lines of text. Problems raise `MapError`.
- `woodquest.pathcheck.validate_map(game_map)` checks contents, walls and
  reachability, returning a `PathReport`; `check_path` and `explore` run the
  reachability walk on its own.
- `woodquest.game.Game` holds the play state: `move_player`, `handle_key`,
  `move_enemy`, `check_collision`, `animate`, `tick` and `steps_text`.
  Actions return an `Outcome` (`CONTINUE`, `WON`, `LOST`, `QUIT`).
- `woodquest.xpm.xpm_file_to_image` and `xpm_to_image` decode XPM images
  into an `Image` with `get_pixel` and `set_pixel`; bad data raises
  `XpmError`.
- `woodquest.colors.text_to_rgb` resolves XPM colour names and `#rrggbb`
  values; `convert_color` maps a colour onto a display of lower depth.
- `woodquest.app.run(map_path, texture_dir)` plays a map in a window;
  `load_textures`, `image_to_surface` and `draw_map` are available for
  drawing.