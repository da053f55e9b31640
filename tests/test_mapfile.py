import pytest

from woodquest.mapfile import (
    GameMap,
    MapError,
    Position,
    load_map,
    parse_lines,
    read_lines,
)

LINES = ["1111111\n", "1P0C0E1\n", "1TGO0X1\n", "1111111\n"]


def test_grid_round_trip():
    game_map = parse_lines(LINES)
    assert ["".join(row) for row in game_map.grid] == [l.rstrip("\n") for l in LINES]
    assert game_map.width == len(LINES[0].rstrip("\n"))
    assert game_map.height == len(LINES)


def test_element_counts_match_text():
    game_map = parse_lines(LINES)
    text = "".join(LINES)
    assert game_map.collectibles == text.count("C")
    assert game_map.glove == text.count("T")
    assert game_map.gelano == text.count("G")
    assert game_map.popo == text.count("O")
    assert game_map.exits == text.count("E")
    assert game_map.players == text.count("P")


def test_positions_point_at_their_elements():
    game_map = parse_lines(LINES)
    assert game_map.cell(game_map.player.x, game_map.player.y) == "P"
    assert game_map.cell(game_map.exit.x, game_map.exit.y) == "E"
    assert game_map.cell(game_map.enemy.x, game_map.enemy.y) == "X"


def test_blank_lines_are_skipped():
    lines = ["111\n", "\n", "1P1\n", "", "111"]
    game_map = parse_lines(lines)
    assert ["".join(row) for row in game_map.grid] == ["111", "1P1", "111"]


def test_non_rectangular_raises():
    with pytest.raises(MapError, match="rectangulaire"):
        parse_lines(["1111\n", "111\n"])


def test_add_line_grows_height():
    game_map = GameMap()
    game_map.add_line("1111\n")
    game_map.add_line("1111")
    assert game_map.height == 2
    assert game_map.width == 4


def test_walls_ok():
    game_map = parse_lines(LINES)
    game_map.check_walls()
    assert all(cell == "1" for cell in game_map.grid[0])


@pytest.mark.parametrize(
    "lines, message",
    [
        (["1011\n", "1111\n"], r"line 1, position 2"),
        (["1111\n", "1101\n"], r"last line, position 3"),
        (["111\n", "0P1\n", "111\n"], r"left col, ligne 2"),
        (["111\n", "1P0\n", "111\n"], r"right col, ligne 2"),
    ],
)
def test_wall_errors(lines, message):
    with pytest.raises(MapError, match=message):
        parse_lines(lines).check_walls()


def test_empty_map_walls_raise():
    with pytest.raises(MapError, match="vide"):
        GameMap().check_walls()


def test_cell_out_of_range():
    game_map = parse_lines(LINES)
    with pytest.raises(IndexError):
        game_map.cell(-1, 0)
    with pytest.raises(IndexError):
        game_map.cell(0, game_map.height)


def test_read_lines_splits_on_newline_only(tmp_path):
    path = tmp_path / "m.ber"
    path.write_bytes(b"ab\ncd\r\nef")
    assert list(read_lines(path)) == ["ab\n", "cd\r\n", "ef"]


def test_load_map_round_trip(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("".join(LINES))
    game_map = load_map(path)
    assert game_map == parse_lines(LINES)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(MapError, match="Impossible d'ouvrir la map"):
        load_map(tmp_path / "absent.ber")


def test_last_enemy_wins():
    game_map = parse_lines(["11111\n", "1X0X1\n", "11111\n"])
    assert game_map.enemy == Position(3, 1)