import pygame
import pytest

from woodquest.app import (
    TILE,
    Textures,
    check_file_extension,
    draw_map,
    image_to_surface,
    load_textures,
    main,
)
from woodquest.game import Game
from woodquest.mapfile import parse_lines
from woodquest.xpm import TRANSPARENT, Image, XpmError

BASIC = [
    "Purple_Brick.xpm", "wood_floor.xpm", "wood_me.xpm", "wood_gelano.xpm",
    "wood_popo.xpm", "wood_glove.xpm", "wood_blob.xpm", "wood_blob1.xpm",
]
FRAMES = [
    "portal/wood_portal.xpm", "portal/wood_portal1.xpm",
    "portal/wood_portal2.xpm", "portal/wood_portal3.xpm",
    "portal/wood_portal4.xpm", "portal/wood_portal5.xpm",
    "wood_chest.xpm", "wood_chest1.xpm", "wood_chest2.xpm", "wood_chest3.xpm",
]
RED_XPM = '/* XPM */\nstatic char *x[] = {\n"2 2 1 1",\n"a c #FF0000",\n"aa",\n"aa"\n};\n'


def write_textures(directory, names):
    for name in names:
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(RED_XPM)


def solid(color):
    surface = pygame.Surface((TILE, TILE))
    surface.fill(color)
    return surface


def colored_textures():
    return Textures(
        wall=solid((10, 0, 0)), floor=solid((20, 0, 0)), player=solid((30, 0, 0)),
        gelano=solid((40, 0, 0)), popo=solid((50, 0, 0)), glove=solid((60, 0, 0)),
        enemy_right=solid((70, 0, 0)), enemy_left=solid((80, 0, 0)),
        exit_frames=[solid((100 + i, 0, 0)) for i in range(6)],
        chest_frames=[solid((200 + i, 0, 0)) for i in range(4)],
    )


def color_at(surface, x, y):
    return tuple(surface.get_at((x * TILE + TILE // 2, y * TILE + TILE // 2)))[:3]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("map.ber", True),
        ("maps/level.ber", True),
        (".ber", False),
        ("map.txt", False),
        ("map.ber.txt", False),
        ("noext", False),
    ],
)
def test_check_file_extension(path, expected):
    assert check_file_extension(path) is expected


def test_image_to_surface_colors_and_transparency():
    image = Image(2, 1)
    image.set_pixel(0, 0, 0x123456)
    image.set_pixel(1, 0, TRANSPARENT)
    surface = image_to_surface(image)
    assert surface.get_size() == (2, 1)
    assert tuple(surface.get_at((0, 0))) == (0x12, 0x34, 0x56, 255)
    assert surface.get_at((1, 0)).a == 0


def test_load_textures_reads_all_files(tmp_path):
    write_textures(tmp_path, BASIC + FRAMES)
    textures = load_textures(tmp_path)
    assert textures.wall.get_size() == (2, 2)
    assert tuple(textures.wall.get_at((0, 0))) == (255, 0, 0, 255)
    assert len(textures.exit_frames) == 6
    assert len(textures.chest_frames) == 4
    assert all(frame is not None for frame in textures.exit_frames + textures.chest_frames)


def test_missing_frames_are_none(tmp_path):
    write_textures(tmp_path, BASIC)
    textures = load_textures(tmp_path)
    assert textures.exit_frames == [None] * 6
    assert textures.chest_frames == [None] * 4


def test_missing_tile_texture_raises(tmp_path):
    write_textures(tmp_path, BASIC[1:] + FRAMES)
    with pytest.raises(XpmError):
        load_textures(tmp_path)


def make_game():
    rows = ["111111", "1PCXE1", "1TGO01", "111111"]
    return Game(parse_lines(f"{row}\n" for row in rows))


def test_draw_map_places_each_element():
    game = make_game()
    textures = colored_textures()
    surface = pygame.Surface((game.map.width * TILE, game.map.height * TILE))
    draw_map(surface, game, textures)
    assert color_at(surface, 0, 0) == (10, 0, 0)
    assert color_at(surface, 1, 1) == (30, 0, 0)
    assert color_at(surface, 2, 1) == (200, 0, 0)
    assert color_at(surface, 3, 1) == (70, 0, 0)
    assert color_at(surface, 4, 1) == (100, 0, 0)
    assert color_at(surface, 1, 2) == (60, 0, 0)
    assert color_at(surface, 2, 2) == (40, 0, 0)
    assert color_at(surface, 3, 2) == (50, 0, 0)
    assert color_at(surface, 4, 2) == (20, 0, 0)


def test_draw_map_follows_frames_and_direction():
    game = make_game()
    game.exit_frame = 2
    game.chest_frame = 3
    game.enemy_dir = -1
    textures = colored_textures()
    surface = pygame.Surface((game.map.width * TILE, game.map.height * TILE))
    draw_map(surface, game, textures)
    assert color_at(surface, 4, 1) == (102, 0, 0)
    assert color_at(surface, 2, 1) == (203, 0, 0)
    assert color_at(surface, 3, 1) == (80, 0, 0)


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().out


def test_main_rejects_extension(capsys):
    assert main(["level.txt"]) == 1
    assert ".ber" in capsys.readouterr().out


def test_main_reports_invalid_map(tmp_path, capsys):
    path = tmp_path / "level.ber"
    path.write_text("111\n1P1\n111\n")
    assert main([str(path)]) == 1
    assert "Pas de collectibles dans la map" in capsys.readouterr().out


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ber")]) == 1
    assert "Impossible d'ouvrir la map" in capsys.readouterr().out