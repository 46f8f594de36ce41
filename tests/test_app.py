import pygame
import pytest

from peasantquest.app import TILE_SIZE, Renderer, Tileset, load_tileset, main
from peasantquest.game import Game
from peasantquest.xpm import TRANSPARENT, XpmError, XpmImage

FLOOR = (10, 20, 30)
WALL = (200, 0, 0)
ITEM = (0, 200, 0)
PLAYER = (0, 0, 200)
EXIT = (200, 200, 0)
POWERED = (0, 200, 200)


def _image(rgb, size=2):
    value = (rgb[0] << 16) | (rgb[1] << 8) | rgb[2]
    return XpmImage(size, size, (value,) * (size * size))


@pytest.fixture
def tileset():
    return Tileset(
        floor=_image(FLOOR),
        wall=_image(WALL),
        collectible=_image(ITEM),
        player=_image(PLAYER),
        exit=_image(EXIT),
        powered_player=_image(POWERED),
    )


ROWS = ["11111", "1PCE1", "11111"]


def _at(surface, x, y):
    return tuple(surface.get_at((x * TILE_SIZE, y * TILE_SIZE)))[:3]


def test_draw_all_hides_exit_until_powered(tileset):
    game = Game(ROWS)
    surface = pygame.Surface((5 * TILE_SIZE, 3 * TILE_SIZE))
    Renderer(surface, tileset).draw_all(game)
    assert _at(surface, 0, 0) == WALL
    assert _at(surface, 1, 1) == PLAYER
    assert _at(surface, 2, 1) == ITEM
    assert _at(surface, 3, 1) == FLOOR


def test_draw_all_after_collecting(tileset):
    game = Game(ROWS)
    surface = pygame.Surface((5 * TILE_SIZE, 3 * TILE_SIZE))
    renderer = Renderer(surface, tileset)
    renderer.draw_all(game)
    game.move(1, 0)
    renderer.draw_all(game)
    assert _at(surface, 1, 1) == FLOOR
    assert _at(surface, 2, 1) == POWERED
    assert _at(surface, 3, 1) == EXIT


def test_draw_tile_position(tileset):
    surface = pygame.Surface((3 * TILE_SIZE, 3 * TILE_SIZE))
    renderer = Renderer(surface, tileset)
    renderer.draw_tile(tileset.wall, 2, 1)
    assert _at(surface, 2, 1) == WALL
    assert _at(surface, 1, 1) == (0, 0, 0)


def test_transparent_pixels_show_floor(tileset):
    surface = pygame.Surface((TILE_SIZE, TILE_SIZE))
    renderer = Renderer(surface, tileset)
    renderer.draw_tile(tileset.floor, 0, 0)
    renderer.draw_tile(XpmImage(1, 1, (TRANSPARENT,)), 0, 0)
    assert _at(surface, 0, 0) == FLOOR


_XPM = '/* XPM */\nstatic char *x[] = {\n"1 1 1 1",\n"a c #00FF00",\n"a"\n};\n'


def test_load_tileset(tmp_path):
    for name in ("floor", "wall", "collectible", "player_peasant", "exit-tp", "player_mega"):
        (tmp_path / f"{name}.xpm").write_text(_XPM)
    tiles = load_tileset(tmp_path)
    assert tiles.floor.pixel(0, 0) == 0x00FF00
    assert tiles.powered_player.width == 1


def test_load_tileset_missing_file(tmp_path):
    (tmp_path / "floor.xpm").write_text(_XPM)
    with pytest.raises(XpmError):
        load_tileset(tmp_path)


def test_main_wrong_argument_count(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "Error : wrong number of arguments"


def test_main_bad_path(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ber")]) == 0
    assert capsys.readouterr().out == "Error 1: bad map path\n"


def test_main_bad_map(tmp_path, capsys):
    path = tmp_path / "map.ber"
    path.write_text("11111\n1PCE1\n11101\n")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "Error : bad wall\n"


def test_main_missing_tiles(tmp_path, capsys, monkeypatch):
    path = tmp_path / "map.ber"
    path.write_text("\n".join(ROWS) + "\n")
    monkeypatch.chdir(tmp_path)
    assert main([str(path)]) == 1
    assert capsys.readouterr().out.startswith("Error : cannot read")