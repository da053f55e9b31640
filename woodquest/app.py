"""The playable window: texture loading, drawing and the main loop."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pygame

from woodquest.game import KEY_ESCAPE, Game, Outcome
from woodquest.mapfile import (
    CHEST,
    ENEMY,
    EXIT,
    GELANO,
    GLOVE,
    PLAYER,
    POPO,
    WALL,
    MapError,
    load_map,
)
from woodquest.pathcheck import validate_map
from woodquest.xpm import TRANSPARENT, Image, XpmError, xpm_file_to_image

TILE = 64
FPS = 60
TICKS_PER_FRAME = 100
TITLE = "woodquest"

_BASIC_FILES = {
    "wall": "Purple_Brick.xpm",
    "floor": "wood_floor.xpm",
    "player": "wood_me.xpm",
    "gelano": "wood_gelano.xpm",
    "popo": "wood_popo.xpm",
    "glove": "wood_glove.xpm",
    "enemy_right": "wood_blob.xpm",
    "enemy_left": "wood_blob1.xpm",
}
_EXIT_FILES = (
    "portal/wood_portal.xpm", "portal/wood_portal1.xpm",
    "portal/wood_portal2.xpm", "portal/wood_portal3.xpm",
    "portal/wood_portal4.xpm", "portal/wood_portal5.xpm",
)
_CHEST_FILES = (
    "wood_chest.xpm", "wood_chest1.xpm", "wood_chest2.xpm", "wood_chest3.xpm",
)

log = logging.getLogger(__name__)

PathType = Union[str, "PathLike[str]"]


@dataclass
class Textures:
    """Surfaces for every map element; animation frames may be missing."""

    wall: pygame.Surface
    floor: pygame.Surface
    player: pygame.Surface
    gelano: pygame.Surface
    popo: pygame.Surface
    glove: pygame.Surface
    enemy_right: pygame.Surface
    enemy_left: pygame.Surface
    exit_frames: List[Optional[pygame.Surface]] = field(default_factory=list)
    chest_frames: List[Optional[pygame.Surface]] = field(default_factory=list)


def check_file_extension(path: str) -> bool:
    """True when ``path`` ends in ``.ber`` after a non-empty name."""
    dot = path.rfind(".")
    return dot > 0 and path[dot:] == ".ber"


def image_to_surface(image: Image) -> pygame.Surface:
    """Convert an image to an RGBA surface; the XPM ``None`` colour is see-through."""
    rgba = bytearray()
    for y in range(image.height):
        for x in range(image.width):
            pixel = image.get_pixel(x, y)
            if pixel == TRANSPARENT:
                rgba += b"\0\0\0\0"
            else:
                rgba += bytes(((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF, 0xFF))
    surface = pygame.image.frombuffer(bytes(rgba), (image.width, image.height), "RGBA")
    return surface.copy()


def _load(path: Path) -> Optional[pygame.Surface]:
    try:
        surface = image_to_surface(xpm_file_to_image(path))
    except XpmError as exc:
        log.warning("Impossible de charger %s: %s", path.name, exc)
        return None
    log.info("Texture %s chargee avec succees", path.name)
    return surface


def load_textures(directory: PathType) -> Textures:
    """Load every texture from ``directory``.

    Raises XpmError if a tile texture is missing; a missing animation frame
    is left as None.
    """
    base = Path(directory)
    basic = {name: _load(base / filename) for name, filename in _BASIC_FILES.items()}
    missing = sorted(name for name, surface in basic.items() if surface is None)
    if missing:
        raise XpmError(f"Impossible de charger les textures: {', '.join(missing)}")
    return Textures(
        **basic,
        exit_frames=[_load(base / name) for name in _EXIT_FILES],
        chest_frames=[_load(base / name) for name in _CHEST_FILES],
    )


def _tile_layers(element: str, game: Game, textures: Textures) -> List[Optional[pygame.Surface]]:
    if element == WALL:
        return [textures.wall]
    layers: List[Optional[pygame.Surface]] = [textures.floor]
    if element == EXIT:
        layers.append(textures.exit_frames[game.exit_frame] if textures.exit_frames else None)
    elif element == PLAYER:
        layers.append(textures.player)
    elif element == ENEMY:
        layers.append(textures.enemy_right if game.enemy_dir == 1 else textures.enemy_left)
    elif element == GELANO:
        layers.append(textures.gelano)
    elif element == POPO:
        layers.append(textures.popo)
    elif element == GLOVE:
        layers.append(textures.glove)
    elif element == CHEST:
        layers.append(textures.chest_frames[game.chest_frame] if textures.chest_frames else None)
    return layers


def draw_map(surface: pygame.Surface, game: Game, textures: Textures) -> None:
    """Draw every cell of the game's map onto ``surface``."""
    for y, row in enumerate(game.map.grid):
        for x, element in enumerate(row):
            for layer in _tile_layers(element, game, textures):
                if layer is not None:
                    surface.blit(layer, (x * TILE, y * TILE))


def _keycode(key: int) -> int:
    return KEY_ESCAPE if key == pygame.K_ESCAPE else key


def run(map_path: PathType, texture_dir: PathType = "textures") -> Outcome:
    """Load and validate a map, then play it in a window until it ends."""
    game_map = load_map(map_path)
    validate_map(game_map)
    game = Game(game_map)
    pygame.init()
    try:
        screen = pygame.display.set_mode((game_map.width * TILE, game_map.height * TILE))
        pygame.display.set_caption(TITLE)
        textures = load_textures(texture_dir)
        font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return Outcome.QUIT
                if event.type == pygame.KEYDOWN:
                    outcome = game.handle_key(_keycode(event.key))
                    if outcome is not Outcome.CONTINUE:
                        return outcome
            for _ in range(TICKS_PER_FRAME):
                outcome = game.tick()
                if outcome is not Outcome.CONTINUE:
                    return outcome
            draw_map(screen, game, textures)
            screen.blit(font.render(game.steps_text(), True, (255, 255, 255)), (10, 8))
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: play the map file named by the single argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: woodquest map.ber")
        return 1
    if not check_file_extension(args[0]):
        print("Le fichier doit avoir l'extension .ber")
        return 1
    try:
        outcome = run(args[0])
    except (MapError, XpmError) as exc:
        print(f"Error: {exc}")
        print("Erreur de parsing ou de textures")
        return 1
    except pygame.error as exc:
        print(f"Impossible de créer la fenêtre: {exc}")
        return 1
    if outcome is Outcome.WON:
        print("Félicitations ! Vous avez gagné !")
    elif outcome is Outcome.LOST:
        print("💀 Game Over !")
    return 0