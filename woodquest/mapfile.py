"""Reading .ber map files into a grid with element counts."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Iterator, List, Optional, Union

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
ENEMY = "X"
CHEST = "C"
GLOVE = "T"
GELANO = "G"
POPO = "O"

_LINE_END = re.compile(r"[\n\0]")

log = logging.getLogger(__name__)


class MapError(ValueError):
    """Raised when a map cannot be read or is not a valid level."""


@dataclass(frozen=True)
class Position:
    """A cell position: column ``x`` and row ``y``."""

    x: int
    y: int


@dataclass
class GameMap:
    """The level grid together with counts of the elements found on it."""

    grid: List[List[str]] = field(default_factory=list)
    width: int = 0
    collectibles: int = 0
    glove: int = 0
    gelano: int = 0
    popo: int = 0
    exits: int = 0
    players: int = 0
    player: Optional[Position] = None
    exit: Optional[Position] = None
    enemy: Optional[Position] = None

    @property
    def height(self) -> int:
        return len(self.grid)

    def add_line(self, line: str) -> None:
        """Append one line of the map file as a new row.

        Lines that are empty or start with a newline are skipped. Every row
        must be as wide as the first one.
        """
        if not line or line[0] in "\n\0":
            return
        row = _LINE_END.split(line, maxsplit=1)[0]
        if self.width == 0:
            self.width = len(row)
        elif self.width != len(row):
            raise MapError("La map n'est pas rectangulaire")
        self.grid.append(list(row))
        y = self.height - 1
        for x, element in enumerate(row):
            self._register(element, x, y)

    def _register(self, element: str, x: int, y: int) -> None:
        if element == CHEST:
            self.collectibles += 1
        elif element == GLOVE:
            self.glove += 1
        elif element == GELANO:
            self.gelano += 1
        elif element == POPO:
            self.popo += 1
        elif element == EXIT:
            self.exits += 1
            self.exit = Position(x, y)
            log.info("Sortie trouvée en (%d, %d)", x, y)
        elif element == PLAYER:
            self.players += 1
            self.player = Position(x, y)
        elif element == ENEMY:
            self.enemy = Position(x, y)

    def check_walls(self) -> None:
        """Raise MapError unless the border of the map is made of walls."""
        if not self.grid or self.width == 0:
            raise MapError("La map est vide ou invalide")
        top, bottom = self.grid[0], self.grid[-1]
        for x in range(self.width):
            if top[x] != WALL:
                raise MapError(
                    f"La carte a besoin de murs (line 1, position {x + 1})"
                )
            if bottom[x] != WALL:
                raise MapError(
                    f"La carte a besoin de murs (last line, position {x + 1})"
                )
        for y, row in enumerate(self.grid, start=1):
            if row[0] != WALL:
                raise MapError(f"La carte a besoin de murs (left col, ligne {y})")
            if row[-1] != WALL:
                raise MapError(f"La carte a besoin de murs (right col, ligne {y})")

    def cell(self, x: int, y: int) -> str:
        """Return the element at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) is outside the map")
        return self.grid[y][x]


def read_lines(path: Union[str, "PathLike[str]"]) -> Iterator[str]:
    """Yield the lines of a file, each with its trailing newline if any.

    Lines are split on ``\\n`` only; other control characters are kept.
    """
    with open(path, "rb") as handle:
        for raw in handle:
            yield raw.decode("latin-1")


def parse_lines(lines: Iterable[str]) -> GameMap:
    """Build a map from lines of text."""
    game_map = GameMap()
    for line in lines:
        game_map.add_line(line)
    return game_map


def load_map(path: Union[str, "PathLike[str]"]) -> GameMap:
    """Read a map file; the result is not yet validated."""
    try:
        return parse_lines(read_lines(path))
    except OSError as exc:
        raise MapError("Impossible d'ouvrir la map") from exc