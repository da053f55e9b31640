"""Reachability checks and overall validation of a loaded map."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import List, Set

from woodquest.mapfile import CHEST, EXIT, WALL, GameMap, MapError, Position

log = logging.getLogger(__name__)

_STEPS = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass
class PathReport:
    """What a breadth-first walk from the player reached."""

    total_collectibles: int
    collectibles_found: int = 0
    exits_found: int = 0
    visited: Set[Position] = field(default_factory=set)
    unreachable: List[Position] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every chest and at least one exit were reached."""
        return (
            self.collectibles_found == self.total_collectibles
            and self.exits_found > 0
        )

    @property
    def problem(self) -> str:
        """Describe why the path is invalid; empty when it is valid."""
        if self.ok:
            return ""
        if self.exits_found == 0:
            return "la sortie est inaccessible."
        if self.collectibles_found < self.total_collectibles:
            return "certains collectibles sont inaccessibles."
        return "parcours impossible."


def explore(game_map: GameMap) -> PathReport:
    """Walk the map from the player; an exit is reached but not crossed."""
    if game_map.player is None:
        raise MapError("Il doit y avoir un joueur")
    report = PathReport(total_collectibles=game_map.collectibles)
    start = game_map.player
    queue = deque([start])
    report.visited.add(start)
    while queue:
        pos = queue.popleft()
        element = game_map.cell(pos.x, pos.y)
        if element == EXIT:
            report.exits_found += 1
            continue
        if element == CHEST:
            report.collectibles_found += 1
        for dx, dy in _STEPS:
            nxt = Position(pos.x + dx, pos.y + dy)
            if (
                0 <= nxt.x < game_map.width
                and 0 <= nxt.y < game_map.height
                and game_map.cell(nxt.x, nxt.y) != WALL
                and nxt not in report.visited
            ):
                report.visited.add(nxt)
                queue.append(nxt)
    report.unreachable = [
        Position(x, y)
        for y, row in enumerate(game_map.grid)
        for x, element in enumerate(row)
        if element == CHEST and Position(x, y) not in report.visited
    ]
    return report


def check_path(game_map: GameMap) -> PathReport:
    """Return the walk report, or raise MapError if the level cannot be won."""
    log.info("Dimensions de la carte: %d x %d", game_map.width, game_map.height)
    if game_map.player is not None:
        log.info(
            "Position du joueur: (%d, %d)", game_map.player.x, game_map.player.y
        )
    log.info("Nombre de sorties attendus: %d", game_map.exits)
    report = explore(game_map)
    if report.ok:
        return report
    for pos in report.unreachable:
        log.warning("Collectible inaccessible à [%d, %d]", pos.x, pos.y)
    if report.unreachable:
        log.warning(
            "Total de %d collectibles inaccessibles.", len(report.unreachable)
        )
    raise MapError(f"Chemin invalide, {report.problem}")


def validate_map(game_map: GameMap) -> PathReport:
    """Check contents, walls and paths of a map, in that order."""
    if game_map.width == 0:
        raise MapError("La map est vide ou invalide")
    if game_map.collectibles == 0:
        raise MapError("Pas de collectibles dans la map")
    if game_map.exits == 0:
        raise MapError("Pas de sortie dans la map")
    if game_map.players != 1:
        raise MapError("Il doit y avoir un joueur")
    try:
        game_map.check_walls()
    except MapError as exc:
        raise MapError(f"La map doit etre entouree de murs: {exc}") from exc
    try:
        return check_path(game_map)
    except MapError as exc:
        raise MapError(f"Pas de chemin valide dans la map: {exc}") from exc