"""Game state: player moves, the patrolling enemy and animation frames."""

from __future__ import annotations

import enum
import logging
from typing import Optional

from woodquest.mapfile import (
    CHEST,
    ENEMY,
    EXIT,
    FLOOR,
    GELANO,
    GLOVE,
    PLAYER,
    POPO,
    WALL,
    GameMap,
    MapError,
    Position,
)

KEY_ESCAPE = 65307
KEY_LEFT = 97
KEY_UP = 119
KEY_RIGHT = 100
KEY_DOWN = 115

ENEMY_DELAY = 5000
"""Number of ticks the enemy waits between two steps."""
CHEST_PERIOD = 10000
EXIT_PERIOD = 4500
CHEST_FRAMES = 4
EXIT_FRAMES = 6

_MOVES = {
    KEY_LEFT: (-1, 0),
    KEY_UP: (0, -1),
    KEY_RIGHT: (1, 0),
    KEY_DOWN: (0, 1),
}

# Collectible element -> the GameMap counter it decrements.
_COUNTERS = {
    CHEST: "collectibles",
    GLOVE: "glove",
    GELANO: "gelano",
    POPO: "popo",
}

log = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """What an action did to the running game."""

    CONTINUE = "continue"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


class Game:
    """A level being played: the map, the player, the enemy and animations."""

    def __init__(self, game_map: GameMap) -> None:
        if game_map.player is None:
            raise MapError("Il doit y avoir un joueur")
        self.map = game_map
        self.player: Position = game_map.player
        self.steps = 0
        self.enemy: Optional[Position] = game_map.enemy
        self.enemy_dir = 1 if self.enemy is not None else 0
        self.enemy_timer = ENEMY_DELAY if self.enemy is not None else 0
        self.chest_frame = 0
        self.exit_frame = 0
        self.chest_counter = 0
        self.exit_counter = 0

    @property
    def remaining(self) -> int:
        """Collectibles of every kind still on the map."""
        return sum(getattr(self.map, name) for name in _COUNTERS.values())

    def _collect(self, element: str) -> bool:
        counter = _COUNTERS.get(element)
        if counter is None:
            return False
        setattr(self.map, counter, getattr(self.map, counter) - 1)
        return True

    def move_player(self, dx: int, dy: int) -> Outcome:
        """Move the player by one cell unless a wall or a closed exit is in the way."""
        new_x, new_y = self.player.x + dx, self.player.y + dy
        target = self.map.cell(new_x, new_y)
        if target == WALL:
            return Outcome.CONTINUE
        if not self._collect(target) and target == EXIT:
            if self.remaining > 0:
                log.warning("Vous devez ramasser tous les collectibles!")
                return Outcome.CONTINUE
            log.info("Félicitations ! Vous avez gagné !")
            return Outcome.WON
        grid = self.map.grid
        grid[self.player.y][self.player.x] = FLOOR
        self.steps += 1
        self.player = Position(new_x, new_y)
        grid[new_y][new_x] = PLAYER
        return Outcome.CONTINUE

    def handle_key(self, keycode: int) -> Outcome:
        """React to a key: Escape quits, A/W/D/S move the player."""
        if keycode == KEY_ESCAPE:
            return Outcome.QUIT
        move = _MOVES.get(keycode)
        if move is None:
            return Outcome.CONTINUE
        return self.move_player(*move)

    def move_enemy(self) -> Outcome:
        """Count down the enemy's delay; when it runs out, take one step."""
        if self.enemy is None:
            return Outcome.CONTINUE
        if self.enemy_timer > 0:
            self.enemy_timer -= 1
            return Outcome.CONTINUE
        self.enemy_timer = ENEMY_DELAY
        new_x = self.enemy.x + self.enemy_dir
        y = self.enemy.y
        if 0 <= new_x < self.map.width and self.map.cell(new_x, y) != WALL:
            self.map.grid[y][self.enemy.x] = FLOOR
            self.enemy = Position(new_x, y)
            self.map.grid[y][new_x] = ENEMY
        else:
            self.enemy_dir = -self.enemy_dir
        return self.check_collision()

    def check_collision(self) -> Outcome:
        """Return LOST when the enemy stands on the player's cell."""
        if self.enemy is not None and self.enemy == self.player:
            log.info("Game Over !")
            return Outcome.LOST
        return Outcome.CONTINUE

    def animate(self) -> bool:
        """Advance the animation counters; return True if a frame changed."""
        changed = False
        if self.chest_counter % CHEST_PERIOD == 0:
            self.chest_frame = (self.chest_frame + 1) % CHEST_FRAMES
            changed = True
        self.chest_counter += 1
        if self.exit_counter % EXIT_PERIOD == 0:
            self.exit_frame = (self.exit_frame + 1) % EXIT_FRAMES
            changed = True
        self.exit_counter += 1
        return changed

    def tick(self) -> Outcome:
        """Run one iteration of the game loop."""
        outcome = self.move_enemy()
        if outcome is not Outcome.CONTINUE:
            return outcome
        self.animate()
        return Outcome.CONTINUE

    def steps_text(self) -> str:
        """The step counter as shown on screen."""
        return f"Pas: {self.steps}"