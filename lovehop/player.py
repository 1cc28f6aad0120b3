from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from lovehop.config import GRID_W, PLAYER_WIDTH_TILES

if TYPE_CHECKING:
    from lovehop.hazards import Log


@dataclass
class Player:
    # grid_x stays continuous so a log can carry the player smoothly;
    # hops always move by whole tiles from wherever the log left them.
    grid_x: float = GRID_W // 2
    world_y: int = 0  # negative = forward
    alive: bool = True
    on_log: Optional["Log"] = None  # borrowed from the HazardSet, never owned
    width: float = PLAYER_WIDTH_TILES

    def reset(self):
        self.grid_x = GRID_W // 2
        self.world_y = 0
        self.alive = True
        self.on_log = None

    def hop(self, dc: int, dr: int) -> bool:
        """Try one grid step. Returns False if the edge of the world blocks it.

        Backwards hops stop at the starting row; sideways hops stay on the grid.
        """
        if dr > 0 and self.world_y >= 0:
            return False
        # A log can leave grid_x fractional, so test where the hop lands.
        if dc and not 0 <= self.grid_x + dc <= GRID_W - 1:
            return False

        self.grid_x += dc
        self.world_y += dr
        self.on_log = None
        return True
