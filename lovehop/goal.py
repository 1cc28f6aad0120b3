"""The house at the end of the road.

It only exists once every ingredient is collected. From then on the world is
capped a few rows past it and the approach is forced to safe grass.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from lovehop.config import (
    GRID_W,
    HOUSE_AHEAD_ROWS,
    HOUSE_WIDTH,
    TILE,
    WORLD_CAP_ROWS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HouseEntrance:
    grass_field_start: int
    grass_field_end: int
    path_start: int
    fence_left: int
    fence_right: int
    gate_y: int
    # Short stretch just before the grass field with gentler hazards
    challenge_zone_start: int
    challenge_zone_end: int

    @classmethod
    def around(cls, house_x: int, house_y: int) -> "HouseEntrance":
        return cls(
            grass_field_start=house_y + 5,
            grass_field_end=house_y - 2,
            path_start=house_y + 3,
            fence_left=house_x - 3,
            fence_right=house_x + 8,
            gate_y=house_y + 1,
            challenge_zone_start=house_y + 8,
            challenge_zone_end=house_y + 5,
        )


@dataclass
class House:
    grid_x: int = GRID_W // 2 - 2  # centre a 5-tile house
    world_y: Optional[int] = None
    visible: bool = False
    entrance_spawned: bool = False


class GoalZone:
    def __init__(self):
        self.house = House()
        self.entrance: Optional[HouseEntrance] = None
        self.game_world_top: Optional[int] = None
        self.final_stretch = False

    @property
    def active(self) -> bool:
        return self.house.entrance_spawned and self.entrance is not None

    def reset(self):
        self.house = House()
        self.entrance = None
        self.game_world_top = None
        self.final_stretch = False

    def spawn(self, camera_y: float) -> bool:
        """Place the house ~12 rows above the top of the screen.

        Returns False (and changes nothing) if it was already placed.
        """
        if self.house.entrance_spawned:
            return False

        house_y = math.floor(camera_y / TILE) - HOUSE_AHEAD_ROWS
        self.house.world_y = house_y
        self.house.visible = True
        self.house.entrance_spawned = True
        self.entrance = HouseEntrance.around(self.house.grid_x, house_y)
        self.game_world_top = house_y - WORLD_CAP_ROWS
        self.final_stretch = True

        logger.info("House placed at row %d (world capped at %d)", house_y, self.game_world_top)
        return True

    # Row queries. All are False before the house exists.

    def beyond_world(self, row: int) -> bool:
        return self.active and row < self.house.world_y - WORLD_CAP_ROWS

    def in_approach(self, row: int) -> bool:
        if not self.active:
            return False
        e = self.entrance
        return e.grass_field_end <= row <= e.grass_field_start

    def in_challenge_zone(self, row: int) -> bool:
        if not (self.final_stretch and self.active):
            return False
        e = self.entrance
        return e.challenge_zone_end <= row <= e.challenge_zone_start

    def blocks_spawning(self, row: int) -> bool:
        if self.game_world_top is not None and row < self.game_world_top:
            return True
        return self.beyond_world(row) or self.in_approach(row)

    def at_door(self, grid_x: float, world_y: int) -> bool:
        if not self.house.visible or self.house.world_y is None:
            return False
        return (
            world_y == self.house.world_y
            and self.house.grid_x <= grid_x <= self.house.grid_x + HOUSE_WIDTH - 1
        )
