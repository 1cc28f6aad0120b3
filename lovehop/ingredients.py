"""Soup ingredients scattered over the world.

The collected set is the only record of what has been picked up. Slots and
ingredient listings read their ``taken`` flag from it, so the two can never
disagree.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import AbstractSet, Callable, List, Optional, Set, Tuple

from lovehop.config import (
    GRID_W,
    INITIAL_SPACING,
    LANE_WATER,
    PLACEMENT_ATTEMPTS,
    RESPAWN_MAX_AHEAD,
    RESPAWN_MIN_AHEAD,
    RESPAWN_PERIOD_FRAMES,
    RESPAWN_SPACING,
    STALE_SLOT_ROWS,
)

logger = logging.getLogger(__name__)

LaneLookup = Callable[[int], str]


@dataclass(frozen=True)
class Ingredient:
    key: str
    label: str


INGREDIENTS: Tuple[Ingredient, ...] = (
    Ingredient("tofu", "Tofu"),
    Ingredient("onion", "Onion"),
    Ingredient("broth", "Broth"),
    Ingredient("mushroom", "Mushroom"),
    Ingredient("scallion", "Scallion"),
    Ingredient("chili", "Chili"),
)


@dataclass(eq=False)
class IngredientSlot:
    key: str
    label: str
    gx: int
    gy: int
    collected: AbstractSet[str] = field(default_factory=set, repr=False)

    @property
    def taken(self) -> bool:
        return self.key in self.collected


class IngredientRegistry:
    def __init__(self, rng: Optional[random.Random] = None, items: Tuple[Ingredient, ...] = INGREDIENTS):
        self.rng = rng or random.Random()
        self.items = items
        self.collected: Set[str] = set()
        self.slots: List[IngredientSlot] = []
        self.respawn_timer = 0

    # -- views --

    @property
    def complete(self) -> bool:
        return len(self.collected) == len(self.items)

    def is_taken(self, key: str) -> bool:
        return key in self.collected

    def checklist(self) -> List[Tuple[Ingredient, bool]]:
        return [(item, item.key in self.collected) for item in self.items]

    # -- lifecycle --

    def reset(self, lane_at: LaneLookup):
        # Mutate in place: existing slots hold a reference to this set.
        self.collected.clear()
        self.slots = []
        self.respawn_timer = 0
        self.place_initial(lane_at)

    def collect_all(self):
        for item in self.items:
            self.collected.add(item.key)

    # -- placement --

    def _slot(self, item: Ingredient, gx: int, gy: int) -> IngredientSlot:
        return IngredientSlot(item.key, item.label, gx, gy, self.collected)

    def _crowded(self, gx: int, gy: int, spacing: int) -> bool:
        return any(abs(s.gx - gx) < spacing and abs(s.gy - gy) < spacing for s in self.slots)

    def place_initial(self, lane_at: LaneLookup) -> int:
        """Spread every item ahead of the start, deeper for later items."""
        placed = 0
        for index, item in enumerate(self.items):
            for _ in range(PLACEMENT_ATTEMPTS):
                gx = self.rng.randrange(GRID_W)
                base_y = -(5 + index * 8 + self.rng.randint(0, 5))
                gy = base_y - self.rng.randint(0, 4)

                if lane_at(gy) == LANE_WATER or self._crowded(gx, gy, INITIAL_SPACING):
                    continue
                self.slots.append(self._slot(item, gx, gy))
                placed += 1
                break
            else:
                logger.debug("No room for %s on initial placement", item.key)
        return placed

    def place_ahead(self, item: Ingredient, player_y: int, lane_at: LaneLookup) -> Optional[IngredientSlot]:
        for _ in range(PLACEMENT_ATTEMPTS):
            gx = self.rng.randrange(GRID_W)
            gy = self.rng.randint(player_y - RESPAWN_MAX_AHEAD, player_y - RESPAWN_MIN_AHEAD)

            if lane_at(gy) == LANE_WATER or self._crowded(gx, gy, RESPAWN_SPACING):
                continue
            slot = self._slot(item, gx, gy)
            self.slots.append(slot)
            return slot

        logger.debug("No room for %s ahead of row %d, retrying next cycle", item.key, player_y)
        return None

    def respawn_missing(self, player_y: int, lane_at: LaneLookup) -> int:
        # Drop picked-up slots and ones the player has left far behind.
        self.slots = [s for s in self.slots if not s.taken and s.gy <= player_y + STALE_SLOT_ROWS]

        on_map = {s.key for s in self.slots}
        placed = 0
        for item in self.items:
            if item.key in self.collected or item.key in on_map:
                continue
            if self.place_ahead(item, player_y, lane_at) is not None:
                placed += 1
        return placed

    def tick(self, player_y: int, lane_at: LaneLookup) -> bool:
        """Count one frame; top the map up every RESPAWN_PERIOD_FRAMES."""
        self.respawn_timer += 1
        if self.respawn_timer < RESPAWN_PERIOD_FRAMES:
            return False
        self.respawn_timer = 0
        self.respawn_missing(player_y, lane_at)
        return True

    # -- pickup --

    def pick_up(self, grid_x: float, world_y: int) -> List[IngredientSlot]:
        picked = []
        col = math.floor(grid_x)
        for slot in self.slots:
            if slot.taken or slot.gy != world_y or math.floor(slot.gx) != col:
                continue
            self.collected.add(slot.key)
            picked.append(slot)
            logger.info("Picked up %s (%d/%d)", slot.label, len(self.collected), len(self.items))
        return picked
