"""Procedural terrain: every world row maps to grass, road or water.

Nothing is stored. Spawning, collision and drawing all call ``classify``
independently and get the same answer for the same row.
"""

from typing import Optional

from lovehop.config import (
    LANE_GRASS,
    LANE_ROAD,
    LANE_WATER,
    SECTION_ROWS,
)
from lovehop.goal import GoalZone


def street_rows(world_y: int) -> int:
    """Number of consecutive road rows in the section containing ``world_y``."""
    section = abs(world_y) // SECTION_ROWS
    return 2 + section % 2


def is_three_lane_road(world_y: int) -> bool:
    return street_rows(world_y) == 3


def pattern_lane(world_y: int) -> str:
    abs_y = abs(world_y)
    pos = abs_y % SECTION_ROWS
    roads = street_rows(world_y)

    if pos < roads:
        return LANE_ROAD
    if pos == roads:
        return LANE_GRASS
    if pos < SECTION_ROWS - 1:
        return LANE_WATER
    return LANE_GRASS


def classify(world_y: int, goal: Optional[GoalZone] = None) -> str:
    # Starting area is always safe.
    if world_y >= 0:
        return LANE_GRASS

    if goal is not None and goal.active:
        if goal.beyond_world(world_y):
            return LANE_GRASS
        if goal.in_approach(world_y):
            return LANE_GRASS

    return pattern_lane(world_y)
