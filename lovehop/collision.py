"""Per-frame hazard checks against the player, plus the difficulty ramp."""

import logging
from dataclasses import dataclass
from typing import Optional

from lovehop.config import (
    BASE_GAME_SPEED,
    CAUSE_CAR,
    CAUSE_WATER,
    LANE_ROAD,
    LANE_WATER,
    LOG_RIDE_LEFT_BUFFER,
    LOG_RIDE_RIGHT_REACH,
    MAX_GAME_SPEED,
    RAMP_EVERY_ROWS,
    RAMP_START_ROW,
    SPEED_STEP,
)
from lovehop.goal import GoalZone
from lovehop.hazards import HazardSet, Log, Vehicle
from lovehop.lanes import classify
from lovehop.player import Player

logger = logging.getLogger(__name__)


def hits_vehicle(player: Player, vehicle: Vehicle) -> bool:
    return player.grid_x < vehicle.right and player.grid_x + player.width > vehicle.grid_x


def rides_log(player_x: float, log: Log) -> bool:
    # Generous: the player counts as aboard with a fair bit of overhang.
    left = player_x - LOG_RIDE_LEFT_BUFFER
    right = player_x + LOG_RIDE_RIGHT_REACH
    return right > log.grid_x and left < log.right


def resolve(player: Player, hazards: HazardSet, goal: Optional[GoalZone] = None) -> Optional[str]:
    """Check the player's current row. Returns the death cause, or None."""
    row = player.world_y
    lane = classify(row, goal)

    if lane == LANE_ROAD:
        for vehicle in hazards.vehicles_on(row):
            if hits_vehicle(player, vehicle):
                return CAUSE_CAR

    elif lane == LANE_WATER:
        player.on_log = None
        for log in hazards.logs_on(row):
            if rides_log(player.grid_x, log):
                player.on_log = log
                break
        if player.on_log is None:
            return CAUSE_WATER

    return None


@dataclass
class Difficulty:
    game_speed: float = BASE_GAME_SPEED
    milestones: int = 0

    def reset(self):
        self.game_speed = BASE_GAME_SPEED
        self.milestones = 0

    def on_progress(self, max_progress: int) -> bool:
        """Apply any ramp steps earned by a new furthest row.

        One step per RAMP_EVERY_ROWS rows past RAMP_START_ROW, each applied
        exactly once no matter how long the player lingers.
        """
        if max_progress >= RAMP_START_ROW:
            return False
        reached = (RAMP_START_ROW - max_progress) // RAMP_EVERY_ROWS
        if reached <= self.milestones:
            return False

        steps = reached - self.milestones
        self.milestones = reached
        self.game_speed = min(self.game_speed + SPEED_STEP * steps, MAX_GAME_SPEED)
        logger.debug("Difficulty up: game speed %.1f at row %d", self.game_speed, max_progress)
        return True
