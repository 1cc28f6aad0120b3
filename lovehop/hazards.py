"""Vehicles and logs: spawning, motion and culling."""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from lovehop.config import (
    CAR_COLORS,
    CAUSE_WATER,
    CHALLENGE_LOG_CHANCE,
    CHALLENGE_VEHICLE_CHANCE,
    FINAL_LOG_LENGTH_RANGE,
    FINAL_LOG_SPEED_RANGE,
    FINAL_VEHICLE_SPEED_RANGE,
    GRID_W,
    LANE_ROAD,
    LANE_WATER,
    LOG_CHANCE,
    LOG_COLOR,
    LOG_CULL_MARGIN,
    LOG_LENGTH_RANGE,
    LOG_SPEED_RANGE,
    MIN_SPAWN_PERIOD,
    SPAWN_BASE_PERIOD,
    SPAWN_ROWS_ABOVE,
    SPAWN_ROWS_BELOW,
    SPAWN_SPEED_FACTOR,
    THREE_LANE_VEHICLE_FACTOR,
    TILE,
    TIME_SCALE,
    VEHICLE_CHANCE,
    VEHICLE_CULL_MARGIN,
    VEHICLE_SPEED_RANGE,
    WINDOW_H,
)
from lovehop.goal import GoalZone
from lovehop.lanes import classify, is_three_lane_road
from lovehop.player import Player

logger = logging.getLogger(__name__)


# ----------------------------- Game Objects -----------------------------

# eq=False: hazards are compared by identity (the player holds a reference
# to the log it rides).
@dataclass(eq=False)
class Hazard:
    grid_x: float
    world_y: int
    width: float  # px
    height: float  # px
    speed: float  # grid units per TIME_SCALE step, +right, -left
    color: Tuple[int, int, int]

    @property
    def moving_right(self) -> bool:
        return self.speed > 0

    def advance(self, time_scale: float = TIME_SCALE) -> float:
        dx = self.speed * time_scale
        self.grid_x += dx
        return dx


@dataclass(eq=False)
class Vehicle(Hazard):
    @property
    def right(self) -> float:
        return self.grid_x + self.width / TILE


@dataclass(eq=False)
class Log(Hazard):
    length: int = 2

    @property
    def right(self) -> float:
        return self.grid_x + self.length


@dataclass
class HazardSet:
    vehicles: List[Vehicle] = field(default_factory=list)
    logs: List[Log] = field(default_factory=list)

    def clear(self):
        self.vehicles.clear()
        self.logs.clear()

    def vehicles_on(self, row: int) -> List[Vehicle]:
        return [v for v in self.vehicles if v.world_y == row]

    def logs_on(self, row: int) -> List[Log]:
        return [l for l in self.logs if l.world_y == row]


# ----------------------------- Spawning -----------------------------

def spawn_period(game_speed: float) -> float:
    """Frames between spawn passes; shorter as the game speeds up."""
    return max(MIN_SPAWN_PERIOD, SPAWN_BASE_PERIOD - game_speed * SPAWN_SPEED_FACTOR)


def visible_rows(camera_y: float) -> range:
    start = math.floor(camera_y / TILE) - SPAWN_ROWS_ABOVE
    end = start + math.ceil(WINDOW_H / TILE) + SPAWN_ROWS_BELOW
    return range(start, end + 1)


class HazardSpawner:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.timer = 0

    def reset(self):
        self.timer = 0

    def tick(self, hazards: HazardSet, camera_y: float, game_speed: float, goal: GoalZone) -> bool:
        """Count one frame; run a spawn pass when the period elapses."""
        self.timer += 1
        if self.timer < spawn_period(game_speed):
            return False
        self.timer = 0
        self.spawn_pass(hazards, camera_y, goal)
        return True

    def chances(self, row: int, lane: str, goal: GoalZone) -> Tuple[float, float]:
        vehicle_chance = VEHICLE_CHANCE
        log_chance = LOG_CHANCE

        if lane == LANE_ROAD and is_three_lane_road(row):
            vehicle_chance *= THREE_LANE_VEHICLE_FACTOR

        if goal.in_challenge_zone(row):
            vehicle_chance = CHALLENGE_VEHICLE_CHANCE
            log_chance = CHALLENGE_LOG_CHANCE

        return vehicle_chance, log_chance

    def spawn_pass(self, hazards: HazardSet, camera_y: float, goal: GoalZone):
        final = goal.final_stretch
        for row in visible_rows(camera_y):
            if goal.blocks_spawning(row):
                continue

            lane = classify(row, goal)
            vehicle_chance, log_chance = self.chances(row, lane, goal)

            if lane == LANE_ROAD and self.rng.random() < vehicle_chance:
                hazards.vehicles.append(self.make_vehicle(hazards, row, final))
            elif lane == LANE_WATER and self.rng.random() < log_chance:
                hazards.logs.append(self.make_log(hazards, row, final))

    def make_vehicle(self, hazards: HazardSet, row: int, final: bool = False) -> Vehicle:
        # Keep every lane one-way: follow whatever is already driving here.
        existing = hazards.vehicles_on(row)
        if existing:
            going_right = existing[0].moving_right
        else:
            going_right = row % 2 == 0

        lo, hi = FINAL_VEHICLE_SPEED_RANGE if final else VEHICLE_SPEED_RANGE
        speed = self.rng.uniform(lo, hi)
        width = TILE * (0.8 if final else 0.9)

        return Vehicle(
            grid_x=-2 if going_right else GRID_W + 1,
            world_y=row,
            width=width,
            height=TILE * 0.7,
            speed=speed if going_right else -speed,
            color=self.rng.choice(CAR_COLORS),
        )

    def make_log(self, hazards: HazardSet, row: int, final: bool = False) -> Log:
        # One-way rivers too; only an empty row picks at random.
        existing = hazards.logs_on(row)
        if existing:
            going_right = existing[0].moving_right
        else:
            going_right = self.rng.random() > 0.5

        # Longer and slower near the house
        lo_len, hi_len = FINAL_LOG_LENGTH_RANGE if final else LOG_LENGTH_RANGE
        length = self.rng.randint(lo_len, hi_len)
        lo, hi = FINAL_LOG_SPEED_RANGE if final else LOG_SPEED_RANGE
        speed = self.rng.uniform(lo, hi)

        return Log(
            grid_x=-length if going_right else GRID_W + 1,
            world_y=row,
            width=TILE * length * 0.9,
            height=TILE * 0.8,
            speed=speed if going_right else -speed,
            color=LOG_COLOR,
            length=length,
        )


# ----------------------------- Motion -----------------------------

def is_far_offscreen(hazard: Hazard, margin: float) -> bool:
    return hazard.grid_x > GRID_W + margin or hazard.grid_x < -margin


class HazardSimulator:
    def __init__(self, time_scale: float = TIME_SCALE):
        self.time_scale = time_scale

    def step(self, hazards: HazardSet, player: Player) -> Optional[str]:
        """Move everything one frame. Returns a death cause if the player was
        carried off the edge of the world on a log."""
        for vehicle in hazards.vehicles:
            vehicle.advance(self.time_scale)
        hazards.vehicles = [v for v in hazards.vehicles if not is_far_offscreen(v, VEHICLE_CULL_MARGIN)]

        kept: List[Log] = []
        for i, log in enumerate(hazards.logs):
            dx = log.advance(self.time_scale)

            if player.on_log is log:
                player.grid_x += dx
                if player.grid_x < 0 or player.grid_x >= GRID_W:
                    logger.debug("Carried off the edge at x=%.2f", player.grid_x)
                    # Remaining logs stay where they are this frame.
                    hazards.logs = kept + [log] + hazards.logs[i + 1:]
                    return CAUSE_WATER

            if is_far_offscreen(log, LOG_CULL_MARGIN):
                if player.on_log is log:
                    player.on_log = None
                continue
            kept.append(log)

        hazards.logs = kept
        return None
