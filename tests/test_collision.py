import pytest

from lovehop.collision import Difficulty, hits_vehicle, resolve, rides_log
from lovehop.config import CAUSE_CAR, CAUSE_WATER, LOG_COLOR, TILE
from lovehop.hazards import HazardSet, Log, Vehicle
from lovehop.player import Player


def vehicle_spanning(left, right, row):
    return Vehicle(grid_x=left, world_y=row, width=(right - left) * TILE, height=TILE * 0.7,
                   speed=1.0, color=(255, 0, 0))


def log_at(x, row, length=3):
    return Log(grid_x=x, world_y=row, width=TILE * length * 0.9, height=TILE * 0.8,
               speed=1.0, color=LOG_COLOR, length=length)


def test_overlapping_vehicle_hits():
    player = Player(grid_x=7, world_y=-5)
    assert hits_vehicle(player, vehicle_spanning(6.5, 8.0, -5))


def test_car_collision_on_road_row():
    # -8 is a road row
    player = Player(grid_x=7, world_y=-8)
    hazards = HazardSet(vehicles=[vehicle_spanning(6.5, 8.0, -8)])
    assert resolve(player, hazards) == CAUSE_CAR


def test_vehicle_on_another_row_is_harmless():
    player = Player(grid_x=7, world_y=-8)
    hazards = HazardSet(vehicles=[vehicle_spanning(6.5, 8.0, -9)])
    assert resolve(player, hazards) is None


def test_near_miss():
    player = Player(grid_x=7, world_y=-8)
    hazards = HazardSet(vehicles=[vehicle_spanning(7.8, 8.7, -8), vehicle_spanning(5.0, 7.0, -8)])
    assert resolve(player, hazards) is None


def test_grass_is_never_fatal():
    player = Player(grid_x=7, world_y=-2)
    hazards = HazardSet(vehicles=[vehicle_spanning(6.5, 8.0, -2)])
    assert resolve(player, hazards) is None


def test_log_ride_overlap():
    log = log_at(5, -3, length=3)
    assert rides_log(6.5, log)
    assert not rides_log(9.0, log)
    # the buffer reaches a little past either end
    assert rides_log(8.2, log)
    assert rides_log(4.3, log)


def test_water_without_log_is_fatal():
    player = Player(grid_x=9.0, world_y=-3)
    hazards = HazardSet(logs=[log_at(5, -3)])
    assert resolve(player, hazards) == CAUSE_WATER
    assert player.on_log is None


def test_water_with_log_attaches_player():
    log = log_at(5, -3)
    player = Player(grid_x=6.5, world_y=-3)
    assert resolve(player, HazardSet(logs=[log])) is None
    assert player.on_log is log


def test_first_overlapping_log_wins():
    first, second = log_at(5, -3), log_at(6, -3)
    player = Player(grid_x=6.5, world_y=-3)
    resolve(player, HazardSet(logs=[first, second]))
    assert player.on_log is first


def test_stale_log_association_cleared():
    log = log_at(5, -3)
    player = Player(grid_x=6.5, world_y=-4)
    player.on_log = log
    # -4 is water too, with no log on it
    assert resolve(player, HazardSet(logs=[log])) == CAUSE_WATER
    assert player.on_log is None


def test_difficulty_steps_every_twenty_rows():
    d = Difficulty()
    start = d.game_speed

    assert not d.on_progress(-10)
    assert not d.on_progress(-29)
    assert d.game_speed == start

    assert d.on_progress(-30)
    assert d.game_speed == pytest.approx(start + 0.1)

    # lingering on the same row doesn't add more
    assert not d.on_progress(-30)
    assert d.game_speed == pytest.approx(start + 0.1)

    assert d.on_progress(-50)
    assert d.game_speed == pytest.approx(start + 0.2)


def test_difficulty_is_capped():
    d = Difficulty()
    for row in range(-1, -5000, -1):
        d.on_progress(row)
    assert d.game_speed == 8.0

    d.on_progress(-100000)
    assert d.game_speed == 8.0


def test_difficulty_reset():
    d = Difficulty()
    d.on_progress(-70)
    d.reset()
    assert d.game_speed == 2.0
    assert d.milestones == 0
