import random

import pytest

from conftest import ZeroRandom
from lovehop.config import CAUSE_WATER, GRID_W, LANE_ROAD, LANE_WATER, LOG_COLOR, TILE
from lovehop.goal import GoalZone
from lovehop.hazards import HazardSet, HazardSimulator, HazardSpawner, Log, Vehicle, spawn_period
from lovehop.lanes import classify
from lovehop.player import Player


def make_vehicle(x=-2.0, row=0, speed=1.5, width=TILE * 0.9):
    return Vehicle(grid_x=x, world_y=row, width=width, height=TILE * 0.7, speed=speed, color=(255, 0, 0))


def make_log(x=5.0, row=-3, speed=1.0, length=3):
    return Log(grid_x=x, world_y=row, width=TILE * length * 0.9, height=TILE * 0.8,
               speed=speed, color=LOG_COLOR, length=length)


def test_vehicle_advances_by_speed_times_time_scale():
    hazards = HazardSet(vehicles=[make_vehicle()])
    sim = HazardSimulator()
    player = Player()

    for _ in range(100):
        sim.step(hazards, player)

    assert hazards.vehicles[0].grid_x == pytest.approx(-2 + 1.5 * 0.02 * 100)


def test_vehicle_culled_past_right_edge():
    vehicle = make_vehicle()
    hazards = HazardSet(vehicles=[vehicle])
    sim = HazardSimulator()
    player = Player()

    frames = 0
    while hazards.vehicles and frames < 2000:
        assert vehicle.grid_x <= GRID_W + 3
        sim.step(hazards, player)
        frames += 1

    assert not hazards.vehicles
    assert vehicle.grid_x > GRID_W + 3


def test_leftward_vehicle_culled_past_left_edge():
    vehicle = make_vehicle(x=GRID_W + 1, speed=-2.0)
    hazards = HazardSet(vehicles=[vehicle])
    sim = HazardSimulator()
    while hazards.vehicles:
        sim.step(hazards, Player())
    assert vehicle.grid_x < -3


def test_log_carries_player():
    log = make_log(x=5, speed=1.0)
    hazards = HazardSet(logs=[log])
    player = Player(grid_x=6.0, world_y=-3)
    player.on_log = log

    assert HazardSimulator().step(hazards, player) is None
    assert player.grid_x == pytest.approx(6.02)
    assert log.grid_x == pytest.approx(5.02)


def test_carried_off_the_world_is_water_death():
    log = make_log(x=13, speed=2.0)
    hazards = HazardSet(logs=[log])
    player = Player(grid_x=14.99, world_y=-3)
    player.on_log = log

    assert HazardSimulator().step(hazards, player) == CAUSE_WATER
    assert player.grid_x >= GRID_W
    assert hazards.logs == [log]


def test_culled_log_releases_player():
    log = make_log(x=-3.99, speed=-1.0, length=2)
    hazards = HazardSet(logs=[log])
    player = Player(grid_x=3.0, world_y=-3)
    player.on_log = log

    HazardSimulator().step(hazards, player)

    assert hazards.logs == []
    assert player.on_log is None


def test_hazards_compare_by_identity():
    a, b = make_log(), make_log()
    assert a is not b
    assert a != b


def test_spawn_period_shrinks_with_speed():
    assert spawn_period(2) == 50
    assert spawn_period(6) == 30
    assert spawn_period(8) == 20
    assert spawn_period(50) == 20


def test_tick_fires_once_per_period():
    spawner = HazardSpawner(random.Random(1))
    hazards = HazardSet()
    goal = GoalZone()

    fired = [spawner.tick(hazards, -192, 2.0, goal) for _ in range(100)]
    assert fired.count(True) == 2
    assert fired.index(True) == 49


def test_vehicle_direction_follows_row_parity():
    spawner = HazardSpawner(random.Random(3))
    hazards = HazardSet()

    right = spawner.make_vehicle(hazards, -8)
    left = spawner.make_vehicle(hazards, -7)

    assert right.speed > 0 and right.grid_x == -2
    assert left.speed < 0 and left.grid_x == GRID_W + 1


def test_vehicle_direction_matches_existing_traffic():
    spawner = HazardSpawner(random.Random(3))
    hazards = HazardSet(vehicles=[make_vehicle(x=4, row=-8, speed=-1.0)])

    for _ in range(10):
        assert spawner.make_vehicle(hazards, -8).speed < 0


def test_log_direction_matches_existing_logs():
    spawner = HazardSpawner(random.Random(3))
    hazards = HazardSet(logs=[make_log(row=-4, speed=1.2)])

    for _ in range(10):
        log = spawner.make_log(hazards, -4)
        assert log.speed > 0
        assert log.grid_x == -log.length


def test_speed_and_length_ranges():
    spawner = HazardSpawner(random.Random(7))
    hazards = HazardSet()

    for _ in range(200):
        v = spawner.make_vehicle(hazards, -2)
        assert 1.0 <= abs(v.speed) <= 2.2
        fv = spawner.make_vehicle(hazards, -2, final=True)
        assert 0.8 <= abs(fv.speed) <= 1.8
        assert fv.width < v.width

        log = spawner.make_log(HazardSet(), -4)
        assert 0.8 <= abs(log.speed) <= 2.0
        assert 2 <= log.length <= 4
        flog = spawner.make_log(HazardSet(), -4, final=True)
        assert 0.6 <= abs(flog.speed) <= 1.6
        assert 3 <= flog.length <= 4


def test_three_lane_roads_get_fewer_cars():
    spawner = HazardSpawner()
    goal = GoalZone()
    v2, _ = spawner.chances(-1, LANE_ROAD, goal)
    v3, _ = spawner.chances(-8, LANE_ROAD, goal)
    assert v2 == pytest.approx(0.2)
    assert v3 == pytest.approx(0.14)


def test_challenge_zone_overrides_chances():
    spawner = HazardSpawner()
    goal = GoalZone()
    goal.spawn(camera_y=-192)  # house -18, challenge zone -13..-10

    assert spawner.chances(-11, LANE_WATER, goal) == (0.1, 0.25)
    assert spawner.chances(-8, LANE_ROAD, goal)[0] == pytest.approx(0.14)


def test_spawn_pass_only_uses_matching_lanes():
    spawner = HazardSpawner(ZeroRandom())
    hazards = HazardSet()

    spawner.spawn_pass(hazards, camera_y=-640, goal=GoalZone())

    assert hazards.vehicles and hazards.logs
    assert all(classify(v.world_y) == LANE_ROAD for v in hazards.vehicles)
    assert all(classify(l.world_y) == LANE_WATER for l in hazards.logs)


def test_spawn_pass_skips_house_area_and_beyond():
    spawner = HazardSpawner(ZeroRandom())
    hazards = HazardSet()
    goal = GoalZone()
    goal.spawn(camera_y=-192)  # house -18, approach -20..-13, cap -23
    assert goal.final_stretch

    spawner.spawn_pass(hazards, camera_y=-1000, goal=goal)
    spawner.spawn_pass(hazards, camera_y=-640, goal=goal)

    rows = {h.world_y for h in hazards.vehicles + hazards.logs}
    assert rows
    assert all(not -20 <= r <= -13 for r in rows)
    assert all(r >= -23 for r in rows)
    # final stretch logs are long ones
    assert all(l.length >= 3 for l in hazards.logs)
