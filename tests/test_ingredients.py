import random
from itertools import combinations

from lovehop.config import GRID_W, LANE_WATER, RESPAWN_PERIOD_FRAMES
from lovehop.ingredients import INGREDIENTS, IngredientRegistry, IngredientSlot
from lovehop.lanes import classify


def all_water(row):
    return LANE_WATER


def fresh_registry(seed=1337):
    reg = IngredientRegistry(random.Random(seed))
    reg.reset(classify)
    return reg


def test_initial_placement_avoids_water_and_crowding():
    reg = fresh_registry()

    assert len(reg.slots) == len(INGREDIENTS)
    assert {s.key for s in reg.slots} == {i.key for i in INGREDIENTS}
    for slot in reg.slots:
        assert classify(slot.gy) != LANE_WATER
        assert 0 <= slot.gx < GRID_W
        assert slot.gy < 0
    for a, b in combinations(reg.slots, 2):
        assert not (abs(a.gx - b.gx) < 3 and abs(a.gy - b.gy) < 3)


def test_later_items_start_further_out():
    reg = fresh_registry()
    by_key = {s.key: s for s in reg.slots}
    assert -14 <= by_key["tofu"].gy <= -5
    assert -54 <= by_key["chili"].gy <= -45


def test_pick_up_matches_floor_of_column():
    reg = fresh_registry()
    slot = reg.slots[0]

    assert reg.pick_up(slot.gx + 0.7, slot.gy - 1) == []
    assert reg.pick_up(slot.gx + 0.7, slot.gy) == [slot]

    assert slot.taken
    assert reg.is_taken(slot.key)
    assert slot.key in reg.collected
    # already taken, nothing more to pick up
    assert reg.pick_up(slot.gx, slot.gy) == []


def test_checklist_tracks_collected_set():
    reg = fresh_registry()
    reg.collected.add("onion")

    checklist = dict((item.key, taken) for item, taken in reg.checklist())
    assert checklist["onion"]
    assert not checklist["tofu"]
    assert [s.taken for s in reg.slots] == [s.key == "onion" for s in reg.slots]


def test_complete_and_collect_all():
    reg = fresh_registry()
    assert not reg.complete
    reg.collect_all()
    assert reg.complete
    assert all(s.taken for s in reg.slots)


def test_reset_clears_progress_for_old_slots_too():
    reg = fresh_registry()
    old = reg.slots[0]
    reg.collect_all()

    reg.reset(classify)

    assert not reg.collected
    assert not old.taken
    assert all(not s.taken for s in reg.slots)


def test_respawn_places_missing_items_ahead():
    reg = fresh_registry()
    reg.slots = []

    placed = reg.respawn_missing(-20, classify)

    assert placed == len(INGREDIENTS)
    for slot in reg.slots:
        assert -55 <= slot.gy <= -30
        assert classify(slot.gy) != LANE_WATER


def test_respawn_skips_collected_and_drops_stale():
    reg = IngredientRegistry(random.Random(5))
    reg.collected.add("tofu")
    reg.slots = [
        IngredientSlot("tofu", "Tofu", 3, -22, reg.collected),
        IngredientSlot("onion", "Onion", 3, 0, reg.collected),  # far behind row -20
        IngredientSlot("broth", "Broth", 3, -25, reg.collected),
    ]

    reg.respawn_missing(-20, classify)

    keys = [s.key for s in reg.slots]
    assert "tofu" not in keys
    assert keys.count("broth") == 1
    assert keys.count("onion") == 1
    onion = next(s for s in reg.slots if s.key == "onion")
    assert onion.gy <= -30


def test_no_room_is_not_an_error():
    reg = IngredientRegistry(random.Random(2))
    reg.reset(all_water)
    assert reg.slots == []
    assert reg.respawn_missing(-20, all_water) == 0


def test_tick_respawns_on_schedule():
    reg = fresh_registry()
    reg.slots = []

    results = [reg.tick(-20, classify) for _ in range(RESPAWN_PERIOD_FRAMES)]

    assert results[-1] and not any(results[:-1])
    assert len(reg.slots) == len(INGREDIENTS)
    assert reg.respawn_timer == 0
