"""
Tests for the population store: counters, index mirroring, stale lookups.
"""

import pytest

from pasture.occupancy import OccupancyIndex
from pasture.population import PopulationStore, AgentNotFoundError


def make_store() -> PopulationStore:
    index = OccupancyIndex(20, 10, ["sheep"])
    return PopulationStore(["sheep", "wolf"], index)


def test_spawn_assigns_unique_ids_and_counts():
    store = make_store()
    a = store.spawn("sheep", 1, 1, 5.0)
    b = store.spawn("sheep", 2, 2, 5.0)
    w = store.spawn("wolf", 3, 3, 5.0)

    assert len({a.instance_id, b.instance_id, w.instance_id}) == 3
    assert store.counts() == {"sheep": 2, "wolf": 1}
    assert len(store) == 3


def test_spawn_indexes_prey_only():
    store = make_store()
    a = store.spawn("sheep", 1, 1, 5.0)
    store.spawn("wolf", 3, 3, 5.0)
    assert store.occupancy.occupant("sheep", 1, 1) == a.instance_id
    assert "wolf" not in store.occupancy


def test_remove_updates_counter_and_slot():
    store = make_store()
    a = store.spawn("sheep", 1, 1, 5.0)

    removed = store.remove(a.instance_id)

    assert removed is a
    assert store.count("sheep") == 0
    assert store.occupancy.occupant("sheep", 1, 1) is None
    assert a.instance_id not in store


def test_stale_lookup_raises_not_found():
    store = make_store()
    a = store.spawn("sheep", 1, 1, 5.0)
    store.remove(a.instance_id)

    with pytest.raises(AgentNotFoundError):
        store.get(a.instance_id)
    with pytest.raises(AgentNotFoundError):
        store.remove(a.instance_id)
    assert store.find(a.instance_id) is None
    assert store.count("sheep") == 0


def test_ids_never_reused():
    store = make_store()
    a = store.spawn("sheep", 1, 1, 5.0)
    store.remove(a.instance_id)
    b = store.spawn("sheep", 1, 1, 5.0)
    assert b.instance_id != a.instance_id


def test_move_clears_old_slot():
    store = make_store()
    a = store.spawn("sheep", 1, 1, 5.0)

    store.move(a, 4, 5)

    assert a.position == (4, 5)
    assert store.occupancy.occupant("sheep", 1, 1) is None
    assert store.occupancy.occupant("sheep", 4, 5) == a.instance_id


def test_ids_keep_insertion_order():
    store = make_store()
    spawned = [store.spawn("sheep", i, 0, 1.0).instance_id for i in range(5)]
    store.remove(spawned[2])
    assert store.ids() == [spawned[0], spawned[1], spawned[3], spawned[4]]


def test_unknown_species_rejected():
    store = make_store()
    with pytest.raises(KeyError):
        store.spawn("goat", 0, 0, 1.0)


def test_overwritten_slot_cleared_when_first_occupant_leaves():
    """B moves onto A's cell, A leaves: slot empties and B is unindexed until it moves"""
    store = make_store()
    a = store.spawn("sheep", 1, 1, 5.0)
    b = store.spawn("sheep", 7, 7, 5.0)

    store.move(b, 1, 1)
    assert store.occupancy.occupant("sheep", 1, 1) == b.instance_id

    store.move(a, 3, 3)
    assert store.occupancy.occupant("sheep", 1, 1) is None
    assert store.occupancy.occupant("sheep", 3, 3) == a.instance_id
    assert b in list(store)
    assert store.count("sheep") == 2

    store.move(b, 2, 2)
    assert store.occupancy.occupant("sheep", 2, 2) == b.instance_id
