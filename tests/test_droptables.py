import random

import pytest

from hearthrogue.components import HealthStats, Name, Position, World
from hearthrogue.database import DatabaseError, ItemDatabase
from hearthrogue.droptables import (
    MAX_ITEM_DROPS,
    DropQty,
    Drops,
    Loot,
    death_loot_drop,
    generate_drops,
)
from hearthrogue.items import ItemID, ItemQty, ItemSpawner, SpawnType


@pytest.fixture
def items_db():
    return ItemDatabase.from_raw(
        {"data": [{"identifier": 7, "name": "Wool", "examine_text": "Soft.", "atlas_index": 1, "fg": [1, 1, 1]}]}
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3", DropQty(3)),
        ("2:5", DropQty(2, 5)),
        ("5:2", DropQty(1)),
        ("abc", DropQty(1)),
        (":", DropQty(0, 1)),
        ("x:y", DropQty(0, 1)),
    ],
)
def test_parse(text, expected):
    assert DropQty.parse(text) == expected


def test_from_raw(items_db):
    drops = Drops.from_raw(
        {"drop_chance": 50, "loot_table": [{"item": "Wool", "item_qty": "1:3", "weight": 2}]}, items_db
    )
    assert drops.drop_chance == 50
    assert drops.loot_table == [Loot(ItemID(7), DropQty(1, 3), 2)]


def test_from_raw_unknown_item(items_db):
    with pytest.raises(DatabaseError):
        Drops.from_raw({"drop_chance": 5, "loot_table": [{"item": "Gold", "item_qty": "1", "weight": 1}]}, items_db)


def test_zero_chance_drops_nothing():
    drops = Drops(0, [Loot(ItemID(7), DropQty(1), 1)])
    assert generate_drops(drops, random.Random(3)) == []


def test_drops_are_capped_and_in_range():
    drops = Drops(100000, [Loot(ItemID(7), DropQty(2, 5), 1)])
    result = generate_drops(drops, random.Random(11))
    assert len(result) == MAX_ITEM_DROPS
    assert all(item_id == ItemID(7) for item_id, _ in result)
    assert all(ItemQty(2) <= qty < ItemQty(5) for _, qty in result)


def test_empty_table_drops_nothing():
    assert generate_drops(Drops(100000, []), random.Random(1)) == []


def test_death_loot_drop_requests_on_ground():
    world = World()
    world.create_entity(Position(4, 5), HealthStats(0, 10, 0), Name("Goat"))
    world.create_entity(Position(1, 1), HealthStats(5, 10, 0), Name("Goat"))
    world.create_entity(Position(2, 2), HealthStats(0, 10, 0), Name("Rock"))
    table = Drops(100000, [Loot(ItemID(7), DropQty(1), 1)])
    spawner = ItemSpawner()
    death_loot_drop(world, spawner, {"Goat": table}.get, random.Random(5))
    assert len(spawner.requests) == MAX_ITEM_DROPS
    assert all(r.spawn_type == SpawnType.on_ground(Position(4, 5)) for r in spawner.requests)
    assert all(r.qty == ItemQty(1) for r in spawner.requests)