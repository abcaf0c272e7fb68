import pytest

from hearthrogue.beings import EntityBuildError
from hearthrogue.components import (
    Blocking,
    Breakable,
    Grass,
    HealthStats,
    Name,
    Position,
    Renderable,
    ToolType,
    World,
)
from hearthrogue.database import DatabaseError, ItemDatabase
from hearthrogue.items import ItemID, ItemInfo
from hearthrogue.world_objs import WORLD_OBJECT_Z, WorldObjectDatabase, build_world_obj


def items_db():
    return ItemDatabase([ItemInfo(ItemID(4), "Pebble", "small", 3, (5, 5, 5))])


def raw_objects():
    return [
        {
            "identifier": 3,
            "name": "Rock",
            "atlas_index": 9,
            "is_blocking": True,
            "breakable": "Pickaxe",
            "health_stats": {"max_hp": 10, "defense": 1},
            "foreground": [100, 100, 100],
            "loot": {"drop_chance": 100, "loot_table": [{"item": "Pebble", "item_qty": "2", "weight": 1}]},
            "impact_sound": "thud",
        },
        {"identifier": 4, "name": "Tall Grass", "atlas_index": 10, "is_blocking": False, "grass": "yes"},
    ]


def test_from_raw_fields():
    db = WorldObjectDatabase.from_raw(raw_objects(), items_db())
    rock = db.get_by_name("Rock")
    assert rock.health_stats == HealthStats.full(10, 1)
    assert rock.impact_sound == "thud"
    assert rock.loot.loot_table[0].id == ItemID(4)
    assert db.get_by_id(4).impact_sound == ""
    assert db.get_by_id(42) is None


def test_load_json5(tmp_path):
    path = tmp_path / "world_objs.json5"
    path.write_text(
        "// objects\n[{identifier: 4, name: 'Tall Grass', atlas_index: 10, is_blocking: false, grass: 'yes',},]"
    )
    db = WorldObjectDatabase.load(path, items_db())
    assert db == WorldObjectDatabase.from_raw([raw_objects()[1]], items_db())


def test_load_missing_file(tmp_path):
    with pytest.raises(DatabaseError):
        WorldObjectDatabase.load(tmp_path / "missing.json5", items_db())


def test_build_rock():
    db = WorldObjectDatabase.from_raw(raw_objects(), items_db())
    world = World()
    rock = build_world_obj(world, db, "Rock", Position(2, 3))
    assert world.get(rock, Name) == Name("Rock")
    assert world.get(rock, Position) == Position(2, 3)
    assert world.get(rock, Breakable) == Breakable(ToolType.PICKAXE)
    assert world.get(rock, HealthStats) == HealthStats.full(10, 1)
    assert world.has(rock, Blocking)
    assert world.get(rock, Renderable) == Renderable.clear_bg(9, (100, 100, 100), WORLD_OBJECT_Z)


def test_build_grass():
    db = WorldObjectDatabase.from_raw(raw_objects(), items_db())
    world = World()
    grass = build_world_obj(world, db, "Tall Grass", Position(0, 0))
    assert world.has(grass, Grass)
    assert not world.has(grass, Renderable)
    assert not world.has(grass, Blocking)


def test_invalid_breakable():
    raw = raw_objects()
    raw[0]["breakable"] = "Spoon"
    db = WorldObjectDatabase.from_raw(raw, items_db())
    world = World()
    with pytest.raises(EntityBuildError):
        build_world_obj(world, db, "Rock", Position(0, 0))
    assert list(world.join(Name)) == []


def test_unknown_object():
    with pytest.raises(EntityBuildError):
        build_world_obj(World(), WorldObjectDatabase(), "Tree", Position(0, 0))