# hearthrogue

Game rules for a tile-based role-playing game, built around a small
entity-component `World`. It defines the entities' components, loads the
static game data, and provides the systems that change the world each frame.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `hearthrogue.components`: the `World` store and the components that go in
  it. `World` offers `create_entity`, `insert`, `get`, `has`, `remove`,
  `join`, `clear`, `delete` and `is_alive`. `join` yields
  `(entity, *components)` rows in entity order. Wrap a type in `Without(...)`
  to exclude entities that have it, or in `Maybe(...)` to get `None` where it
  is missing. The components include `Position`, `Name`, `Stats`,
  `EntityStats`, `HealthStats`, `Equipable`, `EquipmentSlots`, `InBag`,
  `Renderable` and the `*Action` request components.
- `hearthrogue.colors`: colour constants, glyph indices, `palette()` and
  `white_fg`.
- `hearthrogue.config`: `SortMode`, `InventoryConfig` (with
  `rotate_sort_mode`) and `ConfigMaster`.
- `hearthrogue.items`: `ItemID`, `ItemQty`, `Item`, `ItemInfo`, `SpawnType`
  and the `ItemSpawner` request queue. Its systems are `spawn_items`,
  `handle_pickups`, `handle_consumes` and `cleanup_zero_qty_items`, and
  `inventory_contains` checks whether an owner carries a named item.
- `hearthrogue.database`: `ItemDatabase`, which reads JSON through `load` or
  `from_raw`. The module also has `stats_from_optional` and `load_json5`, a
  JSON5 parser for the `.json5` data files. Bad data raises `DatabaseError`.
- `hearthrogue.droptables`: `Drops`, `Loot`, `DropQty.parse` (`"3"` or
  `"1:4"`), `generate_drops` and `death_loot_drop`.
- `hearthrogue.crafting`: `RecipeDatabase` and `handle_crafting`.
- `hearthrogue.equipment`: `handle_equip_actions`.
- `hearthrogue.combat`: `handle_attacks` and `handle_heals`.
- `hearthrogue.beings`: `BeingDatabase` (JSON) and `build_being`.
- `hearthrogue.world_objs`: `WorldObjectDatabase` (JSON5) and
  `build_world_obj`. Both builders raise `EntityBuildError` for an unknown
  name.
- `hearthrogue.fishing`: `setup_fishing_actions`, `wait_for_fish`,
  `update_minigames`, `check_minigame`, `catch_fish`, `create_bubbles` and
  `poll_fishing_tiles`.
- `hearthrogue.animation`: `Animation`, `AnimationPlay`, `AnimationDatabase`
  (JSON5) and `AnimationRenderer`. The renderer has `request`, `update` and
  `cells`; `cells` returns screen positions and glyphs.
- `hearthrogue.inventory`: `sorted_inventory`, `check_inventory_selection`
  and `input_inventory`, plus `handle_one_item_actions` and
  `handle_two_item_actions`.
- `hearthrogue.game_init`: `spawn_player`, `NewGameMenuSelection`,
  `input_new_game_menu` and `InputWorldConfig`.

Systems that report to the player take a `messages` object supplied by the
caller. It must have `log(text)`, `enhance(text)` and `debug(text)` methods.

Randomness is passed in as a `random.Random` or any object with `randrange`
and `choices`. A seeded generator gives the same drops, bites and bubbles on
every run. Time steps (`dt`) are given in seconds.

## Example

```python
from hearthrogue.components import World, Position, Name
from hearthrogue.database import ItemDatabase
from hearthrogue.items import ItemID, ItemSpawner, SpawnType, spawn_items

items_db = ItemDatabase.load("raws/items.json")
world = World()
player = world.create_entity(Name("Player"), Position(5, 5))

spawner = ItemSpawner()
spawner.request(ItemID(201), SpawnType.in_bag(player))
spawn_items(world, spawner, items_db, player)
```

## What it does not do

This is a library of game rules, not a playable game. It has no command to
run, no main loop, no window or terminal drawing, no sound, no map or world
generation, no monster movement or pathfinding, and no saving or loading of
games. The caller drives the systems, owns the message log and draws the
results.