"""Item values, spawn requests and the systems that move items between ground and bags."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .colors import Color
from .components import (
    AttackBonus,
    Consumable,
    ConsumeAction,
    Entity,
    Equipable,
    HealAction,
    InBag,
    LevelPersistent,
    Name,
    PickupAction,
    Position,
    Renderable,
    World,
)

log = logging.getLogger(__name__)

ITEM_Z = 2


@dataclass(frozen=True, order=True)
class ItemQty:
    """A non-negative count of items."""

    value: int = 0

    def __add__(self, other: "ItemQty") -> "ItemQty":
        return ItemQty(self.value + other.value)

    def __sub__(self, other: "ItemQty") -> "ItemQty":
        if other.value > self.value:
            raise ValueError(f"cannot take {other.value} from {self.value} items")
        return ItemQty(self.value - other.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class ItemID:
    """Identifier of an item's static data."""

    value: int = 0

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class Item:
    """An item stack, either on the ground or in a bag."""

    id: ItemID = ItemID(0)
    qty: ItemQty = ItemQty(0)


@dataclass
class ItemInfo:
    """Static data describing an item kind."""

    identifier: ItemID
    name: str
    examine_text: str
    atlas_index: int
    fg: Color
    pickup_text: Optional[str] = None
    equipable: Optional[Equipable] = None
    attack_bonus: Optional[AttackBonus] = None
    consumable: Optional[Consumable] = None


@dataclass(frozen=True)
class SpawnType:
    """Where a spawned item goes: on the ground at a position or into an owner's bag."""

    position: Optional[Position] = None
    owner: Optional[Entity] = None

    def __post_init__(self) -> None:
        if (self.position is None) == (self.owner is None):
            raise ValueError("a spawn goes either on the ground or in a bag")

    @classmethod
    def on_ground(cls, position: Position) -> "SpawnType":
        return cls(position=position)

    @classmethod
    def in_bag(cls, owner: Entity) -> "SpawnType":
        return cls(owner=owner)


@dataclass
class ItemSpawnRequest:
    id: ItemID
    qty: ItemQty
    spawn_type: SpawnType


@dataclass
class ItemSpawner:
    """Queue of items waiting to be created."""

    requests: list[ItemSpawnRequest] = field(default_factory=list)

    def request(self, item_id: ItemID, spawn_type: SpawnType) -> None:
        self.requests.append(ItemSpawnRequest(item_id, ItemQty(1), spawn_type))

    def request_amt(self, item_id: ItemID, spawn_type: SpawnType, qty: ItemQty) -> None:
        self.requests.append(ItemSpawnRequest(item_id, qty, spawn_type))

    def request_named(self, items_db: Any, name: str, spawn_type: SpawnType) -> None:
        info = items_db.get_by_name(name)
        if info is None:
            raise KeyError(f"no item named {name!r}")
        self.request(info.identifier, spawn_type)


def _find_bagged(world: World, owner: Entity, item_id: ItemID) -> Optional[tuple]:
    return next(
        (
            (entity, item)
            for entity, item, bag in world.join(Item, InBag)
            if bag.owner == owner and item.id == item_id
        ),
        None,
    )


def spawn_items(world: World, spawner: ItemSpawner, items_db: Any, player: Optional[Entity]) -> None:
    """Create every requested item, merging into existing bag stacks where possible."""
    for spawn in spawner.requests:
        info = items_db.get_by_id(spawn.id)
        if info is None:
            log.error("Spawn request failed because %s item id does not exist in database", spawn.id)
            continue

        if spawn.spawn_type.position is not None:
            new_item = world.create_entity(spawn.spawn_type.position, Item(spawn.id, spawn.qty))
        else:
            owner = spawn.spawn_type.owner
            bagged = _find_bagged(world, owner, spawn.id)
            if bagged is not None:
                entity, item = bagged
                world.insert(entity, Item(item.id, item.qty + spawn.qty))
                continue
            new_item = world.create_entity(Item(spawn.id, spawn.qty), InBag(owner))
            if player == owner:
                world.insert(new_item, LevelPersistent())

        for extra in (info.equipable, info.consumable, info.attack_bonus):
            if extra is not None:
                world.insert(new_item, extra)
        world.insert(new_item, Renderable.clear_bg(info.atlas_index, info.fg, ITEM_Z))
        world.insert(new_item, Name(info.name))

    spawner.requests.clear()


def handle_pickups(world: World, items_db: Any, messages: Any, player: Optional[Entity]) -> None:
    """Move picked-up ground items into the picker's bag."""
    for picker, pickup, picker_name in list(world.join(PickupAction, Name)):
        ground_entity = pickup.item
        item_name = world.get(ground_entity, Name) or Name.missing_item_name()
        ground_item = world.get(ground_entity, Item)
        if ground_item is None:
            log.warning("%s was not an item, its name was %s", ground_entity, item_name)
            continue

        bagged = _find_bagged(world, picker, ground_item.id)
        if bagged is not None:
            entity, item = bagged
            world.insert(entity, Item(item.id, item.qty + ground_item.qty))
            world.delete(ground_entity)
        else:
            world.insert(ground_entity, InBag(picker))
            if player == picker:
                world.insert(ground_entity, LevelPersistent())
            world.remove(ground_entity, Position)
            text = items_db.get_by_name_unchecked(item_name.value).pickup_text
            if text is not None:
                messages.enhance(text)
        messages.log(f"{picker_name} picked up a {item_name.value.lower()}")

    world.clear(PickupAction)


def cleanup_zero_qty_items(world: World) -> None:
    """Delete item entities whose stack is empty."""
    for entity, item in list(world.join(Item)):
        if item.qty.value == 0:
            world.delete(entity)


def inventory_contains(world: World, target: Name, owner: Entity) -> bool:
    """Whether owner carries at least one item named target."""
    return any(
        name == target and bag.owner == owner for _, _, name, bag in world.join(Item, Name, InBag)
    )


def handle_consumes(world: World) -> None:
    """Apply the effect of consumed items and use one of each."""
    for consumer, consume in list(world.join(ConsumeAction)):
        item = world.get(consume.consuming, Item)
        consumable = world.get(consume.consuming, Consumable)
        if item is None or consumable is None:
            continue
        if consumable.effect == "instant_regen":
            world.insert(consumer, HealAction(consumable.amount))
            item.qty = ItemQty(max(item.qty.value - 1, 0))

    world.clear(ConsumeAction)