"""Player input and actions in the inventory screen."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from .components import (
    ConsumeAction,
    CraftAction,
    Entity,
    EquipAction,
    InBag,
    Name,
    Position,
    World,
)
from .config import InventoryConfig, SortMode
from .items import Item

log = logging.getLogger(__name__)

OUT_OF_BOUNDS_MESSAGE = "Index selected is out of bounds of the backapack."
DROPPED_MESSAGE = "Dropped it"


class UseMenuResult(enum.Enum):
    CRAFT = enum.auto()
    DROP = enum.auto()
    EXAMINE = enum.auto()
    EQUIP = enum.auto()
    CONSUME = enum.auto()
    CANCEL = enum.auto()


@dataclass
class SelectedInventoryItem:
    """The item the player picked and what they intend to do with it."""

    first_item: Entity
    intended_action: Optional[UseMenuResult] = None


class SelectionStatus(enum.Enum):
    NO_SELECTION = enum.auto()
    SELECTION_WITHOUT_ACTION = enum.auto()
    SELECTION_AND_ACTION = enum.auto()


@dataclass(frozen=True)
class InventoryResponse:
    """Outcome of a key press in the inventory screen."""

    kind: str
    second_item: Optional[Entity] = None
    state: Optional[str] = None

    WAITING: ClassVar[str] = "waiting"
    ACTION_READY: ClassVar[str] = "action_ready"
    SECOND_ITEM_SELECTED: ClassVar[str] = "second_item_selected"
    STATE_CHANGE: ClassVar[str] = "state_change"

    IN_GAME: ClassVar[str] = "in_game"


_WAITING = InventoryResponse(InventoryResponse.WAITING)
_ACTION_READY = InventoryResponse(InventoryResponse.ACTION_READY)

_ACTION_KEYS = {
    "E": UseMenuResult.EXAMINE,
    "D": UseMenuResult.DROP,
    "Q": UseMenuResult.EQUIP,
    "C": UseMenuResult.CONSUME,
    "Escape": UseMenuResult.CANCEL,
}

_SLOT_KEYS = {key: index for index, key in enumerate("123456789ABCDEFGH")}


def sorted_inventory(world: World, owner: Entity, cfg: InventoryConfig) -> list[Entity]:
    """Item entities in owner's bag, in the order the inventory shows them."""
    entries = [
        (entity, item, name)
        for entity, item, bag, name in world.join(Item, InBag, Name)
        if bag.owner == owner
    ]
    if cfg.sort_mode is SortMode.NAME_ABC:
        entries.sort(key=lambda entry: entry[2].value)
    else:
        entries.sort(key=lambda entry: entry[1].id)
    return [entity for entity, _, _ in entries]


def check_inventory_selection(world: World, player: Entity) -> SelectionStatus:
    """Whether the player has selected an item, and an action for it."""
    selection = world.get(player, SelectedInventoryItem)
    if selection is None:
        return SelectionStatus.NO_SELECTION
    if selection.intended_action is None:
        return SelectionStatus.SELECTION_WITHOUT_ACTION
    return SelectionStatus.SELECTION_AND_ACTION


def _normalise(key: str) -> str:
    return key.upper() if len(key) == 1 else key


def input_inventory(
    world: World, player: Entity, key: Optional[str], cfg: InventoryConfig, messages: Any
) -> InventoryResponse:
    """Handle one key press in the inventory screen."""
    if key is None:
        return _WAITING
    key = _normalise(key)

    if check_inventory_selection(world, player) is SelectionStatus.SELECTION_WITHOUT_ACTION:
        selection = world.get(player, SelectedInventoryItem)
        if key == "U":
            # using an item with something else almost always means crafting
            selection.intended_action = UseMenuResult.CRAFT
            return _WAITING
        action = _ACTION_KEYS.get(key)
        if action is None:
            return _WAITING
        selection.intended_action = action
        return _ACTION_READY

    if key in _SLOT_KEYS:
        return _select_item(world, player, _SLOT_KEYS[key], cfg, messages)
    if key == "S":
        cfg.rotate_sort_mode()
        return _WAITING
    if key in ("Escape", "I"):
        world.remove(player, SelectedInventoryItem)
        return InventoryResponse(InventoryResponse.STATE_CHANGE, state=InventoryResponse.IN_GAME)
    return _WAITING


def _select_item(
    world: World, player: Entity, index: int, cfg: InventoryConfig, messages: Any
) -> InventoryResponse:
    ordered = sorted_inventory(world, player, cfg)
    selected = ordered[index] if index < len(ordered) else None

    status = check_inventory_selection(world, player)
    if status is SelectionStatus.NO_SELECTION:
        if selected is not None:
            world.insert(player, SelectedInventoryItem(selected))
        else:
            messages.log(OUT_OF_BOUNDS_MESSAGE)
        return _WAITING
    if status is SelectionStatus.SELECTION_AND_ACTION and selected is not None:
        return InventoryResponse(InventoryResponse.SECOND_ITEM_SELECTED, second_item=selected)
    return _WAITING


def _drop(world: World, player: Entity, entity: Entity, dropped: Item, messages: Any) -> None:
    world.remove(entity, InBag)
    messages.log(DROPPED_MESSAGE)
    player_pos = world.get(player, Position)
    if player_pos is None:
        return
    ground = next(
        (
            (ground_entity, item)
            for ground_entity, item, pos in world.join(Item, Position)
            if pos == player_pos and item.id == dropped.id
        ),
        None,
    )
    if ground is not None:
        ground_entity, item = ground
        world.insert(ground_entity, Item(item.id, item.qty + dropped.qty))
    else:
        world.insert(entity, player_pos)


def handle_one_item_actions(world: World, player: Entity, items_db: Any, messages: Any) -> None:
    """Carry out the selected single-item action and clear the selection."""
    selection = world.get(player, SelectedInventoryItem)
    if selection is None:
        log.warning("Player has no selected inventory item when using one item")
        return
    action = selection.intended_action
    if action is None:
        raise ValueError("no action chosen for the selected item")
    if action is UseMenuResult.CRAFT:
        raise ValueError("crafting needs two items")

    found = next(
        (
            (entity, item)
            for entity, item, bag in world.join(Item, InBag)
            if entity == selection.first_item and bag.owner == player
        ),
        None,
    )

    if action is UseMenuResult.DROP:
        if found is not None:
            _drop(world, player, found[0], found[1], messages)
    elif action is UseMenuResult.EXAMINE:
        if found is not None:
            item = found[1]
            info = items_db.get_by_id(item.id)
            messages.log(info.examine_text if info is not None else f"Could not find item with id: {item.id}")
        else:
            messages.log(f"Couldn't examine entity: {selection.first_item}")
    elif action is UseMenuResult.EQUIP:
        if found is not None:
            world.insert(player, EquipAction(found[0]))
    elif action is UseMenuResult.CONSUME:
        if found is not None:
            world.insert(player, ConsumeAction(found[0]))

    world.remove(player, SelectedInventoryItem)


def handle_two_item_actions(world: World, player: Entity, second_item: Entity) -> None:
    """Carry out the selected action that combines two items."""
    selection = world.get(player, SelectedInventoryItem)
    if selection is None:
        log.warning("Player has no selected inventory item when using two items")
        return
    if selection.intended_action is not UseMenuResult.CRAFT:
        raise ValueError("only crafting uses two items")
    if selection.first_item == second_item:
        log.warning("Cannot craft using the same item in your inventory.")
        return
    world.insert(player, CraftAction(selection.first_item, second_item))
    world.remove(player, SelectedInventoryItem)