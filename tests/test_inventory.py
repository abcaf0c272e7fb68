import pytest

from hearthrogue.components import (
    ConsumeAction,
    CraftAction,
    EquipAction,
    InBag,
    Name,
    Position,
    World,
)
from hearthrogue.config import InventoryConfig, SortMode
from hearthrogue.database import ItemDatabase
from hearthrogue.inventory import (
    InventoryResponse,
    SelectedInventoryItem,
    SelectionStatus,
    UseMenuResult,
    check_inventory_selection,
    handle_one_item_actions,
    handle_two_item_actions,
    input_inventory,
    sorted_inventory,
)
from hearthrogue.items import Item, ItemID, ItemInfo, ItemQty


class Messages:
    def __init__(self):
        self.lines = []

    def log(self, text):
        self.lines.append(str(text))

    enhance = log
    debug = log


@pytest.fixture
def setup():
    world = World()
    player = world.create_entity(Name("Player"), Position(4, 4))
    zebra = world.create_entity(Item(ItemID(1), ItemQty(2)), InBag(player), Name("Zebra"))
    apple = world.create_entity(Item(ItemID(5), ItemQty(1)), InBag(player), Name("Apple"))
    return world, player, zebra, apple


def test_sorted_by_name_and_by_id(setup):
    world, player, zebra, apple = setup
    assert sorted_inventory(world, player, InventoryConfig()) == [apple, zebra]
    assert sorted_inventory(world, player, InventoryConfig(SortMode.ID_ASC)) == [zebra, apple]


def test_sorted_excludes_other_owners(setup):
    world, player, zebra, apple = setup
    other = world.create_entity(Name("Other"))
    world.create_entity(Item(ItemID(9), ItemQty(1)), InBag(other), Name("Bread"))
    assert sorted_inventory(world, player, InventoryConfig()) == [apple, zebra]


def test_select_first_item(setup):
    world, player, zebra, apple = setup
    response = input_inventory(world, player, "1", InventoryConfig(), Messages())
    assert response.kind == InventoryResponse.WAITING
    assert world.get(player, SelectedInventoryItem).first_item == apple
    assert check_inventory_selection(world, player) is SelectionStatus.SELECTION_WITHOUT_ACTION


def test_select_out_of_bounds_logs(setup):
    world, player, _, _ = setup
    messages = Messages()
    input_inventory(world, player, "9", InventoryConfig(), messages)
    assert messages.lines == ["Index selected is out of bounds of the backapack."]
    assert check_inventory_selection(world, player) is SelectionStatus.NO_SELECTION


def test_no_key_waits(setup):
    world, player, _, _ = setup
    assert input_inventory(world, player, None, InventoryConfig(), Messages()).kind == InventoryResponse.WAITING


@pytest.mark.parametrize(
    "key,action",
    [("d", UseMenuResult.DROP), ("E", UseMenuResult.EXAMINE), ("q", UseMenuResult.EQUIP),
     ("c", UseMenuResult.CONSUME), ("Escape", UseMenuResult.CANCEL)],
)
def test_action_keys_ready(setup, key, action):
    world, player, _, _ = setup
    input_inventory(world, player, "1", InventoryConfig(), Messages())
    response = input_inventory(world, player, key, InventoryConfig(), Messages())
    assert response.kind == InventoryResponse.ACTION_READY
    assert world.get(player, SelectedInventoryItem).intended_action is action


def test_use_key_sets_craft_and_second_selection(setup):
    world, player, zebra, apple = setup
    cfg = InventoryConfig()
    input_inventory(world, player, "1", cfg, Messages())
    assert input_inventory(world, player, "u", cfg, Messages()).kind == InventoryResponse.WAITING
    assert check_inventory_selection(world, player) is SelectionStatus.SELECTION_AND_ACTION
    response = input_inventory(world, player, "2", cfg, Messages())
    assert response == InventoryResponse(InventoryResponse.SECOND_ITEM_SELECTED, second_item=zebra)


def test_sort_key_rotates(setup):
    world, player, _, _ = setup
    cfg = InventoryConfig()
    input_inventory(world, player, "s", cfg, Messages())
    assert cfg.sort_mode is SortMode.ID_ASC


def test_escape_leaves_and_clears(setup):
    world, player, _, _ = setup
    world.insert(player, SelectedInventoryItem(player, UseMenuResult.CRAFT))
    response = input_inventory(world, player, "Escape", InventoryConfig(), Messages())
    assert response.kind == InventoryResponse.STATE_CHANGE
    assert response.state == InventoryResponse.IN_GAME
    assert world.get(player, SelectedInventoryItem) is None


def test_drop_places_item_at_player(setup):
    world, player, zebra, _ = setup
    world.insert(player, SelectedInventoryItem(zebra, UseMenuResult.DROP))
    messages = Messages()
    handle_one_item_actions(world, player, ItemDatabase(), messages)
    assert not world.has(zebra, InBag)
    assert world.get(zebra, Position) == world.get(player, Position)
    assert messages.lines == ["Dropped it"]
    assert world.get(player, SelectedInventoryItem) is None


def test_drop_merges_with_ground_stack(setup):
    world, player, zebra, _ = setup
    ground = world.create_entity(Item(ItemID(1), ItemQty(3)), Position(4, 4))
    world.insert(player, SelectedInventoryItem(zebra, UseMenuResult.DROP))
    handle_one_item_actions(world, player, ItemDatabase(), Messages())
    assert world.get(ground, Item).qty == ItemQty(3) + ItemQty(2)
    assert world.get(zebra, Position) is None


def test_examine_logs_text(setup):
    world, player, _, apple = setup
    db = ItemDatabase([ItemInfo(ItemID(5), "Apple", "A crisp apple.", 0, (1, 2, 3))])
    world.insert(player, SelectedInventoryItem(apple, UseMenuResult.EXAMINE))
    messages = Messages()
    handle_one_item_actions(world, player, db, messages)
    assert messages.lines == ["A crisp apple."]


def test_examine_unknown_item(setup):
    world, player, _, apple = setup
    world.insert(player, SelectedInventoryItem(apple, UseMenuResult.EXAMINE))
    messages = Messages()
    handle_one_item_actions(world, player, ItemDatabase(), messages)
    assert messages.lines[0].startswith("Could not find item with id:")


def test_equip_and_consume_create_actions(setup):
    world, player, zebra, apple = setup
    world.insert(player, SelectedInventoryItem(zebra, UseMenuResult.EQUIP))
    handle_one_item_actions(world, player, ItemDatabase(), Messages())
    assert world.get(player, EquipAction).item == zebra
    world.insert(player, SelectedInventoryItem(apple, UseMenuResult.CONSUME))
    handle_one_item_actions(world, player, ItemDatabase(), Messages())
    assert world.get(player, ConsumeAction).consuming == apple


def test_one_item_craft_is_an_error(setup):
    world, player, zebra, _ = setup
    world.insert(player, SelectedInventoryItem(zebra, UseMenuResult.CRAFT))
    with pytest.raises(ValueError):
        handle_one_item_actions(world, player, ItemDatabase(), Messages())


def test_two_item_craft(setup):
    world, player, zebra, apple = setup
    world.insert(player, SelectedInventoryItem(apple, UseMenuResult.CRAFT))
    handle_two_item_actions(world, player, zebra)
    action = world.get(player, CraftAction)
    assert (action.first_item, action.second_item) == (apple, zebra)
    assert world.get(player, SelectedInventoryItem) is None


def test_two_item_same_item_keeps_selection(setup):
    world, player, _, apple = setup
    world.insert(player, SelectedInventoryItem(apple, UseMenuResult.CRAFT))
    handle_two_item_actions(world, player, apple)
    assert world.get(player, CraftAction) is None
    assert check_inventory_selection(world, player) is SelectionStatus.SELECTION_AND_ACTION


def test_two_item_non_craft_is_an_error(setup):
    world, player, zebra, apple = setup
    world.insert(player, SelectedInventoryItem(apple, UseMenuResult.DROP))
    with pytest.raises(ValueError):
        handle_two_item_actions(world, player, zebra)