"""Use-with recipes and the system that combines two bagged items."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .components import CraftAction, Entity, InBag, World
from .database import DatabaseError
from .items import Item, ItemID, ItemQty, ItemSpawner, SpawnType

log = logging.getLogger(__name__)

NO_EFFECT_MESSAGE = "These things had no effect on each other."


@dataclass(frozen=True)
class Ingredient:
    """An item a recipe needs, and how many of it are used up (None keeps it)."""

    id: ItemID
    consume: Optional[ItemQty] = None


@dataclass
class UseWithRecipe:
    """Using one item with another yields the output item."""

    ingredients: list[Ingredient]
    output: ItemID


def _ingredient(raw: dict, items_db: Any) -> Ingredient:
    consume = raw.get("consume")
    return Ingredient(
        items_db.get_by_name_unchecked(raw["name"]).identifier,
        None if consume is None else ItemQty(int(consume)),
    )


@dataclass
class RecipeDatabase:
    """All use-with recipes."""

    use_with_recipes: list[UseWithRecipe] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: list, items_db: Any) -> "RecipeDatabase":
        recipes = []
        try:
            for entry in raw:
                recipes.append(
                    UseWithRecipe(
                        [_ingredient(entry["first"], items_db), _ingredient(entry["second"], items_db)],
                        items_db.get_by_name_unchecked(entry["output"]).identifier,
                    )
                )
        except KeyError as err:
            raise DatabaseError(f"bad recipe definition: {err}") from None
        except (TypeError, ValueError) as err:
            raise DatabaseError(f"bad recipe definition: {err}") from None
        return cls(recipes)

    @classmethod
    def load(cls, path: str | Path, items_db: Any) -> "RecipeDatabase":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as err:
            raise DatabaseError(f"unable to read recipes from {path}: {err}") from None
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as err:
            raise DatabaseError(f"bad JSON in {path}: {err}") from None
        return cls.from_raw(raw, items_db)


def _crafting_items(world: World, crafter: Entity, action: CraftAction) -> list[tuple[Entity, Item]]:
    return [
        (entity, item)
        for entity, item, bag in world.join(Item, InBag)
        if (bag.owner == crafter and entity == action.first_item) or entity == action.second_item
    ]


def _find_recipe(recipes: RecipeDatabase, items: list[tuple[Entity, Item]]) -> Optional[UseWithRecipe]:
    ids = {item.id for _, item in items}
    return next(
        (recipe for recipe in recipes.use_with_recipes if all(ing.id in ids for ing in recipe.ingredients)),
        None,
    )


def _consumption(recipe: UseWithRecipe, items: list[tuple[Entity, Item]]) -> Optional[list[tuple[Entity, Item]]]:
    """New stacks after using up ingredients, or None if there are too few of one."""
    updates = []
    for ingredient in recipe.ingredients:
        if ingredient.consume is None:
            continue
        found = next(((e, item) for e, item in items if item.id == ingredient.id), None)
        if found is None:
            log.warning("Item entity was cleared before proper cleanup was conducted.")
            continue
        entity, item = found
        if item.qty < ingredient.consume:
            return None
        updates.append((entity, Item(item.id, item.qty - ingredient.consume)))
    return updates


def handle_crafting(world: World, recipes: RecipeDatabase, spawner: ItemSpawner, messages: Any) -> None:
    """Resolve every craft action against the recipes."""
    for crafter, action in list(world.join(CraftAction)):
        items = _crafting_items(world, crafter, action)
        recipe = _find_recipe(recipes, items)
        if recipe is None:
            messages.log(NO_EFFECT_MESSAGE)
            continue
        updates = _consumption(recipe, items)
        if updates is None:
            continue
        for entity, new_item in updates:
            world.insert(entity, new_item)
        spawner.request(recipe.output, SpawnType.in_bag(crafter))

    world.clear(CraftAction)