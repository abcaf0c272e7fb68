"""Loot tables and the drops produced when something dies."""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .components import HealthStats, Name, Position, World
from .database import DatabaseError
from .items import ItemID, ItemQty, ItemSpawner, SpawnType

log = logging.getLogger(__name__)

MAX_ITEM_DROPS = 10

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_unsigned(text: str) -> Optional[int]:
    return int(text) if _UNSIGNED.fullmatch(text) else None


@dataclass(frozen=True)
class DropQty:
    """A fixed quantity, or a range [minimum, maximum) when maximum is set."""

    minimum: int
    maximum: Optional[int] = None

    @property
    def is_range(self) -> bool:
        return self.maximum is not None

    @classmethod
    def parse(cls, text: str) -> "DropQty":
        """Parse "n" or "min:max"; bad input falls back to a single item."""
        if ":" in text:
            first, second = text.split(":", 1)
            low = _parse_unsigned(first)
            high = _parse_unsigned(second)
            low = 0 if low is None else low
            high = 1 if high is None else high
            if low >= high:
                log.warning("Drop range defined by %s is invalid: The range is empty. Using 1 instead", text)
                return cls(1)
            return cls(low, high)
        value = _parse_unsigned(text)
        if value is None:
            log.error("Invalid qty provided, %s for drop qty falling back to 1", text)
            return cls(1)
        return cls(value)


@dataclass
class Loot:
    id: ItemID
    qty: DropQty
    weight: int


@dataclass
class Drops:
    """A percentage chance of dropping and the weighted table to draw from."""

    drop_chance: int
    loot_table: list[Loot] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict, items_db: Any) -> "Drops":
        loot = []
        for entry in raw["loot_table"]:
            info = items_db.get_by_name(entry["item"])
            if info is None:
                raise DatabaseError(f"{entry['item']} has no definition in items")
            loot.append(Loot(info.identifier, DropQty.parse(entry["item_qty"]), int(entry["weight"])))
        return cls(int(raw["drop_chance"]), loot)


def generate_drops(drops: Drops, rng: random.Random) -> list[tuple[ItemID, ItemQty]]:
    """Roll the table; each further drop is half as likely as the last."""
    weights = [loot.weight for loot in drops.loot_table]
    if not weights or sum(weights) <= 0:
        return []
    result: list[tuple[ItemID, ItemQty]] = []
    roll = rng.randrange(0, 100)
    while len(result) < MAX_ITEM_DROPS and roll < drops.drop_chance // 2 ** len(result):
        loot = rng.choices(drops.loot_table, weights=weights)[0]
        if loot.qty.is_range:
            qty = rng.randrange(loot.qty.minimum, loot.qty.maximum)
        else:
            qty = loot.qty.minimum
        result.append((loot.id, ItemQty(qty)))
        roll = rng.randrange(0, 100)
    return result


def death_loot_drop(
    world: World,
    spawner: ItemSpawner,
    lookup_drops: Callable[[str], Optional[Drops]],
    rng: random.Random,
) -> None:
    """Request loot at the position of every dead entity that has a drop table."""
    for _, pos, health, name in world.join(Position, HealthStats, Name):
        if health.hp != 0:
            continue
        table = lookup_drops(name.value)
        if table is None:
            log.debug("no loot table for %s, skipping", name)
            continue
        for item_id, qty in generate_drops(table, rng):
            spawner.request_amt(item_id, SpawnType.on_ground(pos), qty)