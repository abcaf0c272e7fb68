"""Static definitions of living beings and building them into the world."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from .colors import Color
from .components import (
    Blocking,
    EntityStats,
    GoalMoverAI,
    Name,
    Position,
    RandomWalkerAI,
    Renderable,
    Stats,
    World,
    Entity,
)
from .database import DatabaseError, stats_from_optional
from .droptables import Drops

log = logging.getLogger(__name__)

BEING_Z = 3


class EntityBuildError(Exception):
    """An entity could not be built from its definition."""


@dataclass(frozen=True)
class BeingID:
    """Component naming which being definition an entity came from."""

    value: int


@dataclass
class AIDefinition:
    start_mode: str
    goals: Optional[list[str]] = None
    goal_range: Optional[int] = None


@dataclass
class Being:
    identifier: int
    name: str
    ai: Optional[AIDefinition]
    is_blocking: bool
    atlas_index: int
    fg: Color
    quips: Optional[list[str]] = None
    stats: Stats = field(default_factory=Stats)
    loot: Optional[Drops] = None


def _ai_from_raw(raw: Optional[dict]) -> Optional[AIDefinition]:
    if raw is None:
        return None
    goals = raw.get("goals")
    goal_range = raw.get("goal_range")
    return AIDefinition(
        raw["start_mode"],
        None if goals is None else list(goals),
        None if goal_range is None else int(goal_range),
    )


def _being_from_raw(raw: dict, items_db: Any) -> Being:
    fg = raw["fg"]
    if len(fg) != 3:
        raise DatabaseError(f"a colour needs three components, got {fg!r}")
    quips = raw.get("quips")
    loot = raw.get("loot")
    return Being(
        identifier=int(raw["identifier"]),
        name=raw["name"],
        ai=_ai_from_raw(raw.get("ai")),
        is_blocking=bool(raw["is_blocking"]),
        atlas_index=int(raw["atlas_index"]),
        fg=(int(fg[0]), int(fg[1]), int(fg[2])),
        quips=None if quips is None else list(quips),
        stats=stats_from_optional(raw.get("stats")),
        loot=None if loot is None else Drops.from_raw(loot, items_db),
    )


@dataclass
class BeingDatabase:
    """All being definitions."""

    data: list[Being] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: list, items_db: Any) -> "BeingDatabase":
        try:
            return cls([_being_from_raw(entry, items_db) for entry in raw])
        except KeyError as err:
            raise DatabaseError(f"being definition is missing {err}") from None
        except (TypeError, ValueError) as err:
            if isinstance(err, DatabaseError):
                raise
            raise DatabaseError(f"bad being definition: {err}") from None

    @classmethod
    def load(cls, path: str | Path, items_db: Any) -> "BeingDatabase":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as err:
            raise DatabaseError(f"unable to read beings from {path}: {err}") from None
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as err:
            raise DatabaseError(f"bad JSON in {path}: {err}") from None
        return cls.from_raw(raw, items_db)

    def get_by_name(self, name: str) -> Optional[Being]:
        return next((being for being in self.data if being.name == name), None)

    def get_by_id(self, being_id: int) -> Optional[Being]:
        return next((being for being in self.data if being.identifier == being_id), None)


def _ai_component(being: Being) -> Optional[Any]:
    ai = being.ai
    if ai is None:
        return None
    if ai.start_mode == "random_walk":
        return RandomWalkerAI()
    if ai.start_mode == "goal":
        if ai.goals is None:
            log.warning("%s has Goal ai type but no defined goals.", being.name)
        if ai.goal_range is None:
            raise EntityBuildError(f"{being.name} has Goal ai type but no goal range")
        return GoalMoverAI.with_desires([Name(goal) for goal in ai.goals or []], ai.goal_range)
    return None


def build_being(world: World, beings: BeingDatabase, name: str, pos: Position) -> Entity:
    """Create the named being at pos and return its entity."""
    being = beings.get_by_name(str(name))
    if being is None:
        raise EntityBuildError(f"No being found named: {name}")

    components: list[Any] = [
        Name(being.name),
        BeingID(being.identifier),
        pos,
        Renderable.clear_bg(being.atlas_index, being.fg, BEING_Z),
    ]
    if being.is_blocking:
        components.append(Blocking())
    ai = _ai_component(being)
    if ai is not None:
        components.append(ai)
    components.append(EntityStats(replace(being.stats)))
    return world.create_entity(*components)