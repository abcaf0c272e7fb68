"""Entity storage and the components attached to entities."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .colors import CLEAR, Color, ColorPair

log = logging.getLogger(__name__)

Entity = int

MISSING_ITEM_NAME = "MISSING_ITEM_NAME"


@dataclass(frozen=True)
class Without:
    """Join filter: only entities lacking this component kind."""

    kind: type


@dataclass(frozen=True)
class Maybe:
    """Join column: the component if present, else None."""

    kind: type


class World:
    """Holds entities and their components, one component of each type per entity."""

    def __init__(self) -> None:
        self._next_id = 0
        self._alive: set[Entity] = set()
        self._stores: dict[type, dict[Entity, Any]] = {}

    def create_entity(self, *args: Any) -> Entity:
        """Create an entity carrying the given components."""
        entity = self._next_id
        self._next_id += 1
        self._alive.add(entity)
        for component in args:
            self.insert(entity, component)
        return entity

    def _check_alive(self, entity: Entity) -> None:
        if entity not in self._alive:
            raise KeyError(f"entity {entity} does not exist")

    def insert(self, entity: Entity, component: Any) -> Any:
        """Attach a component, returning the one of the same type it replaced."""
        self._check_alive(entity)
        store = self._stores.setdefault(type(component), {})
        previous = store.get(entity)
        store[entity] = component
        return previous

    def get(self, entity: Entity, kind: type) -> Any:
        return self._stores.get(kind, {}).get(entity)

    def has(self, entity: Entity, kind: type) -> bool:
        return entity in self._stores.get(kind, {})

    def remove(self, entity: Entity, kind: type) -> Any:
        """Detach a component and return it, or None if absent."""
        return self._stores.get(kind, {}).pop(entity, None)

    def join(self, *args: Any) -> Iterator[tuple]:
        """Yield (entity, *components) for entities matching every argument, by entity order.

        Plain types must be present; Without(kind) must be absent and adds no column;
        Maybe(kind) adds the component or None.
        """
        required = [a for a in args if not isinstance(a, (Without, Maybe))]
        if required:
            candidates = min((self._stores.get(kind, {}) for kind in required), key=len)
        else:
            candidates = self._alive
        for entity in sorted(candidates):
            row = self._row(entity, args)
            if row is not None:
                yield row

    def _row(self, entity: Entity, args: tuple) -> Optional[tuple]:
        row: list[Any] = [entity]
        for arg in args:
            if isinstance(arg, Without):
                if entity in self._stores.get(arg.kind, {}):
                    return None
            elif isinstance(arg, Maybe):
                row.append(self._stores.get(arg.kind, {}).get(entity))
            else:
                store = self._stores.get(arg, {})
                if entity not in store:
                    return None
                row.append(store[entity])
        return tuple(row)

    def clear(self, kind: type) -> None:
        """Remove every component of the given type."""
        self._stores.pop(kind, None)

    def delete(self, entity: Entity) -> None:
        """Destroy an entity and all its components."""
        self._check_alive(entity)
        for store in self._stores.values():
            store.pop(entity, None)
        self._alive.discard(entity)

    def is_alive(self, entity: Entity) -> bool:
        return entity in self._alive


def idx_to_point(idx: int, width: int) -> tuple[int, int]:
    """Convert a flat tile index to (x, y)."""
    return idx % width, idx // width


@dataclass(frozen=True)
class Position:
    """Where something physically exists in the game world."""

    x: int = 0
    y: int = 0

    @classmethod
    def from_idx(cls, idx: int, width: int) -> "Position":
        return cls(*idx_to_point(idx, width))

    def to_idx(self, width: int) -> int:
        return self.y * width + self.x

    def __str__(self) -> str:
        return f"X:{self.x} Y:{self.y}"


@dataclass
class Stats:
    intelligence: int = 0
    strength: int = 0
    dexterity: int = 0
    vitality: int = 0
    precision: int = 0
    charisma: int = 0

    def total(self) -> int:
        return (
            self.intelligence
            + self.strength
            + self.dexterity
            + self.vitality
            + self.precision
            + self.charisma
        )


class StatsError(ValueError):
    """Stats exceed the allowed limit."""


@dataclass
class EntityStats:
    set: Stats = field(default_factory=Stats)

    @classmethod
    def init(
        cls,
        stat_limit: int,
        intelligence: int,
        strength: int,
        dexterity: int,
        vitality: int,
        precision: int,
        charisma: int,
    ) -> "EntityStats":
        """Build stats whose total stays under stat_limit."""
        stats = Stats(intelligence, strength, dexterity, vitality, precision, charisma)
        if stats.total() >= stat_limit:
            raise StatsError(f"stat total {stats.total()} is not below {stat_limit}")
        return cls(stats)


@dataclass
class HealthStats:
    hp: int
    max_hp: int
    defense: int

    @classmethod
    def full(cls, max_hp: int, defense: int) -> "HealthStats":
        return cls(max_hp, max_hp, defense)

    def add_health(self, amount: int) -> None:
        self.hp = min(self.hp + amount, self.max_hp)


class ToolType(enum.Enum):
    HAND = "Hand"
    PICKAXE = "Pickaxe"
    AXE = "Axe"
    SHOVEL = "Shovel"


@dataclass
class Breakable:
    by: ToolType

    @classmethod
    def from_str(cls, text: str) -> "Breakable":
        try:
            return cls(ToolType(text))
        except ValueError:
            raise ValueError(f"unknown tool type: {text!r}") from None


@dataclass(frozen=True, order=True)
class Name:
    value: str

    @classmethod
    def missing_item_name(cls) -> "Name":
        return cls(MISSING_ITEM_NAME)

    def __str__(self) -> str:
        return self.value


@dataclass
class Renderable:
    color_pair: ColorPair
    atlas_index: int
    z_priority: int

    @classmethod
    def clear_bg(cls, atlas_index: int, fg: Color, z_priority: int) -> "Renderable":
        """A renderable with a transparent background."""
        return cls(ColorPair(fg, CLEAR), atlas_index, z_priority)


@dataclass
class Transform:
    sprite_pos: tuple[float, float]
    rotation: float = 0.0
    scale: tuple[float, float] = (1.0, 1.0)


class EquipmentSlot(enum.Enum):
    HAND = "Hand"
    TORSO = "Torso"
    HEAD = "Head"
    LEGS = "Legs"
    FEET = "Feet"
    TAIL = "Tail"


@dataclass
class Equipable:
    slot: EquipmentSlot

    @classmethod
    def from_str(cls, text: str) -> "Equipable":
        """Parse a slot name; unknown names fall back to the head slot."""
        try:
            slot = EquipmentSlot(text)
        except ValueError:
            log.warning("%s is not a valid name for an equipment slot, using Head instead", text)
            slot = EquipmentSlot.HEAD
        return cls(slot)


@dataclass
class EquipmentSlots:
    slots: list[EquipmentSlot] = field(default_factory=list)

    @classmethod
    def human(cls) -> "EquipmentSlots":
        """Slots for an average human's body parts."""
        return cls(
            [
                EquipmentSlot.HAND,
                EquipmentSlot.HAND,
                EquipmentSlot.LEGS,
                EquipmentSlot.TORSO,
                EquipmentSlot.HEAD,
                EquipmentSlot.FEET,
            ]
        )


@dataclass
class Consumable:
    effect: str
    amount: int

    _EFFECTS = frozenset({"instant_regen"})

    @classmethod
    def from_str(cls, effect: str, amount: int) -> "Consumable":
        if effect not in cls._EFFECTS:
            raise ValueError(f"unknown consumable effect: {effect!r}")
        return cls(effect, amount)


class InteractorMode(enum.Enum):
    REACTIVE = "Reactive"
    AGRESSIVE = "Agressive"

    def __str__(self) -> str:
        return self.value


@dataclass
class Interactor:
    mode: InteractorMode


@dataclass
class GoalMoverAI:
    """Walks towards the nearest entity whose name it desires."""

    desires: list[Name] = field(default_factory=list)
    goal_range: int = 0
    current: Optional[Entity] = None

    @classmethod
    def with_desires(cls, desires: list[Name], goal_range: int) -> "GoalMoverAI":
        return cls(list(desires), goal_range)


@dataclass
class SizeFlexor:
    points: list[tuple[float, float]]
    scalar: float
    curr: int = 0


@dataclass
class WaitingForFish:
    attempts: int
    time_since_last_attempt: float = 0.0


@dataclass
class MoveAction:
    new_pos: Position


@dataclass
class AttackAction:
    target: Entity


@dataclass
class BreakAction:
    target: Entity


@dataclass
class CraftAction:
    first_item: Entity
    second_item: Entity


@dataclass
class EquipAction:
    item: Entity


@dataclass
class HealAction:
    amount: int


@dataclass
class ConsumeAction:
    consuming: Entity


@dataclass
class PickupAction:
    item: Entity


@dataclass
class SufferDamage:
    amount: list[int] = field(default_factory=list)

    @staticmethod
    def new_damage(world: World, target: Entity, amount: int) -> None:
        """Queue damage on target, adding to any damage already queued."""
        existing = world.get(target, SufferDamage)
        if existing is not None:
            existing.amount.append(amount)
        else:
            world.insert(target, SufferDamage([amount]))


@dataclass
class Equipped:
    on: Entity


@dataclass
class InBag:
    owner: Entity


@dataclass
class AttackBonus:
    value: int


@dataclass
class LevelPersistent:
    """Keeps the entity alive across level switches."""


@dataclass
class Blocking:
    """Prevents game objects from passing through."""


@dataclass
class Grass:
    """Food for many animals."""


@dataclass
class Water:
    """Water to swim in or fish from."""


@dataclass
class Fishable:
    time_left: float = 0.0


@dataclass
class FishAction:
    target: Position


@dataclass
class FishOnTheLine:
    """A fish has bitten."""


@dataclass
class FinishedActivity:
    """The entity has finished its current activity."""


@dataclass
class GameAction:
    """The player pressed the minigame action key."""


@dataclass
class RandomWalkerAI:
    """Walks in random cardinal directions."""