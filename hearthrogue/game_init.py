"""Creating the player and driving the new-game menu."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import ClassVar, Optional

from .components import (
    Entity,
    EntityStats,
    EquipmentSlots,
    Interactor,
    InteractorMode,
    LevelPersistent,
    Name,
    Position,
    Renderable,
    Stats,
    World,
)
from .items import ItemID, ItemSpawner, SpawnType

WHITE = (255, 255, 255)

PLAYER_NAME = "Player"
PLAYER_START = (67, 30)
PLAYER_GLYPH = 2
PLAYER_Z = 5
PLAYER_VITALITY = 25
PLAYER_STRENGTH = 2
STARTING_ITEM = ItemID(201)

# The reactive mode is the first one declared.
_REACTIVE = next(iter(InteractorMode))


def spawn_player(world: World, spawner: ItemSpawner, stats: Stats) -> Entity:
    """Create the player entity and queue its starting item; returns the player."""
    player_stats = replace(stats, vitality=PLAYER_VITALITY, strength=PLAYER_STRENGTH)
    player = world.create_entity(
        Position(*PLAYER_START),
        Interactor(_REACTIVE),
        EquipmentSlots.human(),
        EntityStats(player_stats),
        Renderable.clear_bg(PLAYER_GLYPH, WHITE, PLAYER_Z),
        Name(PLAYER_NAME),
        LevelPersistent(),
    )
    spawner.request(STARTING_ITEM, SpawnType.in_bag(player))
    return player


class NewGameMenuSelection(enum.Enum):
    """The field highlighted in the new-game menu, in display order."""

    WORLD_NAME = enum.auto()
    WIDTH = enum.auto()
    HEIGHT = enum.auto()
    SEED = enum.auto()
    FINALIZE = enum.auto()

    def _step(self, offset: int) -> "NewGameMenuSelection":
        members = list(type(self))
        return members[(members.index(self) + offset) % len(members)]

    def next(self) -> "NewGameMenuSelection":
        return self._step(1)

    def prev(self) -> "NewGameMenuSelection":
        return self._step(-1)


@dataclass(frozen=True)
class NewGameMenuAction:
    """What a key press means in the new-game menu; TEXT carries its character."""

    kind: str
    text: Optional[str] = None

    TEXT: ClassVar[str] = "text"
    SELECT: ClassVar[str] = "select"
    DOWN: ClassVar[str] = "down"
    UP: ClassVar[str] = "up"
    WAITING: ClassVar[str] = "waiting"
    DEL_CHAR: ClassVar[str] = "del_char"
    LEAVE: ClassVar[str] = "leave"


_MENU_KEYS = {
    "Return": NewGameMenuAction.SELECT,
    "Down": NewGameMenuAction.DOWN,
    "Up": NewGameMenuAction.UP,
    "Back": NewGameMenuAction.DEL_CHAR,
    "Escape": NewGameMenuAction.LEAVE,
    "Tab": NewGameMenuAction.DOWN,
}


def input_new_game_menu(key: Optional[str], shift: bool) -> NewGameMenuAction:
    """Translate a key name into a menu action; letters and digits type text."""
    if key is None:
        return NewGameMenuAction(NewGameMenuAction.WAITING)
    if len(key) == 1 and key.isalnum():
        letter = key.lower()
        return NewGameMenuAction(NewGameMenuAction.TEXT, letter.upper() if shift else letter)
    return NewGameMenuAction(_MENU_KEYS.get(key, NewGameMenuAction.WAITING))


@dataclass
class InputWorldConfig:
    """World settings as typed into the menu, still unparsed."""

    world_name: str = ""
    width: str = "100"
    height: str = "100"
    sea_level: str = "33"
    seed: str = ""