"""Static definitions of world objects such as rocks and trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .beings import EntityBuildError
from .colors import Color
from .components import Blocking, Breakable, Entity, Grass, HealthStats, Name, Position, Renderable, World
from .database import DatabaseError, load_json5
from .droptables import Drops

WORLD_OBJECT_Z = 1


@dataclass
class WorldObject:
    id: int
    name: str
    atlas_index: int
    is_blocking: bool
    breakable: Optional[str] = None
    health_stats: Optional[HealthStats] = None
    grass: Optional[str] = None
    foreground: Optional[Color] = None
    loot: Optional[Drops] = None
    impact_sound: str = ""


def _object_from_raw(raw: dict, items_db: Any) -> WorldObject:
    health = raw.get("health_stats")
    foreground = raw.get("foreground")
    if foreground is not None and len(foreground) != 3:
        raise DatabaseError(f"a colour needs three components, got {foreground!r}")
    loot = raw.get("loot")
    return WorldObject(
        id=int(raw["identifier"]),
        name=raw["name"],
        atlas_index=int(raw["atlas_index"]),
        is_blocking=bool(raw["is_blocking"]),
        breakable=raw.get("breakable"),
        health_stats=None if health is None else HealthStats.full(int(health["max_hp"]), int(health["defense"])),
        grass=raw.get("grass"),
        foreground=None if foreground is None else (int(foreground[0]), int(foreground[1]), int(foreground[2])),
        loot=None if loot is None else Drops.from_raw(loot, items_db),
        impact_sound=raw.get("impact_sound") or "",
    )


@dataclass
class WorldObjectDatabase:
    """All world object definitions."""

    data: list[WorldObject] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: list, items_db: Any) -> "WorldObjectDatabase":
        try:
            return cls([_object_from_raw(entry, items_db) for entry in raw])
        except KeyError as err:
            raise DatabaseError(f"world object definition is missing {err}") from None
        except (TypeError, ValueError) as err:
            if isinstance(err, DatabaseError):
                raise
            raise DatabaseError(f"bad world object definition: {err}") from None

    @classmethod
    def load(cls, path: str | Path, items_db: Any) -> "WorldObjectDatabase":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as err:
            raise DatabaseError(f"unable to read world objects from {path}: {err}") from None
        return cls.from_raw(load_json5(text), items_db)

    def get_by_name(self, name: str) -> Optional[WorldObject]:
        return next((obj for obj in self.data if obj.name == name), None)

    def get_by_id(self, object_id: int) -> Optional[WorldObject]:
        return next((obj for obj in self.data if obj.id == object_id), None)


def build_world_obj(world: World, objects: WorldObjectDatabase, name: str, pos: Position) -> Entity:
    """Create the named world object at pos and return its entity."""
    obj = objects.get_by_name(str(name))
    if obj is None:
        raise EntityBuildError(f"No world object found named: {name}")

    components: list[Any] = [Name(obj.name), pos]
    if obj.foreground is not None:
        components.append(Renderable.clear_bg(obj.atlas_index, obj.foreground, WORLD_OBJECT_Z))
    if obj.is_blocking:
        components.append(Blocking())
    if obj.breakable is not None:
        try:
            components.append(Breakable.from_str(obj.breakable))
        except ValueError:
            raise EntityBuildError(
                f"Invalid breakable string {obj.breakable} on world object {obj.name}"
            ) from None
    if obj.grass is not None:
        components.append(Grass())
    if obj.health_stats is not None:
        components.append(HealthStats.full(obj.health_stats.max_hp, obj.health_stats.defense))
    return world.create_entity(*components)