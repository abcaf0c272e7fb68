"""Frame-by-frame glyph animations and the renderer that plays them."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .colors import CLEAR, MIDDLERED, WHITE, Color
from .components import idx_to_point
from .database import DatabaseError, load_json5

log = logging.getLogger(__name__)

PURPLE: Color = (128, 0, 128)


def _to_cp437(ch: str) -> int:
    try:
        return ch.encode("cp437")[0]
    except UnicodeEncodeError:
        return 0


@dataclass(frozen=True)
class Cell:
    glyph: int
    fg: Color
    bg: tuple = CLEAR


@dataclass
class Frame:
    cells: list[Cell] = field(default_factory=list)


def _frame_from_rows(rows: list[str], keys: dict[str, int], colors: dict[str, Color]) -> Frame:
    cells = [
        Cell(keys[ch] if ch in keys else _to_cp437(ch), colors.get(ch, MIDDLERED))
        for row in rows
        for ch in row
    ]
    return Frame(cells)


@dataclass
class Animation:
    frames: list[Frame]
    height: int
    width: int
    time_between_ms: int

    @classmethod
    def from_rows(
        cls,
        frames: list[list[str]],
        char_keys: dict[str, int],
        key_colors: dict[str, Color],
        time_between_ms: int,
    ) -> "Animation":
        """Build an animation from frames given as rows of characters."""
        if not frames or not frames[0]:
            raise ValueError("an animation needs at least one non-empty frame")
        height = len(frames[0])
        width = len(frames[0][0])
        return cls(
            [_frame_from_rows(frame, char_keys, key_colors) for frame in frames],
            height,
            width,
            time_between_ms,
        )


@dataclass
class AnimationPlay:
    """Playback state of one running animation."""

    top_left: tuple[int, int]
    looping_play: bool = False
    lasting_play: bool = False
    curr_frame: int = 0
    timer: float = 0.0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def looping(cls, top_left: tuple[int, int]) -> "AnimationPlay":
        return cls(top_left, looping_play=True)

    @classmethod
    def lasting(cls, top_left: tuple[int, int]) -> "AnimationPlay":
        """Play once and keep showing the final frame."""
        return cls(top_left, lasting_play=True)


def _key_color(raw: str) -> Color:
    return WHITE if raw == "white" else PURPLE


def _single_char(key: str) -> str:
    if len(key) != 1:
        raise DatabaseError(f"animation key must be a single character, got {key!r}")
    return key


@dataclass
class AnimationDatabase:
    animations: dict[str, Animation] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: list) -> "AnimationDatabase":
        animations = {}
        try:
            for entry in raw:
                keys = {_single_char(k): int(v) for k, v in entry["frame_keys"].items()}
                colors = {_single_char(k): _key_color(v) for k, v in entry["key_colors"].items()}
                animations[entry["name"]] = Animation.from_rows(
                    entry["frames"], keys, colors, int(entry["time_between_ms"])
                )
        except KeyError as err:
            raise DatabaseError(f"animation definition is missing {err}") from None
        except (TypeError, AttributeError) as err:
            raise DatabaseError(f"bad animation definition: {err}") from None
        except ValueError as err:
            if isinstance(err, DatabaseError):
                raise
            raise DatabaseError(f"bad animation definition: {err}") from None
        return cls(animations)

    @classmethod
    def load(cls, path: str | Path) -> "AnimationDatabase":
        """Load animations; an unreadable or malformed file gives an empty database."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as err:
            log.error("Error while reading animation file: %s", err)
            return cls()
        try:
            return cls.from_raw(load_json5(text))
        except DatabaseError as err:
            log.error("Error while parsing animation file: %s", err)
            return cls()

    def get_by_name(self, name: str) -> Optional[Animation]:
        return self.animations.get(name)


@dataclass
class AnimationRenderer:
    """Animations currently playing."""

    running_anims: list[tuple[Animation, AnimationPlay]] = field(default_factory=list)

    def clear(self) -> None:
        self.running_anims.clear()

    def request(self, database: AnimationDatabase, name: str, play: AnimationPlay) -> None:
        """Start the named animation; unknown names are ignored."""
        anim = database.get_by_name(name)
        if anim is None:
            return
        self.running_anims.append((anim, play))

    def update(self, dt: float) -> None:
        """Advance the timers by dt seconds."""
        finished: list[uuid.UUID] = []
        for anim, play in self.running_anims:
            frame_count = len(anim.frames)
            if play.lasting_play and play.curr_frame >= frame_count - 1:
                continue
            play.timer += dt

            if not play.lasting_play and play.curr_frame >= frame_count:
                finished.append(play.id)
                continue
            if play.looping_play and play.curr_frame >= frame_count:
                play.curr_frame = 0
                continue

            if int(play.timer * 1000) > anim.time_between_ms:
                play.curr_frame += 1
                play.timer = 0.0

        self.running_anims = [(a, p) for a, p in self.running_anims if p.id not in finished]

    def cells(self) -> list[tuple[int, int, Cell]]:
        """Screen position and cell of every glyph in the current frames."""
        drawn = []
        for anim, play in self.running_anims:
            if play.curr_frame >= len(anim.frames):
                continue
            frame = anim.frames[play.curr_frame]
            left, top = play.top_left
            for i, cell in enumerate(frame.cells):
                x, y = idx_to_point(i, anim.width)
                drawn.append((left + x, top + y, cell))
        return drawn