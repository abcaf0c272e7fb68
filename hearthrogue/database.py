"""Loading of static item data and shared parsing helpers."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .components import AttackBonus, Consumable, Equipable, Stats
from .items import ItemID, ItemInfo


class DatabaseError(ValueError):
    """Static game data is missing or malformed."""


def _color(raw: Any) -> tuple[int, int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise DatabaseError(f"a colour needs three components, got {raw!r}")
    return (int(raw[0]), int(raw[1]), int(raw[2]))


def item_info_from_raw(raw: dict) -> ItemInfo:
    """Build item information from its raw definition."""
    try:
        equipable = raw.get("equipable")
        attack_bonus = raw.get("attack_bonus")
        consumable = raw.get("consumable")
        if consumable is not None:
            if consumable.get("amount") is None:
                raise DatabaseError(f"consumable on {raw['name']} has no amount")
            consumable = Consumable.from_str(consumable["effect"], consumable["amount"])
        return ItemInfo(
            identifier=ItemID(int(raw["identifier"])),
            name=raw["name"],
            examine_text=raw["examine_text"],
            atlas_index=int(raw["atlas_index"]),
            fg=_color(raw["fg"]),
            pickup_text=raw.get("pickup_text"),
            equipable=None if equipable is None else Equipable.from_str(equipable),
            attack_bonus=None if attack_bonus is None else AttackBonus(int(attack_bonus)),
            consumable=consumable,
        )
    except KeyError as err:
        raise DatabaseError(f"item definition is missing {err}") from None
    except DatabaseError:
        raise
    except (ValueError, TypeError, AttributeError) as err:
        raise DatabaseError(f"bad item definition: {err}") from None


@dataclass
class ItemDatabase:
    """All item definitions."""

    data: list[ItemInfo] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict) -> "ItemDatabase":
        try:
            entries = raw["data"]
        except (KeyError, TypeError):
            raise DatabaseError("item data must be an object with a 'data' list") from None
        return cls([item_info_from_raw(entry) for entry in entries])

    @classmethod
    def load(cls, path: str | Path) -> "ItemDatabase":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as err:
            raise DatabaseError(f"unable to read items from {path}: {err}") from None
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as err:
            raise DatabaseError(f"bad JSON in {path}: {err}") from None
        return cls.from_raw(raw)

    def get_by_name(self, name: str) -> Optional[ItemInfo]:
        return next((info for info in self.data if info.name == name), None)

    def get_by_name_unchecked(self, name: str) -> ItemInfo:
        """Look up an item that must exist."""
        info = self.get_by_name(name)
        if info is None:
            raise KeyError(f"no item named {name!r}")
        return info

    def get_by_id(self, item_id: ItemID) -> Optional[ItemInfo]:
        return next((info for info in self.data if info.identifier == item_id), None)


_STAT_NAMES = ("intelligence", "strength", "dexterity", "vitality", "precision", "charisma")


def stats_from_optional(raw: Optional[dict]) -> Stats:
    """Stats from a partial definition; missing values are zero."""
    if raw is None:
        return Stats()
    return Stats(**{name: int(raw.get(name) or 0) for name in _STAT_NAMES})


_IDENT = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER = re.compile(r"0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


class _Json5Reader:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, message: str) -> DatabaseError:
        return DatabaseError(f"{message} at offset {self.pos}")

    def peek(self) -> str:
        text = self.text
        while self.pos < len(text):
            if text[self.pos].isspace() or text[self.pos] == "\ufeff":
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end == -1:
                    raise self.fail("unterminated comment")
                self.pos = end + 2
            else:
                return text[self.pos]
        return ""

    def value(self) -> Any:
        ch = self.peek()
        if ch == "{":
            return self.obj()
        if ch == "[":
            return self.array()
        if ch in ('"', "'"):
            return self.string()
        match = _IDENT.match(self.text, self.pos)
        if match and match.group() in ("true", "false", "null"):
            self.pos = match.end()
            return {"true": True, "false": False, "null": None}[match.group()]
        return self.number()

    def number(self) -> Any:
        sign = 1
        if self.peek() in ("+", "-"):
            sign = -1 if self.text[self.pos] == "-" else 1
            self.pos += 1
        for word, special in (("Infinity", math.inf), ("NaN", math.nan)):
            if self.text.startswith(word, self.pos):
                self.pos += len(word)
                return sign * special
        match = _NUMBER.match(self.text, self.pos)
        if not match:
            raise self.fail("unexpected character")
        token = match.group()
        self.pos = match.end()
        if token[:2] in ("0x", "0X"):
            return sign * int(token, 16)
        if any(c in token for c in ".eE"):
            return sign * float(token)
        return sign * int(token)

    def string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        parts = []
        while True:
            if self.pos >= len(self.text):
                raise self.fail("unterminated string")
            ch = self.text[self.pos]
            self.pos += 1
            if ch == quote:
                return "".join(parts)
            if ch == "\n":
                raise self.fail("newline in string")
            if ch != "\\":
                parts.append(ch)
                continue
            if self.pos >= len(self.text):
                raise self.fail("unterminated string")
            esc = self.text[self.pos]
            self.pos += 1
            if esc in ("u", "x"):
                size = 4 if esc == "u" else 2
                digits = self.text[self.pos:self.pos + size]
                if len(digits) != size or not all(c in "0123456789abcdefABCDEF" for c in digits):
                    raise self.fail("bad escape")
                parts.append(chr(int(digits, 16)))
                self.pos += size
            elif esc == "\r":
                if self.text.startswith("\n", self.pos):
                    self.pos += 1
            elif esc in ("\n", "\u2028", "\u2029"):
                pass
            else:
                parts.append(_ESCAPES.get(esc, esc))

    def key(self) -> str:
        if self.peek() in ('"', "'"):
            return self.string()
        match = _IDENT.match(self.text, self.pos)
        if not match:
            raise self.fail("expected a key")
        self.pos = match.end()
        return match.group()

    def obj(self) -> dict:
        self.pos += 1
        result: dict = {}
        while True:
            if self.peek() == "}":
                self.pos += 1
                return result
            key = self.key()
            if self.peek() != ":":
                raise self.fail("expected ':'")
            self.pos += 1
            result[key] = self.value()
            ch = self.peek()
            if ch == ",":
                self.pos += 1
            elif ch == "}":
                self.pos += 1
                return result
            else:
                raise self.fail("expected ',' or '}'")

    def array(self) -> list:
        self.pos += 1
        result: list = []
        while True:
            if self.peek() == "]":
                self.pos += 1
                return result
            result.append(self.value())
            ch = self.peek()
            if ch == ",":
                self.pos += 1
            elif ch == "]":
                self.pos += 1
                return result
            else:
                raise self.fail("expected ',' or ']'")


def load_json5(text: str) -> Any:
    """Parse a JSON5 document."""
    reader = _Json5Reader(text)
    value = reader.value()
    if reader.peek() != "":
        raise reader.fail("trailing data")
    return value