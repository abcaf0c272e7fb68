"""Game configuration held by the running state."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class SortMode(enum.Enum):
    """How the inventory is ordered."""

    NAME_ABC = enum.auto()
    NAME_ZYX = enum.auto()
    ID_ASC = enum.auto()
    ID_DESC = enum.auto()
    CATEGORY = enum.auto()

    def label(self) -> str:
        """A three character label for display."""
        if self is SortMode.NAME_ABC:
            return "ABC"
        if self is SortMode.ID_ASC:
            return "ID+"
        return "UNK"

    def __str__(self) -> str:
        return self.label()


@dataclass
class InventoryConfig:
    """Inventory display settings."""

    sort_mode: SortMode = SortMode.NAME_ABC

    def rotate_sort_mode(self) -> None:
        """Switch between name and id ordering."""
        if self.sort_mode is SortMode.NAME_ABC:
            self.sort_mode = SortMode.ID_ASC
        else:
            self.sort_mode = SortMode.NAME_ABC


@dataclass
class ConfigMaster:
    """All configuration for the game; general settings are supplied by the caller."""

    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    general: Any = None