"""Entity-component game rules for a tile-based role-playing game: items, crafting, combat, equipment, fishing and animations."""

__version__ = "0.1.0"