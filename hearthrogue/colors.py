"""Colours, palette entries and glyph indices used throughout the game."""

from __future__ import annotations

from typing import NamedTuple, Tuple

Color = Tuple[int, int, int]
RGBA = Tuple[float, float, float, float]


class ColorPair(NamedTuple):
    """A foreground and background colour drawn together."""

    fg: tuple
    bg: tuple


# Glyph indices: fishing minigame
CH_LILFISH = 29
CH_REELLINE = 28
CH_CURSOR = 16
CH_REELBAR_MID = 26
CH_REELBAR_LEFT = 25
CH_REELBAR_RIGHT = 27
CH_BAR_MID = 20
CH_BAR_LEFT = 19
CH_BAR_RIGHT = 21
CH_GOAL_SINGLE = 18
CH_GOAL_MID = 23
CH_GOAL_LEFT = 22
CH_GOAL_RIGHT = 24

# Glyph indices: mining
CH_STRIKE = 2

CH_SOLID = 4
CH_WATER = 5 * 16

# Palette names
PL_KEYBIND = "keybind"
PL_MAIN_MENU_TEXT = "main_menu_text"
PL_MAIN_MENU_TEXT_HIGHLIGHT = "main_menu_text_hl"

PL_SETTINGS_TEXT = "settings_text"
PL_SETTINGS_HIGHLIGHT = "settings_highlight"

PL_ORANGE = "orange"
PL_MENU_TEXT = "menu_text"
PL_MENU_ACCENT_TEXT = "menu_accent_text"

PL_MAX_HP = "max_hp"
PL_MED_HP = "med_hp"
PL_LOW_HP = "low_hp"
PL_CRITICAL_HP = "critical_hp"

# Colours
MIDDLERED: Color = (183, 65, 50)
SALMON: Color = (230, 113, 70)
MAROON: Color = (122, 40, 73)
DARKBLUEPURPLE: Color = (18, 14, 35)
DARKBLUE: Color = (42, 41, 66)
WHITE: Color = (222, 222, 222)
PARCHMENT: Color = (255, 241, 169)
TEXASROSE: Color = (235, 184, 91)
DARKESTBROWN: Color = (64, 46, 43)
DARKERBROWN: Color = (118, 64, 50)
DARKBROWN: Color = (161, 92, 52)

WHITESMOKE: Color = (245, 245, 245)
CLEAR: RGBA = (0.0, 0.0, 0.0, 0.0)


def _from_hex(text: str) -> Color:
    digits = text.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"not a six digit hex colour: {text!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def palette() -> dict[str, Color]:
    """Return the named colours used by the text printer."""
    return {
        PL_KEYBIND: MAROON,
        PL_MAIN_MENU_TEXT: MIDDLERED,
        PL_MAIN_MENU_TEXT_HIGHLIGHT: SALMON,
        PL_SETTINGS_TEXT: WHITE,
        PL_SETTINGS_HIGHLIGHT: MIDDLERED,
        PL_ORANGE: SALMON,
        PL_MENU_TEXT: DARKERBROWN,
        PL_MENU_ACCENT_TEXT: DARKBROWN,
        PL_MAX_HP: _from_hex("#67fc3a"),
        PL_MED_HP: _from_hex("#48aa2a"),
        PL_LOW_HP: _from_hex("#eab838"),
        PL_CRITICAL_HP: _from_hex("#fc321b"),
        "red": MIDDLERED,
        "bright_green": (52, 156, 88),
        "white": WHITE,
        "lightgray": (161, 161, 161),
    }


def white_fg(rgb: tuple) -> ColorPair:
    """Pair a white-smoke foreground with the given background."""
    return ColorPair(WHITESMOKE, rgb)