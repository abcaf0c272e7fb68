from hearthrogue.colors import (
    MAROON,
    MIDDLERED,
    PL_KEYBIND,
    PL_MAX_HP,
    PL_MENU_TEXT,
    DARKERBROWN,
    SALMON,
    WHITE,
    WHITESMOKE,
    palette,
    white_fg,
)


def test_palette_named_colours():
    colours = palette()
    assert colours[PL_KEYBIND] == MAROON
    assert colours[PL_MENU_TEXT] == DARKERBROWN
    assert colours["red"] == MIDDLERED
    assert colours["white"] == WHITE
    assert colours["orange"] == SALMON


def test_palette_hex_entries():
    assert palette()[PL_MAX_HP] == (0x67, 0xFC, 0x3A)


def test_palette_entries_are_valid_rgb():
    for colour in palette().values():
        assert len(colour) == 3
        assert all(0 <= channel <= 255 for channel in colour)


def test_palette_returns_fresh_dict():
    first = palette()
    first["red"] = (0, 0, 0)
    assert palette()["red"] == MIDDLERED


def test_white_fg():
    pair = white_fg(SALMON)
    assert pair.fg == WHITESMOKE
    assert pair.bg == SALMON


def test_palette_plain_rgb_entries():
    colours = palette()
    assert colours["lightgray"] == (161, 161, 161)
    assert colours["bright_green"] == (52, 156, 88)