import pytest

from padsynthkit.colors import ROLE_KEYS, Color, ColorGroup, ColorRole, Palette
from padsynthkit.palette_store import (
    Settings,
    add_named_palette_conf,
    color_role,
    delete_named_palette_conf,
    load_named_palette,
    load_named_palette_conf,
    named_palette,
    named_palette_conf,
    named_palette_list,
    save_named_palette,
    save_named_palette_conf,
)


def _custom_palette():
    palette = Palette()
    palette.set_color(ColorGroup.ACTIVE, ColorRole.WINDOW, Color(10, 20, 30))
    palette.set_color(ColorGroup.DISABLED, ColorRole.TEXT, Color(99, 88, 77))
    return palette


def _assert_same_roles(a, b):
    for role in ROLE_KEYS.values():
        for group in ColorGroup:
            assert a.color(group, role).name() == b.color(group, role).name()


def test_settings_value_and_default():
    settings = Settings()
    settings.set_value("A/b", "x")
    assert settings.value("/A/b/") == "x"
    assert settings.value("missing", "dflt") == "dflt"


def test_settings_empty_key_raises():
    with pytest.raises(ValueError):
        Settings().set_value("/", 1)


def test_settings_children():
    settings = Settings()
    settings.set_value("G/k1", "1")
    settings.set_value("G/sub/k2", "2")
    settings.set_value("G/k3", "3")
    assert settings.child_keys("G") == ["k1", "k3"]
    assert settings.child_groups("G") == ["sub"]
    assert settings.child_groups() == ["G"]


def test_settings_remove_subtree():
    settings = Settings()
    settings.set_value("G/a", "1")
    settings.set_value("G/a/b", "2")
    settings.set_value("G/ab", "3")
    settings.remove("G/a")
    assert "G/a" not in settings
    assert "G/a/b" not in settings
    assert settings.value("G/ab") == "3"


def test_settings_file_round_trip(tmp_path):
    path = tmp_path / "conf" / "settings.conf"
    settings = Settings(path)
    settings.set_value("Editor/ShowDetails", True)
    settings.set_value("Editor/Dir", "/tmp/a, b")
    settings.set_value("Themes/Wonton Soup/Window", ["#010203", "#040506", "#070809"])
    settings.set_value("top", "plain")
    settings.set_value("word", "true")
    settings.sync()
    reloaded = Settings(path)
    assert reloaded.value("Editor/ShowDetails") is True
    assert reloaded.value("Editor/Dir") == "/tmp/a, b"
    assert reloaded.value("Themes/Wonton Soup/Window") == ["#010203", "#040506", "#070809"]
    assert reloaded.value("top") == "plain"
    assert reloaded.value("word") == "true"


def test_color_role_lookup():
    assert color_role("Window") == ColorRole.WINDOW
    assert color_role("HighlightedText") == ColorRole.HIGHLIGHTED_TEXT
    assert color_role("Bogus") == ColorRole.NO_ROLE


def test_list_without_settings_is_empty():
    assert named_palette_list(None) == []
    assert named_palette_conf(None, "x") == ""


def test_add_and_delete_conf():
    settings = Settings()
    add_named_palette_conf(settings, "KXStudio", "/themes/KXStudio.conf")
    assert named_palette_conf(settings, "KXStudio") == "/themes/KXStudio.conf"
    assert named_palette_list(settings) == ["KXStudio"]
    delete_named_palette_conf(settings, "KXStudio")
    assert named_palette_list(settings) == []


def test_add_conf_replaces_inline_theme():
    settings = Settings()
    save_named_palette(settings, "Dark", Palette())
    assert named_palette_list(settings) == ["Dark"]
    add_named_palette_conf(settings, "Dark", "dark.conf")
    assert settings.child_groups("ColorThemes") == []
    assert named_palette_conf(settings, "Dark") == "dark.conf"


def test_save_load_inline_round_trip():
    settings = Settings()
    original = _custom_palette()
    assert save_named_palette(settings, "Mine", original)
    loaded = Palette()
    assert load_named_palette(settings, "Mine", loaded)
    _assert_same_roles(original, loaded)


def test_load_missing_and_none():
    assert not load_named_palette(Settings(), "Nope", Palette())
    assert not load_named_palette(None, "Nope", Palette())
    assert not save_named_palette(None, "Nope", Palette())


def test_conf_file_round_trip(tmp_path):
    path = tmp_path / "mine.conf"
    original = _custom_palette()
    assert save_named_palette_conf("Mine", path, original)
    assert "[ColorThemes]" in path.read_text(encoding="utf-8")
    loaded = Palette()
    assert load_named_palette_conf("Mine", path, loaded)
    _assert_same_roles(original, loaded)


def test_named_palette_through_conf_file(tmp_path):
    path = tmp_path / "mine.conf"
    original = _custom_palette()
    save_named_palette_conf("Mine", path, original)
    settings = Settings()
    add_named_palette_conf(settings, "Mine", str(path))
    loaded = Palette()
    assert named_palette(settings, "Mine", loaded)
    _assert_same_roles(original, loaded)


def test_named_palette_light_unknown_is_false():
    assert not named_palette(Settings(), "Unknown", Palette())


def test_dark_palette_is_fixed_up():
    palette = Palette.from_button_color(Color(40, 40, 40))
    window = palette.color(ColorGroup.ACTIVE, ColorRole.WINDOW)
    assert named_palette(None, "", palette)
    mid = palette.color(ColorGroup.ACTIVE, ColorRole.MID)
    assert palette.color(ColorGroup.ACTIVE, ColorRole.LIGHT) == window.lighter(140)
    assert palette.color(ColorGroup.INACTIVE, ColorRole.SHADOW) == window.darker(180)
    assert palette.color(ColorGroup.DISABLED, ColorRole.HIGHLIGHT) == mid
    assert palette.color(ColorGroup.DISABLED, ColorRole.BUTTON_TEXT) == mid


def test_fixup_flag_skips_dark_fix():
    palette = Palette.from_button_color(Color(40, 40, 40))
    before = palette.copy()
    assert not named_palette(None, "", palette, True)
    assert palette == before