import pytest

from padsynthkit.colors import ROLE_KEYS, Color, ColorGroup, ColorRole, Palette
from padsynthkit.palette_editor import DialogButtons, PaletteEditor, PaletteImportError
from padsynthkit.palette_store import (
    Settings,
    load_named_palette_conf,
    named_palette_conf,
    save_named_palette_conf,
)

RED = Color(200, 0, 0)


@pytest.fixture
def editor():
    return PaletteEditor(settings=Settings())


def test_initial_state(editor):
    assert not editor.is_dirty()
    assert editor.buttons == DialogButtons(False, False, False, False, False)


def test_generate_marks_dirty(editor):
    editor.generate(RED)
    assert editor.palette.color(ColorGroup.ACTIVE, ColorRole.BUTTON) == RED
    assert editor.generate_color == RED
    assert editor.buttons.reset


def test_reset_restores_parent(editor):
    parent = editor.parent_palette
    editor.generate(RED)
    editor.reset()
    assert editor.palette.color(ColorGroup.ACTIVE, ColorRole.BUTTON) == parent.color(
        ColorGroup.ACTIVE, ColorRole.BUTTON
    )
    assert not editor.buttons.reset


def test_unmasked_palette_takes_parent_colors(editor):
    parent = Palette.from_button_color(Color(20, 40, 60))
    editor.set_palette(Palette(), parent)
    for role in ROLE_KEYS.values():
        assert editor.palette.color(ColorGroup.ACTIVE, role) == parent.color(ColorGroup.ACTIVE, role)
    assert editor.palette.resolve_mask == 0


def test_save_registers_theme(editor, tmp_path):
    target = tmp_path / "mine.conf"
    editor.name_changed("Mine")
    editor.generate(RED)
    assert editor.buttons.save
    assert editor.save(target)
    assert "Mine" in editor.names
    assert editor.is_dirty()
    assert editor.buttons.ok and not editor.buttons.save
    assert named_palette_conf(editor.settings, "Mine") == str(target)
    loaded = Palette()
    assert load_named_palette_conf("Mine", target, loaded)
    assert loaded.color(ColorGroup.ACTIVE, ColorRole.BUTTON) == RED


def test_save_without_name_or_file(editor):
    assert editor.save() is False
    editor.name_changed("Unsaved")
    assert editor.save() is False


def test_delete_removes_theme(editor, tmp_path):
    editor.name_changed("Gone")
    editor.save(tmp_path / "gone.conf")
    editor.delete()
    assert "Gone" not in editor.names
    assert not editor.buttons.delete


def test_import_file(editor, tmp_path):
    source = tmp_path / "themes.conf"
    dark = Color(40, 40, 40)
    save_named_palette_conf("Dark", source, Palette.from_button_color(dark))
    assert editor.import_file(source) == 1
    assert "Dark" in editor.names
    assert editor.name == "Dark"
    assert editor.palette.color(ColorGroup.ACTIVE, ColorRole.BUTTON) == dark
    assert editor.default_dir() == str(tmp_path)


def test_import_empty_file_raises(editor, tmp_path):
    empty = tmp_path / "empty.conf"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(PaletteImportError):
        editor.import_file(empty)


def test_export_file_uses_file_name(editor, tmp_path):
    editor.generate(RED)
    target = tmp_path / "mytheme.conf"
    assert editor.export_file(target)
    loaded = Palette()
    assert load_named_palette_conf("mytheme", target, loaded)
    assert loaded.color(ColorGroup.ACTIVE, ColorRole.BUTTON) == RED
    assert "mytheme" not in editor.names


def test_accept_stores_details(editor):
    editor.details = True
    editor.accept()
    assert editor.is_show_details() is True
    assert editor.model.generate is False


def test_settings_round_trips(editor, tmp_path):
    editor.set_default_dir(str(tmp_path))
    assert editor.default_dir() == str(tmp_path)
    editor.set_show_details(True)
    assert editor.is_show_details()
    editor.set_show_details(False)
    assert not editor.is_show_details()


def test_no_settings_defaults():
    editor = PaletteEditor()
    editor.set_default_dir("/somewhere")
    assert editor.default_dir() == ""
    assert editor.is_show_details() is False


def test_name_change_kept_while_dirty(editor):
    editor.generate(RED)
    editor.name_changed("Fresh")
    assert editor.name == "Fresh"
    assert editor.palette.color(ColorGroup.ACTIVE, ColorRole.BUTTON) == RED
    assert editor.buttons.save