"""Palette theme editor: named themes, dirty tracking and file import/export."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from padsynthkit.colors import ROLE_KEYS, Color, ColorGroup, ColorRole, Palette
from padsynthkit.palette_model import ItemRole, PaletteModel
from padsynthkit.palette_store import (
    COLOR_THEMES_GROUP,
    PathLike,
    Settings,
    add_named_palette_conf,
    delete_named_palette_conf,
    named_palette,
    named_palette_conf,
    named_palette_list,
    save_named_palette_conf,
)

PALETTE_EDITOR_GROUP = "PaletteEditor"
DEFAULT_DIR_KEY = "DefaultDir"
SHOW_DETAILS_KEY = "ShowDetails"


class PaletteImportError(ValueError):
    """A file held no color themes to import."""


@dataclass(frozen=True)
class DialogButtons:
    """Which editor actions are currently available."""

    save: bool
    delete: bool
    reset: bool
    export: bool
    ok: bool


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


class PaletteEditor:
    """Edits a palette against a parent palette and a store of named themes."""

    def __init__(
        self, palette: Optional[Palette] = None, settings: Optional[Settings] = None
    ) -> None:
        palette = palette if palette is not None else Palette()
        self.settings: Optional[Settings] = None
        self.name = ""
        self.names: list[str] = []
        self._details = False
        self._palette = palette.copy()
        self._parent_palette = palette.copy()
        self._model_updated = False
        self._palette_updated = False
        self.dirty_count = 0
        self.dirty_total = 0
        self.generate_color = self._palette.color(ColorGroup.ACTIVE, ColorRole.BUTTON)
        self.model = PaletteModel()
        self.model.on_palette_changed = self._palette_changed
        self.set_palette(palette, palette)
        if settings is not None:
            self.set_settings(settings)

    @property
    def palette(self) -> Palette:
        return self._palette

    @property
    def parent_palette(self) -> Palette:
        return self._parent_palette

    @property
    def details(self) -> bool:
        return self._details

    @details.setter
    def details(self, on: bool) -> None:
        self._details = bool(on)
        self.model.generate = not self._details

    @property
    def buttons(self) -> DialogButtons:
        exists = self.name in self.names
        return DialogButtons(
            save=bool(self.name) and (self.dirty_count > 0 or not exists),
            delete=exists,
            reset=self.dirty_count > 0,
            export=bool(self.name) or exists,
            ok=exists,
        )

    def set_palette(self, palette: Palette, parent_palette: Optional[Palette] = None) -> None:
        """Take palette, filling roles it leaves unset from the parent palette."""
        if parent_palette is not None:
            self._parent_palette = parent_palette.copy()
        self._palette = palette.copy()
        mask = palette.resolve_mask
        for i, role in enumerate(ROLE_KEYS.values()):
            if not mask & (1 << i):
                for group in (ColorGroup.ACTIVE, ColorGroup.INACTIVE, ColorGroup.DISABLED):
                    self._palette.set_color(group, role, self._parent_palette.color(group, role))
        self._palette.resolve_mask = mask

        self.generate_color = self._palette.color(ColorGroup.ACTIVE, ColorRole.BUTTON)

        self._palette_updated = True
        if not self._model_updated:
            self.model.set_palette(self._palette, self._parent_palette)
        self._palette_updated = False

    def _palette_changed(self, palette: Palette) -> None:
        self._model_updated = True
        if not self._palette_updated:
            self.set_palette(palette)
        self._model_updated = False
        self.dirty_count += 1

    def set_settings(self, settings: Optional[Settings]) -> None:
        self.settings = settings
        self.details = self.is_show_details()
        self._update_named_palette_list()

    def _update_named_palette_list(self) -> None:
        self.names = named_palette_list(self.settings)

    def set_palette_name(self, name: str) -> None:
        """Make name current, loading its theme if one is known."""
        self.name = name
        palette = Palette()
        if named_palette(self.settings, name, palette, True):
            self.set_palette(palette, palette)
        self.dirty_count = 0

    def name_changed(self, name: str) -> None:
        if self.dirty_count > 0 and name not in self.names:
            self.name = name
            return
        self.reset()
        self.set_palette_name(name)
        self.dirty_total += 1

    def _add_named_palette_conf(self, name: str, filename: str) -> None:
        add_named_palette_conf(self.settings, name, filename)
        self.dirty_total += 1

    def save(self, filename: Optional[PathLike] = None) -> bool:
        """Save the current theme to its registered file, or else to filename."""
        name = self.name
        if not name:
            return False
        target = named_palette_conf(self.settings, name)
        if not target or not os.access(target, os.W_OK):
            target = os.fspath(filename) if filename is not None else ""
        if not target or not save_named_palette_conf(name, target, self._palette):
            return False
        self._add_named_palette_conf(name, target)
        self.set_palette(self._palette, self._palette)
        self._update_named_palette_list()
        self.reset()
        return True

    def delete(self) -> None:
        if self.name not in self.names:
            return
        if self.settings is not None:
            delete_named_palette_conf(self.settings, self.name)
            self.dirty_total += 1
        self._update_named_palette_list()

    def generate(self, color: Color) -> None:
        """Replace the palette with one generated from a button color."""
        self.set_palette(Palette.from_button_color(color))
        self.dirty_count += 1

    def reset(self) -> None:
        """Drop all role edits, restoring the parent palette's colors."""
        for role in ROLE_KEYS.values():
            self.model.set_data(int(role), 0, False, ItemRole.EDIT)
        self.dirty_count = 0

    def import_file(self, filename: PathLike) -> int:
        """Register every theme found in a palette file; returns how many."""
        path = os.fspath(filename)
        conf = Settings(path)
        imported = 0
        for name in conf.child_groups(COLOR_THEMES_GROUP):
            if name:
                self._add_named_palette_conf(name, path)
                self.set_palette_name(name)
                imported += 1
        if not imported:
            raise PaletteImportError(f"could not import from file: {path}")
        self._update_named_palette_list()
        self.reset()
        self.set_default_dir(os.path.dirname(os.path.abspath(path)))
        return imported

    def export_file(self, filename: PathLike) -> bool:
        """Write the current palette to a file, named after the file."""
        path = os.fspath(filename)
        name = Path(path).name.split(".")[0]
        if not save_named_palette_conf(name, path, self._palette):
            return False
        self.set_default_dir(os.path.dirname(os.path.abspath(path)))
        return True

    def is_dirty(self) -> bool:
        return self.dirty_total > 0

    def accept(self) -> None:
        self.set_show_details(self.details)
        if self.dirty_count > 0:
            self.save()

    def default_dir(self) -> str:
        if self.settings is None:
            return ""
        value = self.settings.value(f"{PALETTE_EDITOR_GROUP}/{DEFAULT_DIR_KEY}")
        return "" if value is None else str(value)

    def set_default_dir(self, directory: str) -> None:
        if self.settings is not None:
            self.settings.set_value(f"{PALETTE_EDITOR_GROUP}/{DEFAULT_DIR_KEY}", directory)

    def is_show_details(self) -> bool:
        if self.settings is None:
            return False
        return _to_bool(self.settings.value(f"{PALETTE_EDITOR_GROUP}/{SHOW_DETAILS_KEY}", False))

    def set_show_details(self, on: bool) -> None:
        if self.settings is not None:
            self.settings.set_value(f"{PALETTE_EDITOR_GROUP}/{SHOW_DETAILS_KEY}", bool(on))