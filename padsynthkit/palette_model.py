"""Table model exposing a palette's roles and groups for editing."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Optional

from padsynthkit.colors import ROLE_KEYS, Color, ColorGroup, ColorRole, Palette

Cell = tuple[int, int]


class ItemRole(Enum):
    """What a model cell is asked for."""

    DISPLAY = 0
    EDIT = 1
    BACKGROUND = 2


_HEADERS = {0: "Color Role", 1: "Active", 2: "Inactive", 3: "Disabled"}


class PaletteModel:
    """Rows are color roles; column 0 is the role, columns 1-3 its groups."""

    def __init__(self) -> None:
        self.role_names: dict[ColorRole, str] = {role: key for key, role in ROLE_KEYS.items()}
        self._nrows = len(ROLE_KEYS)
        self._palette = Palette()
        self._parent_palette = Palette()
        self.generate = True
        self.on_palette_changed: Optional[Callable[[Palette], None]] = None
        self.on_data_changed: Optional[Callable[[Cell, Cell], None]] = None

    @property
    def palette(self) -> Palette:
        return self._palette

    def row_count(self) -> int:
        return self._nrows

    def column_count(self) -> int:
        return 4

    def _valid(self, row: int, column: int) -> bool:
        return 0 <= row < self._nrows and 0 <= column < 4

    def _emit(self, begin: Cell, end: Cell) -> None:
        if self.on_palette_changed:
            self.on_palette_changed(self._palette)
        if self.on_data_changed:
            self.on_data_changed(begin, end)

    def data(self, row: int, column: int, role: ItemRole) -> Any:
        if not self._valid(row, column):
            return None
        if column == 0:
            if role == ItemRole.DISPLAY:
                return self.role_names.get(ColorRole(row))
            if role == ItemRole.EDIT:
                return bool(self._palette.resolve_mask & (1 << row))
            return None
        if role == ItemRole.BACKGROUND:
            return self._palette.color(self.column_to_group(column), ColorRole(row))
        return None

    def set_data(self, row: int, column: int, value: Any, role: ItemRole) -> bool:
        """Change a cell; returns whether the change applied."""
        if not self._valid(row, column):
            return False

        if column != 0 and role == ItemRole.BACKGROUND:
            color: Color = value
            cr = ColorRole(row)
            disabled = ColorGroup.DISABLED
            self._palette.set_color(self.column_to_group(column), cr, color)
            begin: Cell = (int(cr), 0)
            end: Cell = (int(cr), 3)
            if self.generate:
                self._palette.set_color(ColorGroup.INACTIVE, cr, color)
                if cr in (
                    ColorRole.WINDOW_TEXT,
                    ColorRole.TEXT,
                    ColorRole.BUTTON_TEXT,
                    ColorRole.BASE,
                ):
                    pass
                elif cr == ColorRole.DARK:
                    for target in (
                        ColorRole.WINDOW_TEXT,
                        ColorRole.DARK,
                        ColorRole.TEXT,
                        ColorRole.BUTTON_TEXT,
                    ):
                        self._palette.set_color(disabled, target, color)
                    begin = (0, 0)
                    end = (self._nrows - 1, 3)
                elif cr == ColorRole.WINDOW:
                    self._palette.set_color(disabled, ColorRole.BASE, color)
                    self._palette.set_color(disabled, ColorRole.WINDOW, color)
                    begin = (int(ColorRole.BASE), 0)
                elif cr == ColorRole.HIGHLIGHT:
                    self._palette.set_color(disabled, ColorRole.HIGHLIGHT, color.darker(120))
                else:
                    self._palette.set_color(disabled, cr, color)
            self._emit(begin, end)
            return True

        if column == 0 and role == ItemRole.EDIT:
            mask = self._palette.resolve_mask
            if bool(value):
                mask |= 1 << row
            else:
                cr = ColorRole(row)
                for group in (ColorGroup.ACTIVE, ColorGroup.INACTIVE, ColorGroup.DISABLED):
                    self._palette.set_color(group, cr, self._parent_palette.color(group, cr))
                mask &= ~(1 << row)
            self._palette.resolve_mask = mask
            self._emit((row, 0), (row, 3))
            return True

        return False

    def header_data(self, section: int) -> Optional[str]:
        return _HEADERS.get(section)

    def set_palette(self, palette: Palette, parent_palette: Palette) -> None:
        self._palette = palette.copy()
        self._parent_palette = parent_palette.copy()
        if self.on_data_changed:
            self.on_data_changed((0, 0), (self._nrows - 1, 3))

    def column_to_group(self, column: int) -> ColorGroup:
        if column == 1:
            return ColorGroup.ACTIVE
        if column == 2:
            return ColorGroup.INACTIVE
        return ColorGroup.DISABLED

    def group_to_column(self, group: ColorGroup) -> int:
        if group == ColorGroup.ACTIVE:
            return 1
        if group == ColorGroup.INACTIVE:
            return 2
        return 3