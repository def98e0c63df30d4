"""Colors, color roles and color groups forming an editable widget palette."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from enum import IntEnum


class ColorRole(IntEnum):
    """Palette color roles, numbered as the toolkit numbers them."""

    WINDOW_TEXT = 0
    BUTTON = 1
    LIGHT = 2
    MIDLIGHT = 3
    DARK = 4
    MID = 5
    TEXT = 6
    BRIGHT_TEXT = 7
    BUTTON_TEXT = 8
    BASE = 9
    WINDOW = 10
    SHADOW = 11
    HIGHLIGHT = 12
    HIGHLIGHTED_TEXT = 13
    LINK = 14
    LINK_VISITED = 15
    ALTERNATE_BASE = 16
    NO_ROLE = 17
    TOOL_TIP_BASE = 18
    TOOL_TIP_TEXT = 19
    PLACEHOLDER_TEXT = 20


class ColorGroup(IntEnum):
    """Widget states a palette holds colors for."""

    ACTIVE = 0
    DISABLED = 1
    INACTIVE = 2


# Role names as stored in palette files, in their canonical order.
ROLE_KEYS: dict[str, ColorRole] = {
    "Window": ColorRole.WINDOW,
    "WindowText": ColorRole.WINDOW_TEXT,
    "Button": ColorRole.BUTTON,
    "ButtonText": ColorRole.BUTTON_TEXT,
    "Light": ColorRole.LIGHT,
    "Midlight": ColorRole.MIDLIGHT,
    "Dark": ColorRole.DARK,
    "Mid": ColorRole.MID,
    "Text": ColorRole.TEXT,
    "BrightText": ColorRole.BRIGHT_TEXT,
    "Base": ColorRole.BASE,
    "AlternateBase": ColorRole.ALTERNATE_BASE,
    "Shadow": ColorRole.SHADOW,
    "Highlight": ColorRole.HIGHLIGHT,
    "HighlightedText": ColorRole.HIGHLIGHTED_TEXT,
    "Link": ColorRole.LINK,
    "LinkVisited": ColorRole.LINK_VISITED,
    "ToolTipBase": ColorRole.TOOL_TIP_BASE,
    "ToolTipText": ColorRole.TOOL_TIP_TEXT,
    "PlaceholderText": ColorRole.PLACEHOLDER_TEXT,
    "NoRole": ColorRole.NO_ROLE,
}

_NAMED_COLORS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "darkgray": (169, 169, 169),
    "darkblue": (0, 0, 139),
}


@dataclass(frozen=True)
class Color:
    """An 8-bit per channel RGBA color."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= channel <= 255:
                raise ValueError(f"color channel out of range: {channel}")

    @classmethod
    def from_name(cls, name: str) -> Color:
        """Parse '#rgb', '#rrggbb', '#aarrggbb' or a basic color name."""
        text = name.strip().lower()
        if text in _NAMED_COLORS:
            return cls(*_NAMED_COLORS[text])
        if not text.startswith("#"):
            raise ValueError(f"invalid color name: {name!r}")
        digits = text[1:]
        try:
            int(digits, 16)
        except ValueError:
            raise ValueError(f"invalid color name: {name!r}") from None
        if len(digits) == 3:
            r, g, b = (int(d * 2, 16) for d in digits)
            return cls(r, g, b)
        if len(digits) == 6:
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        if len(digits) == 8:
            return cls(
                int(digits[2:4], 16),
                int(digits[4:6], 16),
                int(digits[6:8], 16),
                int(digits[0:2], 16),
            )
        raise ValueError(f"invalid color name: {name!r}")

    def name(self) -> str:
        """The '#rrggbb' form of this color."""
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def value(self) -> int:
        """HSV value, 0..255."""
        return max(self.red, self.green, self.blue)

    def _hsv(self) -> tuple[float, float, float]:
        h, s, v = colorsys.rgb_to_hsv(self.red / 255.0, self.green / 255.0, self.blue / 255.0)
        return h, s * 255.0, v * 255.0

    def _with_hsv(self, h: float, s: float, v: float) -> Color:
        r, g, b = colorsys.hsv_to_rgb(h, s / 255.0, v / 255.0)
        return Color(round(r * 255.0), round(g * 255.0), round(b * 255.0), self.alpha)

    def lighter(self, factor: int = 150) -> Color:
        """A lighter color; factor is a percentage of the current value."""
        if factor <= 0:
            return self
        if factor < 100:
            return self.darker(10000 // factor)
        h, s, v = self._hsv()
        v = factor * v / 100.0
        if v > 255.0:
            s = max(0.0, s - (v - 255.0))
            v = 255.0
        return self._with_hsv(h, s, v)

    def darker(self, factor: int = 200) -> Color:
        """A darker color; the value is divided by factor percent."""
        if factor <= 0:
            return self
        if factor < 100:
            return self.lighter(10000 // factor)
        h, s, v = self._hsv()
        return self._with_hsv(h, s, v * 100.0 / factor)


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
_DEFAULT_BUTTON = Color(239, 239, 239)


def _mix(a: Color, b: Color) -> Color:
    return Color((a.red + b.red) // 2, (a.green + b.green) // 2, (a.blue + b.blue) // 2)


class Palette:
    """Colors for every role and group, plus a mask of roles set explicitly."""

    def __init__(self) -> None:
        self._colors: dict[tuple[ColorGroup, ColorRole], Color] = {}
        self.resolve_mask = 0
        self._fill_from_button(_DEFAULT_BUTTON)
        self.resolve_mask = 0

    def color(self, group: ColorGroup, role: ColorRole) -> Color:
        return self._colors.get((ColorGroup(group), ColorRole(role)), BLACK)

    def set_color(self, group: ColorGroup, role: ColorRole, color: Color) -> None:
        role = ColorRole(role)
        self._colors[(ColorGroup(group), role)] = color
        self.resolve_mask |= 1 << int(role)

    def set_role(self, role: ColorRole, color: Color) -> None:
        """Set one role to the same color in every group."""
        for group in ColorGroup:
            self.set_color(group, role, color)

    def set_color_group(
        self,
        group: ColorGroup,
        window_text: Color,
        button: Color,
        light: Color,
        dark: Color,
        mid: Color,
        text: Color,
        bright_text: Color,
        base: Color,
        window: Color,
    ) -> None:
        """Set a whole group from its principal colors, deriving the rest."""
        derived = {
            ColorRole.WINDOW_TEXT: window_text,
            ColorRole.BUTTON: button,
            ColorRole.LIGHT: light,
            ColorRole.DARK: dark,
            ColorRole.MID: mid,
            ColorRole.TEXT: text,
            ColorRole.BRIGHT_TEXT: bright_text,
            ColorRole.BASE: base,
            ColorRole.ALTERNATE_BASE: _mix(base, button),
            ColorRole.WINDOW: window,
            ColorRole.MIDLIGHT: _mix(button, light),
            ColorRole.BUTTON_TEXT: text,
            ColorRole.SHADOW: BLACK,
            ColorRole.HIGHLIGHT: Color(0, 0, 128),
            ColorRole.HIGHLIGHTED_TEXT: WHITE,
            ColorRole.LINK: Color(0, 0, 255),
            ColorRole.LINK_VISITED: Color(255, 0, 255),
            ColorRole.TOOL_TIP_BASE: Color(255, 255, 220),
            ColorRole.TOOL_TIP_TEXT: BLACK,
            ColorRole.PLACEHOLDER_TEXT: Color(text.red, text.green, text.blue, 128),
        }
        for role, color in derived.items():
            self.set_color(group, role, color)

    def _fill_from_button(self, button: Color) -> None:
        bright = button.value() > 128
        base = WHITE if bright else BLACK
        foreground = BLACK if bright else WHITE
        dark = button.darker()
        mid = button.darker(150)
        light = button.lighter(150)
        for group in (ColorGroup.ACTIVE, ColorGroup.INACTIVE):
            self.set_color_group(
                group, foreground, button, light, dark, mid, foreground, WHITE, base, button
            )
        self.set_color_group(
            ColorGroup.DISABLED, dark, button, light, dark, mid, dark, WHITE, button, button
        )

    def copy(self) -> Palette:
        other = Palette.__new__(Palette)
        other._colors = dict(self._colors)
        other.resolve_mask = self.resolve_mask
        return other

    @classmethod
    def from_button_color(cls, color: Color) -> Palette:
        """A full palette generated from a single button color."""
        palette = cls()
        palette._fill_from_button(color)
        return palette

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._colors == other._colors and self.resolve_mask == other.resolve_mask

    def __repr__(self) -> str:
        window = self.color(ColorGroup.ACTIVE, ColorRole.WINDOW).name()
        return f"Palette(window={window}, resolve_mask={self.resolve_mask:#x})"