"""Named color themes kept in INI-style settings and palette files."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Optional, Union

from padsynthkit.colors import ROLE_KEYS, Color, ColorGroup, ColorRole, Palette

COLOR_THEMES_GROUP = "ColorThemes"
_GENERAL = "General"

PathLike = Union[str, "os.PathLike[str]"]


def _norm(key: str) -> str:
    return "/".join(part for part in str(key).split("/") if part)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    text = str(value)
    if (
        "," in text
        or text != text.strip()
        or text.startswith('"')
        or text in ("true", "false")
    ):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def _parse_value(text: str) -> Any:
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return re.sub(r"\\(.)", r"\1", text[1:-1])
    if text == "true":
        return True
    if text == "false":
        return False
    if "," in text:
        return [part.strip() for part in text.split(",")]
    return text


class Settings:
    """Hierarchical key/value store with slash-separated keys, saved as INI."""

    def __init__(self, filename: Optional[PathLike] = None) -> None:
        self.filename = Path(filename) if filename is not None else None
        self._values: dict[str, Any] = {}
        if self.filename is not None and self.filename.is_file():
            self._load(self.filename.read_text(encoding="utf-8"))

    def value(self, key: str, default: Any = None) -> Any:
        return self._values.get(_norm(key), default)

    def set_value(self, key: str, value: Any) -> None:
        path = _norm(key)
        if not path:
            raise ValueError("empty settings key")
        self._values[path] = list(value) if isinstance(value, (list, tuple)) else value

    def remove(self, key: str) -> None:
        """Remove a key and everything below it; an empty key clears all."""
        path = _norm(key)
        if not path:
            self._values.clear()
            return
        prefix = path + "/"
        for existing in [k for k in self._values if k == path or k.startswith(prefix)]:
            del self._values[existing]

    def _children(self, group: str) -> list[tuple[str, bool]]:
        path = _norm(group)
        prefix = path + "/" if path else ""
        children = []
        for key in self._values:
            if key.startswith(prefix):
                head, sep, _ = key[len(prefix):].partition("/")
                children.append((head, bool(sep)))
        return children

    def child_keys(self, group: str = "") -> list[str]:
        return list(dict.fromkeys(name for name, nested in self._children(group) if not nested))

    def child_groups(self, group: str = "") -> list[str]:
        return list(dict.fromkeys(name for name, nested in self._children(group) if nested))

    def sync(self) -> None:
        """Write the settings to their file, if they have one."""
        if self.filename is None:
            return
        sections: dict[str, list[tuple[str, Any]]] = {_GENERAL: []}
        for key, value in self._values.items():
            head, sep, tail = key.partition("/")
            section, name = (head, tail.replace("/", "\\")) if sep else (_GENERAL, head)
            sections.setdefault(section, []).append((name, value))
        lines: list[str] = []
        for section, entries in sections.items():
            if not entries:
                continue
            if lines:
                lines.append("")
            lines.append(f"[{section}]")
            lines.extend(f"{name}={_format_value(value)}" for name, value in entries)
        self.filename.parent.mkdir(parents=True, exist_ok=True)
        self.filename.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def _load(self, text: str) -> None:
        section = _GENERAL
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line[0] in ";#":
                continue
            if line.startswith("[") and line.endswith("]"):
                section = line[1:-1].strip()
                continue
            name, sep, value = line.partition("=")
            if not sep:
                continue
            name = name.strip().replace("\\", "/")
            key = name if section == _GENERAL else f"{section}/{name}"
            path = _norm(key)
            if path:
                self._values[path] = _parse_value(value.strip())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _norm(key) in self._values


def color_role(name: str) -> ColorRole:
    """The role stored under a key name, or NO_ROLE if unknown."""
    return ROLE_KEYS.get(name, ColorRole.NO_ROLE)


def named_palette_list(settings: Optional[Settings]) -> list[str]:
    """Names of themes known to settings: file references, then inline ones."""
    if settings is None:
        return []
    return settings.child_keys(COLOR_THEMES_GROUP) + settings.child_groups(COLOR_THEMES_GROUP)


def named_palette_conf(settings: Optional[Settings], name: str) -> str:
    """The palette file registered for a theme name, or ''."""
    if settings is None or not name:
        return ""
    value = settings.value(f"{COLOR_THEMES_GROUP}/{name}")
    return "" if value is None or isinstance(value, list) else str(value)


def add_named_palette_conf(settings: Optional[Settings], name: str, filename: str) -> None:
    if settings is None:
        return
    key = f"{COLOR_THEMES_GROUP}/{name}"
    settings.remove(key)
    settings.set_value(key, str(filename))


def delete_named_palette_conf(settings: Optional[Settings], name: str) -> None:
    if settings is None:
        return
    settings.remove(f"{COLOR_THEMES_GROUP}/{name}")


def load_named_palette(settings: Optional[Settings], name: str, palette: Palette) -> bool:
    """Load an inline theme into palette; True if any role was read."""
    if settings is None or name not in settings.child_groups(COLOR_THEMES_GROUP):
        return False
    group = f"{COLOR_THEMES_GROUP}/{name}"
    loaded = 0
    for key in settings.child_keys(group):
        role = color_role(key)
        colors = settings.value(f"{group}/{key}")
        if not isinstance(colors, list) or len(colors) != 3:
            continue
        try:
            active, inactive, disabled = (Color.from_name(c) for c in colors)
        except ValueError:
            continue
        palette.set_color(ColorGroup.ACTIVE, role, active)
        palette.set_color(ColorGroup.INACTIVE, role, inactive)
        palette.set_color(ColorGroup.DISABLED, role, disabled)
        loaded += 1
    return loaded > 0


def save_named_palette(settings: Optional[Settings], name: str, palette: Palette) -> bool:
    """Store every role of palette as an inline theme."""
    if settings is None:
        return False
    group = f"{COLOR_THEMES_GROUP}/{name}"
    for key, role in ROLE_KEYS.items():
        settings.set_value(
            f"{group}/{key}",
            [
                palette.color(ColorGroup.ACTIVE, role).name(),
                palette.color(ColorGroup.INACTIVE, role).name(),
                palette.color(ColorGroup.DISABLED, role).name(),
            ],
        )
    return True


def load_named_palette_conf(name: str, filename: PathLike, palette: Palette) -> bool:
    return load_named_palette(Settings(filename), name, palette)


def save_named_palette_conf(name: str, filename: PathLike, palette: Palette) -> bool:
    conf = Settings(filename)
    saved = save_named_palette(conf, name, palette)
    conf.sync()
    return saved


def named_palette(
    settings: Optional[Settings], name: str, palette: Palette, fixup: bool = False
) -> bool:
    """Load a theme by name, inline or from its file, fixing dark themes.

    Unless fixup is set, a palette with a dark base gets its shades and its
    disabled group regenerated from the window color.
    """
    result = 0
    if name and load_named_palette(settings, name, palette):
        result += 1
    else:
        filename = named_palette_conf(settings, name)
        if (
            filename
            and os.access(filename, os.R_OK)
            and load_named_palette_conf(name, filename, palette)
        ):
            result += 1

    active = ColorGroup.ACTIVE
    if not fixup and palette.color(active, ColorRole.BASE).value() < 0x7F:
        window = palette.color(active, ColorRole.WINDOW)
        for group in ColorGroup:
            palette.set_color(group, ColorRole.LIGHT, window.lighter(140))
            palette.set_color(group, ColorRole.MIDLIGHT, window.lighter(100))
            palette.set_color(group, ColorRole.MID, window.lighter(90))
            palette.set_color(group, ColorRole.DARK, window.darker(160))
            palette.set_color(group, ColorRole.SHADOW, window.darker(180))
        text = palette.color(active, ColorRole.TEXT)
        palette.set_color_group(
            ColorGroup.DISABLED,
            palette.color(active, ColorRole.WINDOW_TEXT).darker(),
            palette.color(active, ColorRole.BUTTON),
            palette.color(active, ColorRole.LIGHT),
            palette.color(active, ColorRole.DARK),
            palette.color(active, ColorRole.MID),
            text.darker(),
            text.lighter(),
            palette.color(active, ColorRole.BASE),
            palette.color(active, ColorRole.WINDOW),
        )
        mid = palette.color(active, ColorRole.MID)
        palette.set_color(ColorGroup.DISABLED, ColorRole.HIGHLIGHT, mid)
        palette.set_color(ColorGroup.DISABLED, ColorRole.BUTTON_TEXT, mid)
        result += 1

    return result > 0