"""Parameter controls: a value with range, default and scale behind each widget."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Optional

from padsynthkit.dial import Dial, Edit

_EPSILON = 0.0001


def _iround(x: float) -> int:
    """Round half away from zero."""
    return int(x - 0.5 if x < 0.0 else x + 0.5)


@contextmanager
def _blocked(widget: Any) -> Iterator[None]:
    """Silence a widget's change callback for the duration of the block."""
    callback = widget.on_value_changed
    widget.on_value_changed = None
    try:
        yield
    finally:
        widget.on_value_changed = callback


class Param:
    """A float parameter with a range, a remembered default and a display scale."""

    def __init__(self) -> None:
        self._value = 0.0
        self._minimum = 0.0
        self._maximum = 1.0
        self._default_value = 0.0
        self._default_count = 0
        self.scale = 1.0
        self.enabled = True
        self.highlighted = False
        self.tool_tip = ""
        self.on_value_changed: Optional[Callable[[float], None]] = None

    @property
    def value(self) -> float:
        return self._value

    @property
    def minimum(self) -> float:
        return self._minimum

    @minimum.setter
    def minimum(self, minimum: float) -> None:
        self._set_minimum(minimum)

    @property
    def maximum(self) -> float:
        return self._maximum

    @maximum.setter
    def maximum(self, maximum: float) -> None:
        self._set_maximum(maximum)

    def _set_minimum(self, minimum: float) -> None:
        self._minimum = minimum

    def _set_maximum(self, maximum: float) -> None:
        self._maximum = maximum

    @property
    def default_value(self) -> float:
        return self._default_value

    def set_text(self, text: str) -> None:
        """Set the value from its text form; unparsable text reads as zero."""
        try:
            number = float(text)
        except ValueError:
            number = 0.0
        self.set_value(number)

    def text(self) -> str:
        return f"{self._value:g}"

    def value_text(self) -> str:
        return f"{self._value:g}"

    def set_value(self, value: float) -> None:
        """Set the value; the first value ever set becomes the default."""
        self.highlighted = False
        if self._default_count == 0:
            self._default_value = value
            self._default_count += 1
        elif self.enabled and abs(value - self._default_value) > _EPSILON:
            self.highlighted = True

        if abs(value - self._value) > _EPSILON:
            self._value = value
            if self.on_value_changed:
                self.on_value_changed(self._value)

    def reset_default_value(self) -> None:
        self._default_value = 0.0
        self._default_count = 0

    def is_default_value(self) -> bool:
        """Whether a default value has been recorded."""
        return self._default_count > 0

    def set_default_value(self, value: float) -> None:
        self._default_value = value
        self._default_count += 1

    def middle_click(self) -> None:
        """Restore the default, taking the range midpoint if none is known."""
        if self._default_count < 1:
            self._default_value = 0.5 * (self._maximum + self._minimum)
            self._default_count += 1
        self.set_value(self._default_value)

    def scale_from_value(self, value: float) -> float:
        return self.scale * value

    def value_from_scale(self, scaled: float) -> float:
        return scaled / self.scale


class Knob(Param):
    """A parameter shown as a labelled dial."""

    def __init__(self) -> None:
        super().__init__()
        self.label = ""
        self.dial = Dial()
        self._dial_step = 1
        self.dial.on_value_changed = self.dial_value_changed

    def set_text(self, text: str) -> None:
        self.label = text

    def text(self) -> str:
        return self.label

    def set_value(self, value: float) -> None:
        with _blocked(self.dial):
            self.dial.value = self.scale_from_value(value)
            Param.set_value(self, value)

    def _set_maximum(self, maximum: float) -> None:
        super()._set_maximum(maximum)
        self.dial.maximum = int(self.scale_from_value(maximum))
        self.dial.value = self.dial.value

    def _set_minimum(self, minimum: float) -> None:
        super()._set_minimum(minimum)
        self.dial.minimum = int(self.scale_from_value(minimum))
        self.dial.value = self.dial.value

    @property
    def single_step(self) -> float:
        return self.value_from_scale(self._dial_step)

    @single_step.setter
    def single_step(self, step: float) -> None:
        self._dial_step = int(self.scale_from_value(step))

    def dial_value_changed(self, dial_value: int) -> None:
        self.set_value(self.value_from_scale(dial_value))


class Spin(Knob):
    """A knob paired with a numeric spin edit, shown in percent."""

    def __init__(self) -> None:
        super().__init__()
        self.edit = Edit()
        self.edit_step = 10.0 ** -self.edit.decimals
        self.special_value_text = ""
        self.scale = 100.0
        self.minimum = 0.0
        self.maximum = 1.0
        self.decimals = 1
        self.edit.on_value_changed = self.spin_value_changed

    def set_value(self, value: float) -> None:
        with _blocked(self.edit):
            self.edit.set_value(self.scale_from_value(value))
            super().set_value(value)

    def _set_maximum(self, maximum: float) -> None:
        self.edit.maximum = self.scale_from_value(maximum)
        self.edit.set_value(self.edit.value)
        super()._set_maximum(maximum)

    def _set_minimum(self, minimum: float) -> None:
        self.edit.minimum = self.scale_from_value(minimum)
        self.edit.set_value(self.edit.value)
        super()._set_minimum(minimum)

    def value_text(self) -> str:
        return f"{self.edit.value:.1f}"

    def spin_value_changed(self, spin_value: float) -> None:
        Knob.set_value(self, self.value_from_scale(float(spin_value)))

    def is_special_value(self) -> bool:
        """Whether the edit sits at its minimum, where special text shows."""
        return self.edit.minimum >= self.edit.value

    @property
    def decimals(self) -> int:
        return self.edit.decimals

    @decimals.setter
    def decimals(self, decimals: int) -> None:
        self.edit.decimals = decimals
        self.edit_step = 10.0 ** -float(decimals)
        self.single_step = 0.1


class Combo(Knob):
    """A knob paired with a list of choices indexed by the value."""

    def __init__(self) -> None:
        super().__init__()
        self.items: list[str] = []
        self.current_index = -1

    def set_value(self, value: float) -> None:
        index = _iround(value)
        self.current_index = index if 0 <= index < len(self.items) else -1
        super().set_value(value)

    def value_text(self) -> str:
        if 0 <= self.current_index < len(self.items):
            return self.items[self.current_index]
        return ""

    def insert_items(self, index: int, items: Iterable[str]) -> None:
        new_items = list(items)
        index = max(0, min(index, len(self.items)))
        self.items[index:index] = new_items
        if new_items:
            if self.current_index < 0:
                self.current_index = 0
            elif index <= self.current_index:
                self.current_index += len(new_items)
        self.minimum = 0.0
        self.maximum = float(len(self.items) - 1) if self.items else 1.0
        self.single_step = 1.0

    def clear(self) -> None:
        self.items.clear()
        self.current_index = -1
        self.minimum = 0.0
        self.maximum = 1.0
        self.single_step = 1.0

    def combo_value_changed(self, index: int) -> None:
        """A choice was picked directly."""
        self.current_index = index
        Knob.set_value(self, float(index))

    def wheel(self, angle_delta: int) -> None:
        """Step one choice per wheel notch, staying within range."""
        delta = int(angle_delta / 120)
        if delta:
            value = self.value + float(delta)
            value = max(self.minimum, min(self.maximum, value))
            self.set_value(value)


class Radio(Param):
    """A parameter shown as a group of exclusive buttons."""

    def __init__(self) -> None:
        super().__init__()
        self.buttons: dict[int, str] = {}
        self.checked_id: Optional[int] = None

    def set_value(self, value: float) -> None:
        button_id = _iround(value)
        if button_id in self.buttons:
            Param.set_value(self, float(button_id))
            self.checked_id = button_id

    def value_text(self) -> str:
        return self.buttons.get(_iround(self.value), "")

    def insert_items(self, index: int, items: Iterable[str]) -> None:
        for offset, text in enumerate(items):
            self.buttons[index + offset] = text
        self.minimum = 0.0
        self.maximum = float(len(self.buttons) - 1) if self.buttons else 1.0

    def clear(self) -> None:
        self.buttons.clear()
        self.checked_id = None
        self.minimum = 0.0
        self.maximum = 1.0

    def radio_group_value_changed(self, button_id: int) -> None:
        """A button was clicked."""
        self.checked_id = button_id
        Param.set_value(self, float(button_id))


class Check(Param):
    """A parameter shown as an on/off check box."""

    def __init__(self) -> None:
        super().__init__()
        self.label = ""
        self.checked = False

    def set_text(self, text: str) -> None:
        self.label = text

    def text(self) -> str:
        return self.label

    def set_value(self, value: float) -> None:
        checked = value > 0.5 * (self.maximum + self.minimum)
        Param.set_value(self, self.maximum if checked else self.minimum)
        self.checked = checked

    def check_box_value_changed(self, checked: bool) -> None:
        """The box was toggled."""
        self.checked = checked
        Param.set_value(self, self.maximum if checked else self.minimum)


class Group:
    """A checkable group whose check state mirrors a parameter."""

    def __init__(self) -> None:
        self.checked = True
        self.param = Param()
        # Half-way on, so the first real value always registers a change.
        self.param.set_value(0.5)
        self.param.on_value_changed = self._param_value_changed

    @property
    def tool_tip(self) -> str:
        return self.param.tool_tip

    @tool_tip.setter
    def tool_tip(self, text: str) -> None:
        self.param.tool_tip = text

    def _param_value_changed(self, value: float) -> None:
        self.checked = value > 0.5 * (self.param.maximum + self.param.minimum)

    def set_checked(self, checked: bool) -> None:
        """Toggle the group, driving the parameter to its maximum or minimum."""
        if checked == self.checked:
            return
        self.checked = checked
        self.param.set_value(self.param.maximum if checked else self.param.minimum)