"""Knob dial with alternate drag modes and a spin edit with deferred changes."""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import Enum, IntEnum
from typing import Optional


class DialMode(IntEnum):
    """How mouse drags turn the dial."""

    DEFAULT = 0
    LINEAR = 1
    ANGULAR = 2


class Dial:
    """Integer-valued rotary dial driven by pointer events."""

    mode: DialMode = DialMode.DEFAULT

    def __init__(
        self,
        width: int = 48,
        height: int = 48,
        minimum: int = 0,
        maximum: int = 99,
        value: int = 0,
    ) -> None:
        self.width = width
        self.height = height
        self.minimum = minimum
        self.maximum = maximum
        self._value = self._bound(value)
        self.pressed = False
        self._pos = (0, 0)
        self._last_drag_value = 0.0
        self.on_value_changed: Optional[Callable[[int], None]] = None
        self.on_slider_moved: Optional[Callable[[int], None]] = None
        self.on_slider_pressed: Optional[Callable[[], None]] = None

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        value = self._bound(value)
        if value != self._value:
            self._value = value
            if self.on_value_changed:
                self.on_value_changed(value)

    def _bound(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, int(value)))

    def mouse_angle(self, x: int, y: int) -> float:
        """Angle in degrees from the upward vertical, clockwise positive."""
        dx = x - (self.width >> 1)
        dy = (self.height >> 1) - y
        return 180.0 * math.atan2(dx, dy) / math.pi

    def _value_from_point(self, x: int, y: int) -> int:
        yy = self.height / 2.0 - y
        xx = x - self.width / 2.0
        a = math.atan2(yy, xx) if (xx or yy) else 0.0
        if a < -math.pi / 2:
            a += 2 * math.pi
        dist = 0
        minv, maxv = self.minimum, self.maximum
        if self.minimum < 0:
            dist = -self.minimum
            minv = 0
            maxv = self.maximum + dist
        span = maxv - minv
        v = int(0.5 + minv + span * (math.pi * 4 / 3 - a) / (math.pi * 10 / 6))
        return v - dist

    def _emit_pressed(self) -> None:
        if self.on_slider_pressed:
            self.on_slider_pressed()

    def _emit_moved(self) -> None:
        if self.on_slider_moved:
            self.on_slider_moved(self._value)

    def press(self, x: int, y: int) -> None:
        self.pressed = True
        self._pos = (x, y)
        self._emit_pressed()
        if self.mode == DialMode.DEFAULT:
            self.value = self._value_from_point(x, y)
        else:
            self._last_drag_value = float(self._value)

    def move(self, x: int, y: int) -> None:
        if not self.pressed:
            return
        if self.mode == DialMode.DEFAULT:
            self.value = self._value_from_point(x, y)
            self._emit_moved()
            return

        dx = x - self._pos[0]
        dy = y - self._pos[1]
        if self.mode == DialMode.LINEAR:
            new_value = int(self._last_drag_value) + dx - dy
        else:
            delta = self.mouse_angle(x, y) - self.mouse_angle(*self._pos)
            if delta > 180.0:
                delta -= 360.0
            elif delta < -180.0:
                delta += 360.0
            self._last_drag_value += (self.maximum - self.minimum) * delta / 270.0
            self._last_drag_value = max(
                float(self.minimum), min(float(self.maximum), self._last_drag_value)
            )
            self._pos = (x, y)
            new_value = int(self._last_drag_value + 0.5)

        self.value = new_value
        self._emit_moved()

    def release(self) -> None:
        self.pressed = False


class EditMode(IntEnum):
    """When spin-box edits are reported."""

    DEFAULT = 0
    DEFERRED = 1


class Edit:
    """Numeric spin edit that can defer change notifications until editing ends."""

    mode: EditMode = EditMode.DEFAULT

    class Validation(Enum):
        INVALID = 0
        INTERMEDIATE = 1
        ACCEPTABLE = 2

    def __init__(
        self,
        minimum: float = 0.0,
        maximum: float = 99.99,
        decimals: int = 2,
        value: float = 0.0,
    ) -> None:
        self.minimum = minimum
        self.maximum = maximum
        self.decimals = decimals
        self.value = self._bound(value)
        self.text_changes = 0
        self.on_value_changed: Optional[Callable[[float], None]] = None

    def _bound(self, value: float) -> float:
        return max(self.minimum, min(self.maximum, round(value, self.decimals)))

    def _emit(self, value: float) -> None:
        if self.on_value_changed:
            self.on_value_changed(value)

    def text_changed(self, text: str) -> None:
        if self.mode == EditMode.DEFERRED:
            self.text_changes += 1

    def editing_finished(self) -> None:
        if self.mode == EditMode.DEFERRED:
            self.text_changes = 0
            self._emit(self.value)

    def set_value(self, value: float) -> None:
        value = self._bound(value)
        if value == self.value:
            return
        self.value = value
        if self.mode != EditMode.DEFERRED or self.text_changes == 0:
            self._emit(value)

    def validate(self, state: Edit.Validation) -> Edit.Validation:
        """Downgrade an acceptable state while deferred with no typed changes."""
        if (
            state == Edit.Validation.ACCEPTABLE
            and self.mode == EditMode.DEFERRED
            and self.text_changes == 0
        ):
            return Edit.Validation.INTERMEDIATE
        return state