"""Harmonic editor view: a waveform outline plus one draggable node per partial."""

from __future__ import annotations

import math
import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Optional, Protocol

NODE_SIZE = 8
DEFAULT_WIDTH = 240
DEFAULT_HEIGHT = 100
START_DRAG_DISTANCE = 10


class Sample(Protocol):
    """What the view needs from a harmonic sample."""

    @property
    def size(self) -> int: ...

    @property
    def nh(self) -> int: ...

    def value(self, phase: float) -> float: ...

    def harmonic(self, n: int) -> float: ...

    def set_harmonic(self, n: int, value: float) -> None: ...

    def reset_nh(self) -> None: ...


class DragState(Enum):
    NONE = 0
    START = 1
    SELECT = 2
    NODE = 3


class Modifier(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()


class Cursor(Enum):
    DEFAULT = 0
    POINTING_HAND = 1
    SIZE_VER = 2
    EDIT = 3


_SELECT_MODIFIERS = Modifier.SHIFT | Modifier.CONTROL


def _safe_value(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


@dataclass
class Rect:
    """An integer rectangle; right and bottom are inclusive edges."""

    x: int
    y: int
    width: int = NODE_SIZE
    height: int = NODE_SIZE

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def center(self) -> tuple[int, int]:
        return (self.x + self.right) // 2, (self.y + self.bottom) // 2


class SampleView:
    """Interaction model for editing the partial magnitudes of a sample."""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        self._check_size(width, height)
        self.width = width
        self.height = height
        self.sample: Optional[Sample] = None
        self.polygon: list[tuple[int, int]] = []
        self.rects: list[Rect] = []
        self.start_drag_distance = START_DRAG_DISTANCE
        self.on_sample_changed: Optional[Callable[[], None]] = None
        self.cursor = Cursor.DEFAULT
        self.drag_state = DragState.NONE
        self.drag_cursor = DragState.NONE
        self.dragged = 0
        self.drag_node_index = -1
        self.drag_pos = (0, 0)
        self._reset_drag_state()

    @staticmethod
    def _check_size(width: int, height: int) -> None:
        if width < 2 or height < 1:
            raise ValueError(f"view size too small: {width}x{height}")

    def _emit_changed(self) -> None:
        if self.on_sample_changed:
            self.on_sample_changed()

    def set_sample(self, sample: Optional[Sample]) -> None:
        """Attach a sample and rebuild the waveform outline and the nodes."""
        self.polygon = []
        self.rects = []
        self.sample = sample
        if sample is None:
            return

        h = self.height
        w = self.width & 0x7FFE
        h2 = h >> 1
        w2 = w >> 1
        nframes = sample.size
        nperiod = nframes // w2
        points = [(0, 0)] * w
        n = 0
        x = 1
        if nframes > 0:
            phase_inc = 1.0 / nframes
            phase = 0.0
            vmax = vmin = 0.0
            j = 0
            for _ in range(nframes):
                v = sample.value(phase)
                if vmax < v or j == 0:
                    vmax = v
                if vmin > v or j == 0:
                    vmin = v
                j += 1
                if j > nperiod and n < w2:
                    points[n] = (x, h2 - int(vmax * h2))
                    points[w - n - 1] = (x, h2 - int(vmin * h2))
                    vmax = vmin = 0.0
                    n += 1
                    x += 2
                    j = 0
                phase += phase_inc
        while n < w2:
            points[n] = (x, h2)
            points[w - n - 1] = (x, h2)
            n += 1
            x += 2
        self.polygon = points

        nrects = sample.nh
        if nrects > 0:
            h1 = h - NODE_SIZE
            dx = (w - NODE_SIZE) / nrects
            self.rects = [
                Rect(int(dx * (0.5 + k)), h1 - int(sample.harmonic(k) * h1))
                for k in range(nrects)
            ]

    def resize(self, width: int, height: int) -> None:
        self._check_size(width, height)
        self.width = width
        self.height = height
        self.set_sample(self.sample)

    def node_index(self, x: int, y: int) -> int:
        """Index of the node under a point, or -1."""
        return next((n for n, rect in enumerate(self.rects) if rect.contains(x, y)), -1)

    def tool_tip(self, n: int) -> str:
        if self.sample is None:
            return ""
        return f"[{n + 1}]  {self.sample.harmonic(n):.3f}"

    def tool_tip_at(self, x: int, y: int) -> Optional[str]:
        """Tool-tip text for the node under a point, if any."""
        n = self.node_index(x, y)
        return self.tool_tip(n) if n >= 0 else None

    def leave(self) -> None:
        self.drag_node_index = -1
        self.cursor = Cursor.DEFAULT

    def _set_node(self, n: int, y: int) -> None:
        h1 = self.height - NODE_SIZE
        v = _safe_value((h1 - y) / h1) if h1 else 0.0
        assert self.sample is not None
        self.sample.set_harmonic(n, v)
        self.rects[n].y = h1 - int(v * h1)
        self.dragged += 1

    def drag_select(self, x: int, y: int) -> None:
        """Set the partial whose column holds x to the height at y."""
        if self.sample is None or not self.rects:
            return
        for n, rect in enumerate(self.rects):
            if rect.x <= x < rect.right:
                self._set_node(n, y)
                break

    def drag_node(self, x: int, y: int) -> None:
        """Move the grabbed node vertically by the drag distance."""
        if self.sample is None or not self.rects:
            return
        dy = y - self.drag_pos[1]
        if dy and self.drag_node_index >= 0:
            rect = self.rects[self.drag_node_index]
            self._set_node(self.drag_node_index, rect.y + dy)
            self.drag_pos = (rect.x, rect.y)

    def press(self, x: int, y: int, modifiers: Modifier = Modifier.NONE) -> None:
        """Left button press."""
        self.drag_state = DragState.START
        self.drag_pos = (x, y)
        node = self.node_index(x, y)
        if node >= 0:
            self.drag_cursor = DragState.NODE
            self.drag_node_index = node
            self.cursor = Cursor.SIZE_VER
        elif modifiers & _SELECT_MODIFIERS:
            self.drag_cursor = DragState.SELECT
            self.cursor = Cursor.EDIT

    def move(self, x: int, y: int, modifiers: Modifier = Modifier.NONE) -> None:
        state = self.drag_state
        if state == DragState.NONE:
            if self.node_index(x, y) >= 0:
                self.drag_cursor = DragState.NODE
                self.cursor = Cursor.POINTING_HAND
            elif self.drag_cursor != DragState.NONE:
                self.cursor = Cursor.DEFAULT
        elif state == DragState.SELECT:
            self.drag_select(x, y)
        elif state == DragState.NODE:
            self.drag_node(x, y)
        elif state == DragState.START:
            px, py = self.drag_pos
            if abs(px - x) + abs(py - y) > self.start_drag_distance:
                self.drag_state = self.drag_cursor
                if self.drag_state == DragState.NODE:
                    self.drag_node(x, y)
                elif modifiers & _SELECT_MODIFIERS:
                    self.drag_select(px, py)
                    self.drag_select(x, y)

    def release(self, x: int, y: int) -> bool:
        """Finish a drag; returns whether any partial was changed."""
        if self.drag_state == DragState.SELECT:
            self.drag_select(x, y)
        elif self.drag_state == DragState.NODE:
            self.drag_node(x, y)
        changed = self.dragged > 0
        if changed:
            self._emit_changed()
        self._reset_drag_state()
        return changed

    def _reset_drag_state(self) -> None:
        if self.drag_cursor != DragState.NONE:
            self.cursor = Cursor.DEFAULT
        self.dragged = 0
        self.drag_node_index = -1
        self.drag_state = self.drag_cursor = DragState.NONE

    def _apply(self, shape: Callable[[int], float]) -> None:
        if self.sample is None:
            return
        for n in range(self.sample.nh):
            self.sample.set_harmonic(n, shape(n))
        self._emit_changed()

    def reset_default(self) -> None:
        if self.sample is None:
            return
        self.sample.reset_nh()
        self._emit_changed()

    def reset_normal(self) -> None:
        self._apply(lambda n: 1.0 / (n + 1))

    def reset_normal_odd(self) -> None:
        self._apply(lambda n: (1.667 if n & 1 else 1.0) / (n + 1))

    def reset_normal_even(self) -> None:
        self._apply(lambda n: (1.0 if (n & 1) or n < 1 else 1.667) / (n + 1))

    def reset_square(self) -> None:
        self._apply(lambda n: 1.0 / math.sqrt(n + 1))

    def reset_square_odd(self) -> None:
        self._apply(lambda n: (1.291 if n & 1 else 1.0) / math.sqrt(n + 1))

    def reset_square_even(self) -> None:
        self._apply(lambda n: (1.0 if (n & 1) or n < 1 else 1.291) / math.sqrt(n + 1))

    def reset_sinc(self) -> None:
        """Sinc-like magnitudes; the fundamental is left as it is."""
        if self.sample is None:
            return
        for n in range(1, self.sample.nh):
            n2 = n * (2.0 / math.pi)
            v = (math.pi / 2.0) * abs(math.cos(n2) / (n + 1))
            self.sample.set_harmonic(n, v)
        self._emit_changed()

    def randomize(self, percent: float = 100.0, rng: Optional[random.Random] = None) -> None:
        """Perturb every partial by normal noise scaled by percent, clamped to 0..1."""
        if self.sample is None:
            return
        rng = rng if rng is not None else random.Random()
        p = 0.01 * percent
        for n in range(self.sample.nh):
            v = self.sample.harmonic(n) + 0.25 * p * rng.gauss(0.0, 1.0)
            self.sample.set_harmonic(n, _safe_value(v))
        self._emit_changed()