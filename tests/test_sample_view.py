import math
import random

import pytest

from padsynthkit.sample_view import DragState, Modifier, SampleView


class FakeSample:
    def __init__(self, nh=4, size=1024, level=0.5):
        self.size = size
        self.level = level
        self.harmonics = [level] * nh
        self.resets = 0

    @property
    def nh(self):
        return len(self.harmonics)

    def value(self, phase):
        return math.sin(2.0 * math.pi * phase)

    def harmonic(self, n):
        return self.harmonics[n]

    def set_harmonic(self, n, v):
        self.harmonics[n] = v

    def reset_nh(self):
        self.resets += 1
        self.harmonics = [self.level] * len(self.harmonics)


@pytest.fixture
def view():
    v = SampleView()
    v.set_sample(FakeSample())
    return v


def test_polygon_upper_and_lower_share_x(view):
    w = len(view.polygon)
    for n in range(w // 2):
        assert view.polygon[n][0] == view.polygon[w - n - 1][0]


def test_one_node_per_harmonic(view):
    assert len(view.rects) == view.sample.nh
    xs = [r.x for r in view.rects]
    assert xs == sorted(xs)


def test_node_index_hits_and_misses(view):
    for n, rect in enumerate(view.rects):
        cx, cy = rect.center()
        assert view.node_index(cx, cy) == n
    assert view.node_index(0, 0) == -1


def test_tool_tip_format(view):
    cx, cy = view.rects[0].center()
    assert view.tool_tip_at(cx, cy) == "[1]  0.500"
    assert view.tool_tip_at(0, 0) is None


def test_drag_select_clamps_to_range(view):
    rect = view.rects[1]
    view.drag_select(rect.x, -50)
    assert view.sample.harmonic(1) == 1.0
    view.drag_select(rect.x, view.height * 3)
    assert view.sample.harmonic(1) == 0.0
    assert view.rects[1].y == view.height - 8


def test_drag_node_flow_emits_once(view):
    calls = []
    view.on_sample_changed = lambda: calls.append(1)
    cx, cy = view.rects[0].center()
    view.press(cx, cy)
    assert view.drag_cursor == DragState.NODE
    view.move(cx, cy - 20)
    assert view.drag_state == DragState.NODE
    assert view.release(cx, cy - 20) is True
    assert view.sample.harmonic(0) > 0.5
    assert calls == [1]
    assert view.drag_state == DragState.NONE


def test_small_move_does_not_drag(view):
    cx, cy = view.rects[0].center()
    view.press(cx, cy)
    view.move(cx, cy - 2)
    assert view.release(cx, cy - 2) is False
    assert view.sample.harmonic(0) == 0.5


def test_select_drag_with_modifier(view):
    rect = view.rects[2]
    view.press(rect.x, 2, Modifier.SHIFT)
    view.move(rect.x + 1, 30, Modifier.SHIFT)
    assert view.drag_state == DragState.SELECT
    assert view.release(rect.x + 1, 30) is True
    assert view.sample.harmonic(2) > 0.5


def test_reset_normal_decreasing(view):
    view.reset_normal()
    h = view.sample.harmonics
    assert h[0] == 1.0
    assert h == sorted(h, reverse=True)


def test_reset_normal_odd_boosts_odd(view):
    view.reset_normal_odd()
    assert view.sample.harmonics[1] == pytest.approx(1.667 / 2)


def test_reset_square_even_keeps_fundamental(view):
    view.reset_square_even()
    assert view.sample.harmonics[0] == 1.0
    assert view.sample.harmonics[1] == pytest.approx(1.0 / math.sqrt(2))


def test_reset_sinc_keeps_fundamental(view):
    view.reset_sinc()
    assert view.sample.harmonics[0] == 0.5
    assert all(v >= 0.0 for v in view.sample.harmonics)


def test_reset_default_calls_sample(view):
    calls = []
    view.on_sample_changed = lambda: calls.append(1)
    view.sample.harmonics[0] = 0.9
    view.reset_default()
    assert view.sample.resets == 1
    assert view.sample.harmonics[0] == 0.5
    assert calls == [1]


def test_randomize_deterministic_and_bounded():
    a, b = SampleView(), SampleView()
    a.set_sample(FakeSample(nh=16))
    b.set_sample(FakeSample(nh=16))
    a.randomize(100.0, random.Random(7))
    b.randomize(100.0, random.Random(7))
    assert a.sample.harmonics == b.sample.harmonics
    assert all(0.0 <= v <= 1.0 for v in a.sample.harmonics)


def test_randomize_zero_percent_unchanged(view):
    view.randomize(0.0, random.Random(1))
    assert view.sample.harmonics == [0.5] * 4


def test_no_sample_is_inert():
    v = SampleView()
    calls = []
    v.on_sample_changed = lambda: calls.append(1)
    v.reset_normal()
    v.drag_select(10, 10)
    assert calls == []
    assert v.rects == []


def test_resize_rebuilds_and_rejects_tiny(view):
    view.resize(120, 60)
    assert len(view.polygon) == 120
    with pytest.raises(ValueError):
        view.resize(1, 60)


def test_leave_clears_drag_node(view):
    cx, cy = view.rects[0].center()
    view.press(cx, cy)
    view.leave()
    assert view.drag_node_index == -1