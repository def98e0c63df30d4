import pytest

from padsynthkit.dial import Dial, DialMode, Edit, EditMode


def make_dial(mode, **kwargs):
    dial = Dial(width=100, height=100, **kwargs)
    dial.mode = mode
    return dial


def test_mouse_angle_directions():
    dial = make_dial(DialMode.ANGULAR)
    assert dial.mouse_angle(50, 0) == pytest.approx(0.0)
    assert dial.mouse_angle(100, 50) == pytest.approx(90.0)
    assert dial.mouse_angle(0, 50) == pytest.approx(-90.0)


def test_linear_drag_follows_offsets():
    dial = make_dial(DialMode.LINEAR, maximum=100, value=10)
    dial.press(50, 50)
    dial.move(55, 50)
    assert dial.value == 15
    dial.move(55, 45)
    assert dial.value == 20


def test_linear_drag_is_clamped():
    dial = make_dial(DialMode.LINEAR, maximum=20, value=10)
    dial.press(0, 0)
    dial.move(100, 0)
    assert dial.value == 20


def test_angular_drag_quarter_turn():
    dial = make_dial(DialMode.ANGULAR, maximum=270, value=0)
    dial.press(50, 0)
    dial.move(100, 50)
    assert dial.value == 90


def test_angular_drag_clamps_at_maximum():
    dial = make_dial(DialMode.ANGULAR, maximum=10, value=5)
    dial.press(50, 0)
    dial.move(100, 50)
    dial.move(50, 100)
    assert dial.value == 10


def test_move_without_press_does_nothing():
    dial = make_dial(DialMode.LINEAR, maximum=100, value=10)
    dial.move(80, 0)
    assert dial.value == 10


def test_release_ends_drag():
    dial = make_dial(DialMode.LINEAR, maximum=100, value=10)
    dial.press(50, 50)
    dial.release()
    dial.move(70, 50)
    assert dial.value == 10


def test_default_mode_top_is_midpoint():
    dial = make_dial(DialMode.DEFAULT, maximum=100)
    dial.press(50, 0)
    assert dial.value == 50


def test_callbacks_report_moves():
    dial = make_dial(DialMode.LINEAR, maximum=100, value=0)
    moved, pressed = [], []
    dial.on_slider_moved = moved.append
    dial.on_slider_pressed = lambda: pressed.append(True)
    dial.press(0, 0)
    dial.move(3, 0)
    dial.move(5, 0)
    assert pressed == [True]
    assert moved == [3, 5]


def test_edit_default_mode_emits_immediately():
    edit = Edit()
    edit.mode = EditMode.DEFAULT
    seen = []
    edit.on_value_changed = seen.append
    edit.text_changed("4")
    edit.set_value(4.0)
    assert seen == [4.0]


def test_edit_deferred_waits_for_finish():
    edit = Edit()
    edit.mode = EditMode.DEFERRED
    seen = []
    edit.on_value_changed = seen.append
    edit.text_changed("4")
    edit.set_value(4.0)
    assert seen == []
    edit.editing_finished()
    assert seen == [4.0]
    assert edit.text_changes == 0


def test_edit_deferred_without_typing_emits():
    edit = Edit()
    edit.mode = EditMode.DEFERRED
    seen = []
    edit.on_value_changed = seen.append
    edit.set_value(2.5)
    assert seen == [2.5]


def test_edit_value_is_clamped():
    edit = Edit(minimum=0.0, maximum=10.0)
    edit.set_value(50.0)
    assert edit.value == 10.0


def test_edit_validate_deferred():
    edit = Edit()
    edit.mode = EditMode.DEFERRED
    assert edit.validate(Edit.Validation.ACCEPTABLE) is Edit.Validation.INTERMEDIATE
    edit.text_changed("1")
    assert edit.validate(Edit.Validation.ACCEPTABLE) is Edit.Validation.ACCEPTABLE
    assert edit.validate(Edit.Validation.INVALID) is Edit.Validation.INVALID


def test_edit_validate_default_mode_passes_through():
    edit = Edit()
    edit.mode = EditMode.DEFAULT
    assert edit.validate(Edit.Validation.ACCEPTABLE) is Edit.Validation.ACCEPTABLE