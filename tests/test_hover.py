import math

import pytest

from conicexplorer.model.hover import HoverAxis, HoverState, axis_distances, hit_test_axes

ORIGIN = (100.0, 100.0)


@pytest.mark.parametrize("pointer, expected", [
    ((150.0, 100.0), HoverAxis.X),
    ((100.0, 150.0), HoverAxis.Y),
    ((150.0, 119.0), HoverAxis.X),
    ((130.0, 130.0), HoverAxis.NONE),
    ((300.0, 20.0), HoverAxis.NONE),
])
def test_hit_test_unrotated(pointer, expected):
    assert hit_test_axes(pointer, ORIGIN, 0.0) is expected


def test_x_axis_wins_ties():
    assert hit_test_axes(ORIGIN, ORIGIN, 0.0) is HoverAxis.X
    assert hit_test_axes((110.0, 110.0), ORIGIN, 0.0) is HoverAxis.X


def test_threshold_is_exclusive():
    assert hit_test_axes((150.0, 120.0), ORIGIN, 0.0) is HoverAxis.NONE
    assert hit_test_axes((150.0, 120.0), ORIGIN, 0.0, threshold=40.0) is HoverAxis.X


def test_rotated_axes():
    theta = math.pi / 4
    # x' points up-right on screen for a positive model angle
    along_x = (ORIGIN[0] + 50 * math.cos(theta), ORIGIN[1] - 50 * math.sin(theta))
    along_y = (ORIGIN[0] - 50 * math.sin(theta), ORIGIN[1] - 50 * math.cos(theta))

    assert axis_distances(along_x, ORIGIN, theta)[0] == pytest.approx(0.0, abs=1e-9)
    assert hit_test_axes(along_x, ORIGIN, theta) is HoverAxis.X
    assert hit_test_axes(along_y, ORIGIN, theta) is HoverAxis.Y


@pytest.mark.parametrize("origin", [None, (math.inf, 0.0), (0.0, math.nan)])
def test_undefined_origin(origin):
    assert hit_test_axes(ORIGIN, origin, 0.0) is HoverAxis.NONE


def test_state_machine_transitions():
    state = HoverState()
    assert state.axis is HoverAxis.NONE

    assert state.pointer_moved((150.0, 100.0), ORIGIN, 0.0) is True
    assert state.axis is HoverAxis.X
    assert state.pointer_moved((160.0, 101.0), ORIGIN, 0.0) is False

    assert state.pointer_moved((100.0, 160.0), ORIGIN, 0.0) is True
    assert state.axis is HoverAxis.Y

    assert state.pointer_left() is True
    assert state.axis is HoverAxis.NONE
    assert state.pointer_left() is False


def test_state_clears_when_origin_disappears():
    state = HoverState()
    state.pointer_moved((150.0, 100.0), ORIGIN, 0.0)

    assert state.pointer_moved((150.0, 100.0), None, 0.0) is True
    assert state.axis is HoverAxis.NONE
