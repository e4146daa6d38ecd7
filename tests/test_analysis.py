import math

import pytest

from conicexplorer.model.analysis import (
    analyze, determinant, rotated_coefficients, rotation_angle
)
from conicexplorer.model.coefficients import Coefficients


def test_unit_circle():
    geometry = analyze(Coefficients(1, 0, 1, 0, 0, -1))

    assert geometry.theta == 0.0
    assert geometry.center == (0.0, 0.0)
    assert geometry.is_vertex is False
    assert geometry.translation_label == "Center"


def test_default_rotated_ellipse():
    geometry = analyze(Coefficients())

    assert geometry.theta == pytest.approx(math.pi / 4)
    assert geometry.angle_degrees == pytest.approx(45.0)
    assert geometry.center == (0.0, 0.0)
    assert geometry.is_vertex is False


def test_parabola_vertex_at_origin():
    geometry = analyze(Coefficients(1, 0, 0, 0, -1, 0))

    assert geometry.theta == 0.0
    assert geometry.is_vertex is True
    assert geometry.translation_label == "Vertex"
    assert geometry.center == (0.0, 0.0)


def test_shifted_parabola_vertex():
    # (x - 1)^2 = y - 2
    geometry = analyze(Coefficients(1, 0, 0, -2, -1, 3))

    assert geometry.is_vertex is True
    assert geometry.center == pytest.approx((1.0, 2.0))


def test_rotated_parabola_vertex_lies_on_curve():
    coeffs = Coefficients(1, 2, 1, 1, -1, 2)
    geometry = analyze(coeffs)

    assert geometry.is_vertex is True
    assert geometry.theta == pytest.approx(math.pi / 4)
    assert geometry.center == pytest.approx((-1.0, 1.0))
    assert coeffs.evaluate(*geometry.center) == pytest.approx(0.0, abs=1e-9)


def test_shifted_ellipse_center():
    # (x - 2)^2 + 4(y + 1)^2 = 4
    geometry = analyze(Coefficients(1, 0, 4, -4, 8, 4))

    assert geometry.center == pytest.approx((2.0, -1.0))


def test_center_is_a_critical_point():
    coeffs = Coefficients(2, 1, 3, -5, 4, 1)
    geometry = analyze(coeffs)

    assert coeffs.gradient(*geometry.center) == pytest.approx((0.0, 0.0), abs=1e-9)


@pytest.mark.parametrize("a11, a22", [(1, 1), (1, 3), (-2, 5), (0, 0)])
def test_no_cross_term_means_no_rotation(a11, a22):
    assert rotation_angle(Coefficients(a11, 0, a22, 1, 1, 1)) == 0.0


def test_equal_diagonal_gives_forty_five_degrees():
    assert rotation_angle(Coefficients(2, 3, 2, 0, 0, 0)) == math.pi / 4
    assert rotation_angle(Coefficients(2, -3, 2, 0, 0, 0)) == -math.pi / 4


@pytest.mark.parametrize("values", [
    (1, 1, 1, 0, 0, -10),
    (3, 4, 0, 0, 0, 0),
    (1, -7, 5, 0, 0, 0),
    (-2, 1, 4, 0, 0, 0),
])
def test_rotation_removes_cross_term(values):
    coeffs = Coefficients(*values)
    theta = rotation_angle(coeffs)
    r = rotated_coefficients(coeffs, theta)
    c, s = math.cos(theta), math.sin(theta)

    # x'y' coefficient of the rotated equation
    cross = 2 * (coeffs.a22 - coeffs.a11) * s * c + coeffs.a12 * (c * c - s * s)
    assert cross == pytest.approx(0.0, abs=1e-9)
    assert -math.pi / 4 <= theta <= math.pi / 4
    assert r.a + r.c == pytest.approx(coeffs.a11 + coeffs.a22)


@pytest.mark.parametrize("values, is_vertex", [
    ((1, 2, 1, 0, 0, 0), True),
    ((1, 0, 0, 0, 0, 0), True),
    ((1e-4, 0, 1e-3, 0, 0, 0), True),
    ((1e-3, 0, 1e-3, 0, 0, 0), False),
    ((1, 0, 1, 0, 0, -1), False),
    ((1, 0, -1, 0, 0, -1), False),
])
def test_vertex_branch_follows_determinant(values, is_vertex):
    coeffs = Coefficients(*values)
    geometry = analyze(coeffs)

    assert geometry.is_vertex is is_vertex
    assert (abs(determinant(coeffs)) <= 1e-6) is is_vertex


def test_degenerate_parabola_keeps_zero_coordinate():
    # x^2 = 1: two parallel lines, no linear term along y'
    geometry = analyze(Coefficients(1, 0, 0, 0, 0, -1))

    assert geometry.is_vertex is True
    assert geometry.center == (0.0, 0.0)


def test_overflowing_center_is_undefined():
    geometry = analyze(Coefficients(1e-3, 0, 1e-3, 1e308, 0, 0))

    assert geometry.is_vertex is False
    assert geometry.center is None


def test_invalid_vertex_is_undefined():
    geometry = analyze(Coefficients(0, 0, 1e308, 1e308, 1e308, 0))

    assert geometry.is_vertex is True
    assert geometry.center is None
