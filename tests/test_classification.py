import pytest

from conicexplorer.model.classification import ConicKind, classify, discriminant_3x3
from conicexplorer.model.coefficients import Coefficients


@pytest.mark.parametrize("values, kind", [
    ((1, 0, 1, 0, 0, -1), ConicKind.CIRCLE),
    ((1, 1, 1, 0, 0, -10), ConicKind.ELLIPSE),
    ((1, 0, 4, -4, 8, 4), ConicKind.ELLIPSE),
    ((1, 0, 1, 0, 0, 1), ConicKind.IMAGINARY_ELLIPSE),
    ((1, 0, 1, 0, 0, 0), ConicKind.POINT),
    ((1, 0, -1, 0, 0, -1), ConicKind.HYPERBOLA),
    ((0, 1, 0, 0, 0, 0), ConicKind.INTERSECTING_LINES),
    ((1, 0, 0, 0, -1, 0), ConicKind.PARABOLA),
    ((1, 2, 1, 1, -1, 2), ConicKind.PARABOLA),
    ((1, 0, 0, 0, 0, -1), ConicKind.PARALLEL_LINES),
    ((0, 0, 1, 0, 0, -1), ConicKind.PARALLEL_LINES),
    ((1, 2, 1, 0, 0, -1), ConicKind.PARALLEL_LINES),
    ((1, 0, 0, 0, 0, 0), ConicKind.COINCIDENT_LINES),
    ((1, 0, 0, 0, 0, 1), ConicKind.IMAGINARY_PARALLEL_LINES),
    ((0, 0, 0, 1, 1, 0), ConicKind.LINE),
    ((0, 0, 0, 0, 0, 5), ConicKind.EMPTY),
    ((0, 0, 0, 0, 0, 0), ConicKind.PLANE),
])
def test_classify(values, kind):
    assert classify(Coefficients(*values)) is kind


def test_discriminant_of_unit_circle():
    assert discriminant_3x3(Coefficients(1, 0, 1, 0, 0, -1)) == -1.0


def test_real_points():
    assert ConicKind.ELLIPSE.has_real_points
    assert ConicKind.POINT.has_real_points
    assert not ConicKind.IMAGINARY_ELLIPSE.has_real_points
    assert not ConicKind.EMPTY.has_real_points
