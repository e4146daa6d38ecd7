"""
Classification of the curve using the invariants of the quadratic form.
"""
from __future__ import annotations

from enum import Enum

from conicexplorer.model.analysis import determinant, is_negligible, rotated_coefficients, rotation_angle
from conicexplorer.model.coefficients import Coefficients


class ConicKind(str, Enum):
    ELLIPSE = "Ellipse"
    CIRCLE = "Circle"
    IMAGINARY_ELLIPSE = "Imaginary ellipse"
    POINT = "Single point"
    HYPERBOLA = "Hyperbola"
    INTERSECTING_LINES = "Pair of intersecting lines"
    PARABOLA = "Parabola"
    PARALLEL_LINES = "Pair of parallel lines"
    COINCIDENT_LINES = "Double line"
    IMAGINARY_PARALLEL_LINES = "Imaginary parallel lines"
    LINE = "Line"
    EMPTY = "No curve"
    PLANE = "Whole plane"

    @property
    def has_real_points(self) -> bool:
        return self not in (ConicKind.IMAGINARY_ELLIPSE, ConicKind.IMAGINARY_PARALLEL_LINES, ConicKind.EMPTY)


def discriminant_3x3(coeffs: Coefficients) -> float:
    """
    Determinant of the symmetric matrix of the homogeneous form

        | a11    a12/2  b1/2 |
        | a12/2  a22    b2/2 |
        | b1/2   b2/2   c    |
    """
    a, h, b = coeffs.a11, coeffs.a12 / 2, coeffs.a22
    g, f, c = coeffs.b1 / 2, coeffs.b2 / 2, coeffs.c
    return a * (b * c - f * f) - h * (h * c - f * g) + g * (h * f - b * g)


def _classify_parabolic(coeffs: Coefficients, delta: float) -> ConicKind:
    """Kinds with a vanishing quadratic determinant."""
    if is_negligible(coeffs.a11) and is_negligible(coeffs.a12) and is_negligible(coeffs.a22):
        if not (is_negligible(coeffs.b1) and is_negligible(coeffs.b2)):
            return ConicKind.LINE
        return ConicKind.PLANE if is_negligible(coeffs.c) else ConicKind.EMPTY

    if not is_negligible(delta):
        return ConicKind.PARABOLA

    # Degenerate: one squared coordinate only, solve the 1D quadratic along it
    r = rotated_coefficients(coeffs, rotation_angle(coeffs))
    if is_negligible(r.c):
        quad, lin = r.a, r.d
    else:
        quad, lin = r.c, r.e
    disc = lin * lin - 4 * quad * r.f
    if is_negligible(disc):
        return ConicKind.COINCIDENT_LINES
    return ConicKind.PARALLEL_LINES if disc > 0 else ConicKind.IMAGINARY_PARALLEL_LINES


def classify(coeffs: Coefficients) -> ConicKind:
    """Kind of the real curve f(x, y) = 0."""
    det = determinant(coeffs)
    delta = discriminant_3x3(coeffs)

    if is_negligible(det):
        return _classify_parabolic(coeffs, delta)

    if det < 0:
        return ConicKind.INTERSECTING_LINES if is_negligible(delta) else ConicKind.HYPERBOLA

    if is_negligible(delta):
        return ConicKind.POINT
    if (coeffs.a11 + coeffs.a22) * delta > 0:
        return ConicKind.IMAGINARY_ELLIPSE
    if is_negligible(coeffs.a11 - coeffs.a22) and is_negligible(coeffs.a12):
        return ConicKind.CIRCLE
    return ConicKind.ELLIPSE
