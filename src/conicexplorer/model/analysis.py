"""
Conic Analyzer
==============
Maps a coefficient snapshot to the geometry needed to draw and describe the
curve: the rotation angle that removes the xy term and the center (ellipse,
hyperbola) or vertex (parabola) of the curve.

Note: This module is pure Python and must NOT import PySide6.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

from conicexplorer.config import EPS
from conicexplorer.model.coefficients import Coefficients

logger = logging.getLogger(__name__)


class RotatedCoefficients(NamedTuple):
    """Coefficients of the curve written in the rotated (x', y') frame."""
    a: float  # x'^2
    c: float  # y'^2
    d: float  # x'
    e: float  # y'
    f: float  # constant


@dataclass(frozen=True)
class GeometryDescriptor:
    """
    Derived geometry of one coefficient snapshot.

    Attributes:
        theta: Rotation angle in radians, in (-pi/4, pi/4].
        center: (xi, eta) of the center or vertex, None if it is not finite.
        is_vertex: True when the parabola branch was taken (|determinant| <= EPS).
        determinant: 4*a11*a22 - a12^2.
    """
    theta: float
    center: Optional[tuple[float, float]]
    is_vertex: bool
    determinant: float

    @property
    def cos_theta(self) -> float:
        return math.cos(self.theta)

    @property
    def sin_theta(self) -> float:
        return math.sin(self.theta)

    @property
    def angle_degrees(self) -> float:
        return math.degrees(self.theta)

    @property
    def translation_label(self) -> str:
        return "Vertex" if self.is_vertex else "Center"


def is_negligible(value: float) -> bool:
    return abs(value) <= EPS


def rotation_angle(coeffs: Coefficients) -> float:
    """Angle that eliminates the cross term: tan(2*theta) = a12 / (a11 - a22)."""
    if is_negligible(coeffs.a12):
        return 0.0
    if is_negligible(coeffs.a11 - coeffs.a22):
        # 45 degrees; atan would divide by zero
        return math.pi / 4 if coeffs.a12 > 0 else -math.pi / 4
    return 0.5 * math.atan(coeffs.a12 / (coeffs.a11 - coeffs.a22))


def determinant(coeffs: Coefficients) -> float:
    return 4 * coeffs.a11 * coeffs.a22 - coeffs.a12 * coeffs.a12


def rotated_coefficients(coeffs: Coefficients, theta: float) -> RotatedCoefficients:
    """
    Substitute x = x'c - y's, y = x's + y'c into the equation.

    Args:
        coeffs: Coefficients in the global frame.
        theta: Rotation angle of the primed frame.

    Returns:
        The coefficients (A', C', D', E', F') of the equation in the primed frame.
        The x'y' term vanishes when theta comes from `rotation_angle`.
    """
    c = math.cos(theta)
    s = math.sin(theta)
    return RotatedCoefficients(
        a=coeffs.a11 * c * c + coeffs.a12 * c * s + coeffs.a22 * s * s,
        c=coeffs.a11 * s * s - coeffs.a12 * c * s + coeffs.a22 * c * c,
        d=coeffs.b1 * c + coeffs.b2 * s,
        e=-coeffs.b1 * s + coeffs.b2 * c,
        f=coeffs.c,
    )


def central_center(coeffs: Coefficients, det: float) -> tuple[float, float]:
    """Solve grad f = 0 in closed form (requires det != 0)."""
    xi = (coeffs.a12 * coeffs.b2 - 2 * coeffs.a22 * coeffs.b1) / det
    eta = (coeffs.a12 * coeffs.b1 - 2 * coeffs.a11 * coeffs.b2) / det
    return xi, eta


def parabola_vertex(coeffs: Coefficients, theta: float) -> tuple[float, float]:
    """
    Vertex of a parabola by completing the square in the rotated frame.

    When the linear coefficient of the non-squared coordinate is negligible
    (double line, parallel lines), that coordinate stays 0.

    Returns:
        (xi, eta) in the global frame. Components may be non-finite for
        degenerate input; the caller checks.
    """
    r = rotated_coefficients(coeffs, theta)
    xv = 0.0
    yv = 0.0

    if is_negligible(r.c):
        # A'x'^2 + D'x' + E'y' + F' = 0
        if not is_negligible(r.a):
            xv = -r.d / (2 * r.a)
            k = r.f - (r.d * r.d) / (4 * r.a)
            if not is_negligible(r.e):
                yv = -k / r.e
    else:
        # C'y'^2 + D'x' + E'y' + F' = 0
        yv = -r.e / (2 * r.c)
        k = r.f - (r.e * r.e) / (4 * r.c)
        if not is_negligible(r.d):
            xv = -k / r.d

    c = math.cos(theta)
    s = math.sin(theta)
    return xv * c - yv * s, xv * s + yv * c


def analyze(coeffs: Coefficients) -> GeometryDescriptor:
    """Compute rotation and translation of the curve; never raises for finite input."""
    theta = rotation_angle(coeffs)
    det = determinant(coeffs)
    is_vertex = is_negligible(det)

    if is_vertex:
        xi, eta = parabola_vertex(coeffs, theta)
    else:
        xi, eta = central_center(coeffs, det)

    center: Optional[tuple[float, float]] = (xi, eta)
    if not (math.isfinite(xi) and math.isfinite(eta)):
        logger.debug("Translation undefined for %s (xi=%s, eta=%s).", coeffs, xi, eta)
        center = None

    return GeometryDescriptor(theta=theta, center=center, is_vertex=is_vertex, determinant=det)
