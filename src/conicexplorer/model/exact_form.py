"""
Exact-Form Resolver
===================
Tries to write cos(theta) and sin(theta) of the principal-axis rotation as
signed ratios of square roots of integers, e.g. cos = 2/sqrt(5).

With A = a11 - a22, B = a12 and H = sqrt(A^2 + B^2) the half-angle identities
give cos^2 = (H + |A|) / 2H and sin^2 = (H - |A|) / 2H, so a closed form exists
whenever H is an integer and |A| is a (small) rational number.

Note: This module is pure Python and must NOT import PySide6.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional

from conicexplorer.config import EPS, EXACT_EPS
from conicexplorer.model.analysis import is_negligible

MAX_DENOMINATOR = 10 ** 6


def _root_text(n: int) -> str:
    root = math.isqrt(n)
    return str(root) if root * root == n else f"√{n}"


@dataclass(frozen=True)
class SurdTerm:
    """The number sign * sqrt(numerator) / sqrt(denominator)."""
    sign: int
    numerator: int
    denominator: int = 1

    @classmethod
    def from_square(cls, sign: int, square: Fraction) -> SurdTerm:
        """Term whose square is `square` (already reduced by Fraction)."""
        if square == 0:
            return cls(0, 0, 1)
        return cls(sign, square.numerator, square.denominator)

    @property
    def value(self) -> float:
        if self.sign == 0 or self.numerator == 0:
            return 0.0
        # Ratio first: numerator and denominator can exceed the float range
        return self.sign * math.sqrt(self.numerator / self.denominator)

    def __neg__(self) -> SurdTerm:
        return SurdTerm(-self.sign, self.numerator, self.denominator)

    def __str__(self) -> str:
        if self.sign == 0 or self.numerator == 0:
            return "0"
        top = _root_text(self.numerator)
        body = top if self.denominator == 1 else f"{top}/{_root_text(self.denominator)}"
        return f"-{body}" if self.sign < 0 else body


@dataclass(frozen=True)
class ExactRotation:
    """Closed forms of cos(theta) and sin(theta)."""
    cos: SurdTerm
    sin: SurdTerm


ONE = SurdTerm(1, 1, 1)
ZERO = SurdTerm(0, 0, 1)
HALF_SQRT2 = SurdTerm(1, 2, 4)  # rendered as √2/2


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _as_fraction(value: float) -> Optional[Fraction]:
    """Exact small fraction equal to `value`, or None if there is none."""
    fraction = Fraction(value).limit_denominator(MAX_DENOMINATOR)
    if abs(float(fraction) - value) > EXACT_EPS * max(1.0, abs(value)):
        return None
    return fraction


def resolve_exact(theta: float, a: float, b: float) -> Optional[ExactRotation]:
    """
    Closed form of the rotation, or None when only decimals are available.

    Args:
        theta: The rotation angle returned by the analyzer.
        a: a11 - a22.
        b: a12.

    Returns:
        ExactRotation, or None. Never raises for finite input.
    """
    # Same zero tests as rotation_angle, so both take the same branch
    if is_negligible(b):
        return ExactRotation(cos=ONE, sin=ZERO)
    if is_negligible(a):
        return ExactRotation(cos=HALF_SQRT2, sin=HALF_SQRT2 if b > 0 else -HALF_SQRT2)

    h = math.hypot(a, b)
    if not math.isfinite(h):
        return None
    h_int = round(h)
    if h_int == 0 or abs(h - h_int) >= EPS:
        return None

    a_abs = _as_fraction(abs(a))
    if a_abs is None:
        return None

    cos_square = (h_int + a_abs) / (2 * h_int)
    sin_square = (h_int - a_abs) / (2 * h_int)
    if sin_square < 0:
        return None

    exact = ExactRotation(
        cos=SurdTerm.from_square(1, cos_square),
        sin=SurdTerm.from_square(_sign(math.sin(theta)), sin_square),
    )
    if abs(exact.cos.value - math.cos(theta)) > EPS or abs(exact.sin.value - math.sin(theta)) > EPS:
        return None
    return exact
