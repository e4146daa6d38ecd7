"""
Everything the analysis panel shows for one coefficient snapshot, derived in
one pass and never updated in place.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from conicexplorer.model.analysis import GeometryDescriptor, analyze
from conicexplorer.model.classification import ConicKind, classify
from conicexplorer.model.coefficients import Coefficients
from conicexplorer.model.exact_form import ExactRotation, resolve_exact


def format_number(value: float, decimals: int = 3) -> str:
    """Fixed-point text without a negative zero ('-0.000' -> '0.000')."""
    text = f"{value:.{decimals}f}"
    if text.startswith("-") and float(text) == 0:
        return text[1:]
    return text


@dataclass(frozen=True)
class AnalysisReport:
    coefficients: Coefficients
    geometry: GeometryDescriptor
    exact: Optional[ExactRotation]
    kind: ConicKind

    def rotation_cells(self) -> tuple[tuple[str, str], tuple[str, str]]:
        """Text of R = [[cos, -sin], [sin, cos]], exact where possible."""
        if self.exact is not None:
            cos, sin = str(self.exact.cos), str(self.exact.sin)
            minus_sin = str(-self.exact.sin)
        else:
            cos = format_number(self.geometry.cos_theta)
            sin = format_number(self.geometry.sin_theta)
            minus_sin = format_number(-self.geometry.sin_theta)
        return (cos, minus_sin), (sin, cos)

    def translation_cells(self) -> Optional[tuple[str, str]]:
        if self.geometry.center is None:
            return None
        xi, eta = self.geometry.center
        return format_number(xi), format_number(eta)


def build_report(coeffs: Coefficients) -> AnalysisReport:
    geometry = analyze(coeffs)
    exact = resolve_exact(geometry.theta, coeffs.a11 - coeffs.a22, coeffs.a12)
    return AnalysisReport(coefficients=coeffs, geometry=geometry, exact=exact, kind=classify(coeffs))
