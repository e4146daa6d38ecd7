"""
Scalar-Field Rasterizer
=======================
Draws the implicit curve f(x, y) = 0 on a pixel grid.

Every pixel is mapped to model coordinates, f and its analytic gradient are
evaluated there and the first-order distance |f| / |grad f| decides whether
the pixel belongs to the curve. The whole grid is evaluated at once with
numpy; nothing is cached between frames.

Note: This module is pure Python/NumPy and must NOT import PySide6.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

from conicexplorer.config import CURVE_ALPHA_FLOOR, CURVE_RGB, CURVE_THRESHOLD_PX, GRADIENT_EPS, SCALE
from conicexplorer.model.coefficients import Coefficients

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass
class ScalarField:
    """Per-pixel samples, all arrays of shape (height, width)."""
    f: npt.NDArray[np.float64]
    dfdx: npt.NDArray[np.float64]
    dfdy: npt.NDArray[np.float64]
    distance_px: npt.NDArray[np.float64]


@dataclass
class RasterResult:
    """
    Attributes:
        image: (height, width, 4) uint8 RGBA buffer, transparent off the curve.
        mask: (height, width) bool array of curve pixels.
        is_empty: True if no pixel of the grid lies on the curve.
    """
    image: npt.NDArray[np.uint8]
    mask: npt.NDArray[np.bool_]
    is_empty: bool

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]


def pixel_to_model(
    px: npt.ArrayLike,
    py: npt.ArrayLike,
    center_px: tuple[float, float],
    scale: float = SCALE
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Screen y grows downwards, model y grows upwards."""
    cx, cy = center_px
    x = (np.asarray(px, dtype=np.float64) - cx) / scale
    y = -(np.asarray(py, dtype=np.float64) - cy) / scale
    return x, y


def model_to_pixel(x: float, y: float, center_px: tuple[float, float], scale: float = SCALE) -> tuple[float, float]:
    cx, cy = center_px
    return cx + x * scale, cy - y * scale


def sample_field(
    coeffs: Coefficients,
    width: int,
    height: int,
    center_px: tuple[float, float],
    scale: float = SCALE
) -> ScalarField:
    """
    Evaluate f, grad f and the approximate pixel distance to the curve.

    Args:
        coeffs: Coefficient snapshot.
        width: Grid width in pixels.
        height: Grid height in pixels.
        center_px: Pixel position of the model origin.
        scale: Pixels per model unit.

    Returns:
        ScalarField with arrays of shape (height, width).
    """
    x, y = pixel_to_model(np.arange(width), np.arange(height), center_px, scale)
    xx, yy = np.meshgrid(x, y)

    # Huge coefficients overflow to inf/nan; such pixels simply fail the threshold test
    with np.errstate(over="ignore", invalid="ignore"):
        f = coeffs.evaluate(xx, yy)
        dfdx, dfdy = coeffs.gradient(xx, yy)
        grad = np.hypot(dfdx, dfdy)
        distance_px = np.abs(f) / (grad + GRADIENT_EPS) * scale

    return ScalarField(f=f, dfdx=dfdx, dfdy=dfdy, distance_px=distance_px)


def rasterize(
    coeffs: Coefficients,
    width: int,
    height: int,
    center_px: Optional[tuple[float, float]] = None,
    scale: float = SCALE
) -> RasterResult:
    """
    Rasterize the curve into an anti-aliased RGBA buffer.

    A pixel is on the curve when its distance is below CURVE_THRESHOLD_PX; its
    alpha falls off linearly with the distance, lifted by CURVE_ALPHA_FLOOR.

    Args:
        coeffs: Coefficient snapshot.
        width: Grid width in pixels.
        height: Grid height in pixels.
        center_px: Pixel position of the model origin, defaults to the grid center.
        scale: Pixels per model unit.

    Returns:
        RasterResult for exactly this (width, height).
    """
    width = max(0, int(width))
    height = max(0, int(height))
    image = np.zeros((height, width, 4), dtype=np.uint8)
    if width == 0 or height == 0:
        return RasterResult(image=image, mask=np.zeros((height, width), dtype=bool), is_empty=True)

    if center_px is None:
        center_px = (width / 2, height / 2)

    start = time.perf_counter()
    field = sample_field(coeffs, width, height, center_px, scale)

    with np.errstate(invalid="ignore"):
        mask = field.distance_px < CURVE_THRESHOLD_PX

    alpha = np.minimum(1.0, np.maximum(0.0, CURVE_THRESHOLD_PX - field.distance_px[mask]) + CURVE_ALPHA_FLOOR)
    image[mask, :3] = CURVE_RGB
    image[mask, 3] = np.rint(255 * alpha).astype(np.uint8)

    n_points = int(np.count_nonzero(mask))
    logger.debug(
        "Rasterized %dx%d grid in %.1f ms (%d curve pixels).",
        width, height, (time.perf_counter() - start) * 1000, n_points
    )
    return RasterResult(image=image, mask=mask, is_empty=n_points == 0)
