import numpy as np
import pytest

from conicexplorer.config import CURVE_ALPHA_FLOOR, CURVE_RGB
from conicexplorer.model.coefficients import Coefficients
from conicexplorer.model.raster import model_to_pixel, pixel_to_model, rasterize, sample_field

UNIT_CIRCLE = Coefficients(1, 0, 1, 0, 0, -1)
IMAGINARY = Coefficients(1, 0, 1, 0, 0, 1)


@pytest.mark.parametrize("width, height", [(64, 48), (200, 100), (1, 1), (300, 300)])
def test_curve_without_real_points_is_empty(width, height):
    result = rasterize(IMAGINARY, width, height)

    assert result.is_empty is True
    assert not result.mask.any()
    assert not result.image.any()


def test_unit_circle_is_drawn():
    result = rasterize(UNIT_CIRCLE, 200, 200)

    assert result.is_empty is False
    assert result.image.shape == (200, 200, 4)
    assert result.image.dtype == np.uint8
    assert (result.width, result.height) == (200, 200)

    # (1, 0) in model space lands on pixel (140, 100)
    assert result.mask[100, 140]
    assert tuple(result.image[100, 140]) == (*CURVE_RGB, 255)

    # The origin is inside the circle, not on it
    assert not result.mask[100, 100]
    assert result.image[100, 100, 3] == 0


def test_alpha_never_below_floor():
    result = rasterize(Coefficients(), 320, 240)
    alpha = result.image[..., 3][result.mask]

    assert alpha.size > 0
    assert alpha.min() >= round(255 * CURVE_ALPHA_FLOOR)


def test_rasterize_is_deterministic():
    first = rasterize(Coefficients(), 160, 120)
    second = rasterize(Coefficients(), 160, 120)

    assert np.array_equal(first.image, second.image)
    assert np.array_equal(first.mask, second.mask)


@pytest.mark.parametrize("width, height", [(0, 0), (0, 50), (50, 0), (-3, 10)])
def test_zero_size_grid(width, height):
    result = rasterize(UNIT_CIRCLE, width, height)

    assert result.is_empty is True
    assert result.image.size == 0


def test_custom_origin():
    result = rasterize(UNIT_CIRCLE, 200, 200, center_px=(40.0, 40.0))

    assert result.mask[40, 80]
    assert not result.mask[100, 140]


def test_huge_coefficients_do_not_raise():
    result = rasterize(Coefficients(1e308, 1e308, 1e308, 1e308, 1e308, 1e308), 50, 50)
    assert result.image.shape == (50, 50, 4)


def test_pixel_model_mapping():
    x, y = pixel_to_model(140.0, 60.0, (100.0, 100.0), scale=40.0)

    assert float(x) == 1.0
    assert float(y) == 1.0
    assert model_to_pixel(1.0, 1.0, (100.0, 100.0), scale=40.0) == (140.0, 60.0)


def test_sample_field_uses_analytic_gradient():
    coeffs = Coefficients(1, 2, 3, 4, 5, 6)
    field = sample_field(coeffs, 20, 10, center_px=(10.0, 5.0))
    x, y = pixel_to_model(13, 2, (10.0, 5.0))

    assert field.f.shape == (10, 20)
    assert field.f[2, 13] == pytest.approx(coeffs.evaluate(float(x), float(y)))
    dfdx, dfdy = coeffs.gradient(float(x), float(y))
    assert field.dfdx[2, 13] == pytest.approx(dfdx)
    assert field.dfdy[2, 13] == pytest.approx(dfdy)
