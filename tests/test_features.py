import math

import numpy as np
import pytest

from safetysnap.features import extract_features
from safetysnap.pixels import PixelBuffer
from safetysnap.regions import crop, whole_image
from synthetic import DARK_YELLOW, YELLOW, canvas, paint_stripes


def features_of(arr):
    return extract_features(whole_image(PixelBuffer(arr)))


def test_uniform_bright_region():
    fv = features_of(canvas(32, 32, YELLOW))
    assert fv.avg_color == YELLOW
    assert fv.color_variance == 0.0
    assert fv.edge_intensity == 0.0
    assert fv.stripe_probability == 0.0
    assert fv.reflective_ratio == 0.0
    assert fv.uniformity == 1.0
    assert fv.roundness == pytest.approx(math.pi / 4)
    assert fv.aspect_ratio == 1.0
    assert (fv.center_x, fv.center_y) == (16.0, 16.0)


def test_black_region_roundness_floor():
    fv = features_of(canvas(16, 16))
    assert fv.roundness == pytest.approx(1 - math.pi / 4)
    assert fv.distinct_regions == 1


def test_alternating_rows_are_stripes():
    fv = features_of(paint_stripes(canvas(48, 48), 0, 0, 48, 48))
    assert fv.stripe_probability == 1.0
    assert fv.avg_color == (190, 180, 20)
    expected_edges = 200.0 * 47 * 47 / (48 * 48) / 255.0
    assert fv.edge_intensity == pytest.approx(expected_edges)
    assert 0.2 < fv.color_variance < 0.3


def test_reflective_and_variance_bounds():
    fv = features_of(canvas(10, 10, (255, 255, 255)))
    assert fv.reflective_ratio == 1.0
    arr = canvas(10, 10)
    arr[::2, ::2] = (255, 255, 255)
    fv = features_of(arr)
    assert 0.0 <= fv.color_variance <= 1.0
    assert 0.0 <= fv.edge_intensity <= 1.0


def test_average_rounds_half_up():
    arr = canvas(2, 1)
    arr[0, 1] = (1, 1, 1)
    assert features_of(arr).avg_color == (1, 1, 1)


def test_empty_region_is_all_zero():
    fv = extract_features(crop(PixelBuffer(canvas(8, 8)), 50, 50, 32, 32))
    assert fv.pixel_count == 0
    assert fv.avg_color == (0, 0, 0)
    assert fv.aspect_ratio == 1.0
    values = [fv.color_variance, fv.edge_intensity, fv.stripe_probability, fv.reflective_ratio, fv.roundness]
    assert all(v == 0.0 for v in values)


def test_skin_and_variation():
    arr = canvas(20, 20, (200, 140, 110))
    arr[:10] = (20, 20, 20)
    fv = features_of(arr)
    assert fv.skin_ratio == pytest.approx(0.5)
    assert fv.variation_ratio == 1.0
    assert fv.distinct_regions == 2


def test_single_row_region():
    fv = features_of(np.full((1, 40, 3), DARK_YELLOW, np.uint8))
    assert fv.stripe_probability == 0.0
    assert fv.edge_intensity == 0.0
