# safetysnap/features.py
import math
from dataclasses import dataclass

import numpy as np

from safetysnap import config


@dataclass(frozen=True)
class FeatureVector:
    avg_color: tuple
    color_variance: float
    edge_intensity: float
    stripe_probability: float
    reflective_ratio: float
    roundness: float
    aspect_ratio: float
    center_x: float
    center_y: float
    image_width: int
    image_height: int
    uniformity: float = 0.0
    skin_ratio: float = 0.0
    variation_ratio: float = 0.0
    distinct_regions: int = 0
    scene_complexity: float = 0.0
    pixel_count: int = 0


def _clamp01(v):
    v = float(v)
    if not math.isfinite(v):
        return 0.0
    return min(1.0, max(0.0, v))


def empty_features(region):
    return FeatureVector(
        avg_color=(0, 0, 0), color_variance=0.0, edge_intensity=0.0, stripe_probability=0.0,
        reflective_ratio=0.0, roundness=0.0, aspect_ratio=1.0,
        center_x=float(region.x), center_y=float(region.y),
        image_width=region.image_width, image_height=region.image_height,
    )


def average_color(px):
    mean = px.reshape(-1, 3).mean(axis=0)
    # half-up rounding, not banker's
    return tuple(int(math.floor(c + 0.5)) for c in mean)


def color_variance(px, mean):
    diff = px.reshape(-1, 3) - mean
    return _clamp01(math.sqrt(float((diff * diff).sum(axis=1).mean())) / 255.0)


def edge_intensity(px):
    h, w = px.shape[:2]
    if h < 2 or w < 2:
        return 0.0
    core = px[:-1, :-1]
    gx = np.abs(core - px[:-1, 1:]).sum(axis=2)
    gy = np.abs(core - px[1:, :-1]).sum(axis=2)
    mag = np.sqrt(gx * gx + gy * gy)
    return _clamp01(float(mag.sum()) / (h * w) / 255.0)


def stripe_probability(brightness):
    rows = brightness.shape[0]
    if rows < 2:
        return 0.0
    row_means = brightness.mean(axis=1)
    stripes = int((np.abs(np.diff(row_means)) > config.STRIPE_DELTA).sum())
    return _clamp01(stripes / (rows * config.STRIPE_ROW_FRACTION))


def roundness(brightness):
    fill = float((brightness > config.FILL_BRIGHTNESS).mean())
    return _clamp01(1.0 - abs(fill - math.pi / 4.0))


def skin_ratio(px):
    r, g, b = px[..., 0], px[..., 1], px[..., 2]
    skin = (r > 95) & (g > 40) & (b > 20) & (r > g) & (r > b) & (r - g > 15)
    return float(skin.mean())


def distinct_regions(px):
    levels = config.COLOR_BIN_LEVELS
    q = np.minimum((px.reshape(-1, 3) * levels / 256.0).astype(np.int64), levels - 1)
    bins = q[:, 0] * levels * levels + q[:, 1] * levels + q[:, 2]
    counts = np.bincount(bins, minlength=levels ** 3)
    return int((counts >= config.COLOR_BIN_MIN_SHARE * bins.size).sum())


def extract_features(region):
    if region.empty or region.pixels.size == 0:
        return empty_features(region)
    px = region.pixels.astype(np.float64)
    h, w = px.shape[:2]
    mean = px.reshape(-1, 3).mean(axis=0)
    brightness = px.sum(axis=2) / 3.0
    l1_dev = float(np.abs(px.reshape(-1, 3) - mean).sum(axis=1).mean())
    variance = color_variance(px, mean)
    return FeatureVector(
        avg_color=average_color(px),
        color_variance=variance,
        edge_intensity=edge_intensity(px),
        stripe_probability=stripe_probability(brightness),
        reflective_ratio=float((brightness > config.REFLECTIVE_BRIGHTNESS).mean()),
        roundness=roundness(brightness),
        aspect_ratio=w / h,
        center_x=region.x + w / 2.0,
        center_y=region.y + h / 2.0,
        image_width=region.image_width,
        image_height=region.image_height,
        uniformity=_clamp01(1.0 - l1_dev / config.UNIFORMITY_SPAN),
        skin_ratio=skin_ratio(px),
        variation_ratio=float((np.abs(brightness - brightness.mean()) > config.VARIATION_DELTA).mean()),
        distinct_regions=distinct_regions(px),
        scene_complexity=_clamp01(2.0 * variance),
        pixel_count=h * w,
    )
