# safetysnap/scoring.py
from collections import namedtuple

from safetysnap import config

Score = namedtuple("Score", ["confidence", "accepted", "color"])

REJECTED = Score(0.0, False, None)


def in_range(color, rng):
    return all(lo <= c <= hi for c, (lo, hi) in zip(color, rng))


def color_matches(color, cls):
    """Name of the first configured color range of `cls` containing `color`, else None."""
    for name, rng in config.COLOR_RANGES[cls].items():
        if in_range(color, rng):
            return name
    return None


def is_light_blue(color):
    r, g, b = color
    return b > r and b > g and b > config.LIGHT_BLUE_MIN_B


def _finish(cls, confidence, color=None):
    # rounded so gate sums compare exactly against thresholds
    confidence = round(min(config.CONFIDENCE_CAPS[cls], max(0.0, confidence)), 6)
    return Score(confidence, confidence > config.ACCEPT_THRESHOLDS[cls], color)


def score_helmet(fv):
    if fv.pixel_count == 0:
        return REJECTED
    w = config.GATE_WEIGHTS[config.HELMET]
    conf = 0.0
    color = color_matches(fv.avg_color, config.HELMET)
    if color is not None:
        conf += w["safety_color"]
    if fv.color_variance < config.HELMET_MAX_VARIANCE:
        conf += w["low_variance"]
    if fv.roundness > config.HELMET_MIN_ROUNDNESS:
        conf += w["round"]
    lo, hi = config.HELMET_EDGE_RANGE
    if lo < fv.edge_intensity < hi:
        conf += w["moderate_edges"]
    if fv.center_y < fv.image_height * config.HELMET_TOP_FRACTION:
        conf += w["top_region"]
    return _finish(config.HELMET, conf, color)


def score_vest(fv):
    if fv.pixel_count == 0:
        return REJECTED
    w = config.GATE_WEIGHTS[config.VEST]
    conf = 0.0
    color = color_matches(fv.avg_color, config.VEST)
    if color is not None:
        conf += w["high_vis_color"]
    if fv.stripe_probability > config.VEST_MIN_STRIPES:
        conf += w["stripes"]
    if fv.reflective_ratio > config.VEST_MIN_REFLECTIVE:
        conf += w["reflective"]
    top, bottom = config.VEST_TORSO_RANGE
    if fv.image_height * top < fv.center_y < fv.image_height * bottom:
        conf += w["torso_region"]
    lo, hi = config.VEST_ASPECT_RANGE
    if lo < fv.aspect_ratio < hi:
        conf += w["vest_shape"]
    # plain, stripe-free panel
    if fv.color_variance < config.VEST_PLAIN_VARIANCE and fv.stripe_probability < config.VEST_PLAIN_STRIPES:
        conf *= w["plain_penalty"]
    return _finish(config.VEST, conf, color)


def score_person(fv, upright_ratio=None):
    if fv.pixel_count == 0:
        return REJECTED
    w = config.GATE_WEIGHTS[config.PERSON]
    conf = w["base"]
    if fv.skin_ratio >= config.PERSON_MIN_SKIN:
        conf += w["skin_tone"]
    if fv.variation_ratio >= config.PERSON_MIN_VARIATION:
        conf += w["clothing_variation"]
    if fv.scene_complexity > config.PERSON_MIN_COMPLEXITY:
        conf += w["scene_complexity"]
    if upright_ratio is None:
        upright_ratio = 1.0 / fv.aspect_ratio if fv.aspect_ratio > 0 else 0.0
    if upright_ratio > config.PERSON_MIN_UPRIGHT:
        conf += w["upright"]
    if fv.distinct_regions >= config.PERSON_MIN_REGIONS:
        conf += w["distinct_regions"]
    if fv.uniformity > config.PERSON_MAX_UNIFORMITY:
        conf *= w["uniform_penalty"]
    return _finish(config.PERSON, conf)


def score_full_kit(fv):
    """Uniformity of a large window whose mean color is in the protective-suit family."""
    if fv.pixel_count == 0:
        return REJECTED
    color = color_matches(fv.avg_color, config.FULL_KIT)
    if color is None and is_light_blue(fv.avg_color):
        color = "light_blue"
    if color is None:
        return Score(fv.uniformity, False, None)
    return Score(fv.uniformity, fv.uniformity > config.ACCEPT_THRESHOLDS[config.FULL_KIT], color)


SCORERS = {
    config.HELMET: score_helmet,
    config.VEST: score_vest,
    config.PERSON: score_person,
    config.FULL_KIT: score_full_kit,
}
