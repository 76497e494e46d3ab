# safetysnap/config.py
import os
from collections import namedtuple
from types import MappingProxyType

VEST_THRESHOLD = float(os.environ.get("SAFETYSNAP_VEST_THRESHOLD", "0.7"))
CONFIDENCE_FLOOR = float(os.environ.get("SAFETYSNAP_CONFIDENCE_FLOOR", "0.6"))
HASH_ALGORITHM = os.environ.get("SAFETYSNAP_HASH_ALGORITHM", "md5")
PARALLEL = os.environ.get("SAFETYSNAP_PARALLEL", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = os.environ.get("SAFETYSNAP_LOG_LEVEL", "INFO").upper()

HELMET = "helmet"
VEST = "vest"
PERSON = "person"
FULL_KIT = "full_kit"

# discovery order; ties in confidence keep this order
CLASS_ORDER = (PERSON, HELMET, VEST, FULL_KIT)

LABELS = MappingProxyType({
    HELMET: "Hard hat or safety helmet",
    VEST: "High-visibility safety vest",
    PERSON: "Person detected in image",
})

# (r, g, b) inclusive intervals
COLOR_RANGES = MappingProxyType({
    HELMET: MappingProxyType({
        "green": ((20, 120), (80, 180), (20, 100)),
        "yellow": ((180, 255), (180, 255), (0, 100)),
        "dark_blue": ((0, 80), (0, 80), (80, 180)),
        "orange": ((200, 255), (100, 180), (0, 80)),
    }),
    VEST: MappingProxyType({
        "high_vis": ((150, 255), (150, 255), (0, 120)),
        "orange": ((200, 255), (120, 180), (0, 120)),
        "lime": ((0, 150), (200, 255), (0, 150)),
    }),
    FULL_KIT: MappingProxyType({
        "dark_blue": ((0, 80), (0, 80), (80, 180)),
    }),
})
LIGHT_BLUE_MIN_B = 100

GATE_WEIGHTS = MappingProxyType({
    HELMET: MappingProxyType({
        "safety_color": 0.4,
        "low_variance": 0.3,
        "round": 0.25,
        "moderate_edges": 0.15,
        "top_region": 0.1,
    }),
    VEST: MappingProxyType({
        "high_vis_color": 0.4,
        "stripes": 0.35,
        "reflective": 0.25,
        "torso_region": 0.15,
        "vest_shape": 0.1,
        "plain_penalty": 0.6,
    }),
    PERSON: MappingProxyType({
        "base": 0.2,
        "skin_tone": 0.25,
        "clothing_variation": 0.2,
        "scene_complexity": 0.2,
        "upright": 0.1,
        "distinct_regions": 0.15,
        "uniform_penalty": 0.4,
    }),
    FULL_KIT: MappingProxyType({
        "role_match": 0.8,
    }),
})

ACCEPT_THRESHOLDS = MappingProxyType({HELMET: 0.7, VEST: VEST_THRESHOLD, PERSON: 0.5, FULL_KIT: 0.7})
CONFIDENCE_CAPS = MappingProxyType({HELMET: 0.98, VEST: 0.96, PERSON: 0.92})
MERGE_IOU = MappingProxyType({HELMET: 0.3, VEST: 0.4, PERSON: 0.3})
GENERIC_MERGE_IOU = 0.3
CLASS_CAPS = MappingProxyType({HELMET: 2, VEST: 2, PERSON: 1})
DEFAULT_CLASS_CAP = 3

# band_top/band_bottom are fractions of image height bounding the window start rows
ScanPlan = namedtuple("ScanPlan", ["window", "stride", "band_top", "band_bottom"])

SCAN_PLANS = MappingProxyType({
    HELMET: ScanPlan(32, 16, 0.0, 0.5),
    VEST: ScanPlan(48, 24, 0.2, 0.8),
    PERSON: ScanPlan(64, 32, 0.0, 1.0),
    FULL_KIT: ScanPlan(96, 48, 0.0, 1.0),
})

HELMET_TOP_FRACTION = 0.4
HELMET_MAX_VARIANCE = 0.3
HELMET_MIN_ROUNDNESS = 0.6
HELMET_EDGE_RANGE = (0.3, 0.8)
VEST_MIN_STRIPES = 0.5
VEST_MIN_REFLECTIVE = 0.3
VEST_TORSO_RANGE = (0.25, 0.75)
VEST_ASPECT_RANGE = (0.6, 2.0)
VEST_PLAIN_VARIANCE = 0.1
VEST_PLAIN_STRIPES = 0.2
PERSON_MIN_SKIN = 0.05
PERSON_MIN_VARIATION = 0.05
PERSON_MIN_COMPLEXITY = 0.4
PERSON_MIN_UPRIGHT = 1.2
PERSON_MIN_REGIONS = 2
PERSON_MAX_UNIFORMITY = 0.8
PERSON_PRESENCE_BOX = (0.1, 0.1, 0.8, 0.8)
FULL_KIT_HEAD_FRACTION = 0.3
FULL_KIT_HEAD_MAX_Y = 0.3
FULL_KIT_BODY_MIN_Y = 0.2

STRIPE_DELTA = 50.0
STRIPE_ROW_FRACTION = 0.3
REFLECTIVE_BRIGHTNESS = 240.0
FILL_BRIGHTNESS = 100.0
VARIATION_DELTA = 50.0
UNIFORMITY_SPAN = 150.0
COLOR_BIN_LEVELS = 4
COLOR_BIN_MIN_SHARE = 0.05

FALLBACK_CONFIDENCE = 0.75
FALLBACK_BOXES = MappingProxyType({
    HELMET: (0.2, 0.1, 0.6, 0.4),
    VEST: (0.1, 0.3, 0.8, 0.5),
})

HASH_CONFIDENCE_DIGITS = 2
HASH_BBOX_DIGITS = 3
