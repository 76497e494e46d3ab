"""Detection value types.

Bounding boxes are normalized to the source image and expressed as
``(x, y, width, height)``, each value in ``[0.0, 1.0]`` with the box inside the
unit square.
"""

import math
from dataclasses import dataclass
from typing import Optional

BBOX_TOLERANCE = 1e-3


def _unit(v):
    v = float(v)
    if not math.isfinite(v):
        return 0.0
    return min(1.0, max(0.0, v))


@dataclass(frozen=True)
class BBox:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_pixels(cls, x, y, w, h, image_width, image_height):
        return cls(x / image_width, y / image_height, w / image_width, h / image_height).clamped()

    def clamped(self):
        x = _unit(self.x); y = _unit(self.y)
        return BBox(x, y, min(_unit(self.width), 1.0 - x), min(_unit(self.height), 1.0 - y))

    @property
    def area(self):
        return max(0.0, self.width) * max(0.0, self.height)

    def corners(self):
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def as_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def is_valid(self):
        vals = (self.x, self.y, self.width, self.height)
        return (all(math.isfinite(v) and 0.0 <= v <= 1.0 for v in vals)
                and self.x + self.width <= 1.0 + BBOX_TOLERANCE
                and self.y + self.height <= 1.0 + BBOX_TOLERANCE)


@dataclass(frozen=True)
class Detection:
    label: str
    confidence: float
    bbox: BBox
    # scan pass the candidate came from; not part of the hash
    source: str = ""
    # named color range that matched, when the scorer uses one
    color: Optional[str] = None
