# safetysnap/regions.py
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Region:
    x: int
    y: int
    w: int
    h: int
    pixels: np.ndarray
    image_width: int
    image_height: int

    @property
    def empty(self):
        return self.w <= 0 or self.h <= 0

    def box(self):
        return (self.x, self.y, self.w, self.h)


def crop(pixels, x, y, w, h):
    # clip to the image; a window fully outside yields an empty region
    W, H = pixels.width, pixels.height
    x1 = min(max(0, int(x)), W); y1 = min(max(0, int(y)), H)
    x2 = min(max(0, int(x) + int(w)), W); y2 = min(max(0, int(y) + int(h)), H)
    cw = max(0, x2 - x1); ch = max(0, y2 - y1)
    return Region(x1, y1, cw, ch, pixels.rgb[y1:y1 + ch, x1:x1 + cw], W, H)


def whole_image(pixels):
    return crop(pixels, 0, 0, pixels.width, pixels.height)


def window_origins(width, height, plan):
    y_start = int(np.floor(height * plan.band_top))
    y_stop = int(np.floor(height * plan.band_bottom))
    if plan.band_bottom >= 1.0:
        y_stop = height
    for y in range(y_start, max(y_start, y_stop), plan.stride):
        for x in range(0, width, plan.stride):
            yield x, y


class WindowScan:
    """Restartable sequence of clipped windows for one scan plan."""

    def __init__(self, pixels, plan):
        self.pixels = pixels
        self.plan = plan

    def __iter__(self):
        win = self.plan.window
        for x, y in window_origins(self.pixels.width, self.pixels.height, self.plan):
            yield crop(self.pixels, x, y, win, win)

    def __len__(self):
        return sum(1 for _ in window_origins(self.pixels.width, self.pixels.height, self.plan))


def scan_regions(pixels, plan):
    return WindowScan(pixels, plan)
