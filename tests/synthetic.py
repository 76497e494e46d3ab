import numpy as np

from safetysnap.pixels import PixelBuffer

YELLOW = (230, 220, 40)
DARK_YELLOW = (150, 140, 0)
LIGHT_BLUE = (100, 150, 220)
ORANGE = (220, 140, 40)


def canvas(width, height, color=(0, 0, 0)):
    arr = np.zeros((height, width, 3), np.uint8)
    arr[:, :] = color
    return arr


def paint_stripes(arr, x, y, w, h, bright=YELLOW, dark=DARK_YELLOW):
    for row in range(y, y + h):
        arr[row, x:x + w] = bright if (row - y) % 2 == 0 else dark
    return arr


def vest_scene():
    # 192x192 black frame, striped high-vis patch in rows 64..135, cols 48..143
    return PixelBuffer(paint_stripes(canvas(192, 192), 48, 64, 96, 72))


def noise(width, height, seed=7):
    rng = np.random.default_rng(seed)
    return PixelBuffer(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))
