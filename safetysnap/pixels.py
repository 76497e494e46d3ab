# safetysnap/pixels.py
import logging
from dataclasses import dataclass

import cv2
import numpy as np

from safetysnap.errors import DecodeFailure

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Immutable RGB(A) raster, shape (height, width, channels), dtype uint8."""

    data: np.ndarray

    def __post_init__(self):
        arr = np.asarray(self.data)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"expected (height, width, 3|4) array, got shape {arr.shape}")
        if arr.shape[0] <= 0 or arr.shape[1] <= 0:
            raise ValueError(f"image dimensions must be positive, got {arr.shape[1]}x{arr.shape[0]}")
        arr = np.array(arr, dtype=np.uint8, copy=True)
        arr.setflags(write=False)
        object.__setattr__(self, "data", arr)

    @property
    def width(self):
        return int(self.data.shape[1])

    @property
    def height(self):
        return int(self.data.shape[0])

    @property
    def channels(self):
        return int(self.data.shape[2])

    @property
    def rgb(self):
        return self.data[:, :, :3]

    @classmethod
    def from_bytes(cls, raw, width, height, channels=4):
        if width <= 0 or height <= 0:
            raise ValueError(f"image dimensions must be positive, got {width}x{height}")
        if channels not in (3, 4):
            raise ValueError(f"unsupported channel count {channels}")
        flat = np.frombuffer(bytes(raw), np.uint8)
        if flat.size != width * height * channels:
            raise ValueError(f"buffer holds {flat.size} bytes, expected {width * height * channels}")
        return cls(flat.reshape(height, width, channels))


def decode_image(image_bytes: bytes) -> PixelBuffer:
    if not image_bytes:
        raise DecodeFailure("empty image payload")
    nparr = np.frombuffer(image_bytes, np.uint8)
    try:
        frame = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    except cv2.error as exc:
        raise DecodeFailure(f"OpenCV could not decode image: {exc}") from exc
    if frame is None or frame.size == 0:
        raise DecodeFailure("OpenCV could not decode image")
    rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    log.debug("decoded image %dx%d", rgb.shape[1], rgb.shape[0])
    return PixelBuffer(rgb)


def load_image(path) -> PixelBuffer:
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError as exc:
        raise DecodeFailure(f"cannot read {path}: {exc}", source=str(path)) from exc
    try:
        return decode_image(raw)
    except DecodeFailure as exc:
        raise DecodeFailure(str(exc), source=str(path)) from exc
