# safetysnap/errors.py


class SafetySnapError(Exception):
    pass


class DecodeFailure(SafetySnapError):
    """Raised when image bytes cannot be rasterized into a PixelBuffer."""

    def __init__(self, message, source=None):
        super().__init__(message)
        self.source = source
