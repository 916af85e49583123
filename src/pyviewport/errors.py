class ViewportError(ValueError):
    """Base class for invalid construction parameters in pyviewport."""


class InvalidRangeError(ViewportError):
    """Raised when a Range is constructed with min > max."""


class InvalidIntervalError(ViewportError):
    """Raised when a TimeInterval is constructed with start > end."""


class InvalidCapacityError(ViewportError):
    """Raised when a sample buffer is constructed with capacity <= 0."""
