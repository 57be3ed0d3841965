"""Exception types raised by houghcircles."""


class HoughError(Exception):
    """Base class for circle detection errors."""


class HoughConfigurationError(HoughError, ValueError):
    """Invalid detector parameters (e.g. minimum radius above maximum radius)."""


class MissingInputError(HoughError, ValueError):
    """Detection was requested before an input image was set."""


class DetectionCancelled(HoughError):
    """A run was cancelled between phases."""
