class PathSearchError(Exception):
    """Base class for fatal search errors."""


class ValidationError(PathSearchError):
    """Malformed dataset or search configuration."""


class NumericError(PathSearchError):
    """A distance or length could not be totally ordered (e.g. NaN)."""


class InvariantViolation(PathSearchError):
    """An internal lookup that must always succeed did not."""
