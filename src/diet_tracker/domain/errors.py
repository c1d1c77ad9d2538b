"""Domain errors."""


class InvalidProfileError(ValueError):
    """Raised when a profile lacks the measurements a formula needs."""
