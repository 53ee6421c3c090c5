"""Exception hierarchy for generator configuration and cursor usage."""


class SkylineGenError(Exception):
    """Base class for all generator errors."""

    pass


class ConfigError(SkylineGenError, ValueError):
    """Raised when a generator configuration is invalid."""

    pass


class ResultSetError(SkylineGenError):
    """Raised when a result set cursor is used incorrectly."""

    pass


class UnsupportedCursorOperationError(ResultSetError):
    """Raised for operations a cursor never supports (remove, update, streaming peek)."""

    pass


class CursorExhaustedError(ResultSetError):
    """Raised when next() or peek() is called past the last row."""

    pass
