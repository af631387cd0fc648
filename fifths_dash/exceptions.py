"""
fifths-dash exceptions
"""


class FifthsDashError(Exception):
    """Base exception for recoverable fifths-dash errors"""

    pass


class ConfigError(FifthsDashError, ValueError):
    """Raised when the config file cannot be read or has a bad shape"""

    def __init__(self, message: str, path: str | None = None):
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path


class PreconditionError(AssertionError):
    """Raised when calling code breaks an invariant of the dashboard state.

    Not a FifthsDashError: nothing is expected to catch it. It points at a
    bug in the caller (e.g. the dataset loader), so the process should stop.
    """

    pass
