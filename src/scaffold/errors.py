"""Errors raised while preparing or writing a new package."""


class ScaffoldError(ValueError):
    """Raised when options are inconsistent or the target cannot be used."""


class PartialWriteError(OSError):
    """Raised when writing stops partway; ``written`` lists files already on disk."""

    def __init__(self, message: str, written):
        super().__init__(message)
        self.written = list(written)
