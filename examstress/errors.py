"""Exception types shared across examstress."""


class ExamStressError(RuntimeError):
    """Base class for errors raised by examstress."""


class TableLoadError(ExamStressError):
    """One or more feature tables could not be read; the dashboard cannot start."""

    def __init__(self, message: str, paths=None) -> None:
        super().__init__(message)
        self.paths = list(paths or [])


class ConfigurationError(ExamStressError):
    """Static reference data (grades, durations, table set) is incomplete."""
