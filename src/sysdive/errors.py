"""Exceptions raised by sysdive."""


class SysdiveError(Exception):
    """Base class for sysdive errors."""


class AcquisitionError(SysdiveError):
    """Raised when a category query fails and the report is aborted."""

    def __init__(self, category: str, message: str) -> None:
        super().__init__(f"{category} query failed: {message}")
        self.category = category


class ReportWriteError(SysdiveError):
    """Raised when the report file cannot be written."""
