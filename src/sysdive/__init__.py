"""sysdive - one-shot hardware and OS diagnostic report."""

__version__ = "1.0.0"
