"""Pydantic models for sysdive configuration."""

import logging

from pydantic import BaseModel, Field, field_validator

from sysdive.reporters.writer import DEFAULT_REPORT_NAME


class ReportConfig(BaseModel):
    """Settings for one report run."""

    output_file: str = Field(default=DEFAULT_REPORT_NAME, min_length=1)
    command_timeout: float = Field(default=5.0, gt=0)
    max_workers: int | None = Field(default=None, ge=1)  # None = one per category
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level
