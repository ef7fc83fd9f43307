"""Pydantic models for range order configuration with validation."""

from typing import Literal
from pydantic import BaseModel, Field, model_validator


class CurveBounds(BaseModel):
    """Editing domain of a single rate curve."""

    min_gap: float = Field(
        default=1000.0,
        gt=0.0,
        description="Minimum amount separation between neighbouring curve points"
    )
    min_apr: float = Field(
        default=1.0,
        ge=0.0,
        description="Lowest APR a dragged point may take"
    )
    max_apr: float = Field(
        default=70.0,
        gt=0.0,
        description="Highest APR a dragged point may take"
    )

    @model_validator(mode="after")
    def validate_apr_range(self) -> "CurveBounds":
        """Require min_apr < max_apr."""
        if self.min_apr >= self.max_apr:
            raise ValueError(
                f"min_apr ({self.min_apr}) must be lower than max_apr ({self.max_apr})"
            )
        return self


class CurveConfig(BaseModel):
    """Rate curve editing parameters."""

    bounds: CurveBounds = Field(
        default_factory=CurveBounds,
        description="Default editing domain for curves without their own bounds"
    )
    sample_steps: int = Field(
        default=100,
        ge=2,
        le=10000,
        description="Number of steps used when sampling a curve for display"
    )
    insert_offset: float = Field(
        default=500000.0,
        gt=0.0,
        description="Amount added past the last point when inserting after it"
    )
    min_zoom: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Smallest zoom multiplier applied to the chart domain"
    )
    default_zoom: float = Field(
        default=1.0,
        gt=0.0,
        description="Zoom multiplier restored by a zoom reset"
    )


class AllocationConfig(BaseModel):
    """Vault allocation parameters."""

    max_total_percentage: float = Field(
        default=100.0,
        gt=0.0,
        le=100.0,
        description="Upper bound on the sum of allocation percentages"
    )
    sum_tolerance: float = Field(
        default=1e-6,
        ge=0.0,
        le=0.01,
        description="Floating-point slack allowed when checking the allocation sum"
    )
    derive_allocated_value: bool = Field(
        default=True,
        description="Derive allocated value from entries instead of carrying a running figure"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level"
    )
    format: Literal["text", "json"] = Field(
        default="text",
        description="Output format of the structured formatter"
    )


class AppConfig(BaseModel):
    """Root application configuration."""

    curve: CurveConfig = Field(
        default_factory=CurveConfig,
        description="Rate curve editing settings"
    )
    allocation: AllocationConfig = Field(
        default_factory=AllocationConfig,
        description="Vault allocation settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )
