from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.config import ASSUMPTIONS_VERSION
from app.models.plots import CompressionLevel, ProofSize


class FarmInputs(BaseModel):
    """Farm parameters chosen by the user."""

    model_config = ConfigDict(validate_assignment=True)

    unit_count: int = Field(default=10, ge=1, description="Number of plots (values below 1 become 1)")
    proof_size: ProofSize = Field(default=ProofSize.K32, description="Plot k-size")
    compression_level: CompressionLevel = Field(
        default=CompressionLevel.C0,
        description="Plot compression level (0-7 or 9)",
    )

    @field_validator("unit_count", mode="before")
    @classmethod
    def clamp_unit_count(cls, v):
        """Raise plot counts below one to one."""
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v < 1:
            return 1
        return v


class CalculationRequest(FarmInputs):
    """Request model for a stateless farming calculation."""

    assumptions_version: str | None = Field(
        default=None,
        description="Assumptions version to use (defaults to current)",
    )
    netspace_bytes: Optional[float] = Field(None, description="Total network storage in bytes")
    xch_price_usd: Optional[float] = Field(None, ge=0, description="XCH price in USD")
    block_height: Optional[int] = Field(None, ge=0, description="Blockchain peak height")

    @field_validator("assumptions_version", mode="before")
    @classmethod
    def set_default_version(cls, v):
        """Set default assumptions version if not provided."""
        if v is None:
            return ASSUMPTIONS_VERSION
        return v


class InputsUpdate(BaseModel):
    """Partial update of the session's farm inputs."""

    unit_count: Optional[int] = Field(None, description="Number of plots")
    unit_count_delta: Optional[int] = Field(
        None, description="Relative change to the plot count, applied after unit_count"
    )
    proof_size: Optional[ProofSize] = None
    compression_level: Optional[CompressionLevel] = None
