from datetime import datetime
from typing import Any, Optional, List, Dict

from pydantic import BaseModel, Field

from app.models.requests import FarmInputs


class EarningsBreakdown(BaseModel):
    """Expected earnings over one period, in XCH and USD."""

    xch: Optional[float] = Field(None, description="Expected earnings in XCH")
    usd: Optional[float] = Field(None, description="Expected earnings in USD")


class WinChances(BaseModel):
    """Probability of winning at least one block within each window."""

    hourly: Optional[float] = Field(None, description="Within one hour")
    daily: Optional[float] = Field(None, description="Within one day")
    monthly: Optional[float] = Field(None, description="Within a 30-day month")


class MetricsResponse(BaseModel):
    """Derived farming metrics. Unknown values are null."""

    assumptions_version: str = Field(..., description="Assumptions version used")
    plot_size_gib: float = Field(..., description="Size of one plot in GiB")
    owned_storage_bytes: float = Field(..., description="Total plot storage in bytes")
    netspace_bytes: Optional[float] = Field(None, description="Total network storage in bytes")
    xch_price_usd: Optional[float] = Field(None, description="XCH price in USD")
    block_height: Optional[int] = Field(None, description="Blockchain peak height")
    owned_storage_share: Optional[float] = Field(
        None, description="Share of the netspace owned (may exceed 1)"
    )
    expected_wins_per_day: Optional[float] = Field(None, description="Expected blocks won per day")
    block_reward_xch: Optional[float] = Field(None, description="Block reward at the peak height")
    expected_time_to_win_days: Optional[float] = Field(
        None, description="Expected days between wins"
    )
    earnings_hourly: EarningsBreakdown = Field(default_factory=EarningsBreakdown)
    earnings_daily: EarningsBreakdown = Field(default_factory=EarningsBreakdown)
    earnings_monthly: EarningsBreakdown = Field(default_factory=EarningsBreakdown)
    chance_to_win: WinChances = Field(default_factory=WinChances)
    notes: List[str] = Field(default_factory=list, description="Calculation notes and warnings")
    inputs_echo: Dict[str, Any] = Field(
        default_factory=dict,
        description="Echo of effective inputs used in calculation",
    )


class ChanceResponse(BaseModel):
    """Chance to win within an arbitrary window."""

    hours: float = Field(..., description="Window length in hours")
    chance: Optional[float] = Field(None, description="Probability of at least one win")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok")
    service: str = Field(default="chia-farming-engine")


class LiveDataResponse(BaseModel):
    """Network figures held by the session, plus the last fetch error."""

    source: str = Field(..., description="Host of the pool stats API")
    netspace_bytes: Optional[float] = Field(None, description="Total network storage in bytes")
    xch_price_usd: Optional[float] = Field(None, description="Current XCH price in USD")
    block_height: Optional[int] = Field(None, description="Current blockchain peak height")
    updated_at: Optional[datetime] = Field(None, description="UTC time of the last successful fetch")
    is_refreshing: bool = Field(default=False, description="Whether a refresh is in flight")
    error: Optional[str] = Field(None, description="Message from the last failed refresh")


class InputsResponse(FarmInputs):
    """Session farm inputs with the resulting plot size."""

    plot_size_gib: float = Field(..., description="Size of one plot in GiB")
