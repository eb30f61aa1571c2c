"""Schema of the pool stats document served by the Space Farmers API."""

from datetime import datetime
from math import isfinite
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.engine.farming import netspace_tib_to_bytes


class PoolBlock(BaseModel):
    """A block recently won by the pool."""

    model_config = ConfigDict(populate_by_name=True)

    height: int
    received_height: Optional[int] = None
    farmer: str
    won_at: datetime = Field(..., alias="datetime")


class PoolStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pool_space_tib: float = Field(..., alias="poolSpaceTiB")
    farmers: int
    current_fee_type: str = Field(..., alias="currentFeeType")
    current_fee: float = Field(..., alias="currentFee")


class XchStats(BaseModel):
    """Network-wide XCH figures."""

    model_config = ConfigDict(populate_by_name=True)

    usdt: float = Field(..., ge=0, allow_inf_nan=False, description="XCH price in USDT")
    peak_height: int = Field(..., ge=0, alias="peakHeight")
    netspace_tib: Optional[float] = Field(None, alias="netspaceTiB")

    @field_validator("netspace_tib", mode="before")
    @classmethod
    def parse_netspace(cls, v):
        """Accept finite numbers and numeric strings; anything else counts as missing."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, str):
            v = v.strip()
        elif not isinstance(v, (int, float)):
            return None
        try:
            netspace_tib = float(v)
        except (ValueError, OverflowError):
            return None
        if not isfinite(netspace_tib):
            return None
        return netspace_tib


class PoolStatsData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_blocks: List[PoolBlock] = Field(..., alias="lastBlocks")
    pool_stats: PoolStats = Field(..., alias="poolStats")
    xch: XchStats


class PoolStatsResponse(BaseModel):
    """Top-level pool stats document."""

    status: str
    data: PoolStatsData

    @property
    def is_ok(self) -> bool:
        return self.status.upper() == "OK"

    @property
    def netspace_bytes(self) -> Optional[float]:
        if self.data.xch.netspace_tib is None:
            return None
        return netspace_tib_to_bytes(self.data.xch.netspace_tib)

    @property
    def xch_price_usd(self) -> float:
        return self.data.xch.usdt
