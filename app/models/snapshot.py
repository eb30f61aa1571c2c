from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NetworkSnapshot(BaseModel):
    """Chia network figures captured by a single pool stats fetch."""

    model_config = ConfigDict(frozen=True)

    netspace_bytes: Optional[float] = Field(None, description="Total network storage in bytes")
    xch_price_usd: Optional[float] = Field(None, ge=0, description="XCH price in USD")
    block_height: Optional[int] = Field(None, ge=0, description="Current blockchain peak height")
    fetched_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC time the snapshot was fetched",
    )
