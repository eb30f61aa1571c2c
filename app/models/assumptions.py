from pydantic import BaseModel, Field

from app.core.config import ASSUMPTIONS_VERSION
from app.engine.farming import BLOCKS_PER_DAY, DAYS_PER_MONTH
from app.engine.rewards import BASE_BLOCK_REWARD_XCH, HALVING_HEIGHTS
from app.models.plots import DEFAULT_PLOT_SIZE_GIB


class Assumptions(BaseModel):
    """Default calculation assumptions and their version."""

    assumptions_version: str = Field(
        default=ASSUMPTIONS_VERSION,
        description="Version identifier for the calculation methodology",
    )
    base_block_reward_xch: float = Field(
        default=BASE_BLOCK_REWARD_XCH,
        description="Block reward in XCH before the first halving",
    )
    halving_heights: list[int] = Field(
        default=list(HALVING_HEIGHTS),
        description="Peak heights at which the block reward halves",
    )
    blocks_per_day: int = Field(
        default=BLOCKS_PER_DAY,
        description="Expected number of blocks per day",
    )
    days_per_month: int = Field(
        default=DAYS_PER_MONTH,
        description="Days used for monthly projections",
    )
    default_plot_size_gib: float = Field(
        default=DEFAULT_PLOT_SIZE_GIB,
        description="Plot size used when a plot format is not in the table",
    )
    simplifications: list[str] = Field(
        default=[
            "Transaction fees not included in earnings",
            "Pool fees not deducted from earnings",
            "Netspace assumed constant at the fetched value",
            "Wins modelled as a Poisson process proportional to storage share",
            "Monthly figures use a fixed 30-day month",
        ],
        description="Known simplifications in the current model",
    )


def get_default_assumptions() -> Assumptions:
    """Get the default assumptions for calculations."""
    return Assumptions()
