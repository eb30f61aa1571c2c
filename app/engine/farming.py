"""Chia farming calculations.

Every function returns None when an input it depends on is unknown.
"""

from math import expm1
from typing import Optional

from app.engine.rewards import reward_for_height
from app.models.plots import BYTES_PER_GIB, plot_size_gib


# Target of 32 blocks per 10 minutes
BLOCKS_PER_DAY = 4608
BYTES_PER_TIB = 1024**4
HOURS_PER_DAY = 24
DAYS_PER_MONTH = 30


def calculate_owned_storage_bytes(
    unit_count: int,
    proof_size: int,
    compression_level: int,
) -> float:
    """
    Calculate the storage committed by the farmer.

    Args:
        unit_count: Number of plots
        proof_size: Plot k-size
        compression_level: Plot compression level

    Returns:
        Total plot storage in bytes
    """
    return unit_count * plot_size_gib(proof_size, compression_level) * BYTES_PER_GIB


def calculate_owned_storage_share(
    owned_storage_bytes: float,
    netspace_bytes: Optional[float],
) -> Optional[float]:
    """
    Calculate the farmer's share of the netspace.

    The share is not capped at 1.

    Returns:
        Ratio of owned storage to netspace, or None if netspace is unknown or not positive
    """
    if netspace_bytes is None or netspace_bytes <= 0:
        return None
    return owned_storage_bytes / netspace_bytes


def calculate_expected_wins_per_day(
    storage_share: Optional[float],
    blocks_per_day: int = BLOCKS_PER_DAY,
) -> Optional[float]:
    """Calculate expected blocks won per day."""
    if storage_share is None:
        return None
    return storage_share * blocks_per_day


def calculate_block_reward(block_height: Optional[int]) -> Optional[float]:
    """Calculate the block reward in XCH at the current peak height."""
    if block_height is None:
        return None
    return reward_for_height(block_height)


def calculate_expected_time_to_win_days(
    wins_per_day: Optional[float],
) -> Optional[float]:
    """
    Calculate the expected time between wins.

    Returns:
        Days to the next expected win, or None if no win is expected
    """
    if wins_per_day is None or wins_per_day <= 0:
        return None
    return 1.0 / wins_per_day


def calculate_daily_earnings(
    wins_per_day: Optional[float],
    block_reward_xch: Optional[float],
) -> Optional[float]:
    """Calculate expected daily earnings in XCH."""
    if wins_per_day is None or block_reward_xch is None:
        return None
    return wins_per_day * block_reward_xch


def calculate_hourly_earnings(daily_earnings_xch: Optional[float]) -> Optional[float]:
    if daily_earnings_xch is None:
        return None
    return daily_earnings_xch / HOURS_PER_DAY


def calculate_monthly_earnings(daily_earnings_xch: Optional[float]) -> Optional[float]:
    """Calculate expected earnings over a fixed 30-day month."""
    if daily_earnings_xch is None:
        return None
    return daily_earnings_xch * DAYS_PER_MONTH


def calculate_earnings_usd(
    amount_xch: Optional[float],
    xch_price_usd: Optional[float],
) -> Optional[float]:
    """Convert an XCH amount to USD."""
    if amount_xch is None or xch_price_usd is None:
        return None
    return amount_xch * xch_price_usd


def calculate_chance_to_win(
    storage_share: Optional[float],
    hours: float,
    blocks_per_day: int = BLOCKS_PER_DAY,
) -> Optional[float]:
    """
    Calculate the probability of winning at least one block within a window.

    Wins are modelled as a Poisson process whose rate is the farmer's share
    of the blocks produced, so the probability is 1 - exp(-expected_blocks).

    Args:
        storage_share: Farmer's share of the netspace
        hours: Length of the window in hours
        blocks_per_day: Expected number of blocks per day

    Returns:
        Probability in [0, 1), or None if the share is unknown
    """
    if storage_share is None:
        return None
    if hours <= 0:
        return 0.0

    expected_blocks = storage_share * blocks_per_day * (hours / HOURS_PER_DAY)
    return -expm1(-expected_blocks)


def netspace_tib_to_bytes(netspace_tib: float) -> float:
    """Convert a netspace figure in TiB to bytes."""
    return netspace_tib * BYTES_PER_TIB
