"""Main calculation orchestration."""

from typing import Optional

from app.core.config import ASSUMPTIONS_VERSION
from app.models.plots import plot_size_gib
from app.models.requests import FarmInputs
from app.models.responses import EarningsBreakdown, MetricsResponse, WinChances
from app.models.snapshot import NetworkSnapshot
from app.engine.rewards import next_halving_height
from app.engine.farming import (
    DAYS_PER_MONTH,
    HOURS_PER_DAY,
    calculate_owned_storage_bytes,
    calculate_owned_storage_share,
    calculate_expected_wins_per_day,
    calculate_block_reward,
    calculate_expected_time_to_win_days,
    calculate_daily_earnings,
    calculate_hourly_earnings,
    calculate_monthly_earnings,
    calculate_earnings_usd,
    calculate_chance_to_win,
)


def _storage_share(
    snapshot: Optional[NetworkSnapshot],
    inputs: FarmInputs,
) -> Optional[float]:
    owned_storage_bytes = calculate_owned_storage_bytes(
        unit_count=inputs.unit_count,
        proof_size=inputs.proof_size,
        compression_level=inputs.compression_level,
    )
    netspace_bytes = snapshot.netspace_bytes if snapshot else None
    return calculate_owned_storage_share(owned_storage_bytes, netspace_bytes)


def chance_to_win_within(
    hours: float,
    snapshot: Optional[NetworkSnapshot],
    inputs: FarmInputs,
) -> Optional[float]:
    """Probability of winning at least one block in the next `hours` hours."""
    return calculate_chance_to_win(_storage_share(snapshot, inputs), hours)


def calculate_farming_metrics(
    snapshot: Optional[NetworkSnapshot],
    inputs: FarmInputs,
    assumptions_version: Optional[str] = None,
) -> MetricsResponse:
    """
    Perform complete farming rewards calculation.

    Args:
        snapshot: Network figures, or None if nothing has been fetched yet
        inputs: Farm parameters
        assumptions_version: Assumptions version to report (defaults to current)

    Returns:
        Metrics response with results and notes
    """
    netspace_bytes = snapshot.netspace_bytes if snapshot else None
    xch_price_usd = snapshot.xch_price_usd if snapshot else None
    block_height = snapshot.block_height if snapshot else None

    # Storage
    owned_storage_bytes = calculate_owned_storage_bytes(
        unit_count=inputs.unit_count,
        proof_size=inputs.proof_size,
        compression_level=inputs.compression_level,
    )
    storage_share = calculate_owned_storage_share(owned_storage_bytes, netspace_bytes)

    # Wins
    wins_per_day = calculate_expected_wins_per_day(storage_share)
    block_reward = calculate_block_reward(block_height)
    time_to_win_days = calculate_expected_time_to_win_days(wins_per_day)

    # Earnings
    daily_xch = calculate_daily_earnings(wins_per_day, block_reward)
    hourly_xch = calculate_hourly_earnings(daily_xch)
    monthly_xch = calculate_monthly_earnings(daily_xch)

    # Build notes
    notes = [
        "Transaction fees and pool fees not included in earnings",
        "Netspace assumed constant at the fetched value",
        "Monthly figures use a fixed 30-day month",
    ]
    if netspace_bytes is None or netspace_bytes <= 0:
        notes.append("Netspace unavailable; share, wins and earnings unknown")
    if block_height is None:
        notes.append("Peak height unavailable; block reward unknown")
    else:
        halving_height = next_halving_height(block_height)
        if halving_height is not None:
            notes.append(
                f"Block reward halves at height {halving_height:,} "
                f"({halving_height - block_height:,} blocks away)"
            )
    if xch_price_usd is None:
        notes.append("XCH price unavailable; USD earnings unknown")

    # Echo effective inputs
    inputs_echo = {
        "unit_count": inputs.unit_count,
        "proof_size": int(inputs.proof_size),
        "compression_level": int(inputs.compression_level),
        "netspace_bytes": netspace_bytes,
        "xch_price_usd": xch_price_usd,
        "block_height": block_height,
    }

    return MetricsResponse(
        assumptions_version=assumptions_version or ASSUMPTIONS_VERSION,
        plot_size_gib=plot_size_gib(inputs.proof_size, inputs.compression_level),
        owned_storage_bytes=owned_storage_bytes,
        netspace_bytes=netspace_bytes,
        xch_price_usd=xch_price_usd,
        block_height=block_height,
        owned_storage_share=storage_share,
        expected_wins_per_day=wins_per_day,
        block_reward_xch=block_reward,
        expected_time_to_win_days=time_to_win_days,
        earnings_hourly=EarningsBreakdown(
            xch=hourly_xch,
            usd=calculate_earnings_usd(hourly_xch, xch_price_usd),
        ),
        earnings_daily=EarningsBreakdown(
            xch=daily_xch,
            usd=calculate_earnings_usd(daily_xch, xch_price_usd),
        ),
        earnings_monthly=EarningsBreakdown(
            xch=monthly_xch,
            usd=calculate_earnings_usd(monthly_xch, xch_price_usd),
        ),
        chance_to_win=WinChances(
            hourly=calculate_chance_to_win(storage_share, 1),
            daily=calculate_chance_to_win(storage_share, HOURS_PER_DAY),
            monthly=calculate_chance_to_win(storage_share, HOURS_PER_DAY * DAYS_PER_MONTH),
        ),
        notes=notes,
        inputs_echo=inputs_echo,
    )
