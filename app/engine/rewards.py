"""Chia block reward schedule."""

from typing import Optional


# Farmer + pool reward per block before the first halving
BASE_BLOCK_REWARD_XCH = 2.0

# Reward halves at each of these heights (roughly every three years)
HALVING_HEIGHTS: tuple[int, ...] = (
    5_045_760,
    10_091_520,
    15_137_280,
    20_183_040,
)


def reward_for_height(height: int) -> float:
    """
    Calculate the block reward at a given height.

    The reward starts at 2 XCH and halves at each of the four scheduled
    heights, settling at 0.125 XCH after the last one.

    Args:
        height: Blockchain peak height

    Returns:
        Block reward in XCH
    """
    halvings = sum(1 for threshold in HALVING_HEIGHTS if height >= threshold)
    return BASE_BLOCK_REWARD_XCH / (2**halvings)


def next_halving_height(height: int) -> Optional[int]:
    """Return the next halving height above the given height, or None after the last one."""
    for threshold in HALVING_HEIGHTS:
        if height < threshold:
            return threshold
    return None
