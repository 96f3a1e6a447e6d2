# /feesuggest/core/percentile.py
# Order statistics over fee values and the helpers that pull them out of a fee history.
import math
from typing import List, Sequence

from feesuggest.core.types import FeeHistory

# The two most recent base fees are projections and too noisy to rank against
PROJECTED_BASE_FEE_ENTRIES = 2


def get_percentile(sorted_data: Sequence[int], percentile: float) -> int:
    """
    Returns the value at ``percentile`` using the nearest-rank method.

    ``sorted_data`` must already be sorted ascending. An empty sequence yields 0.
    """
    n = len(sorted_data)
    if n == 0:
        return 0
    if percentile <= 0:
        return sorted_data[0]
    if percentile >= 100:
        return sorted_data[-1]

    rank = math.ceil(percentile / 100.0 * n)
    index = min(max(rank - 1, 0), n - 1)
    return sorted_data[index]


def median(values: Sequence):
    """
    Median of ``values`` (not required to be sorted).

    For an even count the two middle values are averaged; integer inputs use
    floor division so fees stay integral.
    """
    if not values:
        raise ValueError("median of an empty sequence")
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    total = ordered[mid - 1] + ordered[mid]
    if isinstance(total, int):
        return total // 2
    return total / 2


def extract_last_priority_fees(fee_history: FeeHistory, column: int, n_blocks: int) -> List[int]:
    """Reward values of ``column`` for the last ``n_blocks`` blocks, skipping blocks without one."""
    start = max(len(fee_history.reward) - n_blocks, 0)
    return [
        rewards[column]
        for rewards in fee_history.reward[start:]
        if column < len(rewards) and rewards[column] is not None
    ]


def get_sorted_base_fees(fee_history: FeeHistory) -> List[int]:
    return sorted(fee_history.base_fee[:-PROJECTED_BASE_FEE_ENTRIES])


def get_sorted_priority_fees(fee_history: FeeHistory, column: int) -> List[int]:
    return sorted(
        rewards[column]
        for rewards in fee_history.reward
        if column < len(rewards) and rewards[column] is not None
    )
