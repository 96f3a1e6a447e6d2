# /feesuggest/core/priority_fee.py
from typing import Sequence

from feesuggest.core.errors import InsufficientDataError
from feesuggest.core.percentile import extract_last_priority_fees, median
from feesuggest.core.types import FeeHistory


def calculate_priority_fee_from_history(fee_history: FeeHistory, n_blocks: int, column: int) -> int:
    """Representative priority fee for one reward column over the last ``n_blocks`` blocks."""
    priority_fees = extract_last_priority_fees(fee_history, column, n_blocks)
    if not priority_fees:
        raise InsufficientDataError(f"no priority fees found for reward column {column}")
    return calculate_priority_fee(priority_fees)


def calculate_priority_fee(priority_fees: Sequence[int]) -> int:
    """
    Median of the observed priority fees.

    Blocks with empty mempools report a 0 reward, which would drag the median
    to 0 on quiet chains. In that case the smallest non-zero fee from the
    median rank upwards is used instead; only an all-zero window returns 0.
    """
    if not priority_fees:
        raise InsufficientDataError("no priority fees found")

    median_fee = median(priority_fees)
    if median_fee > 0:
        return median_fee

    ordered = sorted(priority_fees)
    for fee in ordered[len(ordered) // 2:]:
        if fee > 0:
            return fee
    return 0
