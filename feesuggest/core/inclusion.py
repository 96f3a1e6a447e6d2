# /feesuggest/core/inclusion.py
# Predicts how many blocks a fee has to wait, by ranking it against recent
# base fees and priority fees. This is a percentile-bucket heuristic, not a
# calibrated probability.
from typing import List, NamedTuple, Sequence, Tuple

from feesuggest.core.percentile import get_percentile
from feesuggest.core.types import Fee, Inclusion

# Percentiles of the medium priority fee distribution a tip must reach
PRIORITY_FEE_PERCENTILE_HIGH = 30.0
PRIORITY_FEE_PERCENTILE_MEDIUM = 20.0
PRIORITY_FEE_PERCENTILE_LOW = 10.0

BASE_FEE_PERCENTILE_SECOND_BLOCK = 45.0
BASE_FEE_PERCENTILE_THIRD_BLOCK = 35.0
BASE_FEE_PERCENTILE_FOURTH_BLOCK = 30.0
BASE_FEE_PERCENTILE_FIFTH_BLOCK = 20.0
BASE_FEE_PERCENTILE_SIXTH_BLOCK = 10.0


class InclusionThreshold(NamedTuple):
    inclusion_in_block: int
    base_fee: int
    priority_fee: int


def _build_thresholds(sorted_base_fees: Sequence[int], sorted_priority_fees: Sequence[int]) -> List[InclusionThreshold]:
    first_two = get_percentile(sorted_priority_fees, PRIORITY_FEE_PERCENTILE_HIGH)
    second_two = get_percentile(sorted_priority_fees, PRIORITY_FEE_PERCENTILE_MEDIUM)
    third_two = get_percentile(sorted_priority_fees, PRIORITY_FEE_PERCENTILE_LOW)

    return [
        InclusionThreshold(2, get_percentile(sorted_base_fees, BASE_FEE_PERCENTILE_SECOND_BLOCK), first_two),
        InclusionThreshold(3, get_percentile(sorted_base_fees, BASE_FEE_PERCENTILE_THIRD_BLOCK), second_two),
        InclusionThreshold(4, get_percentile(sorted_base_fees, BASE_FEE_PERCENTILE_FOURTH_BLOCK), second_two),
        InclusionThreshold(5, get_percentile(sorted_base_fees, BASE_FEE_PERCENTILE_FIFTH_BLOCK), third_two),
        InclusionThreshold(6, get_percentile(sorted_base_fees, BASE_FEE_PERCENTILE_SIXTH_BLOCK), third_two),
    ]


def estimate_blocks_until_inclusion(
    priority_fee: int,
    max_fee_per_gas: int,
    sorted_base_fees: Sequence[int],
    sorted_medium_priority_fees: Sequence[int],
) -> Tuple[int, int]:
    """
    Returns ``(min_blocks, max_blocks)`` for a fee.

    To land by block N the fee must cover the base fee at that block's
    percentile and tip at least that block's priority threshold. The first
    threshold met brackets the estimate between the previous block and N;
    block 1 is always the implicit lower bound. When nothing is met the answer
    is the open-ended (6, 7).
    """
    max_base_fee = max_fee_per_gas - priority_fee
    thresholds = _build_thresholds(sorted_base_fees, sorted_medium_priority_fees)

    for idx, threshold in enumerate(thresholds):
        if max_base_fee >= threshold.base_fee and priority_fee >= threshold.priority_fee:
            if idx == 0:
                return 1, threshold.inclusion_in_block
            return thresholds[idx - 1].inclusion_in_block, threshold.inclusion_in_block

    last_block = thresholds[-1].inclusion_in_block
    return last_block, last_block + 1


def estimate_inclusion(
    fee: Fee,
    sorted_base_fees: Sequence[int],
    sorted_medium_priority_fees: Sequence[int],
    avg_block_time: float,
) -> Inclusion:
    min_blocks, max_blocks = estimate_blocks_until_inclusion(
        fee.max_priority_fee_per_gas,
        fee.max_fee_per_gas,
        sorted_base_fees,
        sorted_medium_priority_fees,
    )
    return Inclusion(
        min_blocks_until_inclusion=min_blocks,
        max_blocks_until_inclusion=max_blocks,
        min_time_until_inclusion=min_blocks * avg_block_time,
        max_time_until_inclusion=max_blocks * avg_block_time,
    )


def fill_inclusions(
    low: Fee,
    medium: Fee,
    high: Fee,
    sorted_base_fees: Sequence[int],
    sorted_medium_priority_fees: Sequence[int],
    avg_block_time: float,
) -> Tuple[Inclusion, Inclusion, Inclusion]:
    """Inclusion estimates for the three levels, against the same history."""
    return tuple(
        estimate_inclusion(fee, sorted_base_fees, sorted_medium_priority_fees, avg_block_time)
        for fee in (low, medium, high)
    )
