# /feesuggest/core/congestion.py
from typing import Sequence

from feesuggest.core.errors import EmptyFeeHistoryError
from feesuggest.core.types import FeeHistory

# EIP-1559 targets blocks that are half full
GAS_USED_TARGET = 0.5


def calculate_network_congestion_from_history(fee_history: FeeHistory, n_blocks: int) -> float:
    start = max(len(fee_history.gas_used_ratio) - n_blocks, 0)
    return calculate_network_congestion(fee_history.gas_used_ratio[start:])


def calculate_network_congestion(gas_used_ratios: Sequence[float]) -> float:
    """
    Scores how far recent blocks run above the utilization target, on a 0-1 scale.

    Only the excess over the target counts; blocks below it contribute 0. The
    average excess is doubled so that consistently full blocks score 1.0.
    Rollups don't fit this model well, their congestion depends on the L1.
    """
    if not gas_used_ratios:
        raise EmptyFeeHistoryError("gas used ratio window is empty")

    excess = sum(max(ratio - GAS_USED_TARGET, 0.0) for ratio in gas_used_ratios)
    congestion = excess / len(gas_used_ratios) * 2
    return min(congestion, 1.0)
