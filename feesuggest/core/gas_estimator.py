# /feesuggest/core/gas_estimator.py
# Turns raw fee data into a GasPrice: one base fee plus three priority fee levels.
from decimal import Decimal

from feesuggest.core.errors import EmptyFeeHistoryError
from feesuggest.core.logger import get_logger
from feesuggest.core.priority_fee import calculate_priority_fee_from_history
from feesuggest.core.types import (
    FeeHistory,
    GasPrice,
    LineaEstimateGasResult,
    LOW_PRIORITY_FEE_INDEX,
    MEDIUM_PRIORITY_FEE_INDEX,
    HIGH_PRIORITY_FEE_INDEX,
)

log = get_logger(__name__)

LINEA_PRIORITY_FEE_BUFFER = Decimal("1.15")


def suggest_gas_price(fee_history: FeeHistory, n_blocks: int) -> GasPrice:
    """
    Builds a GasPrice from the last ``n_blocks`` of ``fee_history``.

    The base fee is the last entry of the history, i.e. the node's projection
    for the next block. Each priority level comes from its own reward column.
    """
    if fee_history is None or not fee_history.base_fee:
        raise EmptyFeeHistoryError("fee history is missing or has no base fees")

    estimated_base_fee = fee_history.base_fee[-1]

    low = calculate_priority_fee_from_history(fee_history, n_blocks, LOW_PRIORITY_FEE_INDEX)
    medium = calculate_priority_fee_from_history(fee_history, n_blocks, MEDIUM_PRIORITY_FEE_INDEX)
    high = calculate_priority_fee_from_history(fee_history, n_blocks, HIGH_PRIORITY_FEE_INDEX)

    # Shouldn't normally happen, but levels must never decrease
    if low > medium:
        log.debug("PRIORITY_FEE_LEVELS_CLAMPED", level="medium", before=medium, after=low)
        medium = low
    if medium > high:
        log.debug("PRIORITY_FEE_LEVELS_CLAMPED", level="high", before=high, after=medium)
        high = medium

    return GasPrice(
        base_fee_per_gas=estimated_base_fee,
        low_priority_fee_per_gas=low,
        medium_priority_fee_per_gas=medium,
        high_priority_fee_per_gas=high,
    )


def suggest_linea_gas_price(
    estimate: LineaEstimateGasResult,
    priority_buffer: Decimal = LINEA_PRIORITY_FEE_BUFFER,
) -> GasPrice:
    """
    GasPrice for Linea-style chains from the linea_estimateGas oracle.

    The base fee there settles on a fixed value and is used as is. The
    priority fee gets a buffer and is shared by all three levels.
    """
    priority_fee = int(Decimal(estimate.priority_fee_per_gas) * priority_buffer)
    return GasPrice(
        base_fee_per_gas=estimate.base_fee_per_gas,
        low_priority_fee_per_gas=priority_fee,
        medium_priority_fee_per_gas=priority_fee,
        high_priority_fee_per_gas=priority_fee,
    )
