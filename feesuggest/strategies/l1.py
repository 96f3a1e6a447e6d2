# /feesuggest/strategies/l1.py
from decimal import Decimal

from feesuggest.core.congestion import calculate_network_congestion_from_history
from feesuggest.core.logger import get_logger
from feesuggest.strategies.base import HistoryFeeStrategy

log = get_logger(__name__)


def adjust_l1_base_fee(base_fee: int, congestion: float, multiplier: float, congestion_multiplier: float) -> int:
    """base_fee * multiplier * (1 + congestion * congestion_multiplier), truncated to wei."""
    scaled = Decimal(base_fee) * Decimal(multiplier)
    additional = scaled * Decimal(congestion_multiplier * congestion)
    return int(scaled + additional)


class L1FeeStrategy(HistoryFeeStrategy):
    """
    Mainnet-style chains. The base fee moves with demand, so each level's
    buffer grows with how congested the recent blocks were.
    """
    name = "L1"

    def level_base_fees(self, gas_price, fee_history, config):
        congestion = calculate_network_congestion_from_history(fee_history, config.network_congestion_blocks)
        base_fee = gas_price.base_fee_per_gas
        base_fees = (
            adjust_l1_base_fee(base_fee, congestion, config.low_base_fee_multiplier, config.low_base_fee_congestion_multiplier),
            adjust_l1_base_fee(base_fee, congestion, config.medium_base_fee_multiplier, config.medium_base_fee_congestion_multiplier),
            adjust_l1_base_fee(base_fee, congestion, config.high_base_fee_multiplier, config.high_base_fee_congestion_multiplier),
        )
        log.debug("L1_BASE_FEES_ADJUSTED", congestion=congestion, base_fee=base_fee, levels=base_fees)
        return base_fees, congestion
