# /feesuggest/strategies/l2.py
from decimal import Decimal

from feesuggest.strategies.base import HistoryFeeStrategy


def adjust_l2_base_fee(base_fee: int, multiplier: float) -> int:
    return int(Decimal(base_fee) * Decimal(multiplier))


class L2FeeStrategy(HistoryFeeStrategy):
    """
    Arbitrum- and Optimism-style rollups. Their gas-used ratio says little
    about real demand, so congestion is not modeled (reported as 0) and each
    level gets a flat base fee multiplier.
    """
    name = "L2"

    def level_base_fees(self, gas_price, fee_history, config):
        base_fee = gas_price.base_fee_per_gas
        base_fees = (
            adjust_l2_base_fee(base_fee, config.low_base_fee_multiplier),
            adjust_l2_base_fee(base_fee, config.medium_base_fee_multiplier),
            adjust_l2_base_fee(base_fee, config.high_base_fee_multiplier),
        )
        return base_fees, 0.0
