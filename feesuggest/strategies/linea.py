# /feesuggest/strategies/linea.py
from typing import Optional

from web3.constants import ADDRESS_ZERO
from web3.types import TxParams

from feesuggest.core.gas_estimator import suggest_linea_gas_price
from feesuggest.core.logger import get_logger
from feesuggest.core.types import FeeSuggestions, LineaEstimateGasResult, TxSuggestions
from feesuggest.strategies.base import (
    AbstractFeeStrategy,
    build_fee_suggestions,
    call_transport,
    get_fee_history,
)

log = get_logger(__name__)

# Only the medium percentile is requested, so it sits in column 0
LINEA_INCLUSION_REWARD_COLUMN = 0


def dummy_call_msg(account: str) -> TxParams:
    """Empty transfer used to probe the oracle when there is no real transaction."""
    return {"from": account, "to": ADDRESS_ZERO, "value": 0}


class LineaFeeStrategy(AbstractFeeStrategy):
    """
    Linea-style rollups. Fees come from the linea_estimateGas oracle for the
    exact transaction rather than from history percentiles. The history is
    only fetched afterwards to estimate inclusion times.
    """
    name = "LineaStack"

    def estimate(self, client, call_msg: TxParams) -> LineaEstimateGasResult:
        return call_transport("linea_estimate_gas", "estimate linea gas", client.linea_estimate_gas, call_msg)

    def suggest(self, client, params, config, call_msg: Optional[TxParams] = None) -> TxSuggestions:
        # Without a transaction the oracle is still needed for pricing, but its
        # gas limit belongs to the probe and is not reported
        probe = call_msg if call_msg is not None else dummy_call_msg(ADDRESS_ZERO)
        estimate = self.estimate(client, probe)
        return TxSuggestions(
            gas_limit=estimate.gas_limit if call_msg is not None else 0,
            fee_suggestions=self._fee_suggestions(client, params, config, estimate),
        )

    def suggest_for_account(self, client, params, config, account) -> FeeSuggestions:
        # The oracle's answer can depend on the sender (e.g. gasless chains)
        estimate = self.estimate(client, dummy_call_msg(account))
        return self._fee_suggestions(client, params, config, estimate)

    def _fee_suggestions(self, client, params, config, estimate: LineaEstimateGasResult) -> FeeSuggestions:
        gas_price = suggest_linea_gas_price(estimate)
        # The max fee tolerates the base fee doubling before inclusion
        twice_base_fee = gas_price.base_fee_per_gas * 2
        log.debug(
            "LINEA_ORACLE_ESTIMATE",
            base_fee=estimate.base_fee_per_gas,
            priority_fee=estimate.priority_fee_per_gas,
            gas_limit=estimate.gas_limit,
        )

        fee_history = get_fee_history(
            client, config.network_congestion_blocks, None, [config.medium_reward_percentile]
        )
        return build_fee_suggestions(
            gas_price,
            (twice_base_fee, twice_base_fee, twice_base_fee),
            0.0,
            fee_history,
            LINEA_INCLUSION_REWARD_COLUMN,
            params.network_block_time,
        )
