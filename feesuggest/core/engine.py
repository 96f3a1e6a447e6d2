# /feesuggest/core/engine.py
# Public entry points: fee suggestions for a chain and inclusion estimates
# for fees the caller already holds.
from typing import Optional

from web3.constants import ADDRESS_ZERO
from web3.types import TxParams

from feesuggest.adapters.client import GasClient
from feesuggest.core.inclusion import estimate_inclusion
from feesuggest.core.logger import get_logger, chain_context, SUGGESTIONS_COMPUTED, INCLUSION_ESTIMATES
from feesuggest.core.percentile import get_sorted_base_fees, get_sorted_priority_fees
from feesuggest.core.types import (
    ChainClass,
    ChainParameters,
    Fee,
    FeeSuggestions,
    Inclusion,
    SuggestionsConfig,
    TxSuggestions,
)
from feesuggest.strategies.base import get_fee_history
from feesuggest.strategies.registry import select_strategy

log = get_logger(__name__)

# Reward column of the medium percentile when it is the only one requested
SINGLE_PERCENTILE_COLUMN = 0


def default_config(chain_class) -> SuggestionsConfig:
    """Pre-tuned estimation parameters for a chain class."""
    if chain_class == ChainClass.L1:
        return SuggestionsConfig(
            network_congestion_blocks=10,
            gas_price_estimation_blocks=10,
            low_reward_percentile=10,
            medium_reward_percentile=45,
            high_reward_percentile=90,
            low_base_fee_multiplier=1.025,  # 2.5% buffer on the base fee
            medium_base_fee_multiplier=1.025,
            high_base_fee_multiplier=1.025,
            low_base_fee_congestion_multiplier=0.0,  # Low level ignores congestion
            medium_base_fee_congestion_multiplier=10.0,
            high_base_fee_congestion_multiplier=10.0,
        )

    return SuggestionsConfig(
        network_congestion_blocks=10,
        gas_price_estimation_blocks=50,
        low_reward_percentile=10,
        medium_reward_percentile=45,
        high_reward_percentile=90,
        low_base_fee_multiplier=1.025,
        medium_base_fee_multiplier=4.1,
        high_base_fee_multiplier=10.25,
        low_base_fee_congestion_multiplier=0.0,
        medium_base_fee_congestion_multiplier=0.0,
        high_base_fee_congestion_multiplier=0.0,
    )


def _chain_label(params: ChainParameters) -> str:
    return getattr(params.chain_class, "value", params.chain_class)


# Unrecognised classes share one metric label so the series count stays fixed
UNKNOWN_CHAIN_LABEL = "unknown"


def _metric_label(params: ChainParameters) -> str:
    if isinstance(params.chain_class, ChainClass):
        return params.chain_class.value
    return UNKNOWN_CHAIN_LABEL


class SuggestionEngine:
    """
    Computes fee suggestions from live chain data fetched through ``client``.

    The engine keeps no state between calls: every request fetches its own
    snapshot, and transport failures are raised to the caller unretried.
    """
    def __init__(self, client: GasClient):
        self.client = client

    def get_tx_suggestions(
        self,
        params: ChainParameters,
        config: SuggestionsConfig,
        call_msg: Optional[TxParams] = None,
    ) -> TxSuggestions:
        """
        Gas limit and low/medium/high fees for a transaction.

        Without ``call_msg`` the gas limit is 0 (Linea chains still probe the
        oracle with an empty transfer to price the fees).
        """
        label = _chain_label(params)
        with chain_context(label, params.network_block_time):
            strategy = select_strategy(params.chain_class)
            log.debug("CHAIN_CLASS_DISPATCH", strategy=strategy.name)
            suggestions = strategy.suggest(self.client, params, config, call_msg)
            SUGGESTIONS_COMPUTED.labels(_metric_label(params)).inc()
            log.info(
                "TX_SUGGESTIONS_COMPUTED",
                gas_limit=suggestions.gas_limit,
                estimated_base_fee=suggestions.fee_suggestions.estimated_base_fee,
                network_congestion=suggestions.fee_suggestions.network_congestion,
            )
            return suggestions

    def get_chain_suggestions(
        self,
        params: ChainParameters,
        config: SuggestionsConfig,
        account: str = ADDRESS_ZERO,
    ) -> FeeSuggestions:
        """Fee levels for the chain as a whole; ``account`` matters only on Linea."""
        label = _chain_label(params)
        with chain_context(label, params.network_block_time):
            strategy = select_strategy(params.chain_class)
            suggestions = strategy.suggest_for_account(self.client, params, config, account)
            SUGGESTIONS_COMPUTED.labels(_metric_label(params)).inc()
            log.info("CHAIN_SUGGESTIONS_COMPUTED", estimated_base_fee=suggestions.estimated_base_fee)
            return suggestions

    def estimate_inclusion(self, params: ChainParameters, config: SuggestionsConfig, fee: Fee) -> Inclusion:
        """Inclusion estimate for a fee the caller already has, e.g. one the user edited."""
        with chain_context(_chain_label(params), params.network_block_time):
            fee_history = get_fee_history(
                self.client, config.fee_history_blocks, None, [config.medium_reward_percentile]
            )
            inclusion = estimate_inclusion(
                fee,
                get_sorted_base_fees(fee_history),
                get_sorted_priority_fees(fee_history, SINGLE_PERCENTILE_COLUMN),
                params.network_block_time,
            )
            INCLUSION_ESTIMATES.inc()
            log.info(
                "INCLUSION_ESTIMATED",
                min_blocks=inclusion.min_blocks_until_inclusion,
                max_blocks=inclusion.max_blocks_until_inclusion,
            )
            return inclusion
