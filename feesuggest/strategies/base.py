# /feesuggest/strategies/base.py
# - Defines the AbstractFeeStrategy interface, one implementation per chain class.
# - Holds the transport plumbing every strategy shares (fee history, gas limit).

from typing import Callable, List, Optional, Tuple, TypeVar

from web3.types import TxParams

from feesuggest.adapters.client import GasClient
from feesuggest.core.errors import (
    EmptyFeeHistoryError,
    FeeEstimationError,
    InsufficientDataError,
    TransportError,
)
from feesuggest.core.gas_estimator import suggest_gas_price
from feesuggest.core.inclusion import fill_inclusions
from feesuggest.core.logger import get_logger, TRANSPORT_FAILURES
from feesuggest.core.percentile import get_sorted_base_fees, get_sorted_priority_fees
from feesuggest.core.types import (
    ChainParameters,
    Fee,
    FeeHistory,
    FeeSuggestions,
    GasPrice,
    SuggestionsConfig,
    TxSuggestions,
    MEDIUM_PRIORITY_FEE_INDEX,
)

log = get_logger(__name__)

T = TypeVar("T")


def call_transport(method: str, action: str, func: Callable[..., T], *args) -> T:
    """
    Runs a transport call. Non-engine exceptions become a TransportError
    chained to the original; nothing is retried here.
    """
    try:
        return func(*args)
    except FeeEstimationError:
        raise
    except Exception as e:
        TRANSPORT_FAILURES.labels(method).inc()
        log.error("TRANSPORT_CALL_FAILED", method=method, error=str(e))
        raise TransportError(f"failed to {action}: {e}") from e


def get_fee_history(
    client: GasClient,
    block_count: int,
    last_block: Optional[int],
    reward_percentiles: List[float],
) -> FeeHistory:
    """Fetches fee history and checks that its arrays line up."""
    fee_history = call_transport(
        "fee_history", "get fee history", client.fee_history, block_count, last_block, reward_percentiles
    )

    if fee_history is None or not fee_history.base_fee:
        raise EmptyFeeHistoryError("fee history has no base fees")

    if len(fee_history.base_fee) != len(fee_history.gas_used_ratio) + 1:
        raise InsufficientDataError(
            f"baseFee length {len(fee_history.base_fee)} does not match "
            f"gasUsedRatio length {len(fee_history.gas_used_ratio)} + 1"
        )

    for i, rewards in enumerate(fee_history.reward):
        if len(rewards) < len(reward_percentiles):
            raise InsufficientDataError(f"reward {i} length is less than {len(reward_percentiles)}")

    log.debug(
        "FEE_HISTORY_FETCHED",
        block_count=block_count,
        oldest_block=fee_history.oldest_block,
        percentiles=reward_percentiles,
    )
    return fee_history


def estimate_gas_limit(client: GasClient, call_msg: Optional[TxParams]) -> int:
    """Gas limit for ``call_msg``; 0 when there is no message to estimate."""
    if call_msg is None:
        return 0
    return int(call_transport("estimate_gas", "estimate gas", client.estimate_gas, call_msg))


def make_fee(base_fee: int, priority_fee: int) -> Fee:
    return Fee(max_priority_fee_per_gas=priority_fee, max_fee_per_gas=base_fee + priority_fee)


def build_fee_suggestions(
    gas_price: GasPrice,
    level_base_fees: Tuple[int, int, int],
    network_congestion: float,
    fee_history: FeeHistory,
    priority_fee_column: int,
    avg_block_time: float,
) -> FeeSuggestions:
    """Assembles the three levels and their inclusion estimates."""
    low_base, medium_base, high_base = level_base_fees
    low = make_fee(low_base, gas_price.low_priority_fee_per_gas)
    medium = make_fee(medium_base, gas_price.medium_priority_fee_per_gas)
    high = make_fee(high_base, gas_price.high_priority_fee_per_gas)

    sorted_base_fees = get_sorted_base_fees(fee_history)
    sorted_priority_fees = get_sorted_priority_fees(fee_history, priority_fee_column)
    low_inclusion, medium_inclusion, high_inclusion = fill_inclusions(
        low, medium, high, sorted_base_fees, sorted_priority_fees, avg_block_time
    )

    return FeeSuggestions(
        low=low,
        low_inclusion=low_inclusion,
        medium=medium,
        medium_inclusion=medium_inclusion,
        high=high,
        high_inclusion=high_inclusion,
        estimated_base_fee=gas_price.base_fee_per_gas,
        priority_fee_lower_bound=gas_price.low_priority_fee_per_gas,
        priority_fee_upper_bound=gas_price.high_priority_fee_per_gas,
        network_congestion=network_congestion,
    )


class AbstractFeeStrategy:
    """
    The interface every chain class implements. A strategy is picked once per
    request and turns chain data into low/medium/high fee levels.
    """
    name = "abstract"

    def suggest(
        self,
        client: GasClient,
        params: ChainParameters,
        config: SuggestionsConfig,
        call_msg: Optional[TxParams] = None,
    ) -> TxSuggestions:
        """Gas limit plus fee levels for ``call_msg`` (gas limit 0 without one)."""
        raise NotImplementedError

    def suggest_for_account(
        self,
        client: GasClient,
        params: ChainParameters,
        config: SuggestionsConfig,
        account: str,
    ) -> FeeSuggestions:
        """Fee levels that don't depend on a particular transaction."""
        return self.suggest(client, params, config, None).fee_suggestions


class HistoryFeeStrategy(AbstractFeeStrategy):
    """
    Shared flow for chains whose fees come from eth_feeHistory: estimate the
    gas limit, fetch the window, derive a GasPrice, then let the subclass
    scale the base fee per level.
    """
    name = "history"

    def level_base_fees(
        self,
        gas_price: GasPrice,
        fee_history: FeeHistory,
        config: SuggestionsConfig,
    ) -> Tuple[Tuple[int, int, int], float]:
        """Returns the (low, medium, high) base fees and the congestion to report."""
        raise NotImplementedError

    def suggest(self, client, params, config, call_msg=None):
        gas_limit = estimate_gas_limit(client, call_msg)

        fee_history = get_fee_history(client, config.fee_history_blocks, None, config.reward_percentiles)
        gas_price = suggest_gas_price(fee_history, config.gas_price_estimation_blocks)
        base_fees, congestion = self.level_base_fees(gas_price, fee_history, config)

        fee_suggestions = build_fee_suggestions(
            gas_price,
            base_fees,
            congestion,
            fee_history,
            MEDIUM_PRIORITY_FEE_INDEX,
            params.network_block_time,
        )
        return TxSuggestions(gas_limit=gas_limit, fee_suggestions=fee_suggestions)
