# Tests each chain class strategy in isolation against the mock client.

import pytest
from web3.constants import ADDRESS_ZERO

from feesuggest.adapters.mock import MockGasClient, GWEI
from feesuggest.core.types import ChainClass, ChainParameters, SuggestionsConfig
from feesuggest.strategies.l1 import L1FeeStrategy, adjust_l1_base_fee
from feesuggest.strategies.l2 import L2FeeStrategy, adjust_l2_base_fee
from feesuggest.strategies.linea import LineaFeeStrategy
from feesuggest.strategies.registry import select_strategy

CALL_MSG = {"from": ADDRESS_ZERO, "to": ADDRESS_ZERO, "value": 0, "data": b""}


@pytest.fixture
def config():
    """Multipliers that are exact in binary so expected fees are round numbers."""
    return SuggestionsConfig(
        network_congestion_blocks=5,
        gas_price_estimation_blocks=10,
        low_reward_percentile=10,
        medium_reward_percentile=50,
        high_reward_percentile=90,
        low_base_fee_multiplier=1.5,
        medium_base_fee_multiplier=2.0,
        high_base_fee_multiplier=2.0,
        low_base_fee_congestion_multiplier=0.0,
        medium_base_fee_congestion_multiplier=10.0,
        high_base_fee_congestion_multiplier=10.0,
    )


@pytest.fixture
def params():
    return ChainParameters(chain_class=ChainClass.L1, network_block_time=12)


def test_adjust_l1_base_fee():
    assert adjust_l1_base_fee(100, 0.0, 2.0, 10.0) == 200
    assert adjust_l1_base_fee(100, 0.5, 2.0, 10.0) == 1200
    assert adjust_l1_base_fee(100, 1.0, 1.5, 0.0) == 150


def test_adjust_l2_base_fee_truncates_to_wei():
    assert adjust_l2_base_fee(100, 1.5) == 150
    # 1.025 is slightly below 1.025 in binary, the result is truncated
    assert adjust_l2_base_fee(20 * GWEI, 1.025) == 20_499_999_999


def test_select_strategy():
    assert isinstance(select_strategy(ChainClass.L1), L1FeeStrategy)
    assert isinstance(select_strategy("ArbStack"), L2FeeStrategy)
    assert select_strategy(ChainClass.OP_STACK) is select_strategy(ChainClass.ARB_STACK)
    assert isinstance(select_strategy("LineaStack"), LineaFeeStrategy)


def test_unknown_chain_class_uses_l2_strategy():
    # Permissive fallback: an unknown class is estimated like a rollup, not rejected
    assert isinstance(select_strategy("InvalidChain"), L2FeeStrategy)


def test_l1_without_congestion(config, params):
    client = MockGasClient(gas_used_ratio=0.0)
    result = L1FeeStrategy().suggest(client, params, config, CALL_MSG)
    fs = result.fee_suggestions

    assert result.gas_limit == 21000
    assert fs.network_congestion == 0.0
    assert fs.low.max_fee_per_gas == 30 * GWEI + 1 * GWEI
    assert fs.medium.max_fee_per_gas == 40 * GWEI + 2 * GWEI
    assert fs.high.max_fee_per_gas == 40 * GWEI + 5 * GWEI
    assert fs.priority_fee_lower_bound == 1 * GWEI
    assert fs.priority_fee_upper_bound == 5 * GWEI


def test_l1_congestion_raises_base_fee(config, params):
    client = MockGasClient(gas_used_ratio=0.75)
    fs = L1FeeStrategy().suggest(client, params, config, CALL_MSG).fee_suggestions

    assert fs.network_congestion == pytest.approx(0.5)
    # Low level has no congestion multiplier
    assert fs.low.max_fee_per_gas == 30 * GWEI + 1 * GWEI
    assert fs.medium.max_fee_per_gas == 240 * GWEI + 2 * GWEI
    assert fs.high.max_fee_per_gas == 240 * GWEI + 5 * GWEI


def test_l2_ignores_congestion(config):
    client = MockGasClient(gas_used_ratio=0.75)
    params = ChainParameters(chain_class=ChainClass.ARB_STACK, network_block_time=0.25)
    fs = L2FeeStrategy().suggest(client, params, config, CALL_MSG).fee_suggestions

    assert fs.network_congestion == 0.0
    assert fs.low.max_fee_per_gas == 30 * GWEI + 1 * GWEI
    assert fs.medium.max_fee_per_gas == 40 * GWEI + 2 * GWEI
    assert fs.high.max_fee_per_gas == 40 * GWEI + 5 * GWEI


def test_history_strategy_requests_full_window(config, params):
    client = MockGasClient()
    L1FeeStrategy().suggest(client, params, config, CALL_MSG)
    (call,) = client.calls_to("fee_history")
    assert call["block_count"] == 10
    assert call["last_block"] is None
    assert call["reward_percentiles"] == [10, 50, 90]


def test_history_strategy_without_call_msg_skips_gas_estimate(config, params):
    client = MockGasClient()
    result = L1FeeStrategy().suggest(client, params, config, None)
    assert result.gas_limit == 0
    assert client.calls_to("estimate_gas") == []


def test_linea_uses_oracle_for_every_level(config):
    client = MockGasClient()
    params = ChainParameters(chain_class=ChainClass.LINEA_STACK, network_block_time=2)
    result = LineaFeeStrategy().suggest(client, params, config, CALL_MSG)
    fs = result.fee_suggestions

    assert result.gas_limit == 21000
    assert client.calls_to("estimate_gas") == []
    for fee in (fs.low, fs.medium, fs.high):
        assert fee.max_priority_fee_per_gas == 2_300_000_000
        assert fee.max_fee_per_gas == 2 * 20 * GWEI + 2_300_000_000
    assert fs.estimated_base_fee == 20 * GWEI
    assert fs.network_congestion == 0.0


def test_linea_fetches_history_for_inclusion_only(config):
    client = MockGasClient()
    params = ChainParameters(chain_class=ChainClass.LINEA_STACK, network_block_time=2)
    fs = LineaFeeStrategy().suggest(client, params, config, CALL_MSG).fee_suggestions

    (call,) = client.calls_to("fee_history")
    assert call["block_count"] == config.network_congestion_blocks
    assert call["reward_percentiles"] == [50]
    assert fs.medium_inclusion.min_blocks_until_inclusion == 1
    assert fs.medium_inclusion.max_blocks_until_inclusion == 2
    assert fs.medium_inclusion.max_time_until_inclusion == 4.0


def test_linea_account_suggestions_probe_with_sender(config):
    client = MockGasClient()
    params = ChainParameters(chain_class=ChainClass.LINEA_STACK, network_block_time=2)
    account = "0x00000000000000000000000000000000000000aa"
    LineaFeeStrategy().suggest_for_account(client, params, config, account)

    (call,) = client.calls_to("linea_estimate_gas")
    assert call["call_msg"] == {"from": account, "to": ADDRESS_ZERO, "value": 0}
