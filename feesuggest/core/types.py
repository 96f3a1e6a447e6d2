# /feesuggest/core/types.py
# Value objects passed between the engine, the strategies and the transport.
# All of them are frozen: every fee computation builds new instances.
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChainClass(str, Enum):
    """How the total fee of a transaction is put together on a chain."""
    # gasLimit * (baseFee + priorityFee), all from eth_estimateGas + fee history
    L1 = "L1"
    # same formula as L1, but the base fee is not congestion driven
    ARB_STACK = "ArbStack"
    # same as ArbStack; the L1 data fee comes from the gas oracle and is not modeled here
    OP_STACK = "OPStack"
    # gasLimit, baseFee and priorityFee all come from linea_estimateGas
    LINEA_STACK = "LineaStack"


# Reward columns requested from eth_feeHistory, in this order
LOW_PRIORITY_FEE_INDEX = 0
MEDIUM_PRIORITY_FEE_INDEX = 1
HIGH_PRIORITY_FEE_INDEX = 2


class FeeHistory(BaseModel):
    """
    Snapshot of eth_feeHistory.

    ``base_fee`` has one entry more than ``gas_used_ratio``: the last one is
    the projected base fee of the next block. ``reward`` has one row per block
    and one column per requested percentile.
    """
    oldest_block: int = 0
    base_fee: List[int] = Field(default_factory=list)
    gas_used_ratio: List[float] = Field(default_factory=list)
    reward: List[List[Optional[int]]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class GasPrice(BaseModel):
    base_fee_per_gas: int = Field(ge=0)
    low_priority_fee_per_gas: int = Field(ge=0)
    medium_priority_fee_per_gas: int = Field(ge=0)
    high_priority_fee_per_gas: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class Fee(BaseModel):
    """A single fee level, in wei."""
    max_priority_fee_per_gas: int
    max_fee_per_gas: int

    model_config = ConfigDict(frozen=True)


class Inclusion(BaseModel):
    min_blocks_until_inclusion: int
    max_blocks_until_inclusion: int
    min_time_until_inclusion: float  # seconds
    max_time_until_inclusion: float  # seconds

    model_config = ConfigDict(frozen=True)


class FeeSuggestions(BaseModel):
    low: Fee
    low_inclusion: Inclusion
    medium: Fee
    medium_inclusion: Inclusion
    high: Fee
    high_inclusion: Inclusion
    estimated_base_fee: int
    priority_fee_lower_bound: int
    priority_fee_upper_bound: int
    # 0-1 scale, only modeled for L1 chains
    network_congestion: float = Field(default=0.0, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)


class TxSuggestions(BaseModel):
    gas_limit: int = 0
    fee_suggestions: FeeSuggestions

    model_config = ConfigDict(frozen=True)


class LineaEstimateGasResult(BaseModel):
    """Result of the linea_estimateGas oracle call."""
    base_fee_per_gas: int
    priority_fee_per_gas: int
    gas_limit: int

    model_config = ConfigDict(frozen=True)


class ChainParameters(BaseModel):
    # Unknown classes are accepted and estimated like ArbStack/OPStack
    chain_class: Union[ChainClass, str] = Field(union_mode="left_to_right")
    network_block_time: float = Field(gt=0)  # average block time in seconds

    model_config = ConfigDict(frozen=True)


class SuggestionsConfig(BaseModel):
    """Tunable estimation parameters. See ``default_config`` for the pre-tuned values."""
    network_congestion_blocks: int = Field(gt=0)
    gas_price_estimation_blocks: int = Field(gt=0)
    low_reward_percentile: float = Field(ge=0, le=100)
    medium_reward_percentile: float = Field(ge=0, le=100)
    high_reward_percentile: float = Field(ge=0, le=100)
    low_base_fee_multiplier: float = Field(gt=0)
    medium_base_fee_multiplier: float = Field(gt=0)
    high_base_fee_multiplier: float = Field(gt=0)
    # L1 only: the base fee of a level is scaled by (1 + congestion * multiplier)
    low_base_fee_congestion_multiplier: float = Field(default=0.0, ge=0)
    medium_base_fee_congestion_multiplier: float = Field(default=0.0, ge=0)
    high_base_fee_congestion_multiplier: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_percentile_order(self) -> "SuggestionsConfig":
        if not (self.low_reward_percentile < self.medium_reward_percentile < self.high_reward_percentile):
            raise ValueError("reward percentiles must be strictly increasing (low < medium < high)")
        return self

    @property
    def fee_history_blocks(self) -> int:
        """Size of the fee-history window that covers both estimations."""
        return max(self.gas_price_estimation_blocks, self.network_congestion_blocks)

    @property
    def reward_percentiles(self) -> List[float]:
        return [self.low_reward_percentile, self.medium_reward_percentile, self.high_reward_percentile]
