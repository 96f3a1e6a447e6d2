"""EIP-1559 fee suggestions and inclusion-time estimates for L1s and rollups."""
from feesuggest.core.engine import SuggestionEngine, default_config
from feesuggest.core.errors import (
    EmptyFeeHistoryError,
    FeeEstimationError,
    InsufficientDataError,
    TransportError,
)
from feesuggest.core.types import (
    ChainClass,
    ChainParameters,
    Fee,
    FeeHistory,
    FeeSuggestions,
    GasPrice,
    Inclusion,
    LineaEstimateGasResult,
    SuggestionsConfig,
    TxSuggestions,
)

__all__ = [
    "SuggestionEngine",
    "default_config",
    "FeeEstimationError",
    "EmptyFeeHistoryError",
    "InsufficientDataError",
    "TransportError",
    "ChainClass",
    "ChainParameters",
    "Fee",
    "FeeHistory",
    "FeeSuggestions",
    "GasPrice",
    "Inclusion",
    "LineaEstimateGasResult",
    "SuggestionsConfig",
    "TxSuggestions",
]
