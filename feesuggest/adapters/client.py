# /feesuggest/adapters/client.py
# The three RPC calls the engine needs. Anything that implements them can be
# handed to the engine: a web3 node client, a cached replay, a test double.
from typing import List, Optional, Protocol

from web3.types import TxParams

from feesuggest.core.types import FeeHistory, LineaEstimateGasResult


class GasClient(Protocol):
    def fee_history(self, block_count: int, last_block: Optional[int], reward_percentiles: List[float]) -> FeeHistory:
        """eth_feeHistory. ``last_block=None`` means the latest block."""
        ...

    def estimate_gas(self, call_msg: TxParams) -> int:
        """eth_estimateGas."""
        ...

    def linea_estimate_gas(self, call_msg: TxParams) -> LineaEstimateGasResult:
        """linea_estimateGas. Only called for Linea-style chains."""
        ...
