# /feesuggest/adapters/mock.py
# - In-memory GasClient for tests and offline experiments.
# - Serves a fixed fee history shape and records every call it receives.

from typing import Dict, List, Optional

from feesuggest.core.logger import get_logger
from feesuggest.core.types import FeeHistory, LineaEstimateGasResult

log = get_logger(__name__)

GWEI = 10**9


class MockGasClient:
    """
    A mock GasClient. By default every block has the same base fee and the
    same reward per percentile column; ``set_fee_history`` replaces that with
    an explicit snapshot.
    """
    def __init__(
        self,
        base_fee: int = 20 * GWEI,
        rewards: Optional[List[int]] = None,
        gas_used_ratio: float = 0.0,
        gas_limit: int = 21000,
        linea_estimate: Optional[LineaEstimateGasResult] = None,
    ):
        self.base_fee = base_fee
        self.rewards = rewards if rewards is not None else [1 * GWEI, 2 * GWEI, 5 * GWEI]
        self.gas_used_ratio = gas_used_ratio
        self.gas_limit = gas_limit
        self.linea_estimate = linea_estimate or LineaEstimateGasResult(
            base_fee_per_gas=20 * GWEI,
            priority_fee_per_gas=2 * GWEI,
            gas_limit=21000,
        )
        self.fixed_history: Optional[FeeHistory] = None
        self.calls: List[Dict] = []
        self._failures: Dict[str, Exception] = {}
        log.debug("MOCK_GAS_CLIENT_INITIALIZED")

    def set_fee_history(self, fee_history: FeeHistory):
        """Serve this snapshot regardless of the requested window."""
        self.fixed_history = fee_history

    def set_next_call_to_fail(self, method: str, error: Optional[Exception] = None):
        """Make the next call to ``method`` raise ``error``."""
        self._failures[method] = error or ConnectionError(f"forced {method} failure")

    def _record(self, method: str, **kwargs):
        self.calls.append({"method": method, **kwargs})
        error = self._failures.pop(method, None)
        if error is not None:
            log.debug("MOCK_FORCED_FAILURE", method=method)
            raise error

    def calls_to(self, method: str) -> List[Dict]:
        return [call for call in self.calls if call["method"] == method]

    def fee_history(self, block_count: int, last_block: Optional[int], reward_percentiles: List[float]) -> FeeHistory:
        self._record("fee_history", block_count=block_count, last_block=last_block, reward_percentiles=list(reward_percentiles))
        if self.fixed_history is not None:
            return self.fixed_history

        # One reward column per requested percentile, matched by position
        columns = [self.rewards[min(i, len(self.rewards) - 1)] for i in range(len(reward_percentiles))]
        return FeeHistory(
            oldest_block=1000,
            base_fee=[self.base_fee] * (block_count + 1),
            gas_used_ratio=[self.gas_used_ratio] * block_count,
            reward=[list(columns) for _ in range(block_count)],
        )

    def estimate_gas(self, call_msg) -> int:
        self._record("estimate_gas", call_msg=call_msg)
        return self.gas_limit

    def linea_estimate_gas(self, call_msg) -> LineaEstimateGasResult:
        self._record("linea_estimate_gas", call_msg=call_msg)
        return self.linea_estimate
