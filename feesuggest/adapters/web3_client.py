# /feesuggest/adapters/web3_client.py
# GasClient backed by a web3.py node connection.
from typing import Any, Dict, List, Optional

from web3 import Web3
from web3.types import RPCEndpoint, TxParams

from feesuggest.core.config import settings
from feesuggest.core.config_validator import validate as validate_config
from feesuggest.core.decorators import retriable_network_call
from feesuggest.core.errors import TransportError
from feesuggest.core.logger import get_logger
from feesuggest.core.types import FeeHistory, LineaEstimateGasResult

log = get_logger(__name__)

LINEA_ESTIMATE_GAS = RPCEndpoint("linea_estimateGas")


def _to_quantity(value: Any) -> int:
    """Decodes a JSON-RPC quantity (hex string or already an int)."""
    if isinstance(value, str):
        return int(value, 16)
    return int(value)


def to_call_arg(call_msg: TxParams) -> Dict[str, Any]:
    """Encodes a call message the way eth_call style methods expect it."""
    arg: Dict[str, Any] = {}
    for key, value in call_msg.items():
        if value is None or value in (b"", "0x", ""):
            continue
        # Nodes read calldata from "input"
        if key == "data":
            key = "input"
        if isinstance(value, (bytes, bytearray)):
            arg[key] = Web3.to_hex(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            arg[key] = Web3.to_hex(value)
        else:
            arg[key] = value
    return arg


class Web3GasClient:
    """Implements the GasClient calls on top of a synchronous Web3 instance."""
    def __init__(self, w3: Web3):
        self.w3 = w3

    @classmethod
    def from_settings(cls) -> "Web3GasClient":
        validate_config()
        w3 = Web3(Web3.HTTPProvider(settings.rpc_url, request_kwargs={"timeout": settings.RPC_TIMEOUT_SECONDS}))
        if not w3.is_connected():
            raise TransportError("RPC node is unreachable")
        log.info("WEB3_GAS_CLIENT_INITIALIZED", timeout=settings.RPC_TIMEOUT_SECONDS)
        return cls(w3)

    @retriable_network_call
    def fee_history(self, block_count: int, last_block: Optional[int], reward_percentiles: List[float]) -> FeeHistory:
        newest_block = "latest" if last_block is None else last_block
        raw = self.w3.eth.fee_history(block_count, newest_block, reward_percentiles)
        return FeeHistory(
            oldest_block=_to_quantity(raw["oldestBlock"]),
            base_fee=[_to_quantity(fee) for fee in raw["baseFeePerGas"]],
            gas_used_ratio=[float(ratio) for ratio in raw["gasUsedRatio"]],
            reward=[
                [None if reward is None else _to_quantity(reward) for reward in rewards]
                for rewards in raw.get("reward") or []
            ],
        )

    @retriable_network_call
    def estimate_gas(self, call_msg: TxParams) -> int:
        return int(self.w3.eth.estimate_gas(call_msg))

    @retriable_network_call
    def linea_estimate_gas(self, call_msg: TxParams) -> LineaEstimateGasResult:
        result = self.w3.manager.request_blocking(LINEA_ESTIMATE_GAS, [to_call_arg(call_msg)])
        return LineaEstimateGasResult(
            base_fee_per_gas=_to_quantity(result["baseFeePerGas"]),
            priority_fee_per_gas=_to_quantity(result["priorityFeePerGas"]),
            gas_limit=_to_quantity(result["gasLimit"]),
        )
