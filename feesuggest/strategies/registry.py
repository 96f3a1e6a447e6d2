# /feesuggest/strategies/registry.py
from typing import Dict, Union

from feesuggest.core.types import ChainClass
from feesuggest.strategies.base import AbstractFeeStrategy
from feesuggest.strategies.l1 import L1FeeStrategy
from feesuggest.strategies.l2 import L2FeeStrategy
from feesuggest.strategies.linea import LineaFeeStrategy

_L2 = L2FeeStrategy()

STRATEGIES: Dict[ChainClass, AbstractFeeStrategy] = {
    ChainClass.L1: L1FeeStrategy(),
    ChainClass.ARB_STACK: _L2,
    ChainClass.OP_STACK: _L2,
    ChainClass.LINEA_STACK: LineaFeeStrategy(),
}


def select_strategy(chain_class: Union[ChainClass, str]) -> AbstractFeeStrategy:
    """
    Strategy for ``chain_class``. Unknown classes get the L2 strategy instead
    of an error; callers relying on strict validation must check the class
    themselves.
    """
    try:
        return STRATEGIES[ChainClass(chain_class)]
    except ValueError:
        return _L2
