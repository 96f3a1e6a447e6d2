# /feesuggest/core/errors.py


class FeeEstimationError(Exception):
    """Base class for every failure surfaced by the suggestion engine."""


class EmptyFeeHistoryError(FeeEstimationError):
    """The base-fee or gas-used-ratio sequence has no entries."""


class InsufficientDataError(FeeEstimationError):
    """No usable reward values, or the fee history has the wrong shape."""


class TransportError(FeeEstimationError):
    """An RPC or oracle call failed. The original exception is chained as ``__cause__``."""
