# /feesuggest/core/config_validator.py
# Checks the settings the web3 transport needs before a client is built.
from feesuggest.core.config import settings
from feesuggest.core.logger import get_logger
from feesuggest.core.types import ChainParameters

log = get_logger(__name__)


def validate():
    log.debug("CONFIG_VALIDATION_START")
    errors = []

    if not settings.rpc_url:
        errors.append("Missing required configuration: FEESUGGEST_RPC_URL")
    if settings.RPC_TIMEOUT_SECONDS <= 0:
        errors.append("FEESUGGEST_RPC_TIMEOUT_SECONDS must be positive")
    if settings.RPC_RETRY_ATTEMPTS < 1:
        errors.append("FEESUGGEST_RPC_RETRY_ATTEMPTS must be at least 1")
    if settings.NETWORK_BLOCK_TIME <= 0:
        errors.append("FEESUGGEST_NETWORK_BLOCK_TIME must be positive")

    if errors:
        for error in errors:
            log.critical("CONFIG_INVALID", error=error)
        raise ValueError("Configuration is incomplete: " + "; ".join(errors))

    log.debug("CONFIG_VALIDATION_PASSED")


def chain_parameters_from_settings() -> ChainParameters:
    """ChainParameters from CHAIN_CLASS / NETWORK_BLOCK_TIME."""
    return ChainParameters(chain_class=settings.CHAIN_CLASS, network_block_time=settings.NETWORK_BLOCK_TIME)
