# /feesuggest/core/decorators.py
# Retry policy for calls that go over the network.
from tenacity import retry, stop_after_attempt, wait_exponential, before_sleep_log
from feesuggest.core.config import settings
from feesuggest.core.logger import get_logger
import logging

log = get_logger(__name__)

# Only the transport uses this. With the default of a single attempt the
# first failure is re-raised as is.
retriable_network_call = retry(
    stop=stop_after_attempt(max(settings.RPC_RETRY_ATTEMPTS, 1)),
    wait=wait_exponential(multiplier=1, min=1, max=5),
    before_sleep=before_sleep_log(log, logging.WARNING),
    reraise=True
)
