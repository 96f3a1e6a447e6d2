# /feesuggest/core/logger.py
import logging
import structlog
from structlog.contextvars import bound_contextvars
import sentry_sdk
from prometheus_client import Counter
from feesuggest.core.config import settings

# --- Prometheus Metrics ---
SUGGESTIONS_COMPUTED = Counter(
    "feesuggest_suggestions_computed_total",
    "Total number of fee suggestion bundles computed",
    ["chain_class"],
)
INCLUSION_ESTIMATES = Counter(
    "feesuggest_inclusion_estimates_total",
    "Total number of standalone inclusion estimates",
)
TRANSPORT_FAILURES = Counter(
    "feesuggest_transport_failures_total",
    "Total number of failed calls to the RPC transport",
    ["method"],
)

def configure_logging():
    """
    Installs the JSON structlog pipeline and, when a DSN is set, sentry.
    Applications call this once at startup; importing the package leaves the
    host's logging untouched.
    """
    if settings.SENTRY_DSN:
        sentry_sdk.init(dsn=settings.SENTRY_DSN.get_secret_value(), traces_sample_rate=0.0)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(settings.LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

def get_logger(name: str):
    return structlog.get_logger(name)

def chain_context(chain_class: str, block_time: float):
    """Binds the chain being estimated to every log line emitted inside the block."""
    return bound_contextvars(chain_class=chain_class, network_block_time=block_time)
