import os
import subprocess
import sys
from pathlib import Path

import pytest
from structlog.contextvars import get_contextvars
from web3.constants import ADDRESS_ZERO

from feesuggest.adapters.mock import MockGasClient
from feesuggest.core.engine import SuggestionEngine, default_config
from feesuggest.core.errors import TransportError
from feesuggest.core.logger import (
    chain_context,
    get_logger,
    SUGGESTIONS_COMPUTED,
    TRANSPORT_FAILURES,
    INCLUSION_ESTIMATES,
)
from feesuggest.core.types import ChainClass, ChainParameters, Fee

REPO_ROOT = Path(__file__).resolve().parents[1]


def run_python(script, **env_overrides):
    """Runs ``script`` in a fresh interpreter so import-time effects are observable."""
    env = {**os.environ, "PYTHONPATH": str(REPO_ROOT), **env_overrides}
    return subprocess.run(
        [sys.executable, "-c", script], capture_output=True, text=True, env=env, cwd=REPO_ROOT
    )


def test_chain_context_is_scoped():
    with chain_context("OPStack", 2.0):
        assert get_contextvars()["chain_class"] == "OPStack"
        get_logger("test").info("UNIT_TEST_EVENT", data=1)
    assert "chain_class" not in get_contextvars()


def test_suggestions_counter_per_chain_class():
    counter = SUGGESTIONS_COMPUTED.labels("OPStack")
    initial = counter._value.get()

    engine = SuggestionEngine(MockGasClient())
    params = ChainParameters(chain_class=ChainClass.OP_STACK, network_block_time=2)
    engine.get_tx_suggestions(params, default_config(ChainClass.OP_STACK))

    assert counter._value.get() == initial + 1


def test_inclusion_counter():
    initial = INCLUSION_ESTIMATES._value.get()
    engine = SuggestionEngine(MockGasClient())
    params = ChainParameters(chain_class=ChainClass.L1, network_block_time=12)
    engine.estimate_inclusion(params, default_config(ChainClass.L1), Fee(max_priority_fee_per_gas=1, max_fee_per_gas=2))
    assert INCLUSION_ESTIMATES._value.get() == initial + 1


def test_transport_failures_are_counted():
    counter = TRANSPORT_FAILURES.labels("estimate_gas")
    initial = counter._value.get()

    client = MockGasClient()
    client.set_next_call_to_fail("estimate_gas")
    engine = SuggestionEngine(client)
    params = ChainParameters(chain_class=ChainClass.L1, network_block_time=12)

    with pytest.raises(TransportError):
        engine.get_tx_suggestions(params, default_config(ChainClass.L1), {"to": ADDRESS_ZERO})

    assert counter._value.get() == initial + 1


def test_unknown_chain_classes_share_one_metric_label():
    unknown = SUGGESTIONS_COMPUTED.labels("unknown")
    initial = unknown._value.get()

    engine = SuggestionEngine(MockGasClient())
    for name in ("SomeNewRollup", "AnotherRollup"):
        params = ChainParameters(chain_class=name, network_block_time=2)
        engine.get_tx_suggestions(params, default_config(name))

    assert unknown._value.get() == initial + 2
    sampled = {
        sample.labels["chain_class"]
        for metric in SUGGESTIONS_COMPUTED.collect()
        for sample in metric.samples
    }
    assert "SomeNewRollup" not in sampled
    assert "AnotherRollup" not in sampled


def test_import_leaves_host_logging_untouched():
    """
    GIVEN a host application that configured structlog with its own renderer
    WHEN the package is imported
    THEN the host's processor chain is still in place
    """
    script = (
        "import structlog\n"
        "structlog.configure(processors=[structlog.processors.KeyValueRenderer()])\n"
        "import feesuggest\n"
        "print(type(structlog.get_config()['processors'][-1]).__name__)\n"
    )
    result = run_python(script)
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "KeyValueRenderer"


def test_configure_logging_installs_json_pipeline():
    script = (
        "import structlog\n"
        "from feesuggest.core.logger import configure_logging\n"
        "configure_logging()\n"
        "print(type(structlog.get_config()['processors'][-1]).__name__)\n"
    )
    result = run_python(script)
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "JSONRenderer"


def test_bad_settings_surface_to_the_importer():
    script = (
        "try:\n"
        "    import feesuggest\n"
        "except Exception as e:\n"
        "    print(type(e).__name__)\n"
    )
    result = run_python(script, FEESUGGEST_RPC_RETRY_ATTEMPTS="three")
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "ValidationError"
