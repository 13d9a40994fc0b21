"""Fixtures for end-to-end CLI tests.

`retry-demo` is a test-only subcommand that pushes one ledger call through a
`ResilientExecutor` built from the environment's retry policy, against a
ledger that is never reachable. Its output exercises the console levels,
``-L`` overrides and the flight recorder with SHELTER's own log lines.
"""

import asyncio
import logging

import click
import pytest
from click.testing import CliRunner

from shelter.adapters.metrics import InMemoryMetrics
from shelter.config import get_retry_policy
from shelter.domain.errors import InternalError
from shelter.entrypoints.cli.main import shelter
from shelter.interfaces.errors import ConnectionFailure
from shelter.service_layer.executor import ResilientExecutor

# pylint: disable=redefined-outer-name


@click.command()
def retry_demo():
    """Call an unreachable ledger until the retry policy gives up."""
    logger = logging.getLogger("shelter.demo")
    vendor = logging.getLogger("vendor.ledger")

    async def get_product():
        vendor.debug("ledger client: opening connection.")
        vendor.info("ledger client: connection refused.")
        raise ConnectionFailure("billing")

    policy = get_retry_policy()
    executor = ResilientExecutor(
        InMemoryMetrics(), max_attempts=policy.max_attempts, delay=policy.delay
    )
    logger.debug("Looking up the demo cat's product.")
    logger.info("Demo started.")
    try:
        asyncio.run(executor.execute(get_product, label="billing.get_product"))
    except InternalError:
        logger.debug("Demo finished without a product.")


def _unregister(group, name: str) -> None:
    """Drop a command from a click-extra group, including its help sections."""
    group.commands.pop(name, None)
    for section in [getattr(group, "_default_section", None), *getattr(group, "_sections", [])]:
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_retry_demo():
    """Attach `retry-demo` to the `shelter` group for one test."""
    shelter.add_command(retry_demo, name="retry-demo")
    try:
        yield
    finally:
        _unregister(shelter, "retry-demo")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def db_env(tmp_path):
    """Environment pointing SHELTER_DB_URL at a fresh, unmigrated SQLite file."""
    return {"SHELTER_DB_URL": f"sqlite+aiosqlite:///{tmp_path / 'shelter.db'}"}
