import pytest
from click.testing import CliRunner

from html_toc.registry import IdentifierRegistry, reset_registry


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def registry() -> IdentifierRegistry:
    """Provides an isolated identifier registry."""
    return IdentifierRegistry()


@pytest.fixture(autouse=True)
def _reset_default_registry():
    reset_registry()
    yield
    reset_registry()
