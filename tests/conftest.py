"""Shared test fixtures for reqsnip.

Provides reusable fixtures for loading the petstore fixture, building
operations, isolating configuration, managing output state, and running CLI
commands. These fixtures are automatically discovered by pytest and available
to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from reqsnip.models import Operation
from reqsnip.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    """Path of the petstore fixture on disk."""
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Load the raw petstore spec dict."""
    with open(petstore_path) as f:
        return json.load(f)


@pytest.fixture
def petstore_operations(petstore_raw: dict[str, Any]) -> list[Operation]:
    """Operations extracted from the petstore spec without credentials."""
    from reqsnip.parser.extractor import extract_operations

    return extract_operations(petstore_raw)


@pytest.fixture
def make_operation():
    """Factory for :class:`Operation` objects with a fixed server URL.

    Keyword arguments override the defaults, so a test only spells out the
    parts it cares about::

        op = make_operation(method="post", parameters=[...])
    """

    def _make(**overrides: Any) -> Operation:
        fields: dict[str, Any] = {
            "method": "get",
            "path": "/pet/{id}",
            "server_url": "https://example.com",
        }
        fields.update(overrides)
        return Operation.model_validate(fields)

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config. Clears all REQSNIP_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("reqsnip.config._is_xdg_platform", lambda: True)

    for var in ["REQSNIP_BASE_HREF", "REQSNIP_SERVER_URL", "REQSNIP_TARGET"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
