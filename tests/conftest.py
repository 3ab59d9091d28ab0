"""Pytest fixtures for tests."""

import io
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from declick import ConsoleConfig
from declick.console import ConsoleInput, ConsoleOutput


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def buffer():
    """Stream that captures console output."""
    return io.StringIO()


@pytest.fixture
def output(buffer):
    """ConsoleOutput writing uncolored text into ``buffer``."""
    return ConsoleOutput(file=buffer, color=False)


@pytest.fixture
def quiet_config():
    """Config with default diagnostics disabled."""
    return ConsoleConfig(default_diagnostics=False)


@pytest.fixture
def make_input():
    """Factory for non-interactive ConsoleInput objects."""

    def _make(arguments=None, options=None, interactive=False):
        return ConsoleInput(arguments or {}, options or {}, interactive=interactive)

    return _make
