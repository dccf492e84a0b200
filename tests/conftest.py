"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from web3bootstrap.adapters.mock import MockProcessRunner
from web3bootstrap.core.context import RunContext
from web3bootstrap.core.services.environment import HostEnvironment


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A throwaway home directory for profile writes."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def linux_host(home: Path) -> HostEnvironment:
    return HostEnvironment(system="linux", machine="x86_64", shell="bash", home=str(home))


@pytest.fixture
def mac_host(home: Path) -> HostEnvironment:
    """Apple Silicon macOS."""
    return HostEnvironment(system="darwin", machine="arm64", shell="zsh", home=str(home))


@pytest.fixture
def runner() -> MockProcessRunner:
    """A simulated host with a shell and nothing else installed."""
    return MockProcessRunner(installed={"bash": "GNU bash, version 5.2.15", "sh": ""})


@pytest.fixture
def make_ctx(runner: MockProcessRunner, linux_host: HostEnvironment, home: Path):
    """Factory for a RunContext bound to the mock runner."""

    def _make(**kwargs) -> RunContext:
        kwargs.setdefault("runner", runner)
        kwargs.setdefault("host", linux_host)
        kwargs.setdefault("env", {"PATH": "/usr/bin:/bin", "HOME": str(home)})
        kwargs.setdefault("profile_path", home / ".zprofile")
        return RunContext(**kwargs)

    return _make
