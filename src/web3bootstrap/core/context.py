"""
Run context — the shared state of one bootstrap run.

Passed explicitly to every service.  Holds the process runner, the
environment installers extend (PATH), the run policy, and the set of
foundational steps that failed, which predicates consult to
short-circuit dependent steps.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from web3bootstrap.adapters.base import InvokeOptions, ProcessResult, ProcessRunner
from web3bootstrap.core.models.step import RunPolicy
from web3bootstrap.core.services.environment import HostEnvironment, detect_host


@dataclass
class RunContext:
    """Everything a step needs while the runner executes it."""

    runner: ProcessRunner
    policy: RunPolicy = RunPolicy.LENIENT
    env: dict[str, str] = field(default_factory=lambda: dict(os.environ))
    host: HostEnvironment | None = None
    confirm: Callable[[str], bool] | None = None
    assume_yes: bool | None = None
    dry_run: bool = False
    refresh: bool = False
    profile_path: Path | None = None
    install_timeout: int | None = None

    failed_foundations: set[str] = field(default_factory=set)
    profile_written: bool = False

    def __post_init__(self) -> None:
        if self.host is None:
            self.host = detect_host(self.env)
        if self.profile_path is None:
            self.profile_path = Path(self.host.home) / ".zprofile"

    @property
    def strict(self) -> bool:
        return self.policy == RunPolicy.STRICT

    def expand(self, path: str) -> str:
        """Expand ``~`` and ``$HOME`` against this run's home directory."""
        home = self.host.home if self.host else str(Path.home())
        if path.startswith("~"):
            path = home + path[1:]
        return path.replace("$HOME", home)

    def which(self, name: str) -> str | None:
        """Resolve ``name`` against this run's PATH."""
        return self.runner.which(name, self.env)

    def prepend_path(self, directory: str) -> None:
        """Put ``directory`` at the front of PATH for the rest of the run."""
        directory = self.expand(directory)
        parts = [p for p in self.env.get("PATH", "").split(os.pathsep) if p]
        if directory in parts:
            parts.remove(directory)
        self.env["PATH"] = os.pathsep.join([directory, *parts])

    def run(
        self,
        argv: tuple[str, ...] | list[str],
        *,
        quiet: bool = True,
        timeout: int | None = None,
    ) -> ProcessResult:
        """Invoke a command through the runner with this run's environment.

        Installer calls are quiet and bounded by ``install_timeout``.
        """
        return self.runner.invoke(
            argv[0],
            list(argv[1:]),
            InvokeOptions(
                quiet=quiet,
                env=dict(self.env),
                timeout=timeout if timeout is not None else self.install_timeout,
            ),
        )
