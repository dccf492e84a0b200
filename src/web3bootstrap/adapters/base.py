"""
Process runner base — the contract between the bootstrapper and the host.

Every external process the bootstrapper starts goes through a
``ProcessRunner``.  Steps, detectors and installers never call
``subprocess`` directly, which keeps the whole checklist testable
against ``MockProcessRunner``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class InvokeOptions(BaseModel):
    """How a single command should be run.

    ``env`` is the complete environment for the child.  ``None`` means
    inherit the current process environment.
    """

    quiet: bool = False
    cwd: str | None = None
    env: dict[str, str] | None = None
    timeout: int | None = None
    stdin: str | None = None


class ProcessResult(BaseModel):
    """Outcome of one process invocation.

    A non-zero ``exit_code`` is a normal value, not a fault.
    When the invocation was quiet, ``stdout`` and ``stderr`` are empty.
    """

    command: list[str] = Field(default_factory=list)
    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """Whether the process exited with status 0."""
        return self.exit_code == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Combined output, stdout first (some tools print versions to stderr)."""
        return (self.stdout or "") + (self.stderr or "")


class ProcessRunner(ABC):
    """Abstract process runner.

    To create a new runner:
        1. Subclass ProcessRunner
        2. Implement ``which`` and ``invoke``
    """

    @abstractmethod
    def which(self, name: str, env: dict[str, str] | None = None) -> str | None:
        """Resolve an executable on the search path.

        Args:
            name: Executable name or absolute path.
            env: Environment whose ``PATH`` is searched (default: current).

        Returns:
            Absolute path of the executable, or None if it does not resolve.
        """

    @abstractmethod
    def invoke(
        self,
        command: str,
        args: list[str] | None = None,
        options: InvokeOptions | None = None,
    ) -> ProcessResult:
        """Run ``command`` with ``args`` and wait for it to finish.

        Raises:
            ProcessLaunchError: if the binary cannot be located or executed.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
