"""
Mock process runner — a simulated host for tests.

Tools are "installed" by name; ``which`` resolves only those.  Commands
can be scripted to succeed, fail, print output, or install tools as a
side effect, so a whole bootstrap run can be exercised without touching
the machine.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from web3bootstrap.adapters.base import InvokeOptions, ProcessResult, ProcessRunner
from web3bootstrap.errors import ProcessLaunchError


@dataclass
class MockResponse:
    """Scripted reply for a command line prefix."""

    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
    # tools that resolve after this command runs: name -> version line
    installs: dict[str, str] = field(default_factory=dict)


@dataclass
class MockCall:
    """One recorded invocation."""

    argv: list[str]
    options: InvokeOptions = field(default_factory=InvokeOptions)


class MockProcessRunner(ProcessRunner):
    """Universal test double for ``ProcessRunner``.

    By default every invocation of a resolvable command exits 0 with no
    output.  Responses are matched on the longest argv prefix.
    """

    def __init__(
        self,
        installed: dict[str, str] | None = None,
        unlaunchable: set[str] | None = None,
    ):
        # tool name -> version line printed by "<tool> --version"
        self._installed: dict[str, str] = dict(installed or {})
        self._unlaunchable = set(unlaunchable or ())
        self._responses: dict[tuple[str, ...], MockResponse] = {}
        self._call_log: list[MockCall] = []

    @property
    def call_log(self) -> list[MockCall]:
        """All invocations this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        """Each recorded invocation joined into a single string."""
        return [" ".join(c.argv) for c in self._call_log]

    def install(self, name: str, version_line: str = "") -> None:
        """Make ``name`` resolve on the simulated PATH."""
        self._installed[name] = version_line

    def uninstall(self, name: str) -> None:
        self._installed.pop(name, None)

    def is_installed(self, name: str) -> bool:
        return name in self._installed

    def set_response(self, *argv: str, response: MockResponse) -> None:
        """Script the reply for invocations starting with ``argv``."""
        self._responses[tuple(argv)] = response

    def set_failure(self, *argv: str, exit_code: int = 1, stderr: str = "mock failure") -> None:
        """Configure invocations starting with ``argv`` to fail."""
        self._responses[tuple(argv)] = MockResponse(exit_code=exit_code, stderr=stderr)

    def which(self, name: str, env: dict[str, str] | None = None) -> str | None:
        if "/" in name:
            base = name.rsplit("/", 1)[-1]
            return name if name in self._installed or base in self._installed else None
        if name in self._installed:
            return f"/mock/bin/{name}"
        return None

    def invoke(
        self,
        command: str,
        args: list[str] | None = None,
        options: InvokeOptions | None = None,
    ) -> ProcessResult:
        argv = [command, *(args or [])]
        opts = options or InvokeOptions()
        self._call_log.append(MockCall(argv=argv, options=opts))

        if command in self._unlaunchable or self.which(command) is None:
            raise ProcessLaunchError(command, "not found on PATH")

        response = self._match(argv)
        if response is None:
            response = self._default_response(argv)

        for name, version_line in response.installs.items():
            self._installed[name] = version_line

        return ProcessResult(
            command=argv,
            exit_code=response.exit_code,
            stdout="" if opts.quiet else response.stdout,
            stderr="" if opts.quiet else response.stderr,
        )

    def _match(self, argv: list[str]) -> MockResponse | None:
        for length in range(len(argv), 0, -1):
            response = self._responses.get(tuple(argv[:length]))
            if response is not None:
                return response
        return None

    def _default_response(self, argv: list[str]) -> MockResponse:
        name = argv[0].rsplit("/", 1)[-1]
        # Version-style queries echo the configured version line.
        if len(argv) > 1 and argv[1] in ("--version", "-v", "version", "-V"):
            return MockResponse(stdout=self._installed.get(name, "") + "\n")
        return MockResponse()

    def reset(self) -> None:
        """Clear the call log and scripted responses."""
        self._call_log.clear()
        self._responses.clear()
