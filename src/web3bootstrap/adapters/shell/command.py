"""
Subprocess runner — the SINGLE PLACE where ``subprocess.run`` is called.

Installer invocations are run quietly (output discarded); version
queries capture output so it can be parsed.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time

from web3bootstrap.adapters.base import InvokeOptions, ProcessResult, ProcessRunner
from web3bootstrap.errors import ProcessLaunchError

logger = logging.getLogger(__name__)

# Captured output is only parsed for versions, which print first.
_OUTPUT_HEAD = 2000


class SubprocessRunner(ProcessRunner):
    """Run commands on the host with ``subprocess.run``."""

    def which(self, name: str, env: dict[str, str] | None = None) -> str | None:
        path = (env or os.environ).get("PATH")
        return shutil.which(name, path=path)

    def invoke(
        self,
        command: str,
        args: list[str] | None = None,
        options: InvokeOptions | None = None,
    ) -> ProcessResult:
        opts = options or InvokeOptions()
        cmd = [command, *(args or [])]

        # Resolve against the caller's PATH, not ours: installers extend it.
        resolved = self.which(command, opts.env)
        if resolved is None:
            raise ProcessLaunchError(command, "not found on PATH")
        cmd[0] = resolved

        logger.debug("RUN: %s (cwd=%s, quiet=%s)", " ".join(cmd), opts.cwd, opts.quiet)
        sink = subprocess.DEVNULL if opts.quiet else subprocess.PIPE

        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                stdout=sink,
                stderr=sink,
                input=opts.stdin,
                text=True,
                timeout=opts.timeout,
                env=opts.env,
                cwd=opts.cwd,
                check=False,
            )
        except subprocess.TimeoutExpired:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.warning("Command timed out after %ss: %s", opts.timeout, command)
            return ProcessResult(
                command=cmd,
                exit_code=-1,
                stderr=f"timed out after {opts.timeout}s",
                duration_ms=elapsed_ms,
                timed_out=True,
            )
        except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
            raise ProcessLaunchError(command, str(e)) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("EXIT %d after %dms: %s", result.returncode, elapsed_ms, command)

        return ProcessResult(
            command=cmd,
            exit_code=result.returncode,
            stdout=(result.stdout or "")[:_OUTPUT_HEAD],
            stderr=(result.stderr or "")[:_OUTPUT_HEAD],
            duration_ms=elapsed_ms,
        )
