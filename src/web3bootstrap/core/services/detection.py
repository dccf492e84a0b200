"""
Presence and version detection.

Read-only probes.  Presence is decided by resolvability on the run's
PATH; the version query that follows is best effort.  A tool whose
version query fails is still present, with version ``"unknown"``.
"""

from __future__ import annotations

import logging
import re

from web3bootstrap.core.context import RunContext
from web3bootstrap.core.models.step import Detection, Probe
from web3bootstrap.errors import ProcessLaunchError

logger = logging.getLogger(__name__)

# Version queries should answer quickly; a hung CLI must not stall the run.
VERSION_TIMEOUT = 15


def detect(probe: Probe, ctx: RunContext) -> Detection:
    """Detect a tool described by ``probe``.

    Returns:
        ``Detection.absent()`` if the tool is not installed, otherwise
        ``Detection.found(version)``.
    """
    if probe.kind == "process":
        return _detect_by_exit_status(probe, ctx)

    if ctx.which(probe.cli) is None:
        logger.debug("%s: not on PATH", probe.cli)
        return Detection.absent()

    return Detection.found(query_version(probe, ctx))


def query_version(probe: Probe, ctx: RunContext) -> str | None:
    """Run the version command and parse its output.

    Returns:
        The parsed version, or None if the query failed or printed nothing.
    """
    argv = (probe.cli, *probe.version_args)
    try:
        result = ctx.run(argv, quiet=False, timeout=VERSION_TIMEOUT)
    except ProcessLaunchError as e:
        logger.debug("%s: version query could not start: %s", probe.cli, e)
        return None

    if not result.ok:
        logger.debug("%s: version query exited %d", probe.cli, result.exit_code)
        return None

    return parse_version(result.stdout, result.stderr, probe.pattern)


def parse_version(stdout: str, stderr: str = "", pattern: str | None = None) -> str | None:
    """Extract a version string from command output.

    With ``pattern``, the first capture group of its first match across
    stdout+stderr.  Without one, the first non-empty line, preferring
    stdout.
    """
    if pattern:
        match = re.search(pattern, (stdout or "") + (stderr or ""))
        if match:
            return match.group(1) if match.groups() else match.group(0)
        return None

    for stream in (stdout, stderr):
        for line in (stream or "").splitlines():
            if line.strip():
                return line.strip()
    return None


def _detect_by_exit_status(probe: Probe, ctx: RunContext) -> Detection:
    """Present when the probe command exits 0 (e.g. ``pgrep oahd``)."""
    if ctx.which(probe.cli) is None:
        return Detection.absent()
    try:
        result = ctx.run((probe.cli, *probe.version_args), quiet=True, timeout=VERSION_TIMEOUT)
    except ProcessLaunchError:
        return Detection.absent()
    if result.ok:
        return Detection.found()
    return Detection.absent()
