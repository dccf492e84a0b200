"""
Installer execution — turns an ``InstallPlan`` into process invocations.

All output is discarded (installers are run quietly); success is the
exit status alone.  Commands run in order and the first failure stops
the plan.  A command's fallback runs when the primary fails or its
binary does not resolve.
"""

from __future__ import annotations

import logging
import os

from web3bootstrap.adapters.base import ProcessResult
from web3bootstrap.core.context import RunContext
from web3bootstrap.core.models.step import Command, InstallPlan
from web3bootstrap.core.services.shell_profile import append_profile_line, render_line
from web3bootstrap.errors import ProcessLaunchError

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
NOT_FOUND_EXIT = 127


def run_install(plan: InstallPlan, ctx: RunContext) -> ProcessResult:
    """Execute every command of ``plan``.

    A later command whose binary does not resolve is an install
    failure: the earlier commands were expected to provide it.

    Returns:
        The result of the last command run; ``ok`` is False if any
        command failed.

    Raises:
        ProcessLaunchError: if the first command resolves neither its
            binary nor its fallback.
    """
    result = ProcessResult()
    for index, command in enumerate(plan.commands):
        try:
            result = run_command(command, ctx)
        except ProcessLaunchError:
            if index == 0:
                raise
            logger.warning("%s not found after the previous install command", command.argv[0])
            return ProcessResult(
                command=list(command.argv),
                exit_code=NOT_FOUND_EXIT,
                stderr=f"{command.argv[0]} not found",
            )
        if not result.ok:
            return result
        # Later commands may need binaries the earlier ones just dropped.
        for directory in plan.post_path:
            ctx.prepend_path(directory)

    _apply_post_install(plan, ctx)
    return result


def run_command(command: Command, ctx: RunContext) -> ProcessResult:
    """Run ``command``, falling back to ``command.fallback`` on failure."""
    candidates = [command.argv]
    if command.fallback:
        candidates.append(command.fallback)

    result: ProcessResult | None = None
    for argv in candidates:
        if ctx.which(argv[0]) is None:
            logger.debug("%s not on PATH, trying next candidate", argv[0])
            continue
        logger.info("Running: %s", " ".join(argv))
        result = ctx.run(argv, quiet=True)
        if result.ok:
            return result
        logger.info("'%s' exited %d", " ".join(argv), result.exit_code)

    if result is None:
        raise ProcessLaunchError(command.argv[0], "not found on PATH")
    return result


def run_refresh(command: Command, ctx: RunContext) -> bool:
    """Run a best-effort refresh (e.g. ``brew update``) for a present tool."""
    try:
        result = run_command(command, ctx)
    except ProcessLaunchError as e:
        logger.warning("Refresh skipped: %s", e)
        return False
    if not result.ok:
        logger.warning("'%s' failed (exit %d)", command, result.exit_code)
    return result.ok


def _apply_post_install(plan: InstallPlan, ctx: RunContext) -> None:
    """Put the located binary on PATH and persist its profile line."""
    if not plan.locate:
        return

    binary = next((c for c in plan.locate if ctx.which(c) is not None), None)
    if binary is None:
        logger.warning("Installed, but none of %s exists", ", ".join(plan.locate))
        return

    ctx.prepend_path(os.path.dirname(binary))
    if plan.profile_line:
        append_profile_line(ctx, render_line(plan.profile_line, {"binary": binary}))
