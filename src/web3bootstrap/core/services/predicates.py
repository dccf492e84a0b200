"""
Step conditions — the platform predicates that gate a step.

Conditions are short strings so recipes stay pure data:

    ``apple_silicon``         macOS on arm64
    ``macos``                 any macOS host
    ``foundation:<step>``     the named foundational step has not failed
    ``cli:<name>``            ``name`` resolves on the run's PATH

Evaluation is read-only.
"""

from __future__ import annotations

import logging

from web3bootstrap.core.context import RunContext

logger = logging.getLogger(__name__)


def evaluate_condition(condition: str, ctx: RunContext) -> bool:
    """Evaluate one condition against the run context.

    Returns:
        True if the condition is met (step should proceed).
    """
    host = ctx.host
    if condition == "apple_silicon":
        return bool(host and host.is_apple_silicon)
    if condition == "macos":
        return bool(host and host.is_macos)
    if condition.startswith("foundation:"):
        return condition.split(":", 1)[1] not in ctx.failed_foundations
    if condition.startswith("cli:"):
        return ctx.which(condition.split(":", 1)[1]) is not None
    logger.warning("Unknown step condition: %s", condition)
    return True


def unmet_condition(conditions: tuple[str, ...], ctx: RunContext) -> str | None:
    """Return the first condition that fails, or None if all are met.

    Foundation conditions are checked first so a step that depends on
    a failed package manager reports that, not a missing CLI.
    """
    ordered = sorted(conditions, key=lambda c: not c.startswith("foundation:"))
    for condition in ordered:
        if not evaluate_condition(condition, ctx):
            return condition
    return None


def describe_condition(condition: str) -> str:
    """Human-readable reason for a failed condition."""
    if condition == "apple_silicon":
        return "not on Apple Silicon"
    if condition == "macos":
        return "not on macOS"
    if condition.startswith("foundation:"):
        return f"{condition.split(':', 1)[1]} unavailable"
    if condition.startswith("cli:"):
        return f"{condition.split(':', 1)[1]} not found"
    return condition
