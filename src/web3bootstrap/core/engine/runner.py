"""
Step runner — walks the registry and decides skip, install or fail.

Flow per step:
    conditions → detect → (confirm) → install → re-detect → result

Strictly sequential: installers share package-manager state (locks,
caches), so a step finishes completely before the next one starts.
"""

from __future__ import annotations

import logging
from typing import Callable

from web3bootstrap.adapters.base import ProcessResult
from web3bootstrap.core.context import RunContext
from web3bootstrap.core.models.result import BootstrapReport, ExecutionResult
from web3bootstrap.core.models.step import UNKNOWN_VERSION, FailurePolicy, Step
from web3bootstrap.core.services.detection import detect
from web3bootstrap.core.services.installers import NOT_FOUND_EXIT, run_install, run_refresh
from web3bootstrap.core.services.predicates import describe_condition, unmet_condition

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ExecutionResult], None]


def run(
    steps: list[Step],
    ctx: RunContext,
    on_result: ResultCallback | None = None,
) -> BootstrapReport:
    """Execute every step in order.

    Args:
        steps: The registry, in execution order.
        ctx: Shared run context.
        on_result: Called with each result as soon as it is known.

    Returns:
        BootstrapReport with one result per step reached.  When a
        failure aborts the run, later steps have no result.

    Raises:
        ProcessLaunchError: if an installer's binary cannot be executed.
    """
    report = BootstrapReport(policy=ctx.policy.value)

    for step in steps:
        result = execute_step(step, ctx)
        report.results.append(result)

        marker = "✓" if result.installed else "✗" if result.failed else "⊘"
        logger.info("%s %s → %s", marker, step.name, result.outcome)

        if on_result is not None:
            on_result(result)

        if result.failed and effective_policy(step, ctx) == FailurePolicy.ABORT:
            logger.info("Aborting run after '%s' failed", step.name)
            report.aborted = True
            report.aborted_at = step.name
            break

    return report


def effective_policy(step: Step, ctx: RunContext) -> FailurePolicy:
    """Strict runs abort on any failure; lenient runs honour the step."""
    if ctx.strict:
        return FailurePolicy.ABORT
    return step.failure_policy


def execute_step(step: Step, ctx: RunContext) -> ExecutionResult:
    """Run a single step and classify its outcome."""
    # ── Conditions ──
    unmet = unmet_condition(step.conditions, ctx)
    if unmet is not None:
        reason = "foundational_missing" if unmet.startswith("foundation:") else "predicate"
        return ExecutionResult.skip(
            step.name, step.label, reason, detail=describe_condition(unmet),
        )

    # ── Detection ──
    found = detect(step.probe, ctx)
    if found.present:
        if found.ambiguous:
            logger.debug("%s: present, version query failed", step.name)
        if ctx.refresh and step.refresh is not None and not ctx.dry_run:
            run_refresh(step.refresh, ctx)
        return ExecutionResult.skip(
            step.name, step.label, "already_present", version=found.version,
        )

    if step.install is None:
        return ExecutionResult.skip(
            step.name, step.label, "bundled", detail="installed with another step",
        )

    # ── Confirmation ──
    if step.confirm and not _confirmed(step.confirm, ctx):
        return ExecutionResult.skip(step.name, step.label, "user_declined", detail="declined")

    if ctx.dry_run:
        return ExecutionResult.skip(step.name, step.label, "dry_run", detail="would install")

    # ── Install ──
    outcome = run_install(step.install, ctx)
    if not outcome.ok:
        return _failed(step, ctx, _failure_detail(outcome), outcome.exit_code)

    # Curl-piped installers can exit 0 without installing anything.
    after = detect(step.probe, ctx)
    if after.present:
        return ExecutionResult.success(step.name, step.label, version=after.version)
    if step.probe.kind == "path":
        return _failed(step, ctx, "not found after install", outcome.exit_code)
    return ExecutionResult.success(step.name, step.label, version=UNKNOWN_VERSION)


def probe(steps: list[Step], ctx: RunContext) -> BootstrapReport:
    """Detect every step without installing anything.

    Condition-gated steps are still detected: a tool installed by
    other means is reported as present.
    """
    report = BootstrapReport(policy=ctx.policy.value)
    for step in steps:
        found = detect(step.probe, ctx)
        if found.present:
            result = ExecutionResult.skip(
                step.name, step.label, "already_present", version=found.version,
            )
        else:
            result = ExecutionResult.skip(step.name, step.label, "not_installed")
        report.results.append(result)
    return report


def _failed(step: Step, ctx: RunContext, detail: str, exit_code: int | None) -> ExecutionResult:
    if step.foundational:
        ctx.failed_foundations.add(step.name)
    return ExecutionResult.failure(step.name, step.label, detail=detail, exit_code=exit_code)


def _failure_detail(outcome: ProcessResult) -> str:
    if outcome.timed_out:
        return "timed out"
    if outcome.exit_code == NOT_FOUND_EXIT and outcome.stderr:
        return outcome.stderr
    return f"exit {outcome.exit_code}"


def _confirmed(prompt: str, ctx: RunContext) -> bool:
    if ctx.assume_yes is not None:
        return ctx.assume_yes
    if ctx.confirm is None:
        return False
    return ctx.confirm(prompt)
