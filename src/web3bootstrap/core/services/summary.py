"""
Summary reporter — pure formatting of run results.

One line per step, in registry order: the detected version, or
``Not installed``.
"""

from __future__ import annotations

from web3bootstrap.core.models.result import ExecutionResult

NOT_INSTALLED = "Not installed"

SUMMARY_TITLE = " Installation Summary "
SUMMARY_WIDTH = 54

_REASON_TEXT: dict[str, str] = {
    "predicate": "skipped",
    "foundational_missing": "skipped",
    "user_declined": "skipped",
    "dry_run": "would install",
    "bundled": "not found",
    "not_installed": "not installed",
}


def summary_value(result: ExecutionResult) -> str:
    """The version column for one result."""
    if result.failed:
        return NOT_INSTALLED
    return result.version or NOT_INSTALLED


def render_summary(results: list[ExecutionResult]) -> list[str]:
    """Render the summary table body, one line per result."""
    return [f"{r.label or r.step}: {summary_value(r)}" for r in results]


def render_banner(title: str = SUMMARY_TITLE, width: int = SUMMARY_WIDTH) -> str:
    return title.center(width, "=")


def render_status_line(result: ExecutionResult) -> str:
    """The single progress line printed as each step finishes."""
    name = result.label or result.step
    if result.failed:
        return f"✗ {name}: install failed ({result.detail or 'error'})"
    if result.installed:
        return f"✓ {name} installed ({result.version})"
    if result.reason == "already_present":
        return f"✓ {name} already installed ({result.version})"

    text = _REASON_TEXT.get(result.reason or "", "skipped")
    if result.detail and result.reason != "dry_run":
        return f"⊘ {name} {text} ({result.detail})"
    return f"⊘ {name} {text}"
