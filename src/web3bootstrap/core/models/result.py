"""
Execution results — what happened to each step in a run.

The runner produces exactly one ``ExecutionResult`` per step it reaches
and collects them, in order, into a ``BootstrapReport``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel

Outcome = Literal["skipped", "installed", "failed"]

Reason = Literal[
    "already_present",
    "predicate",
    "foundational_missing",
    "user_declined",
    "dry_run",
    "bundled",
    "install_failed",
    "no_installer",
    "not_installed",
]


class ExecutionResult(BaseModel):
    """Outcome of a single step."""

    step: str
    label: str = ""
    outcome: Outcome
    version: str | None = None
    reason: Reason | None = None
    detail: str = ""
    exit_code: int | None = None

    @property
    def skipped(self) -> bool:
        return self.outcome == "skipped"

    @property
    def installed(self) -> bool:
        return self.outcome == "installed"

    @property
    def failed(self) -> bool:
        return self.outcome == "failed"

    @classmethod
    def skip(
        cls,
        step: str,
        label: str,
        reason: Reason,
        version: str | None = None,
        detail: str = "",
    ) -> ExecutionResult:
        """Create a skip result."""
        return cls(
            step=step, label=label, outcome="skipped",
            reason=reason, version=version, detail=detail,
        )

    @classmethod
    def success(cls, step: str, label: str, version: str | None = None) -> ExecutionResult:
        """Create an installed result."""
        return cls(step=step, label=label, outcome="installed", version=version)

    @classmethod
    def failure(
        cls,
        step: str,
        label: str,
        reason: Reason = "install_failed",
        detail: str = "",
        exit_code: int | None = None,
    ) -> ExecutionResult:
        """Create a failed result."""
        return cls(
            step=step, label=label, outcome="failed",
            reason=reason, detail=detail, exit_code=exit_code,
        )


@dataclass
class BootstrapReport:
    """Ordered results of one bootstrap run."""

    policy: str = "lenient"
    results: list[ExecutionResult] = field(default_factory=list)
    aborted: bool = False
    aborted_at: str | None = None

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def installed(self) -> int:
        return sum(1 for r in self.results if r.installed)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def status(self) -> str:
        if self.aborted:
            return "aborted"
        if self.failed == 0:
            return "ok"
        return "partial"

    def get(self, step: str) -> ExecutionResult | None:
        for r in self.results:
            if r.step == step:
                return r
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "policy": self.policy,
            "status": self.status,
            "aborted": self.aborted,
            "aborted_at": self.aborted_at,
            "total": self.total,
            "installed": self.installed,
            "failed": self.failed,
            "skipped": self.skipped,
            "results": [r.model_dump(mode="json") for r in self.results],
        }
