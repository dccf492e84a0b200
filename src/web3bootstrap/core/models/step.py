"""
Step model — one named, idempotent install-or-skip unit of the checklist.

Steps are pure data.  The detection, predicate and installer services
interpret them; the runner walks them in registry order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

UNKNOWN_VERSION = "unknown"


class FailurePolicy(str, Enum):
    """What the runner does after a step's installer fails."""

    WARN = "warn"      # report, continue with the next step
    ABORT = "abort"    # report, stop the run


class RunPolicy(str, Enum):
    """Run-wide policy.  Strict turns every step's failure into an abort."""

    LENIENT = "lenient"
    STRICT = "strict"


@dataclass(frozen=True)
class Probe:
    """How to tell whether a tool is installed, and which version.

    ``kind="path"``: present when ``cli`` resolves on PATH; the version
    comes from ``cli *version_args``.
    ``kind="process"``: present when ``cli *version_args`` exits 0
    (e.g. ``pgrep oahd`` for Rosetta); no version is parsed.
    """

    cli: str
    version_args: tuple[str, ...] = ("--version",)
    pattern: str | None = None
    kind: str = "path"


@dataclass(frozen=True)
class Command:
    """A single installer command, with an optional fallback.

    The fallback runs when the primary fails or its binary does not
    resolve (``brew install foundryup`` → Foundry's install script).
    """

    argv: tuple[str, ...]
    fallback: tuple[str, ...] | None = None

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class InstallPlan:
    """The commands that install a tool and what they leave behind.

    ``post_path`` directories are prepended to the run's PATH after a
    successful install.  ``locate`` lists candidate binaries; the first
    one that resolves is substituted for ``{binary}`` in
    ``profile_line``, which is appended once to the login profile.
    """

    commands: tuple[Command, ...]
    post_path: tuple[str, ...] = ()
    locate: tuple[str, ...] = ()
    profile_line: str | None = None


@dataclass(frozen=True)
class Step:
    """One entry of the step registry.

    ``conditions`` gate the step before detection (see
    ``services.predicates``).  A step without ``install`` is provided
    by another step (npm comes with node) and is only detected.
    """

    name: str
    label: str
    probe: Probe
    install: InstallPlan | None = None
    conditions: tuple[str, ...] = ()
    failure_policy: FailurePolicy = FailurePolicy.WARN
    foundational: bool = False
    confirm: str | None = None
    refresh: Command | None = None


@dataclass(frozen=True)
class Detection:
    """Detector verdict: absent, or present with a version string."""

    present: bool
    version: str | None = None
    ambiguous: bool = False

    @classmethod
    def absent(cls) -> Detection:
        return cls(present=False)

    @classmethod
    def found(cls, version: str | None = None) -> Detection:
        """Present.  A missing version means the version query failed."""
        if not version:
            return cls(present=True, version=UNKNOWN_VERSION, ambiguous=True)
        return cls(present=True, version=version)
