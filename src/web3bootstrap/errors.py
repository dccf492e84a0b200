"""
Exception hierarchy for the bootstrapper.

Install failures are NOT exceptions: they are recorded as results and
handled by the runner's failure policy.  Exceptions are reserved for
conditions the runner cannot continue from.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base error for this package."""


class ConfigError(BootstrapError):
    """Raised when bootstrap configuration is invalid or unreadable."""


class ProcessLaunchError(BootstrapError):
    """Raised when a command binary cannot be located or executed.

    Distinct from a non-zero exit, which is an ordinary result value.
    """

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Cannot execute '{command}': {reason}")
        self.command = command
        self.reason = reason
