"""
Host environment probe.

Read-only: CPU architecture, OS, login shell and home directory are
read once at start and never written.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path

# Architecture name normalization (Darwin says arm64, Linux says aarch64).
_ARCH_MAP: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass(frozen=True)
class HostEnvironment:
    """What the bootstrapper knows about the machine it runs on."""

    system: str
    machine: str
    shell: str
    home: str

    @property
    def is_macos(self) -> bool:
        return self.system == "darwin"

    @property
    def is_apple_silicon(self) -> bool:
        return self.is_macos and self.machine == "arm64"

    def to_dict(self) -> dict:
        return {
            "system": self.system,
            "machine": self.machine,
            "shell": self.shell,
            "home": self.home,
            "apple_silicon": self.is_apple_silicon,
        }


def detect_host(env: dict[str, str] | None = None) -> HostEnvironment:
    """Probe the current machine.

    Args:
        env: Environment to read ``SHELL``/``HOME`` from (default: os.environ).
    """
    env = env if env is not None else dict(os.environ)
    machine = platform.machine()
    return HostEnvironment(
        system=platform.system().lower(),
        machine=_ARCH_MAP.get(machine.lower(), machine.lower()),
        shell=os.path.basename(env.get("SHELL", "/bin/zsh")),
        home=env.get("HOME") or str(Path.home()),
    )
