"""
Step registry — the fixed, ordered Web3 toolchain checklist.

Pure data.  Order matters: Homebrew is the foundational step most of
the others depend on, npm must exist before the npm-installed CLIs,
and Rust before Substrate's ``subkey``.
"""

from __future__ import annotations

from web3bootstrap.core.models.step import (
    Command,
    InstallPlan,
    Probe,
    Step,
)
from web3bootstrap.errors import ConfigError

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
FOUNDRY_INSTALL_URL = "https://foundry.paradigm.xyz"
RUSTUP_INSTALL_URL = "https://sh.rustup.rs"
SOLANA_INSTALL_URL = "https://release.solana.com/stable/install"
SUBSTRATE_GIT_URL = "https://github.com/paritytech/substrate"

DOCKER_PROMPT = "Do you want to install Docker (Docker Desktop)?"

_BREW = ("foundation:homebrew", "cli:brew")
_NPM = ("cli:npm",)


def _brew(*formulae: str, cask: bool = False) -> Command:
    argv = ("brew", "install", "--cask", *formulae) if cask else ("brew", "install", *formulae)
    return Command(argv)


def _fetch_then_run(url: str, shell: str) -> str:
    """Download an install script, then run it; a failed download fails the command."""
    return f'set -e; script="$(curl -fsSL {url})"; {shell} -c "$script"'


def _npm_global(package: str) -> InstallPlan:
    return InstallPlan(commands=(Command(("npm", "install", "-g", package)),))


TOOL_RECIPES: tuple[Step, ...] = (
    Step(
        name="rosetta",
        label="Rosetta 2",
        probe=Probe(cli="/usr/bin/pgrep", version_args=("oahd",), kind="process"),
        install=InstallPlan(commands=(
            Command(("/usr/sbin/softwareupdate", "--install-rosetta", "--agree-to-license")),
        )),
        conditions=("apple_silicon",),
    ),
    Step(
        name="homebrew",
        label="Homebrew",
        probe=Probe(cli="brew", pattern=r"Homebrew\s+(\S+)"),
        install=InstallPlan(
            commands=(
                Command(("bash", "-c", _fetch_then_run(HOMEBREW_INSTALL_URL, "/bin/bash"))),
            ),
            locate=("/opt/homebrew/bin/brew", "/usr/local/bin/brew", "/home/linuxbrew/.linuxbrew/bin/brew"),
            profile_line='eval "$({binary} shellenv)"',
        ),
        foundational=True,
        refresh=Command(("brew", "update")),
    ),
    Step(
        name="node",
        label="Node.js",
        probe=Probe(cli="node", pattern=r"(v\d+\.\d+\.\d+)"),
        install=InstallPlan(commands=(_brew("node"),)),
        conditions=_BREW,
    ),
    Step(
        # Ships with node; detected for the summary only.
        name="npm",
        label="npm",
        probe=Probe(cli="npm", pattern=r"(\d+\.\d+\.\d+)"),
    ),
    Step(
        name="yarn",
        label="Yarn",
        probe=Probe(cli="yarn", pattern=r"(\d+\.\d+\.\d+)"),
        install=InstallPlan(commands=(_brew("yarn"),)),
        conditions=_BREW,
    ),
    Step(
        name="hardhat",
        label="Hardhat",
        probe=Probe(cli="hardhat", pattern=r"(\d+\.\d+\.\d+)"),
        install=_npm_global("hardhat"),
        conditions=_NPM,
    ),
    Step(
        name="truffle",
        label="Truffle",
        probe=Probe(cli="truffle", version_args=("version",), pattern=r"Truffle v(\S+)"),
        install=_npm_global("truffle"),
        conditions=_NPM,
    ),
    Step(
        name="ganache",
        label="Ganache",
        probe=Probe(cli="ganache", pattern=r"v?(\d+\.\d+\.\d+)"),
        install=_npm_global("ganache"),
        conditions=_NPM,
    ),
    Step(
        name="near",
        label="NEAR CLI",
        probe=Probe(cli="near", pattern=r"(\d+\.\d+\.\d+)"),
        install=_npm_global("near-cli"),
        conditions=_NPM,
    ),
    Step(
        name="foundry",
        label="Foundry (forge)",
        probe=Probe(cli="forge", pattern=r"forge\s+(\S+)"),
        install=InstallPlan(
            commands=(
                Command(
                    ("brew", "install", "foundryup"),
                    fallback=("bash", "-c", f"set -o pipefail; curl -fsSL {FOUNDRY_INSTALL_URL} | bash"),
                ),
                Command(("foundryup",)),
            ),
            post_path=("~/.foundry/bin",),
        ),
    ),
    Step(
        name="geth",
        label="Geth",
        probe=Probe(cli="geth", version_args=("version",), pattern=r"Version:\s*(\S+)"),
        install=InstallPlan(commands=(
            Command(("brew", "tap", "ethereum/ethereum")),
            _brew("ethereum"),
        )),
        conditions=_BREW,
    ),
    Step(
        name="ipfs",
        label="IPFS",
        probe=Probe(cli="ipfs", pattern=r"version\s+(\S+)"),
        install=InstallPlan(commands=(_brew("ipfs"),)),
        conditions=_BREW,
    ),
    Step(
        name="rust",
        label="Rust (cargo)",
        probe=Probe(cli="cargo", pattern=r"cargo\s+(\S+)"),
        install=InstallPlan(
            commands=(Command(("bash", "-c", f"set -o pipefail; curl -fsSL {RUSTUP_INSTALL_URL} | bash -s -- -y")),),
            post_path=("~/.cargo/bin",),
        ),
    ),
    Step(
        name="subkey",
        label="Substrate (subkey)",
        probe=Probe(cli="subkey", pattern=r"subkey\s+(\S+)"),
        install=InstallPlan(
            commands=(
                Command(("cargo", "install", "--git", SUBSTRATE_GIT_URL, "--force", "subkey")),
            ),
            post_path=("~/.cargo/bin",),
        ),
        conditions=("cli:cargo",),
    ),
    Step(
        name="solana",
        label="Solana CLI",
        probe=Probe(cli="solana", pattern=r"solana-cli\s+(\S+)"),
        install=InstallPlan(
            commands=(
                Command(
                    ("brew", "install", "solana"),
                    fallback=("sh", "-c", _fetch_then_run(SOLANA_INSTALL_URL, "sh")),
                ),
            ),
            post_path=("~/.local/share/solana/install/active_release/bin",),
        ),
    ),
    Step(
        name="docker",
        label="Docker",
        probe=Probe(cli="docker", pattern=r"Docker version\s+([^,\s]+)"),
        install=InstallPlan(commands=(_brew("docker", cask=True),)),
        conditions=_BREW,
        confirm=DOCKER_PROMPT,
    ),
    Step(
        name="solc",
        label="Solidity (solc)",
        probe=Probe(cli="solc", pattern=r"Version:\s*(\S+)"),
        install=InstallPlan(commands=(
            Command(("brew", "tap", "ethereum/ethereum")),
            _brew("solidity"),
        )),
        conditions=_BREW,
    ),
)


def default_registry() -> list[Step]:
    """Return the checklist in execution order."""
    return list(TOOL_RECIPES)


def step_names(steps: list[Step] | tuple[Step, ...] = TOOL_RECIPES) -> list[str]:
    return [s.name for s in steps]


def select_steps(
    steps: list[Step],
    only: list[str] | None = None,
    skip: list[str] | None = None,
) -> list[Step]:
    """Filter the registry, keeping its order.

    Raises:
        ConfigError: if ``only`` or ``skip`` names an unknown step.
    """
    known = set(step_names(steps))
    unknown = sorted({*(only or []), *(skip or [])} - known)
    if unknown:
        raise ConfigError(
            f"Unknown step(s): {', '.join(unknown)}. Valid: {', '.join(step_names(steps))}"
        )
    selected = [s for s in steps if not only or s.name in only]
    return [s for s in selected if s.name not in (skip or [])]
