"""
Tests for models, the step registry and the summary reporter.
"""

import pytest

from web3bootstrap.core.data.recipes import (
    TOOL_RECIPES,
    default_registry,
    select_steps,
    step_names,
)
from web3bootstrap.core.models.result import BootstrapReport, ExecutionResult
from web3bootstrap.core.models.step import Command, Detection
from web3bootstrap.core.services.summary import (
    NOT_INSTALLED,
    render_banner,
    render_status_line,
    render_summary,
    summary_value,
)
from web3bootstrap.errors import ConfigError

# ── Step model ───────────────────────────────────────────────────────


class TestDetection:
    def test_absent(self):
        d = Detection.absent()
        assert not d.present
        assert d.version is None

    def test_found_with_version(self):
        d = Detection.found("1.2.3")
        assert d.present
        assert d.version == "1.2.3"
        assert not d.ambiguous

    def test_found_without_version(self):
        d = Detection.found("")
        assert d.version == "unknown"
        assert d.ambiguous

    def test_command_str(self):
        assert str(Command(("brew", "install", "ipfs"))) == "brew install ipfs"


# ── Results ──────────────────────────────────────────────────────────


class TestExecutionResult:
    def test_skip(self):
        r = ExecutionResult.skip("node", "Node.js", "already_present", version="v20.11.0")
        assert r.skipped
        assert not r.installed
        assert r.version == "v20.11.0"

    def test_success(self):
        r = ExecutionResult.success("ipfs", "IPFS", "0.25.0")
        assert r.installed
        assert r.reason is None

    def test_failure(self):
        r = ExecutionResult.failure("geth", "Geth", detail="exit 1", exit_code=1)
        assert r.failed
        assert r.reason == "install_failed"

    def test_rejects_unknown_reason(self):
        with pytest.raises(ValueError):
            ExecutionResult.skip("x", "X", "because")


class TestBootstrapReport:
    def _report(self) -> BootstrapReport:
        return BootstrapReport(results=[
            ExecutionResult.skip("homebrew", "Homebrew", "already_present", version="4.2.5"),
            ExecutionResult.success("node", "Node.js", "v20.11.0"),
            ExecutionResult.failure("geth", "Geth", detail="exit 1", exit_code=1),
        ])

    def test_counts(self):
        report = self._report()
        assert (report.total, report.installed, report.failed, report.skipped) == (3, 1, 1, 1)
        assert report.status == "partial"

    def test_ok_and_aborted(self):
        assert BootstrapReport().status == "ok"
        assert BootstrapReport(aborted=True, aborted_at="node").status == "aborted"

    def test_get(self):
        report = self._report()
        assert report.get("node").version == "v20.11.0"
        assert report.get("solc") is None

    def test_to_dict(self):
        d = self._report().to_dict()
        assert d["status"] == "partial"
        assert d["policy"] == "lenient"
        assert [r["outcome"] for r in d["results"]] == ["skipped", "installed", "failed"]


# ── Registry ─────────────────────────────────────────────────────────


class TestRegistry:
    def test_names_unique(self):
        names = step_names()
        assert len(names) == len(set(names))

    def test_order(self):
        names = step_names()
        assert names[:3] == ["rosetta", "homebrew", "node"]
        assert names.index("node") < names.index("npm") < names.index("hardhat")
        assert names.index("rust") < names.index("subkey")
        assert names[-2:] == ["docker", "solc"]

    def test_homebrew_is_the_only_foundation(self):
        assert [s.name for s in TOOL_RECIPES if s.foundational] == ["homebrew"]

    def test_brew_steps_depend_on_homebrew(self):
        for step in TOOL_RECIPES:
            if step.install is None or step.name == "homebrew":
                continue
            if step.install.commands[0].argv[0] == "brew" and step.install.commands[0].fallback is None:
                assert "foundation:homebrew" in step.conditions, step.name

    def test_download_failures_fail_the_command(self):
        scripts = [
            argv[-1]
            for step in TOOL_RECIPES if step.install
            for command in step.install.commands
            for argv in (command.argv, command.fallback) if argv
            if "curl" in argv[-1]
        ]
        assert len(scripts) == 4
        for script in scripts:
            assert script.startswith(("set -e;", "set -o pipefail;")), script

    def test_only_docker_asks(self):
        assert [s.name for s in TOOL_RECIPES if s.confirm] == ["docker"]

    def test_default_registry_is_a_copy(self):
        reg = default_registry()
        reg.pop()
        assert len(default_registry()) == len(TOOL_RECIPES)


class TestSelectSteps:
    def test_only_keeps_registry_order(self):
        steps = select_steps(default_registry(), only=["solc", "node"])
        assert step_names(steps) == ["node", "solc"]

    def test_skip(self):
        steps = select_steps(default_registry(), skip=["docker"])
        assert "docker" not in step_names(steps)
        assert len(steps) == len(TOOL_RECIPES) - 1

    def test_unknown(self):
        with pytest.raises(ConfigError, match="Unknown step\\(s\\): metamask"):
            select_steps(default_registry(), skip=["metamask"])


# ── Summary ──────────────────────────────────────────────────────────


class TestSummary:
    def test_one_line_per_result(self):
        results = [
            ExecutionResult.skip("homebrew", "Homebrew", "already_present", version="4.2.5"),
            ExecutionResult.success("hardhat", "Hardhat", "2.19.1"),
            ExecutionResult.skip("rosetta", "Rosetta 2", "predicate", detail="not on Apple Silicon"),
            ExecutionResult.failure("geth", "Geth", detail="exit 1"),
        ]
        assert render_summary(results) == [
            "Homebrew: 4.2.5",
            "Hardhat: 2.19.1",
            f"Rosetta 2: {NOT_INSTALLED}",
            f"Geth: {NOT_INSTALLED}",
        ]

    def test_failed_never_shows_version(self):
        r = ExecutionResult(step="x", outcome="failed", version="1.0")
        assert summary_value(r) == NOT_INSTALLED

    def test_falls_back_to_step_name(self):
        assert render_summary([ExecutionResult.success("ipfs", "", "0.25.0")]) == ["ipfs: 0.25.0"]

    def test_banner(self):
        banner = render_banner()
        assert "Installation Summary" in banner
        assert len(banner) == 54
        assert banner.startswith("=")

    def test_status_lines(self):
        assert render_status_line(
            ExecutionResult.success("node", "Node.js", "v20.11.0")
        ) == "✓ Node.js installed (v20.11.0)"
        assert render_status_line(
            ExecutionResult.skip("node", "Node.js", "already_present", version="v20.11.0")
        ) == "✓ Node.js already installed (v20.11.0)"
        assert render_status_line(
            ExecutionResult.failure("geth", "Geth", detail="exit 1")
        ) == "✗ Geth: install failed (exit 1)"
        assert render_status_line(
            ExecutionResult.skip("docker", "Docker", "user_declined", detail="declined")
        ) == "⊘ Docker skipped (declined)"
        assert render_status_line(
            ExecutionResult.skip("ipfs", "IPFS", "dry_run", detail="would install")
        ) == "⊘ IPFS would install"
        assert render_status_line(
            ExecutionResult.skip("ipfs", "IPFS", "not_installed")
        ) == "⊘ IPFS not installed"
