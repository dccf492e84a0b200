"""
Tests for process runners — subprocess runner and mock runner.
"""

import os

import pytest

from web3bootstrap.adapters.base import InvokeOptions, ProcessResult
from web3bootstrap.adapters.mock import MockProcessRunner, MockResponse
from web3bootstrap.adapters.shell.command import SubprocessRunner
from web3bootstrap.errors import ProcessLaunchError

# ── ProcessResult ────────────────────────────────────────────────────


class TestProcessResult:
    def test_ok_on_zero_exit(self):
        assert ProcessResult(exit_code=0).ok

    def test_not_ok_on_nonzero_exit(self):
        assert not ProcessResult(exit_code=2).ok

    def test_not_ok_on_timeout(self):
        assert not ProcessResult(exit_code=0, timed_out=True).ok

    def test_output_combines_streams(self):
        r = ProcessResult(stdout="a\n", stderr="b\n")
        assert r.output == "a\nb\n"


# ── Subprocess Runner ────────────────────────────────────────────────


class TestSubprocessRunner:
    def test_captures_stdout(self):
        r = SubprocessRunner().invoke("sh", ["-c", "echo hello"])
        assert r.ok
        assert r.stdout.strip() == "hello"

    def test_nonzero_exit_is_a_value(self):
        r = SubprocessRunner().invoke("sh", ["-c", "echo oops >&2; exit 3"])
        assert r.exit_code == 3
        assert "oops" in r.stderr

    def test_quiet_discards_output(self):
        r = SubprocessRunner().invoke("sh", ["-c", "echo hidden"], InvokeOptions(quiet=True))
        assert r.ok
        assert r.stdout == ""

    def test_missing_binary_raises(self):
        with pytest.raises(ProcessLaunchError) as exc:
            SubprocessRunner().invoke("definitely-not-a-real-command-w3b")
        assert exc.value.command == "definitely-not-a-real-command-w3b"

    def test_uses_supplied_environment(self):
        env = dict(os.environ, W3B_TEST_VALUE="from-env")
        r = SubprocessRunner().invoke(
            "sh", ["-c", "echo $W3B_TEST_VALUE"], InvokeOptions(env=env),
        )
        assert r.stdout.strip() == "from-env"

    def test_working_directory(self, tmp_path):
        r = SubprocessRunner().invoke("sh", ["-c", "pwd"], InvokeOptions(cwd=str(tmp_path)))
        assert os.path.realpath(r.stdout.strip()) == os.path.realpath(str(tmp_path))

    def test_timeout(self):
        r = SubprocessRunner().invoke("sh", ["-c", "sleep 5"], InvokeOptions(timeout=1))
        assert r.timed_out
        assert not r.ok

    def test_long_output_keeps_first_line(self):
        script = "echo v1.2.3; i=0; while [ $i -lt 1500 ]; do echo padding; i=$((i+1)); done"
        r = SubprocessRunner().invoke("sh", ["-c", script])
        assert r.stdout.splitlines()[0] == "v1.2.3"

    def test_which_honours_path(self, tmp_path):
        tool = tmp_path / "w3b-fake-tool"
        tool.write_text("#!/bin/sh\necho fake\n")
        tool.chmod(0o755)
        runner = SubprocessRunner()
        assert runner.which("w3b-fake-tool", {"PATH": "/nonexistent"}) is None
        assert runner.which("w3b-fake-tool", {"PATH": str(tmp_path)}) == str(tool)

    def test_invoke_resolves_against_env_path(self, tmp_path):
        tool = tmp_path / "w3b-fake-tool"
        tool.write_text("#!/bin/sh\necho fake 1.2.3\n")
        tool.chmod(0o755)
        env = dict(os.environ, PATH=f"{tmp_path}{os.pathsep}{os.environ.get('PATH', '')}")
        r = SubprocessRunner().invoke("w3b-fake-tool", [], InvokeOptions(env=env))
        assert r.stdout.strip() == "fake 1.2.3"


# ── Mock Runner ──────────────────────────────────────────────────────


class TestMockProcessRunner:
    def test_which_only_installed(self):
        mock = MockProcessRunner(installed={"node": "v20.0.0"})
        assert mock.which("node") == "/mock/bin/node"
        assert mock.which("yarn") is None

    def test_which_absolute_path_matches_basename(self):
        mock = MockProcessRunner(installed={"brew": ""})
        assert mock.which("/opt/homebrew/bin/brew") == "/opt/homebrew/bin/brew"

    def test_version_query_echoes_version_line(self):
        mock = MockProcessRunner(installed={"node": "v20.0.0"})
        r = mock.invoke("node", ["--version"])
        assert r.stdout.strip() == "v20.0.0"

    def test_default_success(self):
        mock = MockProcessRunner(installed={"brew": ""})
        r = mock.invoke("brew", ["install", "ipfs"])
        assert r.ok
        assert mock.call_count == 1

    def test_unresolvable_raises_and_is_logged(self):
        mock = MockProcessRunner()
        with pytest.raises(ProcessLaunchError):
            mock.invoke("brew", ["install", "ipfs"])
        assert mock.commands == ["brew install ipfs"]

    def test_unlaunchable(self):
        mock = MockProcessRunner(installed={"geth": ""}, unlaunchable={"geth"})
        with pytest.raises(ProcessLaunchError):
            mock.invoke("geth", ["version"])

    def test_set_failure_matches_prefix(self):
        mock = MockProcessRunner(installed={"npm": ""})
        mock.set_failure("npm", "install", exit_code=243)
        assert mock.invoke("npm", ["install", "-g", "truffle"]).exit_code == 243
        assert mock.invoke("npm", ["--version"]).ok

    def test_response_installs_tool(self):
        mock = MockProcessRunner(installed={"npm": ""})
        mock.set_response(
            "npm", "install", "-g", "hardhat",
            response=MockResponse(installs={"hardhat": "2.19.1"}),
        )
        mock.invoke("npm", ["install", "-g", "hardhat"])
        assert mock.is_installed("hardhat")
        assert mock.invoke("hardhat", ["--version"]).stdout.strip() == "2.19.1"

    def test_quiet_suppresses_scripted_output(self):
        mock = MockProcessRunner(installed={"x": ""})
        mock.set_response("x", response=MockResponse(stdout="noise"))
        assert mock.invoke("x", [], InvokeOptions(quiet=True)).stdout == ""

    def test_reset(self):
        mock = MockProcessRunner(installed={"x": ""})
        mock.set_failure("x")
        mock.invoke("x")
        mock.reset()
        assert mock.call_count == 0
        assert mock.invoke("x").ok
