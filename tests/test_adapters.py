"""
Tests for the adapter protocol, the mock adapter and the shell adapter.
"""

import subprocess
from pathlib import Path

from devsetup.adapters.base import ExecutionContext
from devsetup.adapters.mock import MockAdapter
from devsetup.adapters.shell.command import ShellCommandAdapter
from devsetup.core.models.action import Action, Receipt

# ── Protocol Tests ───────────────────────────────────────────────────


class TestExecutionContext:
    def test_working_dir_from_params(self):
        ctx = ExecutionContext(
            action=Action(id="test", adapter="shell", params={"cwd": "/work"}),
        )
        assert ctx.working_dir == "/work"

    def test_working_dir_default(self):
        ctx = ExecutionContext(action=Action(id="test", adapter="shell"))
        assert ctx.working_dir is None


# ── Mock Adapter Tests ───────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter(adapter_name="test-mock")
        receipt = mock.run("op-1", ["true"])
        assert receipt.ok
        assert mock.call_count == 1

    def test_custom_response(self):
        mock = MockAdapter()
        mock.set_response(
            "op-1",
            Receipt.success(adapter="mock", action_id="op-1", output="custom"),
        )
        assert mock.run("op-1", ["x"]).output == "custom"

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("op-fail", error="Intentional failure")
        receipt = mock.run("op-fail", ["x"])
        assert receipt.failed
        assert "Intentional failure" in receipt.error

    def test_call_log(self):
        mock = MockAdapter()
        for i in range(3):
            mock.run(f"op-{i}", ["x"])
        assert mock.action_ids == ["op-0", "op-1", "op-2"]
        assert mock.calls_for("op-1") == 1

    def test_on_execute_hook(self):
        seen = []
        mock = MockAdapter(on_execute=lambda ctx: seen.append(ctx.action.params["command"]))
        mock.run("op", ["brew", "install", "go"])
        assert seen == [["brew", "install", "go"]]

    def test_dry_run_skips_hook(self):
        seen = []
        mock = MockAdapter(on_execute=seen.append)
        receipt = mock.run("op", ["x"], dry_run=True)
        assert receipt.skipped
        assert seen == []

    def test_reset(self):
        mock = MockAdapter()
        mock.set_failure("op-1")
        mock.run("op-1", ["x"])
        mock.reset()
        assert mock.call_count == 0
        assert mock.run("op-1", ["x"]).ok

    def test_is_available(self):
        assert MockAdapter(available=True).is_available()
        assert not MockAdapter(available=False).is_available()


# ── Shell Adapter Tests ──────────────────────────────────────────────


class TestShellCommandAdapter:
    def test_name(self):
        assert ShellCommandAdapter().name == "shell"

    def test_argv_success(self):
        receipt = ShellCommandAdapter().run("echo", ["echo", "hello"])
        assert receipt.ok
        assert receipt.output == "hello"
        assert receipt.metadata["return_code"] == 0

    def test_shell_string(self):
        receipt = ShellCommandAdapter().run("pipe", "printf 'one\\ntwo\\n' | cat")
        assert receipt.ok
        assert receipt.first_line == "one"

    def test_nonzero_exit(self):
        receipt = ShellCommandAdapter().run("fail", "echo oops >&2; exit 3")
        assert receipt.failed
        assert receipt.metadata["return_code"] == 3
        assert "oops" in receipt.error

    def test_nonzero_exit_without_stderr(self):
        receipt = ShellCommandAdapter().run("fail", ["sh", "-c", "exit 4"])
        assert receipt.failed
        assert "code 4" in receipt.error

    def test_missing_executable(self):
        receipt = ShellCommandAdapter().run("missing", ["definitely-not-a-real-tool-xyz", "--version"])
        assert receipt.failed
        assert "not found" in receipt.error

    def test_sees_live_environment(self, monkeypatch):
        monkeypatch.setenv("DEVSETUP_TEST_MARKER", "visible")
        receipt = ShellCommandAdapter().run("env", "echo $DEVSETUP_TEST_MARKER")
        assert receipt.output == "visible"

    def test_cwd(self, tmp_path: Path):
        receipt = ShellCommandAdapter().run("pwd", ["pwd"], cwd=str(tmp_path))
        assert Path(receipt.output).resolve() == tmp_path.resolve()

    def test_missing_cwd_rejected(self, tmp_path: Path):
        receipt = ShellCommandAdapter().run("pwd", ["pwd"], cwd=str(tmp_path / "nope"))
        assert receipt.failed
        assert "does not exist" in receipt.error

    def test_empty_command_rejected(self):
        receipt = ShellCommandAdapter().run("empty", [])
        assert receipt.failed
        assert "command" in receipt.error

    def test_dry_run_does_not_execute(self, tmp_path: Path):
        marker = tmp_path / "touched"
        receipt = ShellCommandAdapter().run("touch", ["touch", str(marker)], dry_run=True)
        assert receipt.skipped
        assert not marker.exists()
        assert "[dry-run]" in receipt.output

    def test_runs_without_timeout(self, monkeypatch):
        seen = {}
        real_run = subprocess.run

        def _run(*args, **kwargs):
            seen.update(kwargs)
            return real_run(*args, **kwargs)

        monkeypatch.setattr(subprocess, "run", _run)
        receipt = ShellCommandAdapter().run("slow", ["true"])
        assert receipt.ok
        assert seen.get("timeout") is None
