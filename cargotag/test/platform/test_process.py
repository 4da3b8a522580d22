"""Tests for cargotag.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from cargotag.platform.process import CommandOutput, CommandRunner, FakeRunner, SubprocessRunner


class TestCommandOutput:
    def test_ok(self) -> None:
        assert CommandOutput(command=("git", "status")).ok is True
        assert CommandOutput(command=("git", "status"), returncode=128).ok is False

    def test_str_short_command(self) -> None:
        out = CommandOutput(command=("git", "push"), returncode=1)
        assert str(out) == "git push failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        out = CommandOutput(command=("git", "tag", "-a", "v1.0.0", "-m", "x"), returncode=1)
        assert str(out) == "git tag -a ... failed (exit 1)"

    def test_frozen(self) -> None:
        out = CommandOutput(command=("git",))
        with pytest.raises(AttributeError):
            out.returncode = 2  # type: ignore[misc]


class TestSubprocessRunner:
    def test_implements_protocol(self) -> None:
        assert isinstance(SubprocessRunner(), CommandRunner)

    def test_success_captures_stdout(self, tmp_path: Path) -> None:
        out = SubprocessRunner().run(sys.executable, ["-c", "print('hello')"], cwd=tmp_path)

        assert out.ok
        assert out.stdout.strip() == "hello"
        assert out.command[1:] == ("-c", "print('hello')")

    def test_failure_keeps_stderr_and_code(self, tmp_path: Path) -> None:
        out = SubprocessRunner().run(
            sys.executable,
            ["-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"],
            cwd=tmp_path,
        )

        assert out.returncode == 3
        assert "bad" in out.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        out = SubprocessRunner().run("nonexistent_command_12345", [], cwd=tmp_path)

        assert out.returncode == -1
        assert out.stderr

    def test_timeout(self, tmp_path: Path) -> None:
        out = SubprocessRunner().run(
            sys.executable,
            ["-c", "import time; time.sleep(5)"],
            cwd=tmp_path,
            timeout=0.2,
        )

        assert out.returncode == -1
        assert "timed out" in out.stderr


class TestFakeRunner:
    def test_implements_protocol(self) -> None:
        assert isinstance(FakeRunner(), CommandRunner)

    def test_unscripted_calls_succeed(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        out = runner.run("git", ["status"], cwd=tmp_path)

        assert out.ok
        assert out.stdout == ""
        assert runner.calls == [("git", "status")]

    def test_longest_prefix_wins(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        runner.on("git", "tag", returncode=1, stderr="generic")
        runner.on("git", "tag", "--list", stdout="v1.0.0\n")

        out = runner.run("git", ["tag", "--list", "v1.0.0"], cwd=tmp_path)

        assert out.ok
        assert out.stdout == "v1.0.0\n"

    def test_ran(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        runner.run("git", ["push", "origin", "v1.0.0"], cwd=tmp_path)

        assert runner.ran("git", "push")
        assert not runner.ran("git", "tag")
