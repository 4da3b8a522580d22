"""Subprocess execution behind a narrow command-runner interface.

Git is the only external program a tagging run invokes. Every invocation
goes through a CommandRunner so tests can substitute FakeRunner and never
touch a real repository.

Usage:
    runner = SubprocessRunner()
    out = runner.run("git", ["tag", "--list", "v1.0.0"], cwd=Path("."))
    if out.ok:
        print(out.stdout)
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

__all__ = ["CommandOutput", "CommandRunner", "SubprocessRunner", "FakeRunner"]


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Captured result of one command.

    Attributes:
        command: The command and arguments that were executed.
        stdout: Standard output.
        stderr: Standard error (or the spawn/timeout failure reason).
        returncode: Exit status; -1 when the process could not run to completion.
    """

    command: tuple[str, ...]
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


@runtime_checkable
class CommandRunner(Protocol):
    """Runs a command and reports stdout, stderr and exit status."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
    ) -> CommandOutput: ...


class SubprocessRunner:
    """Production runner using subprocess.run with captured text output."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
    ) -> CommandOutput:
        cmd = (command, *args)
        try:
            proc = subprocess.run(
                list(cmd),
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return CommandOutput(
                command=cmd,
                stderr=f"Command timed out after {timeout}s",
                returncode=-1,
            )
        except OSError as e:
            return CommandOutput(command=cmd, stderr=str(e), returncode=-1)

        return CommandOutput(
            command=cmd,
            stdout=proc.stdout,
            stderr=proc.stderr,
            returncode=proc.returncode,
        )


@dataclass(frozen=True, slots=True)
class _Scripted:
    prefix: tuple[str, ...]
    stdout: str
    stderr: str
    returncode: int


def _empty_calls() -> list[tuple[str, ...]]:
    return []


def _empty_script() -> list[_Scripted]:
    return []


@dataclass
class FakeRunner:
    """Runner that replays scripted outputs and records every call.

    Calls without a scripted response succeed with empty output. When several
    scripted prefixes match, the longest one wins.

    Usage:
        runner = FakeRunner()
        runner.on("git", "tag", "--list", stdout="v1.0.0\\n")
        runner.on("git", "push", returncode=1, stderr="rejected")
    """

    calls: list[tuple[str, ...]] = field(default_factory=_empty_calls)
    _script: list[_Scripted] = field(default_factory=_empty_script)

    def on(self, *prefix: str, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self._script.append(_Scripted(tuple(prefix), stdout, stderr, returncode))

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
    ) -> CommandOutput:
        cmd = (command, *args)
        self.calls.append(cmd)

        best: _Scripted | None = None
        for entry in self._script:
            if cmd[: len(entry.prefix)] != entry.prefix:
                continue
            if best is None or len(entry.prefix) >= len(best.prefix):
                best = entry

        if best is None:
            return CommandOutput(command=cmd)
        return CommandOutput(
            command=cmd,
            stdout=best.stdout,
            stderr=best.stderr,
            returncode=best.returncode,
        )

    # Test helper methods

    def ran(self, *prefix: str) -> bool:
        """True if any recorded call starts with prefix."""
        return any(call[: len(prefix)] == prefix for call in self.calls)
