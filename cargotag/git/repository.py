"""Git repository abstraction for tag operations.

Repository wraps the handful of git commands a tagging run needs. All
operations return Result types; nothing here raises on a failed command.

Usage:
    repo = Repository(Path("."), SubprocessRunner())

    match repo.has_tag("v1.2.3"):
        case Ok(exists):
            print("exists" if exists else "absent")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cargotag.core.result import Err, Ok, Result
from cargotag.platform.process import CommandOutput, CommandRunner

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_NETWORK_COMMANDS = frozenset({"fetch", "push"})

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "push origin v1.0.0")
        message: Error message (stderr when available)
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A local working copy.

    Attributes:
        path: Path to the repository root
        runner: Command runner used for every git invocation
    """

    def __init__(self, path: Path, runner: CommandRunner) -> None:
        self.path = path
        self.runner = runner

    def fetch_tags(self) -> Result[str, GitError]:
        """Fetch remote tags with a shallow history.

        Returns:
            Ok(output) on success
            Err(GitError) on failure (no remote, offline, auth)
        """
        return self._checked(["fetch", "--tags", "--depth=1"], "fetch failed")

    def has_tag(self, name: str) -> Result[bool, GitError]:
        """True if `git tag --list <name>` prints exactly that name."""
        result = self._checked(["tag", "--list", name], "tag --list failed")
        if isinstance(result, Err):
            return result
        return Ok(result.value.strip() == name)

    def set_config(self, key: str, value: str) -> Result[None, GitError]:
        """Set a repository-local config value."""
        result = self._checked(["config", key, value], f"config {key} failed")
        if isinstance(result, Err):
            return result
        return Ok(None)

    def create_annotated_tag(self, name: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag at HEAD."""
        result = self._checked(["tag", "-a", name, "-m", message], f"tag -a {name} failed")
        if isinstance(result, Err):
            return result
        return Ok(None)

    def push_ref(self, remote: str, ref: str) -> Result[None, GitError]:
        """Push a single ref to remote. Rejections are returned as errors."""
        result = self._checked(["push", remote, ref], f"push {remote} {ref} failed")
        if isinstance(result, Err):
            return result
        return Ok(None)

    def _checked(self, args: list[str], fallback: str) -> Result[str, GitError]:
        out = self._run(args)
        if out.ok:
            return Ok(out.stdout)
        return Err(
            GitError(
                command=" ".join(args[:3]),
                message=out.stderr.strip() or out.stdout.strip() or fallback,
                returncode=out.returncode,
            )
        )

    def _run(self, args: list[str]) -> CommandOutput:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else _GIT_TIMEOUT_SECONDS
        )
        return self.runner.run("git", args, cwd=self.path, timeout=timeout)
