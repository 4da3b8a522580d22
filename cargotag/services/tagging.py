# SPDX-License-Identifier: MIT

"""Tagging workflow: read version, check, create, push.

TagService.run() walks the steps strictly in order and stops at the first
failure. Reporting is left to services.report so a failed run never
writes outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from cargotag.core.config import RunConfig
from cargotag.core.result import Err, Ok, Result
from cargotag.git.repository import GitError, Repository
from cargotag.output.console import ConsoleProtocol
from cargotag.services.errors import TagError, TagErrorKind
from cargotag.services.manifest import read_manifest_version
from cargotag.services.tag_check import TagExistenceChecker

__all__ = [
    "BOT_NAME",
    "BOT_EMAIL",
    "DEFAULT_REMOTE",
    "TagDecision",
    "RunOutputs",
    "TagService",
    "render_message",
    "create_tag",
    "publish_tag",
]

BOT_NAME = "github-actions[bot]"
BOT_EMAIL = "github-actions[bot]@users.noreply.github.com"
DEFAULT_REMOTE = "origin"


class TagDecision(Enum):
    ALREADY_EXISTS = auto()
    WOULD_CREATE = auto()
    CREATED = auto()
    CREATED_AND_PUSHED = auto()

    @property
    def created(self) -> bool:
        return self in (TagDecision.CREATED, TagDecision.CREATED_AND_PUSHED)

    @property
    def pushed(self) -> bool:
        return self == TagDecision.CREATED_AND_PUSHED


@dataclass(frozen=True, slots=True)
class RunOutputs:
    """Externally observable result of a successful run."""

    version: str
    tag_name: str
    decision: TagDecision

    @property
    def tag_created(self) -> bool:
        return self.decision.created

    def as_outputs(self) -> dict[str, str]:
        """Named outputs in the order they are written."""
        return {
            "version": self.version,
            "tag-created": "true" if self.tag_created else "false",
            "tag-name": self.tag_name,
        }


def render_message(template: str, version: str) -> str:
    """Substitute the first `{version}` placeholder; other text passes through."""
    return template.replace("{version}", version, 1)


def _git_error(e: GitError, kind: TagErrorKind = "git_failed") -> TagError:
    return TagError(
        kind=kind,
        message=f"git {e.command} failed (exit {e.returncode})",
        hint=e.message,
    )


def create_tag(repo: Repository, tag: str, message: str) -> Result[None, TagError]:
    """Configure the bot identity and create an annotated tag at HEAD."""
    for key, value in (("user.name", BOT_NAME), ("user.email", BOT_EMAIL)):
        configured = repo.set_config(key, value)
        if isinstance(configured, Err):
            return Err(_git_error(configured.error))

    created = repo.create_annotated_tag(tag, message)
    if isinstance(created, Err):
        return Err(_git_error(created.error))
    return Ok(None)


def publish_tag(
    repo: Repository,
    tag: str,
    remote: str = DEFAULT_REMOTE,
) -> Result[None, TagError]:
    """Push a single tag. A rejection (e.g. the tag appeared upstream) is fatal."""
    pushed = repo.push_ref(remote, tag)
    if isinstance(pushed, Err):
        return Err(_git_error(pushed.error, kind="push_rejected"))
    return Ok(None)


class TagService:
    """One tagging run over a resolved configuration.

    Attributes:
        config: Resolved run configuration
        repo: Working copy the tag is created in
        checker: Existence check (remote refs API or local listing)
        console: Progress output
    """

    def __init__(
        self,
        *,
        config: RunConfig,
        repo: Repository,
        checker: TagExistenceChecker,
        console: ConsoleProtocol,
    ) -> None:
        self.config = config
        self.repo = repo
        self.checker = checker
        self.console = console

    def run(self) -> Result[RunOutputs, TagError]:
        cfg = self.config

        info = read_manifest_version(cfg.resolved_manifest_path)
        if isinstance(info, Err):
            e = info.error
            return Err(TagError(kind="manifest_invalid", message=e.message, hint=e.hint))

        version = info.value.version
        tag = cfg.tag_name(version)
        self.console.info(f"Detected version: {version}")

        exists = self.checker.exists(tag)
        if isinstance(exists, Err):
            return exists

        if exists.value:
            self.console.info(f"Tag {tag} already exists. Skipping.")
            return Ok(RunOutputs(version, tag, TagDecision.ALREADY_EXISTS))

        if cfg.dry_run:
            action = "create and push" if cfg.push else "create"
            self.console.info(f"[dry-run] Would {action} tag {tag}")
            return Ok(RunOutputs(version, tag, TagDecision.WOULD_CREATE))

        created = create_tag(self.repo, tag, render_message(cfg.message_template, version))
        if isinstance(created, Err):
            return created
        self.console.success(f"Created tag {tag}")

        if not cfg.push:
            return Ok(RunOutputs(version, tag, TagDecision.CREATED))

        pushed = publish_tag(self.repo, tag)
        if isinstance(pushed, Err):
            return pushed
        self.console.success(f"Pushed tag {tag} to {DEFAULT_REMOTE}.")
        return Ok(RunOutputs(version, tag, TagDecision.CREATED_AND_PUSHED))
