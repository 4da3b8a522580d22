# SPDX-License-Identifier: MIT

"""Tag Existence Checker.

"Does tag T exist?" has two implementations, chosen once per run by
select_checker():

- RemoteRefChecker asks the refs API (authoritative, needs a token).
- LocalTagChecker fetches tags best-effort and lists them locally.
"""

from __future__ import annotations

from typing import Protocol

from cargotag.core.config import RunConfig
from cargotag.core.result import Err, Ok, Result
from cargotag.git.repository import Repository
from cargotag.github.http import HttpClient, HttpError
from cargotag.github.refs import tag_ref_exists
from cargotag.output.console import ConsoleProtocol
from cargotag.services.errors import TagError

__all__ = [
    "TagExistenceChecker",
    "RemoteRefChecker",
    "LocalTagChecker",
    "select_checker",
    "classify_http_error",
]


class TagExistenceChecker(Protocol):
    def exists(self, tag: str) -> Result[bool, TagError]: ...


def classify_http_error(error: HttpError, tag: str) -> TagError:
    """Map a refs API failure (never 404) to a fatal TagError."""
    detail = str(error)
    if error.status == 401:
        return TagError(
            kind="auth_failed",
            message=f"Authentication failed while checking tag {tag}",
            hint=f"{detail}; check the token",
        )
    if error.status in (403, 429):
        return TagError(
            kind="rate_limited_or_forbidden",
            message=f"Refs API refused the request while checking tag {tag}",
            hint=f"{detail}; the token may lack contents:read or the rate limit was hit",
        )
    return TagError(
        kind="remote_query_failed",
        message=f"Could not check tag {tag} on the remote",
        hint=detail,
    )


class RemoteRefChecker:
    """Existence via `GET /repos/{repository}/git/ref/tags/{tag}`."""

    def __init__(self, http: HttpClient, *, api_url: str, repository: str) -> None:
        self.http = http
        self.api_url = api_url
        self.repository = repository

    def exists(self, tag: str) -> Result[bool, TagError]:
        result = tag_ref_exists(
            self.http,
            api_url=self.api_url,
            repository=self.repository,
            tag=tag,
        )
        if isinstance(result, Err):
            return Err(classify_http_error(result.error, tag))
        return result


class LocalTagChecker:
    """Existence via the local tag namespace after a best-effort fetch."""

    def __init__(self, repo: Repository, console: ConsoleProtocol) -> None:
        self.repo = repo
        self.console = console

    def exists(self, tag: str) -> Result[bool, TagError]:
        fetched = self.repo.fetch_tags()
        if isinstance(fetched, Err):
            # A synced clone still has the tag; only completeness suffers.
            self.console.warning(
                f"git fetch --tags failed, using local tags: {fetched.error.message}"
            )

        listed = self.repo.has_tag(tag)
        if isinstance(listed, Err):
            e = listed.error
            return Err(
                TagError(
                    kind="git_failed",
                    message=f"git {e.command} failed",
                    hint=e.message,
                )
            )
        return Ok(listed.value)


def select_checker(
    config: RunConfig,
    *,
    repo: Repository,
    http: HttpClient | None,
    console: ConsoleProtocol,
) -> TagExistenceChecker:
    """Pick the remote check when a token (and so an HTTP client) is available."""
    if config.token and config.repository and http is not None:
        return RemoteRefChecker(http, api_url=config.api_url, repository=config.repository)
    return LocalTagChecker(repo, console)
