from __future__ import annotations

from dataclasses import dataclass

from cargotag.core.config import RunConfig
from cargotag.git.repository import Repository
from cargotag.github.http import HttpClient, RealHttpClient
from cargotag.output.console import ConsoleProtocol, RichConsole
from cargotag.platform.process import SubprocessRunner
from cargotag.services.tag_check import TagExistenceChecker, select_checker


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: RunConfig
    repo: Repository
    checker: TagExistenceChecker
    console: ConsoleProtocol


def build_context(config: RunConfig, console: ConsoleProtocol | None = None) -> CLIContext:
    console = console or RichConsole()
    repo = Repository(config.repo_root, SubprocessRunner())
    http: HttpClient | None = RealHttpClient(token=config.token) if config.token else None
    return CLIContext(
        config=config,
        repo=repo,
        checker=select_checker(config, repo=repo, http=http, console=console),
        console=console,
    )
