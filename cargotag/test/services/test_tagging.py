"""Tests for the tagging workflow."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

import pytest

from cargotag.core.config import RunConfig
from cargotag.core.result import Err, Ok, Result
from cargotag.git.repository import Repository
from cargotag.github.http import MockHttpClient
from cargotag.output.console import MockConsole
from cargotag.platform.process import CommandOutput, FakeRunner
from cargotag.services.errors import TagError
from cargotag.services.tag_check import LocalTagChecker, RemoteRefChecker
from cargotag.services.tagging import (
    BOT_EMAIL,
    BOT_NAME,
    RunOutputs,
    TagDecision,
    TagService,
    create_tag,
    publish_tag,
    render_message,
)

MUTATING = (("git", "config"), ("git", "tag", "-a"), ("git", "push"))


class StubChecker:
    def __init__(self, result: Result[bool, TagError]) -> None:
        self.result = result
        self.asked: list[str] = []

    def exists(self, tag: str) -> Result[bool, TagError]:
        self.asked.append(tag)
        return self.result


class TagStoreRunner(FakeRunner):
    """FakeRunner whose `git tag -a` / `git tag --list` share a tag set."""

    def __init__(self) -> None:
        super().__init__()
        self.tags: set[str] = set()

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
    ) -> CommandOutput:
        out = super().run(command, args, cwd=cwd, timeout=timeout)
        if list(args[:2]) == ["tag", "-a"]:
            self.tags.add(args[2])
        if list(args[:2]) == ["tag", "--list"] and args[2] in self.tags:
            return CommandOutput(command=out.command, stdout=f"{args[2]}\n")
        return out


def _manifest(tmp_path: Path, version: str = "2.0.0") -> Path:
    path = tmp_path / "Cargo.toml"
    path.write_text(f'[package]\nname = "app"\nversion = "{version}"\n', encoding="utf-8")
    return path


def _config(tmp_path: Path, **kwargs: object) -> RunConfig:
    base = RunConfig(manifest_path=Path("Cargo.toml"), repo_root=tmp_path)
    return replace(base, **kwargs)  # type: ignore[arg-type]


def _service(
    tmp_path: Path,
    *,
    exists: Result[bool, TagError] = Ok(False),
    runner: FakeRunner | None = None,
    **config: object,
) -> tuple[TagService, FakeRunner, MockConsole]:
    runner = runner or FakeRunner()
    console = MockConsole()
    service = TagService(
        config=_config(tmp_path, **config),
        repo=Repository(tmp_path, runner),
        checker=StubChecker(exists),
        console=console,
    )
    return service, runner, console


def _mutated(runner: FakeRunner) -> bool:
    return any(runner.ran(*prefix) for prefix in MUTATING)


class TestRenderMessage:
    def test_substitutes_version(self) -> None:
        assert render_message("Release {version}", "1.2.3") == "Release 1.2.3"

    def test_without_placeholder_passes_through(self) -> None:
        assert render_message("Automated release", "1.2.3") == "Automated release"

    def test_single_substitution(self) -> None:
        assert render_message("{version} ({version})", "1.0") == "1.0 ({version})"


class TestRunOutputs:
    @pytest.mark.parametrize(
        ("decision", "created"),
        [
            (TagDecision.ALREADY_EXISTS, "false"),
            (TagDecision.WOULD_CREATE, "false"),
            (TagDecision.CREATED, "true"),
            (TagDecision.CREATED_AND_PUSHED, "true"),
        ],
    )
    def test_outputs_per_decision(self, decision: TagDecision, created: str) -> None:
        outputs = RunOutputs("1.0.0", "v1.0.0", decision)
        assert outputs.as_outputs() == {
            "version": "1.0.0",
            "tag-created": created,
            "tag-name": "v1.0.0",
        }


class TestCreateAndPublish:
    def test_create_configures_bot_identity_first(self, tmp_path: Path) -> None:
        runner = FakeRunner()

        assert create_tag(Repository(tmp_path, runner), "v1.0.0", "Release 1.0.0") == Ok(None)
        assert runner.calls == [
            ("git", "config", "user.name", BOT_NAME),
            ("git", "config", "user.email", BOT_EMAIL),
            ("git", "tag", "-a", "v1.0.0", "-m", "Release 1.0.0"),
        ]

    def test_identity_failure_stops_before_tag(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        runner.on("git", "config", returncode=255, stderr="error: could not lock config file")

        result = create_tag(Repository(tmp_path, runner), "v1.0.0", "m")

        assert isinstance(result, Err)
        assert result.error.kind == "git_failed"
        assert not runner.ran("git", "tag")

    def test_push_rejection_is_fatal(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        runner.on("git", "push", returncode=1, stderr="! [rejected] v1.0.0 (already exists)")

        result = publish_tag(Repository(tmp_path, runner), "v1.0.0")

        assert isinstance(result, Err)
        assert result.error.kind == "push_rejected"
        assert result.error.hint is not None
        assert "rejected" in result.error.hint


class TestTagService:
    def test_create_and_push(self, tmp_path: Path) -> None:
        _manifest(tmp_path, "2.0.0")
        service, runner, console = _service(tmp_path)

        result = service.run()

        assert result == Ok(RunOutputs("2.0.0", "v2.0.0", TagDecision.CREATED_AND_PUSHED))
        assert ("git", "tag", "-a", "v2.0.0", "-m", "Release 2.0.0") in runner.calls
        assert runner.calls[-1] == ("git", "push", "origin", "v2.0.0")
        assert "info: Detected version: 2.0.0" in console.messages
        assert "OK Pushed tag v2.0.0 to origin." in console.messages

    def test_existing_tag_skips_all_mutations(self, tmp_path: Path) -> None:
        _manifest(tmp_path)
        service, runner, console = _service(tmp_path, exists=Ok(True))

        result = service.run()

        assert isinstance(result, Ok)
        assert result.value.decision == TagDecision.ALREADY_EXISTS
        assert result.value.as_outputs()["tag-created"] == "false"
        assert not _mutated(runner)
        assert "info: Tag v2.0.0 already exists. Skipping." in console.messages

    @pytest.mark.parametrize("push", [True, False])
    def test_dry_run_never_mutates(self, tmp_path: Path, push: bool) -> None:
        _manifest(tmp_path)
        service, runner, console = _service(tmp_path, dry_run=True, push=push)

        result = service.run()

        assert isinstance(result, Ok)
        assert result.value.decision == TagDecision.WOULD_CREATE
        assert result.value.as_outputs()["tag-created"] == "false"
        assert runner.calls == []
        assert console.find("[dry-run] Would")

    def test_dry_run_with_existing_tag_reports_exists(self, tmp_path: Path) -> None:
        _manifest(tmp_path)
        service, runner, _ = _service(tmp_path, exists=Ok(True), dry_run=True)

        result = service.run()

        assert isinstance(result, Ok)
        assert result.value.decision == TagDecision.ALREADY_EXISTS
        assert runner.calls == []

    def test_no_push(self, tmp_path: Path) -> None:
        _manifest(tmp_path)
        service, runner, _ = _service(tmp_path, push=False)

        result = service.run()

        assert isinstance(result, Ok)
        assert result.value.decision == TagDecision.CREATED
        assert result.value.as_outputs()["tag-created"] == "true"
        assert runner.ran("git", "tag", "-a")
        assert not runner.ran("git", "push")

    def test_prefix_and_template(self, tmp_path: Path) -> None:
        _manifest(tmp_path, "0.3.1")
        service, runner, _ = _service(
            tmp_path, tag_prefix="app-v", message_template="Ship it: {version}", push=False
        )

        result = service.run()

        assert isinstance(result, Ok)
        assert result.value.tag_name == "app-v0.3.1"
        assert ("git", "tag", "-a", "app-v0.3.1", "-m", "Ship it: 0.3.1") in runner.calls

    def test_checker_receives_computed_name(self, tmp_path: Path) -> None:
        _manifest(tmp_path, "1.2.3")
        checker = StubChecker(Ok(True))
        service = TagService(
            config=_config(tmp_path),
            repo=Repository(tmp_path, FakeRunner()),
            checker=checker,
            console=MockConsole(),
        )

        service.run()

        assert checker.asked == ["v1.2.3"]

    def test_manifest_error_aborts_before_check(self, tmp_path: Path) -> None:
        checker = StubChecker(Ok(False))
        service = TagService(
            config=_config(tmp_path),
            repo=Repository(tmp_path, FakeRunner()),
            checker=checker,
            console=MockConsole(),
        )

        result = service.run()

        assert isinstance(result, Err)
        assert result.error.kind == "manifest_invalid"
        assert "Cargo.toml" in result.error.message
        assert checker.asked == []

    def test_check_error_aborts_without_mutation(self, tmp_path: Path) -> None:
        _manifest(tmp_path)
        error = TagError(kind="remote_query_failed", message="Could not check tag v2.0.0")
        service, runner, _ = _service(tmp_path, exists=Err(error))

        assert service.run() == Err(error)
        assert not _mutated(runner)

    def test_push_rejection_fails_run(self, tmp_path: Path) -> None:
        _manifest(tmp_path)
        runner = FakeRunner()
        runner.on("git", "push", returncode=1, stderr="! [rejected] (already exists)")
        service, _, _ = _service(tmp_path, runner=runner)

        result = service.run()

        assert isinstance(result, Err)
        assert result.error.kind == "push_rejected"

    def test_second_run_is_idempotent(self, tmp_path: Path) -> None:
        _manifest(tmp_path, "2.0.0")
        runner = TagStoreRunner()
        repo = Repository(tmp_path, runner)

        def run_once() -> Result[RunOutputs, TagError]:
            console = MockConsole()
            return TagService(
                config=_config(tmp_path, push=False),
                repo=repo,
                checker=LocalTagChecker(repo, console),
                console=console,
            ).run()

        first = run_once()
        second = run_once()

        assert isinstance(first, Ok) and first.value.tag_created is True
        assert isinstance(second, Ok) and second.value.tag_created is False
        assert second.value.decision == TagDecision.ALREADY_EXISTS

    def test_remote_existing_tag_end_to_end(self, tmp_path: Path) -> None:
        _manifest(tmp_path, "2.0.0")
        http = MockHttpClient()
        http.set_status("https://api.github.com/repos/octo/app/git/ref/tags/v2.0.0", 200)
        runner = FakeRunner()
        service = TagService(
            config=_config(tmp_path, token="t", repository="octo/app"),
            repo=Repository(tmp_path, runner),
            checker=RemoteRefChecker(http, api_url="https://api.github.com", repository="octo/app"),
            console=MockConsole(),
        )

        result = service.run()

        assert isinstance(result, Ok)
        assert result.value.as_outputs() == {
            "version": "2.0.0",
            "tag-created": "false",
            "tag-name": "v2.0.0",
        }
        assert runner.calls == []
