"""Run configuration resolution.

Inputs arrive the way the host automation platform passes action inputs:
one `INPUT_<NAME>` environment variable per input. CLI options, when given,
override the environment. The result is a frozen RunConfig built once at
the start of a run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "RunConfig",
    "ConfigError",
    "resolve_config",
    "get_input",
    "parse_bool",
    "DEFAULT_MANIFEST_PATH",
    "DEFAULT_TAG_PREFIX",
    "DEFAULT_MESSAGE_TEMPLATE",
    "DEFAULT_API_URL",
]

DEFAULT_MANIFEST_PATH = "src-tauri/Cargo.toml"
DEFAULT_TAG_PREFIX = "v"
DEFAULT_MESSAGE_TEMPLATE = "Release {version}"
DEFAULT_API_URL = "https://api.github.com"

# Same grammar as the YAML 1.2 core schema booleans accepted by the host toolkit.
_TRUE_VALUES = frozenset({"true", "True", "TRUE"})
_FALSE_VALUES = frozenset({"false", "False", "FALSE"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when an input is missing or cannot be coerced."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Resolved configuration for a single tagging run.

    Attributes:
        manifest_path: Path to Cargo.toml (relative paths resolve against repo_root)
        tag_prefix: Literal prefix prepended to the version
        message_template: Annotation message, `{version}` is substituted
        push: Push the created tag to origin
        dry_run: Decide only, never mutate
        token: Access token for the refs API (None selects the local check)
        repository: `owner/name` slug used by the refs API
        api_url: Base URL of the hosting service API
        repo_root: Working copy every git command runs in
    """

    manifest_path: Path
    tag_prefix: str = DEFAULT_TAG_PREFIX
    message_template: str = DEFAULT_MESSAGE_TEMPLATE
    push: bool = True
    dry_run: bool = False
    token: str | None = None
    repository: str | None = None
    api_url: str = DEFAULT_API_URL
    repo_root: Path = Path(".")

    @property
    def resolved_manifest_path(self) -> Path:
        if self.manifest_path.is_absolute():
            return self.manifest_path
        return self.repo_root / self.manifest_path

    def tag_name(self, version: str) -> str:
        """Compute the tag name (plain concatenation, no separator added)."""
        return f"{self.tag_prefix}{version}"


def get_input(env: Mapping[str, str], name: str) -> str:
    """Read an action input from the environment.

    `cargo-path` is read from `INPUT_CARGO-PATH`: upper-cased, spaces become
    underscores, hyphens are kept.
    """
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def parse_bool(name: str, raw: str) -> Result[bool, ConfigError]:
    """Coerce an input string to bool."""
    if raw in _TRUE_VALUES:
        return Ok(True)
    if raw in _FALSE_VALUES:
        return Ok(False)
    return Err(
        ConfigError(
            message=f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}",
            hint="Support boolean input list: `true | True | TRUE | false | False | FALSE`",
        )
    )


def _value(
    env: Mapping[str, str],
    overrides: Mapping[str, str | None],
    name: str,
) -> str:
    override = overrides.get(name)
    if override is not None:
        return override.strip()
    return get_input(env, name)


def _bool_value(
    env: Mapping[str, str],
    overrides: Mapping[str, str | None],
    name: str,
    default: bool,
) -> Result[bool, ConfigError]:
    raw = _value(env, overrides, name)
    if not raw:
        return Ok(default)
    return parse_bool(name, raw)


def resolve_config(
    env: Mapping[str, str],
    overrides: Mapping[str, str | None] | None = None,
    *,
    repo_root: Path | None = None,
) -> Result[RunConfig, ConfigError]:
    """Build a RunConfig from environment inputs and CLI overrides.

    Args:
        env: Environment mapping (usually os.environ)
        overrides: Input name -> value from CLI options; None means "not given"
        repo_root: Working copy root (defaults to the current directory)

    Returns:
        Ok(RunConfig) on success, Err(ConfigError) for an invalid boolean
        input or a token without a repository slug.
    """
    given = overrides or {}

    push = _bool_value(env, given, "push", default=True)
    if isinstance(push, Err):
        return push
    dry_run = _bool_value(env, given, "dry-run", default=False)
    if isinstance(dry_run, Err):
        return dry_run

    # The platform token wins over an explicit input.
    token = env.get("GITHUB_TOKEN", "").strip() or _value(env, given, "token") or None
    repository = env.get("GITHUB_REPOSITORY", "").strip() or None
    if token is not None and repository is None:
        return Err(
            ConfigError(
                message="A token was provided but GITHUB_REPOSITORY is not set",
                hint="Set GITHUB_REPOSITORY=owner/name, or drop the token to check tags locally",
            )
        )

    return Ok(
        RunConfig(
            manifest_path=Path(_value(env, given, "cargo-path") or DEFAULT_MANIFEST_PATH),
            tag_prefix=_value(env, given, "tag-prefix") or DEFAULT_TAG_PREFIX,
            message_template=_value(env, given, "commit-message") or DEFAULT_MESSAGE_TEMPLATE,
            push=push.value,
            dry_run=dry_run.value,
            token=token,
            repository=repository,
            api_url=(env.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL).rstrip("/"),
            repo_root=repo_root if repo_root is not None else Path.cwd(),
        )
    )
