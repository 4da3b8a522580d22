# SPDX-License-Identifier: MIT

"""Version Reader: extract `package.version` from a Cargo manifest."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from cargotag.core.result import Err, Ok, Result
from cargotag.core.structured import StrDict, as_str_dict, get_str, get_table

__all__ = ["ManifestError", "VersionInfo", "read_manifest_version"]


@dataclass(frozen=True, slots=True)
class ManifestError:
    """Manifest missing, unreadable, invalid, or without a version."""

    message: str
    path: Path
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class VersionInfo:
    version: str
    manifest_path: Path


def _parse_toml(path: Path) -> Result[StrDict, ManifestError]:
    try:
        content = path.read_text(encoding="utf-8")
        data_obj: object = tomllib.loads(content)
    except FileNotFoundError:
        return Err(ManifestError(f"Manifest not found: {path}", path=path))
    except PermissionError:
        return Err(ManifestError(f"Permission denied reading: {path}", path=path))
    except IsADirectoryError:
        return Err(ManifestError(f"Manifest path is a directory: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ManifestError(f"Invalid TOML in {path}: {e}", path=path))
    except (UnicodeDecodeError, OSError) as e:
        return Err(ManifestError(f"Error reading {path}: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ManifestError(f"Manifest root must be a TOML table: {path}", path=path))
    return Ok(data)


def read_manifest_version(path: Path) -> Result[VersionInfo, ManifestError]:
    """Read and parse a Cargo manifest, returning its package version.

    The whole document is parsed (comments, nested tables, arrays) even
    though only `[package].version` is used.

    Args:
        path: Path to Cargo.toml

    Returns:
        Ok(VersionInfo) on success, Err(ManifestError) naming the path otherwise.
    """
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    package = get_table(parsed.value, "package")
    if package is not None and get_table(package, "version") is not None:
        # `version.workspace = true` inherits from the workspace root manifest.
        return Err(
            ManifestError(
                f"No [package].version found in {path}",
                path=path,
                hint="version.workspace = true is not supported; set an explicit "
                "version in [package]",
            )
        )

    version = get_str(package, "version") if package is not None else None
    if version is None:
        return Err(ManifestError(f"No [package].version found in {path}", path=path))

    return Ok(VersionInfo(version=version, manifest_path=path))
