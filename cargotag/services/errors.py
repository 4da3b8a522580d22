"""Error type shared by the tagging services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TagErrorKind = Literal[
    "manifest_invalid",
    "auth_failed",
    "rate_limited_or_forbidden",
    "remote_query_failed",
    "git_failed",
    "push_rejected",
    "output_failed",
]


@dataclass(frozen=True, slots=True)
class TagError:
    """Canonical failure payload of a tagging run.

    The CLI renders `message` (plus `hint`) and maps `kind` to an exit code.
    """

    kind: TagErrorKind
    message: str
    hint: str | None = None
