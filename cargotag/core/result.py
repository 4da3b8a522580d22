"""Result type for explicit error handling.

Every step of a tagging run that can fail (reading the manifest, querying
the remote, running git) returns a Result instead of raising, so the CLI
layer is the only place that turns failures into an exit code.

Usage:
    match read_manifest_version(path):
        case Ok(info):
            print(info.version)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
