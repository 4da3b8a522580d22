"""Shared helpers for the CLI."""

from __future__ import annotations

from typing import NoReturn

import typer

from cargotag.core.errors import ErrorCode
from cargotag.core.result import Err, Result
from cargotag.output.console import ConsoleProtocol, Style
from cargotag.services.errors import TagError, TagErrorKind

_EXIT_CODES: dict[TagErrorKind, ErrorCode] = {
    "manifest_invalid": ErrorCode.USER_ERROR,
    "auth_failed": ErrorCode.NETWORK_ERROR,
    "rate_limited_or_forbidden": ErrorCode.NETWORK_ERROR,
    "remote_query_failed": ErrorCode.NETWORK_ERROR,
    "git_failed": ErrorCode.GIT_ERROR,
    "push_rejected": ErrorCode.GIT_ERROR,
    "output_failed": ErrorCode.IO_ERROR,
}


def exit_code_for(error: TagError) -> ErrorCode:
    return _EXIT_CODES.get(error.kind, ErrorCode.USER_ERROR)


def exit_on_error[T, E](
    result: Result[T, E],
    console: ConsoleProtocol,
    error_code: ErrorCode | None = None,
) -> None:
    """Exit with error if result is Err, otherwise return.

    Expects error objects to have 'message' and optional 'hint' attributes.
    TagErrors pick their exit code from their kind unless error_code is given.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        console.error(message)
        if hint:
            console.print(f"hint: {hint}", Style.DIM)
        code = error_code
        if code is None:
            code = exit_code_for(error) if isinstance(error, TagError) else ErrorCode.USER_ERROR
        exit_with_code(int(code))


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
