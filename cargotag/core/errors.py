"""Exit codes for the cargo-tag CLI.

Each failure class of a tagging run maps to one stable process exit code
so automation can tell a bad manifest from a rejected push.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI.

    - 0: Success (tag created, skipped, or dry run)
    - 1: User error (bad input, unreadable manifest, missing version)
    - 2: Git error (tag, config or push command failed)
    - 4: Network error (refs API failure other than not-found)
    - 5: I/O error (outputs file not writable)
    """

    OK = 0
    USER_ERROR = 1
    GIT_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
