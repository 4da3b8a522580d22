"""Platform abstraction layer."""

from .process import CommandOutput, CommandRunner, FakeRunner, SubprocessRunner

__all__ = [
    "CommandOutput",
    "CommandRunner",
    "FakeRunner",
    "SubprocessRunner",
]
