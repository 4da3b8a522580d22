"""Core types: results, configuration, exit codes."""

from .config import ConfigError, RunConfig, resolve_config
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "RunConfig",
    "resolve_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
