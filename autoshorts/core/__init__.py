"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Tagged error taxonomy shared by every component
    - runtime.py: Environment parsing helpers and start-up checks
    - auth.py: Shared-secret check for the scheduled trigger

Usage:
    from autoshorts.core import get_logger, ConfigurationError
"""

from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_job_id,
    clear_context,
    mask_secret,
    LogTimer,
)

from .exceptions import (
    ErrorKind,
    AutoShortsError,
    ConfigurationError,
    QuotaExceeded,
    UpstreamRejected,
    AllKeysExhausted,
    MalformedResponse,
    OperationTimeout,
    JobStateError,
    describe_failure,
)

from .runtime import (
    parse_bool_env,
    env_int,
    env_float,
    assert_directory_writable,
    run_startup_runtime_checks,
)

from .auth import (
    is_production,
    is_trigger_authorized,
    is_request_authorized,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_job_id",
    "clear_context",
    "mask_secret",
    "LogTimer",
    # Errors
    "ErrorKind",
    "AutoShortsError",
    "ConfigurationError",
    "QuotaExceeded",
    "UpstreamRejected",
    "AllKeysExhausted",
    "MalformedResponse",
    "OperationTimeout",
    "JobStateError",
    "describe_failure",
    # Runtime
    "parse_bool_env",
    "env_int",
    "env_float",
    "assert_directory_writable",
    "run_startup_runtime_checks",
    # Auth
    "is_production",
    "is_trigger_authorized",
    "is_request_authorized",
]
