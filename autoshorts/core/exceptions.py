"""
Core Exceptions

Every failure that crosses a component boundary is one of the classes below.
Each carries an ``ErrorKind`` tag so callers decide what to do with a plain
match on the kind instead of inspecting messages.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    QUOTA_EXCEEDED = "quota_exceeded"
    UPSTREAM_REJECTED = "upstream_rejected"
    ALL_KEYS_EXHAUSTED = "all_keys_exhausted"
    MALFORMED_RESPONSE = "malformed_response"
    TIMEOUT = "timeout"
    INVALID_STATE = "invalid_state"


class AutoShortsError(Exception):
    """Base exception for all application errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM_REJECTED
    requires_operator_action: bool = False
    user_message: str = "Generation failed because of a technical error. Check the logs."

    def __str__(self) -> str:
        return self.args[0] if self.args else self.user_message


class ConfigurationError(AutoShortsError):
    """No usable credentials (or other static setup problem)."""

    kind = ErrorKind.CONFIGURATION
    requires_operator_action = True
    user_message = "Missing configuration: no API key found. Set API_KEYS (comma-separated) or API_KEY."


class QuotaExceeded(AutoShortsError):
    """The credential used for the call has hit its usage limit."""

    kind = ErrorKind.QUOTA_EXCEEDED
    user_message = "API quota reached (429). Wait a minute or two before retrying."


class UpstreamRejected(AutoShortsError):
    """The remote service refused the call for a reason other than quota."""

    kind = ErrorKind.UPSTREAM_REJECTED
    user_message = "The AI service rejected the request. See the logs for details."

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AllKeysExhausted(AutoShortsError):
    """Every key in the pool hit its quota within the rotation budget."""

    kind = ErrorKind.ALL_KEYS_EXHAUSTED
    requires_operator_action = True
    user_message = "All API keys have reached their quota. Add keys or wait for the quota to reset."

    def __init__(self, pool_size: int, attempts: int, last_error: Optional[BaseException] = None):
        message = f"All API keys ({pool_size}) failed or reached their quota after {attempts} attempts"
        if last_error is not None:
            message += f". Last error: {last_error}"
        super().__init__(message)
        self.pool_size = pool_size
        self.attempts = attempts
        self.last_error = last_error


class MalformedResponse(AutoShortsError):
    """A response parsed but did not have the expected structure."""

    kind = ErrorKind.MALFORMED_RESPONSE
    user_message = "The AI service returned an unusable response."


class OperationTimeout(AutoShortsError):
    """A long-running remote operation did not finish within its polling budget."""

    kind = ErrorKind.TIMEOUT
    user_message = "Video rendering took too long and was abandoned."

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class JobStateError(AutoShortsError):
    """An illegal job stage transition was requested."""

    kind = ErrorKind.INVALID_STATE
    user_message = "This action is not allowed in the job's current state."


def describe_failure(error: BaseException) -> str:
    """User-facing text for a failure, separating operator problems from transient ones."""
    if isinstance(error, AutoShortsError):
        return error.user_message
    return AutoShortsError.user_message
