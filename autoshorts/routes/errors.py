"""
Mapping from application errors to HTTP responses.
"""

from fastapi import HTTPException

from ..core import AutoShortsError, ErrorKind

OPERATOR_STATUS = 503
UPSTREAM_STATUS = 502

STATUS_BY_KIND = {
    ErrorKind.CONFIGURATION: OPERATOR_STATUS,
    ErrorKind.ALL_KEYS_EXHAUSTED: OPERATOR_STATUS,
    ErrorKind.INVALID_STATE: 409,
}


def http_status_for(error: AutoShortsError) -> int:
    return STATUS_BY_KIND.get(error.kind, UPSTREAM_STATUS)


def to_http_exception(error: AutoShortsError) -> HTTPException:
    return HTTPException(
        status_code=http_status_for(error),
        detail={
            "error": error.kind.value,
            "message": error.user_message,
            "requires_operator_action": error.requires_operator_action,
        },
    )
