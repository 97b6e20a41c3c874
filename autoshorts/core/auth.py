"""
Shared-secret authorization for the scheduled trigger endpoint.

An external scheduler calls the trigger with ``Authorization: Bearer <CRON_SECRET>``.
When no secret is configured the endpoint is open outside production only.
"""

from __future__ import annotations

import hmac
import os

from fastapi import Request

AUTH_BEARER_PREFIX = "Bearer "


def _cron_secret() -> str:
    return os.getenv("CRON_SECRET", "").strip()


def is_production() -> bool:
    return os.getenv("ENV", "").strip().lower() == "production"


def extract_bearer_token(authorization_header: str | None) -> str | None:
    if not authorization_header:
        return None
    if not authorization_header.startswith(AUTH_BEARER_PREFIX):
        return None
    return authorization_header[len(AUTH_BEARER_PREFIX):].strip() or None


def is_trigger_authorized(authorization_header: str | None) -> bool:
    secret = _cron_secret()
    if not secret:
        return not is_production()
    token = extract_bearer_token(authorization_header)
    if not token:
        return False
    return hmac.compare_digest(token, secret)


def is_request_authorized(request: Request) -> bool:
    return is_trigger_authorized(request.headers.get("Authorization"))
