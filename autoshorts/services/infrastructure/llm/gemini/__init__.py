"""
Gemini API access
"""

from .client import (
    GeminiGateway,
    extract_inline_audio,
    extract_video_uri,
    is_quota_error,
    translate_api_errors,
)

__all__ = [
    "GeminiGateway",
    "extract_inline_audio",
    "extract_video_uri",
    "is_quota_error",
    "translate_api_errors",
]
