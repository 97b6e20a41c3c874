"""
Parsing Module

Recovers JSON objects from model responses.

Usage:
    from autoshorts.services.infrastructure.parsing import parse_json_object
"""

from .json_parser import (
    JsonParseError,
    extract_largest_balanced_json,
    parse_json_object,
    strip_markdown_fences,
)

__all__ = [
    "JsonParseError",
    "extract_largest_balanced_json",
    "parse_json_object",
    "strip_markdown_fences",
]
