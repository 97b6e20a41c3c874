"""
Credential rotation: the shared key pool and the executor that fails over across it
"""

from .key_pool import ApiKeyPool, load_keys_from_env, parse_key_list
from .executor import RotatingCallExecutor

__all__ = [
    "ApiKeyPool",
    "load_keys_from_env",
    "parse_key_list",
    "RotatingCallExecutor",
]
