"""
API key pool - ordered credentials with a shared rotation cursor.

Keys are never removed: a key that hit its quota is only skipped for the
current attempt sequence, and comes back around on the next rotation.
"""

import os
import random
import threading
from typing import Iterable, List, Optional, Sequence

from autoshorts.config import API_KEY_ENV, API_KEYS_ENV, KEY_POOL_RANDOM_START, LEGACY_API_KEY_ENV
from autoshorts.core.exceptions import ConfigurationError
from autoshorts.core.logging import get_logger, mask_secret

logger = get_logger(__name__, component="key_pool")


def parse_key_list(raw: Optional[str]) -> List[str]:
    """Split a comma separated key list, dropping blanks and duplicates."""
    keys: List[str] = []
    for part in (raw or "").split(","):
        key = part.strip()
        if key and key not in keys:
            keys.append(key)
    return keys


def load_keys_from_env() -> List[str]:
    """API_KEYS wins, then API_KEY, then GEMINI_API_KEY."""
    for env_name in (API_KEYS_ENV, API_KEY_ENV, LEGACY_API_KEY_ENV):
        keys = parse_key_list(os.getenv(env_name))
        if keys:
            logger.info(
                f"Loaded {len(keys)} API key(s) from {env_name}",
                extra={"keys": [mask_secret(key) for key in keys]},
            )
            return keys
    logger.warning("No API key configured (set API_KEYS or API_KEY)")
    return []


class ApiKeyPool:
    """Immutable ordered keys plus a cursor that wraps modulo the pool size."""

    def __init__(self, keys: Iterable[str], start_index: int = 0):
        self._keys: tuple = tuple(keys)
        self._lock = threading.Lock()
        self._cursor = start_index % len(self._keys) if self._keys else 0

    @classmethod
    def from_env(cls, random_start: Optional[bool] = None) -> "ApiKeyPool":
        keys = load_keys_from_env()
        if random_start is None:
            random_start = KEY_POOL_RANDOM_START
        start = random.randrange(len(keys)) if keys and random_start else 0
        return cls(keys, start_index=start)

    @property
    def keys(self) -> Sequence[str]:
        return self._keys

    @property
    def size(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    @property
    def masked_keys(self) -> List[str]:
        return [mask_secret(key) for key in self._keys]

    def select_current(self) -> str:
        """Key at the cursor. Does not move the cursor."""
        if not self._keys:
            raise ConfigurationError("The API key pool is empty")
        with self._lock:
            return self._keys[self._cursor]

    def current(self) -> tuple:
        """``(index, key)`` at the cursor, read atomically."""
        if not self._keys:
            raise ConfigurationError("The API key pool is empty")
        with self._lock:
            return self._cursor, self._keys[self._cursor]

    def advance(self, expected: Optional[int] = None) -> bool:
        """
        Move the cursor to the next key.

        With ``expected`` the move only happens if the cursor still points at
        that index, so two callers that exhausted the same key skip it once.
        Returns whether the cursor moved.
        """
        if not self._keys:
            return False
        with self._lock:
            if expected is not None and self._cursor != expected:
                return False
            self._cursor = (self._cursor + 1) % len(self._keys)
            return True
