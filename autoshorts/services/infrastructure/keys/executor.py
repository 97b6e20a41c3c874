"""
Rotating call executor - runs one remote operation against the key pool,
failing over to the next key on quota exhaustion.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from autoshorts.config import KEY_ROTATION_BACKOFF_SECONDS
from autoshorts.core.exceptions import AllKeysExhausted, ConfigurationError, ErrorKind
from autoshorts.core.logging import get_logger, mask_secret

from .key_pool import ApiKeyPool

T = TypeVar("T")

logger = get_logger(__name__, component="executor")


def error_kind(error: BaseException) -> Optional[ErrorKind]:
    return getattr(error, "kind", None)


class RotatingCallExecutor:
    """
    Every call gets a budget of ``2 * pool_size`` attempts. Only errors tagged
    ``QUOTA_EXCEEDED`` rotate; anything else propagates on the first attempt.
    """

    def __init__(
        self,
        pool: ApiKeyPool,
        backoff_seconds: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.pool = pool
        self.backoff_seconds = KEY_ROTATION_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return 2 * self.pool.size

    async def execute(self, operation: Callable[[str], Awaitable[T]], label: str = "call") -> T:
        if self.pool.size == 0:
            raise ConfigurationError("No API key configured: set API_KEYS (comma separated) or API_KEY")

        max_attempts = self.max_attempts
        last_error: Optional[BaseException] = None

        for attempt in range(1, max_attempts + 1):
            index, key = self.pool.current()
            try:
                return await operation(key)
            except Exception as exc:
                if error_kind(exc) is not ErrorKind.QUOTA_EXCEEDED:
                    raise
                last_error = exc
                logger.warning(
                    f"Quota exceeded on key {mask_secret(key)} for {label}, rotating",
                    extra={"attempt": attempt, "max_attempts": max_attempts, "key_index": index},
                )
                self.pool.advance(expected=index)
                if attempt < max_attempts:
                    await self._sleep(self.backoff_seconds)

        logger.error(
            f"All {self.pool.size} key(s) exhausted for {label}",
            extra={"attempts": max_attempts},
        )
        raise AllKeysExhausted(self.pool.size, max_attempts, last_error=last_error)
