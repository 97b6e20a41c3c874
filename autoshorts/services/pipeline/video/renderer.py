"""
Clip rendering - submit a Veo job, poll it, download the result.

A rendered video can only be fetched with the key that submitted it, so
submit, poll and download all run inside a single executor operation.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from autoshorts.config import VIDEO_POLL_INTERVAL_SECONDS, VIDEO_POLL_MAX_ATTEMPTS
from autoshorts.config.models import (
    VIDEO_ASPECT_RATIO,
    VIDEO_PROMPT_SUFFIX,
    VIDEO_RESOLUTION,
    get_stage_models,
)
from autoshorts.core.exceptions import MalformedResponse, OperationTimeout, UpstreamRejected
from autoshorts.core.logging import get_logger
from autoshorts.services.infrastructure.keys import RotatingCallExecutor
from autoshorts.services.infrastructure.llm.gemini import GeminiGateway, extract_video_uri

logger = get_logger(__name__, component="clip_renderer")


def build_video_prompt(visual_prompt: str) -> str:
    return visual_prompt + VIDEO_PROMPT_SUFFIX


class ClipRenderer:
    def __init__(
        self,
        executor: RotatingCallExecutor,
        gateway: GeminiGateway,
        poll_interval: float = VIDEO_POLL_INTERVAL_SECONDS,
        max_poll_attempts: int = VIDEO_POLL_MAX_ATTEMPTS,
        model: Optional[str] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.executor = executor
        self.gateway = gateway
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts
        self.model = model or get_stage_models().video
        self._sleep = sleep

    async def _wait_for_uri(self, api_key: str, operation: Any, interval: float, max_attempts: int) -> str:
        attempts = 0
        while not getattr(operation, "done", False):
            if attempts >= max_attempts:
                raise OperationTimeout(
                    f"Video operation still running after {attempts} polls",
                    attempts=attempts,
                )
            await self._sleep(interval)
            operation = await self.gateway.refresh_operation(api_key, operation)
            attempts += 1

        error = getattr(operation, "error", None)
        if error:
            raise UpstreamRejected(f"Video operation failed: {error}")

        uri = extract_video_uri(operation)
        if not uri:
            raise MalformedResponse("Video operation finished without a video reference")
        logger.debug(f"Video ready after {attempts} poll(s)")
        return uri

    async def _submit_and_wait(
        self,
        api_key: str,
        visual_prompt: str,
        interval: float,
        max_attempts: int,
    ) -> str:
        operation = await self.gateway.submit_video(
            api_key,
            model=self.model,
            prompt=build_video_prompt(visual_prompt),
            aspect_ratio=VIDEO_ASPECT_RATIO,
            resolution=VIDEO_RESOLUTION,
        )
        return await self._wait_for_uri(api_key, operation, interval, max_attempts)

    async def render(self, visual_prompt: str) -> bytes:
        """
        Full render of one scene, returning the video bytes.

        Submit, poll and download form one attempt, so a quota error while
        polling or downloading rotates the key and submits the render again.
        """

        async def call(api_key: str) -> bytes:
            uri = await self._submit_and_wait(api_key, visual_prompt, self.poll_interval, self.max_poll_attempts)
            return await self.gateway.download(api_key, uri)

        return await self.executor.execute(call, label="video")

    async def render_reference(
        self,
        visual_prompt: str,
        poll_interval: Optional[float] = None,
        max_poll_attempts: Optional[int] = None,
    ) -> str:
        """Submit and poll only; returns the remote video reference without downloading it."""
        interval = self.poll_interval if poll_interval is None else poll_interval
        attempts = self.max_poll_attempts if max_poll_attempts is None else max_poll_attempts

        async def call(api_key: str) -> str:
            return await self._submit_and_wait(api_key, visual_prompt, interval, attempts)

        return await self.executor.execute(call, label="video")
