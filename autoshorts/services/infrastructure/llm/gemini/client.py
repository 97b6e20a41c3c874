"""
Gemini gateway - the only place that talks to the Gemini API.

Each method takes the API key to use for that call, so the rotating executor
stays in charge of which credential is tried. Every SDK or HTTP failure leaves
this module as one of the tagged errors from ``autoshorts.core.exceptions``.
"""

import base64
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Type

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel

from autoshorts.config import VIDEO_DOWNLOAD_TIMEOUT_SECONDS
from autoshorts.core.exceptions import (
    AutoShortsError,
    MalformedResponse,
    OperationTimeout,
    QuotaExceeded,
    UpstreamRejected,
)
from autoshorts.core.logging import get_logger, mask_secret

logger = get_logger(__name__, component="gemini_gateway")

QUOTA_STATUS = "RESOURCE_EXHAUSTED"
REJECTED_CONTENT_TYPES = ("json", "xml", "html", "text/")


def is_quota_error(error: genai_errors.APIError) -> bool:
    return getattr(error, "code", None) == 429 or str(getattr(error, "status", "") or "").upper() == QUOTA_STATUS


@contextmanager
def translate_api_errors(operation: str) -> Iterator[None]:
    """Re-raise SDK and transport failures as tagged application errors."""
    try:
        yield
    except AutoShortsError:
        raise
    except genai_errors.APIError as exc:
        if is_quota_error(exc):
            raise QuotaExceeded(f"{operation}: quota exceeded ({exc.code} {exc.status})") from exc
        raise UpstreamRejected(f"{operation}: {exc.code} {exc.message or exc.status}", status_code=exc.code) from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        if status == 429:
            raise QuotaExceeded(f"{operation}: quota exceeded (HTTP 429)") from exc
        raise UpstreamRejected(f"{operation}: HTTP {status}", status_code=status) from exc
    except httpx.TimeoutException as exc:
        raise OperationTimeout(f"{operation}: request timed out", attempts=1) from exc
    except httpx.HTTPError as exc:
        raise UpstreamRejected(f"{operation}: {exc.__class__.__name__}: {exc}") from exc


def extract_inline_audio(response: Any) -> Optional[bytes]:
    """First inline audio payload of a response, or ``None`` when there is none."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            data = getattr(inline_data, "data", None) if inline_data else None
            if isinstance(data, bytes) and data:
                return data
            if isinstance(data, str) and data:
                try:
                    return base64.b64decode(data)
                except ValueError as exc:
                    raise MalformedResponse("Audio payload is not valid base64") from exc
    return None


def extract_video_uri(operation: Any) -> Optional[str]:
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(response, "generated_videos", None) or []
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None)


def _default_client_factory(api_key: str) -> Any:
    return genai.Client(api_key=api_key)


class GeminiGateway:
    """Async calls for script text, speech and video, one SDK client per key."""

    def __init__(
        self,
        client_factory: Optional[Callable[[str], Any]] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        download_timeout: float = VIDEO_DOWNLOAD_TIMEOUT_SECONDS,
    ):
        self._client_factory = client_factory or _default_client_factory
        self._clients: Dict[str, Any] = {}
        self._http_transport = http_transport
        self._download_timeout = download_timeout

    def client_for(self, api_key: str) -> Any:
        client = self._clients.get(api_key)
        if client is None:
            logger.debug(f"Creating Gemini client for key {mask_secret(api_key)}")
            client = self._client_factory(api_key)
            self._clients[api_key] = client
        return client

    async def generate_json(
        self,
        api_key: str,
        model: str,
        prompt: str,
        temperature: float,
        response_schema: Optional[Type[BaseModel]] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            response_mime_type="application/json",
            response_schema=response_schema,
        )
        with translate_api_errors("script generation"):
            response = await self.client_for(api_key).aio.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        text = getattr(response, "text", None)
        if not text:
            raise MalformedResponse("Script generation returned an empty response")
        return text

    async def synthesize_speech(self, api_key: str, model: str, text: str, voice: str) -> Optional[bytes]:
        """Raw PCM for ``text``; ``None`` when the response carries no audio."""
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
                )
            ),
        )
        with translate_api_errors("speech synthesis"):
            response = await self.client_for(api_key).aio.models.generate_content(
                model=model,
                contents=[types.Content(role="user", parts=[types.Part.from_text(text=text)])],
                config=config,
            )
        return extract_inline_audio(response)

    async def submit_video(
        self,
        api_key: str,
        model: str,
        prompt: str,
        aspect_ratio: str,
        resolution: str,
    ) -> Any:
        config = types.GenerateVideosConfig(
            number_of_videos=1,
            aspect_ratio=aspect_ratio,
            resolution=resolution,
        )
        with translate_api_errors("video submission"):
            return await self.client_for(api_key).aio.models.generate_videos(
                model=model,
                prompt=prompt,
                config=config,
            )

    async def refresh_operation(self, api_key: str, operation: Any) -> Any:
        with translate_api_errors("video polling"):
            return await self.client_for(api_key).aio.operations.get(operation)

    async def download(self, api_key: str, uri: str) -> bytes:
        """Fetch a rendered video; the key travels as the ``key`` query parameter."""
        url = httpx.URL(uri).copy_merge_params({"key": api_key})
        with translate_api_errors("video download"):
            async with httpx.AsyncClient(
                timeout=self._download_timeout,
                follow_redirects=True,
                transport=self._http_transport,
            ) as http:
                response = await http.get(url)
                response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if any(marker in content_type for marker in REJECTED_CONTENT_TYPES):
            raise UpstreamRejected(
                f"Video download returned {content_type or 'no content type'} instead of video data",
                status_code=response.status_code,
            )
        if not response.content:
            raise MalformedResponse("Video download returned an empty body")
        return response.content
