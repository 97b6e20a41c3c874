import json
import os
import tempfile
from types import SimpleNamespace

import pytest

# Settings are read at import time, so point data at a scratch directory first
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="autoshorts-tests-"))
os.environ.setdefault("AUTOMATION_ENABLED", "false")
for _name in ("KEY_ROTATION_BACKOFF_SECONDS", "VIDEO_POLL_INTERVAL_SECONDS", "TRIGGER_POLL_INTERVAL_SECONDS"):
    os.environ.setdefault(_name, "0")

from autoshorts.core.exceptions import QuotaExceeded  # noqa: E402
from autoshorts.services.infrastructure.keys import ApiKeyPool, RotatingCallExecutor  # noqa: E402


async def no_sleep(_seconds: float) -> None:
    return None


def script_payload(scene_count: int = 4, character: str = "Un lycéen en sweat bleu") -> str:
    return json.dumps({
        "trending_topic": "Le secret des révisions",
        "character_description": character,
        "full_script": " ".join(f"Narration {i}" for i in range(1, scene_count + 1)),
        "scenes": [
            {"visual_prompt": f"Visual {i}", "narration": f"Narration {i}"}
            for i in range(1, scene_count + 1)
        ],
    })


def video_operation(done: bool = True, uri: str | None = "https://videos.example/clip.mp4", error=None):
    videos = [SimpleNamespace(video=SimpleNamespace(uri=uri))] if uri else []
    return SimpleNamespace(
        done=done,
        error=error,
        response=SimpleNamespace(generated_videos=videos) if done else None,
    )


class FakeGateway:
    """
    Stands in for ``GeminiGateway``; every call is recorded with the key used.

    ``quota_keys`` makes every call with those keys raise ``QuotaExceeded``.
    ``failures`` maps a method name to an exception raised on its n-th call
    (``{"download": (3, exc)}`` fails the third download).
    """

    def __init__(self, scene_count: int = 4, script_text: str | None = None):
        self.script_text = script_text if script_text is not None else script_payload(scene_count)
        self.audio: bytes | None = b"\x01\x00" * 480
        self.polls_until_done = 1
        self.quota_keys: set[str] = set()
        self.failures: dict = {}
        self.calls: list[tuple[str, str, dict]] = []
        self.counts: dict[str, int] = {}

    def _record(self, method: str, api_key: str, **kwargs) -> None:
        self.calls.append((method, api_key, kwargs))
        self.counts[method] = self.counts.get(method, 0) + 1
        if api_key in self.quota_keys:
            raise QuotaExceeded(f"{method}: quota exceeded")
        failure = self.failures.get(method)
        if failure and failure[0] == self.counts[method]:
            raise failure[1]

    def calls_to(self, method: str) -> list[tuple[str, str, dict]]:
        return [call for call in self.calls if call[0] == method]

    async def generate_json(self, api_key, model, prompt, temperature, response_schema=None, system_instruction=None):
        self._record("generate_json", api_key, prompt=prompt, temperature=temperature, model=model)
        return self.script_text

    async def synthesize_speech(self, api_key, model, text, voice):
        self._record("synthesize_speech", api_key, text=text, voice=voice)
        return self.audio

    async def submit_video(self, api_key, model, prompt, aspect_ratio, resolution):
        self._record("submit_video", api_key, prompt=prompt, aspect_ratio=aspect_ratio, resolution=resolution)
        operation = video_operation(done=False)
        operation.prompt = prompt
        operation.remaining = self.polls_until_done
        return operation

    async def refresh_operation(self, api_key, operation):
        self._record("refresh_operation", api_key)
        operation.remaining -= 1
        if operation.remaining > 0:
            return operation
        finished = video_operation(done=True, uri=f"https://videos.example/{len(self.calls_to('submit_video'))}.mp4")
        finished.prompt = operation.prompt
        return finished

    async def download(self, api_key, uri):
        self._record("download", api_key, uri=uri)
        return f"clip:{uri}".encode()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def key_pool():
    return ApiKeyPool(["key-alpha-0001", "key-bravo-0002", "key-charlie-0003"])


@pytest.fixture
def executor(key_pool):
    return RotatingCallExecutor(key_pool, backoff_seconds=0, sleep=no_sleep)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep credentials from the developer's shell out of every test"""
    for name in ("API_KEYS", "API_KEY", "GEMINI_API_KEY", "CRON_SECRET", "ENV"):
        monkeypatch.delenv(name, raising=False)
