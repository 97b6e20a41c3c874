import random
from datetime import datetime

import pytest

from autoshorts.core.exceptions import AllKeysExhausted
from autoshorts.models.generation import VideoCategory
from autoshorts.services.pipeline.script_generation import ScriptGenerator
from autoshorts.services.pipeline.video import ClipRenderer
from autoshorts.services.scheduler import TIMEOUT_MARKER, category_for, run_scheduled_generation
from conftest import FakeGateway, no_sleep


def make_parts(executor, gateway):
    generator = ScriptGenerator(executor, gateway, rng=random.Random(5), model="text")
    renderer = ClipRenderer(executor, gateway, model="veo", sleep=no_sleep)
    return generator, renderer


@pytest.mark.parametrize("hour, category", [
    (0, VideoCategory.SCHOOL_TIPS),
    (11, VideoCategory.SCHOOL_TIPS),
    (12, VideoCategory.BUSINESS_SUCCESS),
    (23, VideoCategory.BUSINESS_SUCCESS),
])
def test_category_follows_time_of_day(hour, category):
    assert category_for(datetime(2026, 3, 2, hour, 30)) is category


@pytest.mark.asyncio
async def test_returns_reference_of_first_scene(executor):
    gateway = FakeGateway()
    generator, renderer = make_parts(executor, gateway)

    result = await run_scheduled_generation(generator, renderer, now=datetime(2026, 3, 2, 9), poll_interval=0)

    assert result == {
        "success": True,
        "category": "SCHOOL_TIPS",
        "topic": "Le secret des révisions",
        "videoUri": "https://videos.example/1.mp4",
    }
    assert "Visual 1" in gateway.calls_to("submit_video")[0][2]["prompt"]
    assert len(gateway.calls_to("submit_video")) == 1
    assert gateway.calls_to("download") == []
    assert gateway.calls_to("generate_json")[0][2]["temperature"] == 1.0


@pytest.mark.asyncio
async def test_slow_render_reports_timeout_marker(executor):
    gateway = FakeGateway()
    gateway.polls_until_done = 50
    generator, renderer = make_parts(executor, gateway)

    result = await run_scheduled_generation(
        generator, renderer, now=datetime(2026, 3, 2, 20), poll_interval=0, max_poll_attempts=15
    )

    assert result["success"] is True
    assert result["category"] == "BUSINESS_SUCCESS"
    assert result["videoUri"] == TIMEOUT_MARKER
    assert len(gateway.calls_to("refresh_operation")) == 15


@pytest.mark.asyncio
async def test_exhausted_keys_propagate(executor):
    gateway = FakeGateway()
    gateway.quota_keys = {"key-alpha-0001", "key-bravo-0002", "key-charlie-0003"}
    generator, renderer = make_parts(executor, gateway)

    with pytest.raises(AllKeysExhausted):
        await run_scheduled_generation(generator, renderer, now=datetime(2026, 3, 2, 9))
