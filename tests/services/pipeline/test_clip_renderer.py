import pytest

from autoshorts.core.exceptions import MalformedResponse, OperationTimeout, UpstreamRejected
from autoshorts.services.pipeline.video import ClipRenderer, build_video_prompt
from conftest import FakeGateway, no_sleep, video_operation


def make_renderer(executor, gateway, max_poll_attempts=5):
    return ClipRenderer(executor, gateway, poll_interval=0, max_poll_attempts=max_poll_attempts, model="veo", sleep=no_sleep)


def test_prompt_suffix():
    assert build_video_prompt("A cat").endswith(", cinematic, 4k, high quality, photorealistic, french atmosphere")


@pytest.mark.asyncio
async def test_render_submits_polls_and_downloads(executor):
    gateway = FakeGateway()
    gateway.polls_until_done = 3

    data = await make_renderer(executor, gateway).render("A cat")

    assert data == b"clip:https://videos.example/1.mp4"
    submit = gateway.calls_to("submit_video")[0][2]
    assert submit["aspect_ratio"] == "9:16"
    assert submit["resolution"] == "720p"
    assert len(gateway.calls_to("refresh_operation")) == 3


@pytest.mark.asyncio
async def test_download_uses_the_submitting_key(executor):
    gateway = FakeGateway()
    gateway.quota_keys = {"key-alpha-0001"}

    await make_renderer(executor, gateway).render("A cat")

    submit_keys = [key for method, key, _ in gateway.calls if method == "submit_video"]
    download_keys = [key for method, key, _ in gateway.calls if method == "download"]
    assert submit_keys == ["key-alpha-0001", "key-bravo-0002"]
    assert download_keys == ["key-bravo-0002"]


@pytest.mark.asyncio
async def test_polling_budget_exceeded_times_out(executor):
    gateway = FakeGateway()
    gateway.polls_until_done = 10

    with pytest.raises(OperationTimeout) as exc_info:
        await make_renderer(executor, gateway, max_poll_attempts=4).render("A cat")
    assert exc_info.value.attempts == 4
    assert gateway.calls_to("download") == []


@pytest.mark.asyncio
async def test_operation_error_is_rejection(executor):
    gateway = FakeGateway()

    async def failed_refresh(api_key, operation):
        return video_operation(done=True, uri=None, error={"code": 3, "message": "safety filter"})

    gateway.refresh_operation = failed_refresh
    with pytest.raises(UpstreamRejected):
        await make_renderer(executor, gateway).render("A cat")


@pytest.mark.asyncio
async def test_finished_operation_without_video_is_malformed(executor):
    gateway = FakeGateway()

    async def empty_refresh(api_key, operation):
        return video_operation(done=True, uri=None)

    gateway.refresh_operation = empty_refresh
    with pytest.raises(MalformedResponse):
        await make_renderer(executor, gateway).render("A cat")


@pytest.mark.asyncio
async def test_render_reference_skips_download(executor):
    gateway = FakeGateway()
    uri = await make_renderer(executor, gateway).render_reference("A cat", poll_interval=0, max_poll_attempts=2)
    assert uri == "https://videos.example/1.mp4"
    assert gateway.calls_to("download") == []
