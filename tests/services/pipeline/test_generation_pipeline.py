import random
from datetime import date
from pathlib import Path

import pytest

from autoshorts.config.constants import AD_SCENE_NARRATION
from autoshorts.core.exceptions import AllKeysExhausted, JobStateError, QuotaExceeded, UpstreamRejected
from autoshorts.models.automation import Slot
from autoshorts.models.generation import VideoCategory
from autoshorts.models.status import JobStage
from autoshorts.services.infrastructure.orchestration import JobLedger
from autoshorts.services.infrastructure.storage import FileArtifactStore, StudioStateStore
from autoshorts.services.pipeline import GenerationPipeline
from autoshorts.services.pipeline.audio import VoiceSynthesizer
from autoshorts.services.pipeline.script_generation import ScriptGenerator
from autoshorts.services.pipeline.video import ClipRenderer
from conftest import FakeGateway, no_sleep


class RecordingSlotListener:
    def __init__(self):
        self.completed = []
        self.failed = []

    def complete(self, slot, today=None):
        self.completed.append((slot, today))

    def fail(self, slot, error, today=None):
        self.failed.append((slot, error, today))


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def pipeline_parts(tmp_path, executor, gateway):
    state = StudioStateStore(tmp_path / "state.json")
    ledger = JobLedger(tmp_path / "jobs")
    artifacts = FileArtifactStore(tmp_path / "outputs")
    progress = []
    listener = RecordingSlotListener()
    pipeline = GenerationPipeline(
        script_generator=ScriptGenerator(executor, gateway, rng=random.Random(1), model="text"),
        voice=VoiceSynthesizer(executor, gateway, model="tts"),
        renderer=ClipRenderer(executor, gateway, poll_interval=0, max_poll_attempts=3, model="veo", sleep=no_sleep),
        artifacts=artifacts,
        ledger=ledger,
        state=state,
        progress_callback=lambda job: progress.append((job.stage, job.progress)),
        slot_listener=listener,
        today=lambda: date(2026, 3, 2),
    )
    return pipeline, state, ledger, progress, listener


@pytest.mark.asyncio
async def test_successful_job_is_ready_with_ordered_clips(pipeline_parts, gateway):
    pipeline, state, ledger, progress, _ = pipeline_parts

    job = await pipeline.generate(VideoCategory.SCHOOL_TIPS)

    assert job.stage is JobStage.READY
    assert job.progress == 100
    assert [Path(ref).name for ref in job.video_artifacts] == [f"scene_{n}.mp4" for n in range(1, 5)]
    assert Path(job.video_artifacts[0]).read_bytes() == b"clip:https://videos.example/1.mp4"
    assert Path(job.audio_artifact).read_bytes()[:4] == b"RIFF"

    # scenes render one after another, in script order
    prompts = [kwargs["prompt"] for _, _, kwargs in gateway.calls_to("submit_video")]
    assert [p.split("), ")[1].split(",")[0] for p in prompts] == ["Visual 1", "Visual 2", "Visual 3", "Visual 4"]

    assert state.total_videos == 1
    assert state.snapshot().reward_points == 50
    assert ledger.get(job.id) is job
    assert not pipeline.is_busy

    percents = [percent for _, percent in progress]
    assert percents == sorted(percents)
    assert (JobStage.AUDIO, 25) in progress
    assert (JobStage.VIDEO, 40) in progress


@pytest.mark.asyncio
async def test_viral_job_earns_more_points(pipeline_parts):
    pipeline, state, _, _, _ = pipeline_parts
    await pipeline.generate(VideoCategory.SHOWER_THOUGHTS, viral_mode=True)
    assert state.snapshot().reward_points == 75


@pytest.mark.asyncio
async def test_every_third_job_carries_the_ad(pipeline_parts, gateway):
    pipeline, state, _, _, _ = pipeline_parts

    first = await pipeline.generate(VideoCategory.SCHOOL_TIPS)
    second = await pipeline.generate(VideoCategory.SCHOOL_TIPS)
    assert not first.ad_injected and not second.ad_injected

    gateway.script_text = FakeGateway(scene_count=5).script_text
    third = await pipeline.generate(VideoCategory.SCHOOL_TIPS)

    assert third.ad_injected
    assert len(third.video_artifacts) == 5
    assert third.scenes[2].narration == AD_SCENE_NARRATION
    assert state.total_videos == 3


@pytest.mark.asyncio
async def test_missing_audio_does_not_fail_the_job(pipeline_parts, gateway):
    pipeline, _, _, _, _ = pipeline_parts
    gateway.audio = None

    job = await pipeline.generate(VideoCategory.MOTIVATION)

    assert job.stage is JobStage.READY
    assert job.audio_artifact is None


@pytest.mark.asyncio
async def test_failed_scene_fails_the_job_and_keeps_earlier_clips(pipeline_parts, gateway, tmp_path):
    pipeline, state, ledger, _, listener = pipeline_parts
    gateway.failures["download"] = (3, UpstreamRejected("403 Forbidden", status_code=403))

    job = pipeline.create_job(VideoCategory.SCHOOL_TIPS, slot=Slot.MORNING)
    with pytest.raises(UpstreamRejected):
        await pipeline.run(job)

    assert job.stage is JobStage.FAILED
    assert job.error
    assert len(job.video_artifacts) == 2
    assert sorted(p.name for p in (tmp_path / "outputs" / job.id).glob("*.mp4")) == ["scene_1.mp4", "scene_2.mp4"]
    # no retry of the failed scene
    assert len(gateway.calls_to("submit_video")) == 3

    assert ledger.get(job.id).stage is JobStage.FAILED
    assert state.total_videos == 0
    assert listener.failed == [(Slot.MORNING, "403 Forbidden", date(2026, 3, 2))]
    assert listener.completed == []
    assert not pipeline.is_busy


@pytest.mark.asyncio
async def test_slot_completion_is_reported(pipeline_parts):
    pipeline, _, _, _, listener = pipeline_parts
    await pipeline.generate(VideoCategory.BUSINESS_SUCCESS, viral_mode=True, slot=Slot.EVENING)
    assert listener.completed == [(Slot.EVENING, date(2026, 3, 2))]


@pytest.mark.asyncio
async def test_manual_job_does_not_touch_slots(pipeline_parts):
    pipeline, _, _, _, listener = pipeline_parts
    await pipeline.generate(VideoCategory.SCHOOL_TIPS)
    assert listener.completed == [] and listener.failed == []


def test_second_job_is_refused_while_busy(pipeline_parts):
    pipeline, _, _, _, _ = pipeline_parts
    job = pipeline.create_job(VideoCategory.SCHOOL_TIPS)

    assert pipeline.is_busy
    assert pipeline.get_job(job.id) is job
    with pytest.raises(JobStateError):
        pipeline.create_job(VideoCategory.MOTIVATION)


@pytest.mark.asyncio
async def test_rejected_speech_request_fails_the_job(pipeline_parts, gateway):
    pipeline, state, ledger, _, listener = pipeline_parts
    gateway.failures["synthesize_speech"] = (1, UpstreamRejected("400 bad voice", status_code=400))

    job = pipeline.create_job(VideoCategory.MOTIVATION, slot=Slot.MORNING)
    with pytest.raises(UpstreamRejected):
        await pipeline.run(job)

    assert job.stage is JobStage.FAILED
    assert ledger.get(job.id).stage is JobStage.FAILED
    assert gateway.calls_to("submit_video") == []
    assert state.total_videos == 0
    assert listener.failed == [(Slot.MORNING, "400 bad voice", date(2026, 3, 2))]
    assert not pipeline.is_busy


@pytest.mark.asyncio
async def test_speech_quota_on_every_key_fails_the_job(pipeline_parts, gateway, key_pool):
    pipeline, state, ledger, _, listener = pipeline_parts

    async def always_over_quota(api_key, model, text, voice):
        gateway._record("synthesize_speech", api_key, text=text, voice=voice)
        raise QuotaExceeded("429 RESOURCE_EXHAUSTED")

    gateway.synthesize_speech = always_over_quota

    job = pipeline.create_job(VideoCategory.MOTIVATION, slot=Slot.EVENING)
    with pytest.raises(AllKeysExhausted):
        await pipeline.run(job)

    assert len(gateway.calls_to("synthesize_speech")) == 2 * key_pool.size
    assert job.stage is JobStage.FAILED
    assert ledger.get(job.id).stage is JobStage.FAILED
    assert gateway.calls_to("submit_video") == []
    assert state.total_videos == 0
    assert [slot for slot, _, _ in listener.failed] == [Slot.EVENING]
    assert listener.completed == []
