"""
Generation Pipeline - script, voice-over and clips for one job.

Stages run strictly in order (SCRIPT -> AUDIO -> VIDEO -> READY) and scenes
are rendered one after another. Any stage failure fails the whole job; clips
that were already rendered are kept on disk but never retried.
"""

from datetime import date
from typing import Callable, Dict, List, Optional, Protocol

from autoshorts.config.constants import (
    PROGRESS_AUDIO_DONE,
    PROGRESS_CREATED,
    PROGRESS_READY,
    PROGRESS_SCRIPT_DONE,
    PROGRESS_VIDEO_DONE,
)
from autoshorts.core.exceptions import JobStateError, describe_failure
from autoshorts.core.logging import LogTimer, get_logger, set_job_id
from autoshorts.models.automation import Slot
from autoshorts.models.generation import GenerationJob, VideoCategory
from autoshorts.models.status import JobStage
from autoshorts.services.infrastructure.orchestration import JobLedger
from autoshorts.services.infrastructure.storage import ArtifactStore, StudioStateStore

from .audio import VoiceSynthesizer
from .script_generation import ScriptGenerator
from .video import ClipRenderer

logger = get_logger(__name__, component="pipeline")

AUDIO_FILE_NAME = "voiceover.wav"

ProgressCallback = Callable[[GenerationJob], None]


class SlotListener(Protocol):
    """Told how a job started on behalf of a daily slot ended."""

    def complete(self, slot: Slot, today: Optional[date] = None) -> None: ...

    def fail(self, slot: Slot, error: str, today: Optional[date] = None) -> None: ...


def clip_file_name(scene_number: int) -> str:
    return f"scene_{scene_number}.mp4"


class GenerationPipeline:
    """Runs one generation at a time and records every terminal outcome."""

    def __init__(
        self,
        script_generator: ScriptGenerator,
        voice: VoiceSynthesizer,
        renderer: ClipRenderer,
        artifacts: ArtifactStore,
        ledger: JobLedger,
        state: StudioStateStore,
        progress_callback: Optional[ProgressCallback] = None,
        slot_listener: Optional[SlotListener] = None,
        today: Callable[[], date] = date.today,
    ):
        self.script_generator = script_generator
        self.voice = voice
        self.renderer = renderer
        self.artifacts = artifacts
        self.ledger = ledger
        self.state = state
        self.progress_callback = progress_callback
        self.slot_listener = slot_listener
        self._today = today
        self.active_jobs: Dict[str, GenerationJob] = {}

    @property
    def is_busy(self) -> bool:
        return bool(self.active_jobs)

    def get_job(self, job_id: str) -> Optional[GenerationJob]:
        return self.active_jobs.get(job_id) or self.ledger.get(job_id)

    def list_active(self) -> List[GenerationJob]:
        return list(self.active_jobs.values())

    def create_job(
        self,
        category: VideoCategory,
        viral_mode: bool = False,
        slot: Optional[Slot] = None,
    ) -> GenerationJob:
        """Reserve the pipeline for a new job; ``ad_injected`` is decided here, once."""
        if self.is_busy:
            raise JobStateError("A generation is already running")
        job = GenerationJob(
            category=category,
            ad_injected=self.state.next_job_has_ad(),
            viral_mode=viral_mode,
            slot=slot.value if slot else None,
        )
        self.active_jobs[job.id] = job
        self._report(job, PROGRESS_CREATED, "Job created")
        logger.info(
            f"Created job {job.id} ({category.value})",
            extra={"job_id": job.id, "ad_injected": job.ad_injected, "viral_mode": viral_mode, "slot": job.slot},
        )
        return job

    async def generate(
        self,
        category: VideoCategory,
        viral_mode: bool = False,
        slot: Optional[Slot] = None,
    ) -> GenerationJob:
        return await self.run(self.create_job(category, viral_mode=viral_mode, slot=slot))

    async def run(self, job: GenerationJob) -> GenerationJob:
        """Drive ``job`` to READY. On failure the job is recorded as FAILED and the error re-raised."""
        set_job_id(job.id)
        try:
            await self._run_stages(job)
        except Exception as exc:
            self._record_failure(job, exc)
            raise
        else:
            self._record_success(job)
            return job
        finally:
            self.active_jobs.pop(job.id, None)
            set_job_id(None)

    async def _run_stages(self, job: GenerationJob) -> None:
        self._report(job, PROGRESS_CREATED, "Writing script")
        script = await self.script_generator.generate(
            job.category,
            ad_injected=job.ad_injected,
            viral_mode=job.viral_mode,
        )
        job.apply_script(script)
        job.advance(JobStage.AUDIO)
        self._report(job, PROGRESS_SCRIPT_DONE, "Script ready, recording voice-over")

        wav = await self.voice.synthesize(job.full_script)
        if wav is not None:
            job.audio_artifact = self.artifacts.save(job.id, AUDIO_FILE_NAME, wav)
        job.advance(JobStage.VIDEO)
        self._report(job, PROGRESS_AUDIO_DONE, "Voice-over done, rendering clips")

        total = len(job.scenes)
        span = PROGRESS_VIDEO_DONE - PROGRESS_AUDIO_DONE
        for number, scene in enumerate(job.scenes, start=1):
            self._report(job, job.progress, f"Rendering scene {number}/{total}")
            with LogTimer(logger, f"Render scene {number}/{total}"):
                clip = await self.renderer.render(scene.visual_prompt)
            job.add_video_artifact(self.artifacts.save(job.id, clip_file_name(number), clip))
            self._report(job, PROGRESS_AUDIO_DONE + span * number // total, f"Scene {number}/{total} rendered")

        job.advance(JobStage.READY)
        self._report(job, PROGRESS_READY, "Video ready")

    def _report(self, job: GenerationJob, progress: int, message: str) -> None:
        job.set_progress(progress, message)
        if self.progress_callback is None:
            return
        try:
            self.progress_callback(job)
        except Exception as exc:
            logger.warning("Progress callback failed", extra={"job_id": job.id, "error": str(exc)})

    def _record_success(self, job: GenerationJob) -> None:
        total = self.state.record_ready(job.viral_mode)
        self.ledger.append(job)
        logger.info(
            f"Job {job.id} ready with {len(job.video_artifacts)} clip(s)",
            extra={"job_id": job.id, "total_videos": total, "audio": job.audio_artifact is not None},
        )
        if job.slot and self.slot_listener is not None:
            self.slot_listener.complete(Slot(job.slot), self._today())

    def _record_failure(self, job: GenerationJob, exc: BaseException) -> None:
        logger.error(
            f"Job {job.id} failed during {job.stage.value}: {exc}",
            extra={"job_id": job.id, "error_kind": getattr(getattr(exc, "kind", None), "value", None)},
        )
        if job.stage.is_in_progress():
            job.fail(describe_failure(exc))
            self._report(job, job.progress, job.message)
            self.ledger.append(job)
        if job.slot and self.slot_listener is not None:
            self.slot_listener.fail(Slot(job.slot), str(exc), self._today())
