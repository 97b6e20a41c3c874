"""
API schemas for generation and job endpoints
"""

from pydantic import BaseModel
from typing import List, Optional

from .generation import GenerationJob, VideoCategory


class GenerationRequest(BaseModel):
    """Request to start one generation job"""
    category: VideoCategory = VideoCategory.SCHOOL_TIPS
    viral_mode: bool = False


class GenerationAccepted(BaseModel):
    job_id: str
    stage: str
    ad_injected: bool
    message: str


class SceneModel(BaseModel):
    narration: str
    visual_prompt: str


class JobResponse(BaseModel):
    """Job status, progress and artifacts"""
    job_id: str
    category: str
    stage: str
    progress: int
    message: str
    viral_mode: bool
    ad_injected: bool
    slot: Optional[str] = None
    topic: Optional[str] = None
    full_script: Optional[str] = None
    scenes: List[SceneModel] = []
    audio_artifact: Optional[str] = None
    video_artifacts: List[str] = []
    error: Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_job(cls, job: GenerationJob) -> "JobResponse":
        return cls(
            job_id=job.id,
            category=job.category.value,
            stage=job.stage.value,
            progress=job.progress,
            message=job.message,
            viral_mode=job.viral_mode,
            ad_injected=job.ad_injected,
            slot=job.slot,
            topic=job.topic,
            full_script=job.full_script,
            scenes=[SceneModel(**scene.to_dict()) for scene in job.scenes],
            audio_artifact=job.audio_artifact,
            video_artifacts=list(job.video_artifacts),
            error=job.error,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class StudioStatsResponse(BaseModel):
    total_videos: int
    published_videos: int
    reward_points: int
    level: int
    videos_until_ad: int


class AutomationUpdateRequest(BaseModel):
    """Partial update of the automation settings; slot times are ``HH:MM``"""
    active: Optional[bool] = None
    morning_slot: Optional[str] = None
    evening_slot: Optional[str] = None


class AutomationStatusResponse(BaseModel):
    active: bool
    morning_slot: str
    evening_slot: str
    last_morning_run: Optional[str] = None
    last_evening_run: Optional[str] = None
    last_failure: Optional[dict] = None
    pending_slot: Optional[str] = None
    running: bool = False
