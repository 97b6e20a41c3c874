"""
Generation domain models

The job record mutated by the pipeline, its scenes, and the structured script
payload the text model must return.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from autoshorts.config.constants import SCENES_PER_VIDEO, SCENES_PER_VIDEO_WITH_AD
from autoshorts.core.exceptions import JobStateError
from autoshorts.models.status import JobStage


class VideoCategory(str, Enum):
    """Content categories a job can be generated for"""

    SCHOOL_TIPS = "SCHOOL_TIPS"
    GENERAL_CULTURE = "GENERAL_CULTURE"
    BUSINESS_SUCCESS = "BUSINESS_SUCCESS"
    MOTIVATION = "MOTIVATION"
    SCARY_STORY = "SCARY_STORY"
    WOULD_YOU_RATHER = "WOULD_YOU_RATHER"
    SHOWER_THOUGHTS = "SHOWER_THOUGHTS"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    VideoCategory.SCHOOL_TIPS: "Conseils Scolaires (Étudiants)",
    VideoCategory.GENERAL_CULTURE: "Culture Générale Éducative",
    VideoCategory.BUSINESS_SUCCESS: "Histoire de Marque/Succès Business",
    VideoCategory.MOTIVATION: "Motivation Travail",
    VideoCategory.SCARY_STORY: "Horreur & Creepypasta",
    VideoCategory.WOULD_YOU_RATHER: "Tu préfères ? (Dilemme)",
    VideoCategory.SHOWER_THOUGHTS: "Pensées de Douche",
}


# === Structured script payload (response schema of the text model) ===

class SceneSchema(BaseModel):
    visual_prompt: str
    narration: str


class ScriptResponse(BaseModel):
    trending_topic: str
    character_description: str
    full_script: str
    scenes: List[SceneSchema]


@dataclass
class Scene:
    """One narration/visual unit, rendered to one clip"""
    narration: str
    visual_prompt: str

    def to_dict(self) -> Dict[str, str]:
        return {"narration": self.narration, "visual_prompt": self.visual_prompt}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scene":
        return cls(narration=data["narration"], visual_prompt=data["visual_prompt"])


@dataclass
class GeneratedScript:
    """Validated script stage output"""
    topic: str
    character_description: str
    full_script: str
    scenes: List[Scene]


def _now() -> str:
    return datetime.now().isoformat()


_IMMUTABLE_FIELDS = frozenset({"id", "category", "ad_injected", "viral_mode"})


@dataclass
class GenerationJob:
    """
    One end-to-end generation task.

    ``ad_injected`` (like ``id``, ``category`` and ``viral_mode``) is fixed at
    creation; the stage only moves along ``ALLOWED_TRANSITIONS``.
    """

    category: VideoCategory
    ad_injected: bool
    viral_mode: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    stage: JobStage = JobStage.SCRIPT
    slot: Optional[str] = None
    topic: Optional[str] = None
    character_description: Optional[str] = None
    full_script: Optional[str] = None
    scenes: List[Scene] = field(default_factory=list)
    audio_artifact: Optional[str] = None
    video_artifacts: List[str] = field(default_factory=list)
    progress: int = 0
    message: str = "Job created"
    error: Optional[str] = None
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"GenerationJob.{name} cannot change after creation")
        super().__setattr__(name, value)

    @property
    def expected_scene_count(self) -> int:
        return SCENES_PER_VIDEO_WITH_AD if self.ad_injected else SCENES_PER_VIDEO

    def advance(self, target: JobStage, message: Optional[str] = None) -> None:
        if not self.stage.can_transition_to(target):
            raise JobStateError(f"Job {self.id} cannot move from {self.stage.value} to {target.value}")
        if target is JobStage.READY and len(self.video_artifacts) != len(self.scenes):
            raise JobStateError(
                f"Job {self.id} has {len(self.video_artifacts)}/{len(self.scenes)} clips and cannot be ready"
            )
        self.stage = target
        if message is not None:
            self.message = message
        self.touch()

    def fail(self, cause: str) -> None:
        self.advance(JobStage.FAILED, message="Generation failed")
        self.error = cause

    def apply_script(self, script: GeneratedScript) -> None:
        self.topic = script.topic
        self.character_description = script.character_description
        self.full_script = script.full_script
        self.scenes = list(script.scenes)
        self.touch()

    def add_video_artifact(self, reference: str) -> None:
        if len(self.video_artifacts) >= len(self.scenes):
            raise JobStateError(f"Job {self.id} already has a clip for every scene")
        self.video_artifacts.append(reference)
        self.touch()

    def set_progress(self, progress: int, message: str) -> None:
        self.progress = progress
        self.message = message
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "stage": self.stage.value,
            "viral_mode": self.viral_mode,
            "ad_injected": self.ad_injected,
            "slot": self.slot,
            "topic": self.topic,
            "character_description": self.character_description,
            "full_script": self.full_script,
            "scenes": [scene.to_dict() for scene in self.scenes],
            "audio_artifact": self.audio_artifact,
            "video_artifacts": list(self.video_artifacts),
            "progress": self.progress,
            "message": self.message,
            "error": self.error,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationJob":
        return cls(
            id=data["id"],
            category=VideoCategory(data["category"]),
            stage=JobStage(data["stage"]),
            viral_mode=data.get("viral_mode", False),
            ad_injected=data.get("ad_injected", False),
            slot=data.get("slot"),
            topic=data.get("topic"),
            character_description=data.get("character_description"),
            full_script=data.get("full_script"),
            scenes=[Scene.from_dict(scene) for scene in data.get("scenes", [])],
            audio_artifact=data.get("audio_artifact"),
            video_artifacts=list(data.get("video_artifacts", [])),
            progress=data.get("progress", 0),
            message=data.get("message", ""),
            error=data.get("error"),
            created_at=data.get("created_at", _now()),
            updated_at=data.get("updated_at", _now()),
        )
