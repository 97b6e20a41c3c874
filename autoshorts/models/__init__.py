"""
Domain models and API schemas
"""

from .status import JobStage, GENERATION_STAGES, ALLOWED_TRANSITIONS
from .generation import (
    VideoCategory,
    CATEGORY_LABELS,
    Scene,
    SceneSchema,
    ScriptResponse,
    GeneratedScript,
    GenerationJob,
)
from .automation import (
    Slot,
    PendingTask,
    SlotFailure,
    AutomationConfig,
    parse_slot_time,
    format_slot_time,
)
from .jobs import (
    GenerationRequest,
    GenerationAccepted,
    SceneModel,
    JobResponse,
    StudioStatsResponse,
    AutomationUpdateRequest,
    AutomationStatusResponse,
)

__all__ = [
    "JobStage",
    "GENERATION_STAGES",
    "ALLOWED_TRANSITIONS",
    "VideoCategory",
    "CATEGORY_LABELS",
    "Scene",
    "SceneSchema",
    "ScriptResponse",
    "GeneratedScript",
    "GenerationJob",
    "Slot",
    "PendingTask",
    "SlotFailure",
    "AutomationConfig",
    "parse_slot_time",
    "format_slot_time",
    "GenerationRequest",
    "GenerationAccepted",
    "SceneModel",
    "JobResponse",
    "StudioStatsResponse",
    "AutomationUpdateRequest",
    "AutomationStatusResponse",
]
