"""
Job stage constants and enumerations.

A job moves forward through SCRIPT -> AUDIO -> VIDEO -> READY -> PUBLISHED.
The generation stages may drop to FAILED; nothing ever moves backwards.
"""

from enum import Enum


class JobStage(Enum):
    """Enumeration of all possible job stages."""

    SCRIPT = "script"
    AUDIO = "audio"
    VIDEO = "video"
    READY = "ready"
    PUBLISHED = "published"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """No generation work is left once a job reaches one of these."""
        return self in (JobStage.READY, JobStage.PUBLISHED, JobStage.FAILED)

    def is_in_progress(self) -> bool:
        return self in GENERATION_STAGES

    def can_transition_to(self, target: "JobStage") -> bool:
        return target in ALLOWED_TRANSITIONS[self]


GENERATION_STAGES = (JobStage.SCRIPT, JobStage.AUDIO, JobStage.VIDEO)

ALLOWED_TRANSITIONS = {
    JobStage.SCRIPT: {JobStage.AUDIO, JobStage.FAILED},
    JobStage.AUDIO: {JobStage.VIDEO, JobStage.FAILED},
    JobStage.VIDEO: {JobStage.READY, JobStage.FAILED},
    JobStage.READY: {JobStage.PUBLISHED},
    JobStage.PUBLISHED: set(),
    JobStage.FAILED: set(),
}


__all__ = [
    "JobStage",
    "GENERATION_STAGES",
    "ALLOWED_TRANSITIONS",
]
