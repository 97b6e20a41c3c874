"""Storage layer - data persistence."""

from .artifacts import ArtifactStore, FileArtifactStore
from .studio_state import StudioState, StudioStateStore, level_for, should_inject_ad

__all__ = [
    "ArtifactStore",
    "FileArtifactStore",
    "StudioState",
    "StudioStateStore",
    "level_for",
    "should_inject_ad",
]
