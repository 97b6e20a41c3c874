"""
Artifact storage - where generated audio and clips are written.

Implements the Repository pattern so pipeline stages only ever hand over
bytes and get back an opaque reference. The file implementation lays
artifacts out as ``<output_dir>/<job_id>/<name>``.

Classes:
    ArtifactStore: Abstract interface for artifact persistence
    FileArtifactStore: Local filesystem implementation
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from autoshorts.config import OUTPUT_DIR
from autoshorts.core.logging import get_logger

logger = get_logger(__name__, component="artifacts")


class ArtifactStore(ABC):
    """Abstract store for binary job artifacts."""

    @abstractmethod
    def save(self, job_id: str, name: str, data: bytes) -> str:
        """
        Persist an artifact.

        Args:
            job_id: Job the artifact belongs to
            name: File name within the job, e.g. ``voice.wav`` or ``scene_1.mp4``
            data: Raw bytes

        Returns:
            Reference to the stored artifact
        """

    @abstractmethod
    def exists(self, reference: str) -> bool:
        """Whether a previously returned reference still resolves."""


class FileArtifactStore(ArtifactStore):
    """Writes artifacts below a local output directory."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR

    def job_dir(self, job_id: str) -> Path:
        return self.output_dir / job_id

    def save(self, job_id: str, name: str, data: bytes) -> str:
        target_dir = self.job_dir(job_id)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_bytes(data)
        logger.debug(f"Stored {name} ({len(data)} bytes)", extra={"job_id": job_id, "path": str(path)})
        return str(path)

    def exists(self, reference: str) -> bool:
        return Path(reference).is_file()
