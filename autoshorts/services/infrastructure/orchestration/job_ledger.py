"""
Job Ledger - finished generation jobs with file-based persistence.

One JSON file per job under ``JOB_DATA_DIR``. Jobs land here once they reach a
terminal outcome (READY or FAILED) and are never deleted automatically.
"""

import json
from datetime import datetime
from pathlib import Path
from threading import RLock
from typing import Dict, List, Optional

from autoshorts.config import JOB_DATA_DIR
from autoshorts.core.exceptions import JobStateError
from autoshorts.core.logging import get_logger
from autoshorts.models.generation import GenerationJob
from autoshorts.models.status import JobStage

logger = get_logger(__name__, component="job_ledger")


class JobLedger:
    """Ordered (newest first) collection of terminal jobs, persisted on every write."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self._storage_dir = Path(storage_dir) if storage_dir else JOB_DATA_DIR
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        self._jobs: Dict[str, GenerationJob] = {}
        self._lock = RLock()
        self._load_all()

    def _job_file(self, job_id: str) -> Path:
        return self._storage_dir / f"{job_id}.json"

    def _load_all(self) -> None:
        with self._lock:
            for job_file in self._storage_dir.glob("*.json"):
                try:
                    with open(job_file, "r", encoding="utf-8") as f:
                        job = GenerationJob.from_dict(json.load(f))
                except (OSError, ValueError, KeyError) as exc:
                    logger.error(f"Skipping unreadable job file {job_file.name}", extra={"error": str(exc)})
                    continue
                self._jobs[job.id] = job
        if self._jobs:
            logger.info(f"Loaded {len(self._jobs)} job(s) from {self._storage_dir}")

    def _save(self, job: GenerationJob) -> None:
        with open(self._job_file(job.id), "w", encoding="utf-8") as f:
            json.dump(job.to_dict(), f, indent=2, ensure_ascii=False)

    @staticmethod
    def _sort_key(job: GenerationJob) -> datetime:
        try:
            return datetime.fromisoformat(job.created_at)
        except ValueError:
            return datetime.min

    def append(self, job: GenerationJob) -> None:
        """Record a job that reached READY or FAILED."""
        if not job.stage.is_terminal():
            raise JobStateError(f"Job {job.id} is still {job.stage.value} and cannot be recorded")
        with self._lock:
            self._save(job)
            self._jobs[job.id] = job
        logger.info(f"Recorded job {job.id} as {job.stage.value}", extra={"job_id": job.id})

    def get(self, job_id: str) -> Optional[GenerationJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def list(self, stage: Optional[JobStage] = None) -> List[GenerationJob]:
        with self._lock:
            jobs = [job for job in self._jobs.values() if stage is None or job.stage is stage]
        return sorted(jobs, key=self._sort_key, reverse=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def mark_published(self, job_id: str) -> GenerationJob:
        """READY -> PUBLISHED. Raises ``KeyError`` for unknown ids, ``JobStateError`` otherwise."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise KeyError(job_id)
            job.advance(JobStage.PUBLISHED, message="Published")
            self._save(job)
            return job


_ledger_instance: Optional[JobLedger] = None


def get_job_ledger() -> JobLedger:
    """Get the shared JobLedger instance (singleton pattern)."""
    global _ledger_instance
    if _ledger_instance is None:
        _ledger_instance = JobLedger()
    return _ledger_instance
