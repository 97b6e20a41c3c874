"""
Job management routes.

Jobs still generating are served from the pipeline, finished ones from the
ledger.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..core import JobStateError
from ..models import JobResponse, JobStage
from ..services.infrastructure.orchestration import JobLedger
from ..services.infrastructure.storage import StudioStateStore
from ..services.pipeline import GenerationPipeline
from ..services.registry import get_ledger, get_pipeline, get_state_store

router = APIRouter(tags=["jobs"])


@router.get("/jobs", response_model=List[JobResponse])
async def list_jobs(
    stage: Optional[str] = None,
    pipeline: GenerationPipeline = Depends(get_pipeline),
    ledger: JobLedger = Depends(get_ledger),
):
    """List running jobs first, then recorded jobs newest first"""
    stage_filter = None
    if stage is not None:
        try:
            stage_filter = JobStage(stage)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown stage: {stage}")

    jobs = [job for job in pipeline.list_active() if stage_filter is None or job.stage is stage_filter]
    jobs.extend(ledger.list(stage_filter))
    return [JobResponse.from_job(job) for job in jobs]


@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, pipeline: GenerationPipeline = Depends(get_pipeline)):
    job = pipeline.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse.from_job(job)


@router.post("/jobs/{job_id}/publish", response_model=JobResponse)
async def publish_job(
    job_id: str,
    ledger: JobLedger = Depends(get_ledger),
    state: StudioStateStore = Depends(get_state_store),
):
    """Mark a ready video as published and award the publish reward"""
    try:
        job = ledger.mark_published(job_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Job not found")
    except JobStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    state.record_published()
    return JobResponse.from_job(job)
