"""
Video generation routes
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from ..core import ConfigurationError, JobStateError, get_logger
from ..models import GenerationAccepted, GenerationRequest, GenerationJob
from ..services.infrastructure.keys import ApiKeyPool
from ..services.pipeline import GenerationPipeline
from ..services.registry import get_key_pool, get_pipeline
from .errors import to_http_exception

router = APIRouter(tags=["generation"])

logger = get_logger(__name__, component="generation_api")


async def run_generation(pipeline: GenerationPipeline, job: GenerationJob) -> None:
    """Background body of ``POST /generate``; the pipeline records the outcome itself."""
    try:
        await pipeline.run(job)
    except Exception as exc:
        logger.error(f"Background generation {job.id} failed: {exc}", extra={"job_id": job.id})


@router.post("/generate", response_model=GenerationAccepted, status_code=202)
async def start_generation(
    request: GenerationRequest,
    background_tasks: BackgroundTasks,
    pipeline: GenerationPipeline = Depends(get_pipeline),
    key_pool: ApiKeyPool = Depends(get_key_pool),
):
    """Start one generation job in the background"""
    if key_pool.size == 0:
        raise to_http_exception(ConfigurationError())
    if pipeline.is_busy:
        raise HTTPException(status_code=409, detail="A generation is already running")

    try:
        job = pipeline.create_job(request.category, viral_mode=request.viral_mode)
    except JobStateError:
        raise HTTPException(status_code=409, detail="A generation is already running")

    background_tasks.add_task(run_generation, pipeline, job)

    return GenerationAccepted(
        job_id=job.id,
        stage=job.stage.value,
        ad_injected=job.ad_injected,
        message="Generation started",
    )
