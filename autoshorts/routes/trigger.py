"""
Cron trigger route - external schedulers call this to generate server-side.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core import AutoShortsError, ConfigurationError, get_logger, is_request_authorized
from ..services.infrastructure.keys import ApiKeyPool
from ..services.pipeline.script_generation import ScriptGenerator
from ..services.pipeline.video import ClipRenderer
from ..services.registry import get_key_pool, get_renderer, get_script_generator
from ..services.scheduler import run_scheduled_generation

router = APIRouter(tags=["trigger"])

logger = get_logger(__name__, component="cron_api")


@router.api_route("/api/cron", methods=["GET", "POST"])
async def cron_trigger(
    request: Request,
    key_pool: ApiKeyPool = Depends(get_key_pool),
    script_generator: ScriptGenerator = Depends(get_script_generator),
    renderer: ClipRenderer = Depends(get_renderer),
):
    if not is_request_authorized(request):
        logger.warning("Rejected cron call with a missing or wrong secret")
        return JSONResponse(status_code=401, content={"success": False, "error": "Unauthorized"})

    if key_pool.size == 0:
        return JSONResponse(status_code=500, content={"success": False, "error": ConfigurationError.user_message})

    try:
        summary = await run_scheduled_generation(script_generator, renderer)
    except AutoShortsError as exc:
        logger.error(f"Cron generation failed: {exc}", extra={"error_kind": exc.kind.value})
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    logger.info("Cron generation finished", extra=summary)
    return summary
