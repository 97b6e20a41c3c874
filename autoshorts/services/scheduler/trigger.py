"""
Scheduled trigger - server-side generation hit by an external cron.

Lighter than the full pipeline: a viral script plus a render of the first
scene, with a short polling budget. The video reference is returned, not
downloaded.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from autoshorts.config import TRIGGER_POLL_INTERVAL_SECONDS, TRIGGER_POLL_MAX_ATTEMPTS
from autoshorts.core.exceptions import OperationTimeout
from autoshorts.core.logging import get_logger
from autoshorts.models.generation import VideoCategory
from autoshorts.services.pipeline.script_generation import ScriptGenerator
from autoshorts.services.pipeline.video import ClipRenderer

logger = get_logger(__name__, component="trigger")

TIMEOUT_MARKER = "Timeout"
NOON_HOUR = 12


def category_for(now: datetime) -> VideoCategory:
    return VideoCategory.SCHOOL_TIPS if now.hour < NOON_HOUR else VideoCategory.BUSINESS_SUCCESS


async def run_scheduled_generation(
    script_generator: ScriptGenerator,
    renderer: ClipRenderer,
    now: Optional[datetime] = None,
    poll_interval: float = TRIGGER_POLL_INTERVAL_SECONDS,
    max_poll_attempts: int = TRIGGER_POLL_MAX_ATTEMPTS,
) -> Dict[str, Any]:
    """Generate a script and start rendering its first scene. Errors propagate to the caller."""
    now = now or datetime.now()
    category = category_for(now)
    logger.info(f"Scheduled generation for {category.value}", extra={"hour": now.hour})

    script = await script_generator.generate(category, ad_injected=False, viral_mode=True)

    try:
        video_uri = await renderer.render_reference(
            script.scenes[0].visual_prompt,
            poll_interval=poll_interval,
            max_poll_attempts=max_poll_attempts,
        )
    except OperationTimeout:
        logger.warning(f"First scene still rendering after {max_poll_attempts} polls")
        video_uri = TIMEOUT_MARKER

    return {
        "success": True,
        "category": category.value,
        "topic": script.topic,
        "videoUri": video_uri,
    }
