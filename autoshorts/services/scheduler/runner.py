"""
Automation runner - turns due slots into generation jobs.

Each tick evaluates the catch-up scheduler and, when a slot is pending and
nothing is generating, starts one job for it in the background. The pipeline
reports the outcome back to the scheduler through its slot listener.
"""

import asyncio
from typing import Optional

from autoshorts.config import AUTOMATION_CHECK_INTERVAL_SECONDS
from autoshorts.core.logging import get_logger
from autoshorts.models.automation import PendingTask, Slot
from autoshorts.models.generation import VideoCategory
from autoshorts.services.infrastructure.orchestration import RecurringTask
from autoshorts.services.pipeline import GenerationPipeline

from .catch_up import CatchUpScheduler

logger = get_logger(__name__, component="automation")

SLOT_CATEGORIES = {
    Slot.MORNING: VideoCategory.SCHOOL_TIPS,
    Slot.EVENING: VideoCategory.BUSINESS_SUCCESS,
}


class AutomationRunner:
    def __init__(
        self,
        scheduler: CatchUpScheduler,
        pipeline: GenerationPipeline,
        interval_seconds: float = AUTOMATION_CHECK_INTERVAL_SECONDS,
    ):
        self.scheduler = scheduler
        self.pipeline = pipeline
        self._in_flight: Optional[asyncio.Task] = None
        self._recurring = RecurringTask("automation-check", self.tick, interval_seconds)

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def running(self) -> bool:
        return self._recurring.running

    def start(self) -> None:
        self._recurring.start()

    async def stop(self) -> None:
        await self._recurring.stop()
        task, self._in_flight = self._in_flight, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def tick(self) -> Optional[PendingTask]:
        """Evaluate once; start a generation for the pending slot when the pipeline is free."""
        if self.in_flight:
            return self.scheduler.pending

        if not self.scheduler.config.active:
            return None
        pending = self.scheduler.evaluate()
        if pending is None:
            return None
        if self.pipeline.is_busy:
            logger.info(f"Slot {pending.slot.value} is due but a generation is running, deferring")
            return pending

        self._in_flight = asyncio.create_task(self._run_slot(pending.slot), name=f"slot-{pending.slot.value}")
        return pending

    async def _run_slot(self, slot: Slot) -> None:
        category = SLOT_CATEGORIES[slot]
        logger.info(f"Starting {slot.value} generation ({category.value}, viral)", extra={"slot": slot.value})
        try:
            job = await self.pipeline.generate(category, viral_mode=True, slot=slot)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            # The pipeline already recorded the failure and released the slot
            logger.error(f"Automated {slot.value} generation failed: {exc}", extra={"slot": slot.value})
            return
        logger.info(f"Automated {slot.value} generation finished: {job.id}", extra={"slot": slot.value})
