"""
Automation and studio statistics routes
"""

from fastapi import APIRouter, Depends, HTTPException

from ..models import (
    AutomationStatusResponse,
    AutomationUpdateRequest,
    StudioStatsResponse,
    parse_slot_time,
)
from ..services.infrastructure.storage import StudioStateStore
from ..services.registry import get_runner, get_scheduler, get_state_store
from ..services.scheduler import AutomationRunner, CatchUpScheduler

router = APIRouter(tags=["automation"])


def _status(scheduler: CatchUpScheduler, runner: AutomationRunner) -> AutomationStatusResponse:
    config = scheduler.config.to_dict()
    pending = scheduler.pending
    return AutomationStatusResponse(
        **config,
        pending_slot=pending.slot.value if pending else None,
        running=runner.in_flight,
    )


@router.get("/automation", response_model=AutomationStatusResponse)
async def get_automation(
    scheduler: CatchUpScheduler = Depends(get_scheduler),
    runner: AutomationRunner = Depends(get_runner),
):
    return _status(scheduler, runner)


@router.put("/automation", response_model=AutomationStatusResponse)
async def update_automation(
    update: AutomationUpdateRequest,
    scheduler: CatchUpScheduler = Depends(get_scheduler),
    runner: AutomationRunner = Depends(get_runner),
):
    """Toggle automation or move the daily slots (``HH:MM``)"""
    try:
        morning = parse_slot_time(update.morning_slot) if update.morning_slot is not None else None
        evening = parse_slot_time(update.evening_slot) if update.evening_slot is not None else None
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    scheduler.update_settings(active=update.active, morning_slot=morning, evening_slot=evening)
    return _status(scheduler, runner)


@router.post("/automation/evaluate", response_model=AutomationStatusResponse)
async def evaluate_automation(
    scheduler: CatchUpScheduler = Depends(get_scheduler),
    runner: AutomationRunner = Depends(get_runner),
):
    """Run one automation check now instead of waiting for the next tick"""
    await runner.tick()
    return _status(scheduler, runner)


@router.get("/stats", response_model=StudioStatsResponse)
async def get_stats(state: StudioStateStore = Depends(get_state_store)):
    snapshot = state.snapshot()
    return StudioStatsResponse(
        total_videos=snapshot.total_videos,
        published_videos=snapshot.published_videos,
        reward_points=snapshot.reward_points,
        level=snapshot.level,
        videos_until_ad=snapshot.videos_until_ad,
    )
