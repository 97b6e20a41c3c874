"""
Catch-up scheduler - decides whether a daily slot is due.

A slot is due once the local wall clock has passed its time and its day
marker is not today. Because only the marker matters, a slot missed while the
process was down is picked up by the first evaluation after start-up.

At most one ``PendingTask`` exists at a time; evaluation never replaces it.
Only ``complete``, ``fail`` and switching automation off clear it.
"""

from dataclasses import replace
from datetime import date, datetime, time
from threading import RLock
from typing import Callable, Optional

from autoshorts.core.logging import get_logger
from autoshorts.models.automation import AutomationConfig, PendingTask, Slot, SlotFailure
from autoshorts.services.infrastructure.storage import StudioStateStore

logger = get_logger(__name__, component="catch_up")

SLOT_ORDER = (Slot.MORNING, Slot.EVENING)


class CatchUpScheduler:
    def __init__(
        self,
        store: StudioStateStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self._clock = clock
        self._lock = RLock()
        self._pending: Optional[PendingTask] = None

    @property
    def config(self) -> AutomationConfig:
        return self.store.load_automation()

    @property
    def pending(self) -> Optional[PendingTask]:
        with self._lock:
            return self._pending

    def evaluate(self, now: Optional[datetime] = None) -> Optional[PendingTask]:
        """Return the pending task, creating one for the first due slot if none exists."""
        with self._lock:
            config = self.config
            if not config.active:
                return None
            if self._pending is not None:
                return self._pending

            now = now or self._clock()
            today = now.date()
            for slot in SLOT_ORDER:
                if now.time() >= config.slot_time(slot) and config.last_run(slot) != today:
                    self._pending = PendingTask(slot=slot)
                    logger.info(
                        f"Slot {slot.value} is due",
                        extra={"slot": slot.value, "last_run": str(config.last_run(slot)), "now": now.isoformat()},
                    )
                    break
            return self._pending

    def complete(self, slot: Slot, today: Optional[date] = None) -> None:
        """Mark ``slot`` as done for ``today`` and release the pending task."""
        today = today or self._clock().date()
        with self._lock:
            self.store.save_automation(self.config.with_last_run(slot, today))
            self._pending = None
        logger.info(f"Slot {slot.value} completed for {today.isoformat()}", extra={"slot": slot.value})

    def fail(self, slot: Slot, error: str, today: Optional[date] = None) -> None:
        """A failed run still counts as the day's attempt, so the slot is not retried every tick."""
        today = today or self._clock().date()
        with self._lock:
            config = replace(
                self.config.with_last_run(slot, today),
                last_failure=SlotFailure(slot=slot, day=today, error=error),
            )
            self.store.save_automation(config)
            self._pending = None
        logger.warning(f"Slot {slot.value} failed for {today.isoformat()}", extra={"slot": slot.value, "error": error})

    def update_settings(
        self,
        active: Optional[bool] = None,
        morning_slot: Optional[time] = None,
        evening_slot: Optional[time] = None,
    ) -> AutomationConfig:
        with self._lock:
            current = self.config
            updated = replace(
                current,
                active=current.active if active is None else active,
                morning_slot=current.morning_slot if morning_slot is None else morning_slot,
                evening_slot=current.evening_slot if evening_slot is None else evening_slot,
            )
            self.store.save_automation(updated)
            if not updated.active and self._pending is not None:
                logger.info(f"Automation disabled, dropping pending {self._pending.slot.value} slot")
                self._pending = None
        logger.info("Automation settings updated", extra=updated.to_dict())
        return updated
