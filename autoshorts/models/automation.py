"""
Automation models: daily slots, per-slot run markers and the pending task.
"""

from dataclasses import dataclass, field, replace
from datetime import date, time
from enum import Enum
from typing import Any, Dict, Optional


class Slot(str, Enum):
    MORNING = "morning"
    EVENING = "evening"


def parse_slot_time(value: str) -> time:
    """Parse ``HH:MM`` into a ``time``; raises ``ValueError`` on anything else."""
    try:
        hour_text, minute_text = value.strip().split(":")
        return time(int(hour_text), int(minute_text))
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid slot time {value!r}, expected HH:MM") from exc


def format_slot_time(value: time) -> str:
    return value.strftime("%H:%M")


def _parse_marker(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class PendingTask:
    """A due slot waiting for (or undergoing) generation"""
    slot: Slot


@dataclass(frozen=True)
class SlotFailure:
    slot: Slot
    day: date
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"slot": self.slot.value, "date": self.day.isoformat(), "error": self.error}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["SlotFailure"]:
        day = _parse_marker(data.get("date"))
        if day is None:
            return None
        return cls(slot=Slot(data["slot"]), day=day, error=data.get("error", ""))


@dataclass(frozen=True)
class AutomationConfig:
    """
    Daily automation settings.

    The ``last_*_run`` markers are calendar days, not timestamps: a slot is
    either done for today or it is not.
    """

    active: bool = True
    morning_slot: time = time(8, 0)
    evening_slot: time = time(18, 0)
    last_morning_run: Optional[date] = None
    last_evening_run: Optional[date] = None
    last_failure: Optional[SlotFailure] = field(default=None, compare=False)

    def slot_time(self, slot: Slot) -> time:
        return self.morning_slot if slot is Slot.MORNING else self.evening_slot

    def last_run(self, slot: Slot) -> Optional[date]:
        return self.last_morning_run if slot is Slot.MORNING else self.last_evening_run

    def with_last_run(self, slot: Slot, day: date) -> "AutomationConfig":
        if slot is Slot.MORNING:
            return replace(self, last_morning_run=day)
        return replace(self, last_evening_run=day)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": self.active,
            "morning_slot": format_slot_time(self.morning_slot),
            "evening_slot": format_slot_time(self.evening_slot),
            "last_morning_run": self.last_morning_run.isoformat() if self.last_morning_run else None,
            "last_evening_run": self.last_evening_run.isoformat() if self.last_evening_run else None,
            "last_failure": self.last_failure.to_dict() if self.last_failure else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AutomationConfig":
        defaults = cls()
        failure = data.get("last_failure")
        return cls(
            active=bool(data.get("active", defaults.active)),
            morning_slot=parse_slot_time(data["morning_slot"]) if data.get("morning_slot") else defaults.morning_slot,
            evening_slot=parse_slot_time(data["evening_slot"]) if data.get("evening_slot") else defaults.evening_slot,
            last_morning_run=_parse_marker(data.get("last_morning_run")),
            last_evening_run=_parse_marker(data.get("last_evening_run")),
            last_failure=SlotFailure.from_dict(failure) if isinstance(failure, dict) else None,
        )


__all__ = [
    "Slot",
    "PendingTask",
    "SlotFailure",
    "AutomationConfig",
    "parse_slot_time",
    "format_slot_time",
]
