"""
Scheduling - daily slot catch-up, the automation loop and the cron trigger
"""

from .catch_up import CatchUpScheduler, SLOT_ORDER
from .runner import AutomationRunner, SLOT_CATEGORIES
from .trigger import TIMEOUT_MARKER, category_for, run_scheduled_generation

__all__ = [
    "CatchUpScheduler",
    "SLOT_ORDER",
    "AutomationRunner",
    "SLOT_CATEGORIES",
    "TIMEOUT_MARKER",
    "category_for",
    "run_scheduled_generation",
]
