"""Job orchestration - the job ledger and recurring background tasks."""

from .job_ledger import JobLedger, get_job_ledger
from .recurring import RecurringTask

__all__ = ["JobLedger", "get_job_ledger", "RecurringTask"]
