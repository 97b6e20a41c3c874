"""
Lifecycle management for the AutoShorts application.
Handles startup checks, the automation loop, and shutdown tasks.
"""

import os

from fastapi import FastAPI

from autoshorts.config import AUTOMATION_ENABLED, DATA_DIR, JOB_DATA_DIR, OUTPUT_DIR
from autoshorts.core import get_logger, is_production, parse_bool_env, run_startup_runtime_checks

from .registry import Services, get_services

logger = get_logger(__name__, service="lifecycle")


class StartupManager:
    def __init__(self, app: FastAPI, services: Services | None = None):
        self.app = app
        self.services = services or get_services()

    async def run_startup(self) -> None:
        """Verify data directories, then start the automation loop."""
        strict_runtime = parse_bool_env(
            os.getenv("STARTUP_STRICT_RUNTIME_CHECKS"),
            default=is_production(),
        )
        runtime_report = run_startup_runtime_checks(
            [("data", DATA_DIR), ("outputs", OUTPUT_DIR), ("job_data", JOB_DATA_DIR)],
            strict=strict_runtime,
        )
        self.app.state.runtime_report = runtime_report
        logger.info("Startup runtime checks complete", extra={"runtime_report": runtime_report})

        pool = self.services.key_pool
        if pool.size == 0:
            logger.warning("No API key configured; generation requests will be refused")
        else:
            logger.info(f"Key pool ready with {pool.size} key(s)", extra={"keys": pool.masked_keys})

        if AUTOMATION_ENABLED:
            # First tick runs immediately and picks up slots missed while the process was down
            self.services.runner.start()
        else:
            logger.info("Automation loop disabled by environment")

    async def run_shutdown(self) -> None:
        """Stop background services gracefully."""
        await self.services.runner.stop()
