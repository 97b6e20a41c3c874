"""
Paths configuration

Centralized directory paths for the application.
"""

import os
from pathlib import Path

# Base directories
APP_DIR = Path(__file__).parent.parent
PROJECT_DIR = APP_DIR.parent
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_DIR / "data")))
OUTPUT_DIR = DATA_DIR / "outputs"
JOB_DATA_DIR = DATA_DIR / "job_data"
STATE_FILE = DATA_DIR / "studio_state.json"

__all__ = ["APP_DIR", "PROJECT_DIR", "DATA_DIR", "OUTPUT_DIR", "JOB_DATA_DIR", "STATE_FILE"]
