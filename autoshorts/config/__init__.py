"""
Application configuration and settings
"""

import os

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from autoshorts.core.runtime import env_float, env_int, parse_bool_env

from .paths import (
    APP_DIR,
    PROJECT_DIR,
    DATA_DIR,
    OUTPUT_DIR,
    JOB_DATA_DIR,
    STATE_FILE,
)
from .constants import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
)
from .models import (
    StageModels,
    get_stage_models,
)

# Credentials: API_KEYS (comma separated) wins over API_KEY, GEMINI_API_KEY is a last resort
API_KEYS_ENV = "API_KEYS"
API_KEY_ENV = "API_KEY"
LEGACY_API_KEY_ENV = "GEMINI_API_KEY"
KEY_POOL_RANDOM_START = parse_bool_env(os.getenv("KEY_POOL_RANDOM_START"), default=True)
KEY_ROTATION_BACKOFF_SECONDS = env_float("KEY_ROTATION_BACKOFF_SECONDS", 0.5, 0.0)

# Video rendering
VIDEO_POLL_INTERVAL_SECONDS = env_float("VIDEO_POLL_INTERVAL_SECONDS", 5.0, 0.0)
VIDEO_POLL_MAX_ATTEMPTS = env_int("VIDEO_POLL_MAX_ATTEMPTS", 72, 1)
VIDEO_DOWNLOAD_TIMEOUT_SECONDS = env_float("VIDEO_DOWNLOAD_TIMEOUT_SECONDS", 120.0, 1.0)

# Scheduled trigger renders a single clip with a short polling budget
TRIGGER_POLL_INTERVAL_SECONDS = env_float("TRIGGER_POLL_INTERVAL_SECONDS", 2.0, 0.0)
TRIGGER_POLL_MAX_ATTEMPTS = env_int("TRIGGER_POLL_MAX_ATTEMPTS", 15, 1)

# Automation
AUTOMATION_CHECK_INTERVAL_SECONDS = env_float("AUTOMATION_CHECK_INTERVAL_SECONDS", 30.0, 1.0)
AUTOMATION_ENABLED = parse_bool_env(os.getenv("AUTOMATION_ENABLED"), default=True)
DEFAULT_MORNING_SLOT = os.getenv("DEFAULT_MORNING_SLOT", "08:00")
DEFAULT_EVENING_SLOT = os.getenv("DEFAULT_EVENING_SLOT", "18:00")

__all__ = [
    "APP_DIR",
    "PROJECT_DIR",
    "DATA_DIR",
    "OUTPUT_DIR",
    "JOB_DATA_DIR",
    "STATE_FILE",
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "StageModels",
    "get_stage_models",
    "API_KEYS_ENV",
    "API_KEY_ENV",
    "LEGACY_API_KEY_ENV",
    "KEY_POOL_RANDOM_START",
    "KEY_ROTATION_BACKOFF_SECONDS",
    "VIDEO_POLL_INTERVAL_SECONDS",
    "VIDEO_POLL_MAX_ATTEMPTS",
    "VIDEO_DOWNLOAD_TIMEOUT_SECONDS",
    "TRIGGER_POLL_INTERVAL_SECONDS",
    "TRIGGER_POLL_MAX_ATTEMPTS",
    "AUTOMATION_CHECK_INTERVAL_SECONDS",
    "AUTOMATION_ENABLED",
    "DEFAULT_MORNING_SLOT",
    "DEFAULT_EVENING_SLOT",
]
