"""
Studio state - counters, rewards and automation settings in one JSON file.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Optional

from autoshorts.config import STATE_FILE
from autoshorts.config.constants import (
    AD_FREQUENCY,
    POINTS_PER_LEVEL,
    PUBLISH_REWARD,
    READY_REWARD,
    VIRAL_READY_REWARD,
)
from autoshorts.core.logging import get_logger
from autoshorts.models.automation import AutomationConfig

logger = get_logger(__name__, component="studio_state")


def should_inject_ad(total_videos: int) -> bool:
    """Every ``AD_FREQUENCY``-th video carries the advertisement."""
    return (total_videos + 1) % AD_FREQUENCY == 0


def level_for(points: int) -> int:
    return points // POINTS_PER_LEVEL + 1


@dataclass
class StudioState:
    total_videos: int = 0
    reward_points: int = 0
    published_videos: int = 0
    automation: AutomationConfig = field(default_factory=AutomationConfig)

    @property
    def level(self) -> int:
        return level_for(self.reward_points)

    @property
    def videos_until_ad(self) -> int:
        """Completed videos still needed before the next job carries the ad (0 = next one does)."""
        return (AD_FREQUENCY - 1 - self.total_videos % AD_FREQUENCY) % AD_FREQUENCY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_videos": self.total_videos,
            "reward_points": self.reward_points,
            "published_videos": self.published_videos,
            "automation": self.automation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudioState":
        automation = data.get("automation")
        return cls(
            total_videos=int(data.get("total_videos", 0)),
            reward_points=int(data.get("reward_points", 0)),
            published_videos=int(data.get("published_videos", 0)),
            automation=AutomationConfig.from_dict(automation) if isinstance(automation, dict) else AutomationConfig(),
        )


class StudioStateStore:
    """Thread-safe read-modify-write access to the persisted ``StudioState``."""

    def __init__(self, path: Optional[Path] = None, default_automation: Optional[AutomationConfig] = None):
        self.path = Path(path) if path else STATE_FILE
        self._lock = RLock()
        self._state = self._load(default_automation or AutomationConfig())

    def _load(self, default_automation: AutomationConfig) -> StudioState:
        if not self.path.exists():
            return StudioState(automation=default_automation)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return StudioState.from_dict(json.load(f))
        except (OSError, ValueError) as exc:
            logger.error(f"Could not read {self.path.name}, starting from defaults", extra={"error": str(exc)})
            return StudioState(automation=default_automation)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._state.to_dict(), f, indent=2)
        tmp_path.replace(self.path)

    def snapshot(self) -> StudioState:
        with self._lock:
            return StudioState.from_dict(self._state.to_dict())

    @property
    def total_videos(self) -> int:
        with self._lock:
            return self._state.total_videos

    def next_job_has_ad(self) -> bool:
        with self._lock:
            return should_inject_ad(self._state.total_videos)

    def record_ready(self, viral_mode: bool) -> int:
        """Count a completed video and award its points. Returns the new total."""
        with self._lock:
            self._state.total_videos += 1
            self._state.reward_points += VIRAL_READY_REWARD if viral_mode else READY_REWARD
            self._save()
            return self._state.total_videos

    def record_published(self) -> None:
        with self._lock:
            self._state.published_videos += 1
            self._state.reward_points += PUBLISH_REWARD
            self._save()

    def load_automation(self) -> AutomationConfig:
        with self._lock:
            return self._state.automation

    def save_automation(self, config: AutomationConfig) -> None:
        with self._lock:
            self._state.automation = config
            self._save()
