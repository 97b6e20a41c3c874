"""
Model configuration for the generation stages

Each stage talks to a different Gemini model. Names can be overridden from the
environment without touching code, e.g. to move to a newer Veo release.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class StageModels:
    """Model names used by the pipeline stages"""
    text: str
    tts: str
    video: str


DEFAULT_MODELS = StageModels(
    text="gemini-2.5-flash",
    tts="gemini-2.5-flash-preview-tts",
    video="veo-3.1-fast-generate-preview",
)


def get_stage_models() -> StageModels:
    return StageModels(
        text=os.getenv("TEXT_MODEL", DEFAULT_MODELS.text),
        tts=os.getenv("TTS_MODEL", DEFAULT_MODELS.tts),
        video=os.getenv("VIDEO_MODEL", DEFAULT_MODELS.video),
    )


# Script generation
SCRIPT_TEMPERATURE = 0.85
VIRAL_SCRIPT_TEMPERATURE = 1.0

# Voice synthesis
TTS_VOICE = os.getenv("TTS_VOICE", "Kore")
TTS_SAMPLE_RATE = 24000
TTS_CHANNELS = 1
TTS_SAMPLE_WIDTH = 2

# Video rendering
VIDEO_PROMPT_SUFFIX = ", cinematic, 4k, high quality, photorealistic, french atmosphere"
VIDEO_ASPECT_RATIO = "9:16"
VIDEO_RESOLUTION = "720p"

__all__ = [
    "StageModels",
    "DEFAULT_MODELS",
    "get_stage_models",
    "SCRIPT_TEMPERATURE",
    "VIRAL_SCRIPT_TEMPERATURE",
    "TTS_VOICE",
    "TTS_SAMPLE_RATE",
    "TTS_CHANNELS",
    "TTS_SAMPLE_WIDTH",
    "VIDEO_PROMPT_SUFFIX",
    "VIDEO_ASPECT_RATIO",
    "VIDEO_RESOLUTION",
]
