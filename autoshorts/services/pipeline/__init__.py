"""
Pipeline services - core video generation flow.

Pipeline Stages:
1. Script Generation - Topic, character and scenes from a category prompt
2. Audio - Voice-over of the full script
3. Video - One clip per scene, rendered sequentially
"""

from .generation_pipeline import GenerationPipeline, SlotListener, clip_file_name

__all__ = [
    "GenerationPipeline",
    "SlotListener",
    "clip_file_name",
]
