"""
Video - per-scene clip rendering
"""

from .renderer import ClipRenderer, build_video_prompt

__all__ = ["ClipRenderer", "build_video_prompt"]
