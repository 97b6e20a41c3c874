"""
Script generation - prompt assembly and validated scene output
"""

from .generator import ScriptGenerator, force_ad_scene, parse_script_payload, prefix_character
from .prompts import SYSTEM_INSTRUCTION_SCRIPT, build_script_prompt

__all__ = [
    "ScriptGenerator",
    "force_ad_scene",
    "parse_script_payload",
    "prefix_character",
    "SYSTEM_INSTRUCTION_SCRIPT",
    "build_script_prompt",
]
