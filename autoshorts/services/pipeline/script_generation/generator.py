"""
Script Generator - category prompt in, validated scenes out.

The text model is asked for JSON matching ``ScriptResponse``. Anything that
does not parse, or parses with the wrong shape, is a ``MalformedResponse``
and is not retried.
"""

import random
from typing import Any, Dict, List, Optional

from autoshorts.config.constants import (
    AD_SCENE_INDEX,
    AD_SCENE_NARRATION,
    AD_SCENE_VISUAL_PROMPT,
    EDU_EASY_AD_SCRIPT,
    SCENES_PER_VIDEO,
    SCENES_PER_VIDEO_WITH_AD,
    VIRAL_CTAS,
    VIRAL_HOOKS,
)
from autoshorts.config.models import SCRIPT_TEMPERATURE, VIRAL_SCRIPT_TEMPERATURE, get_stage_models
from autoshorts.core.exceptions import MalformedResponse
from autoshorts.core.logging import get_logger
from autoshorts.models.generation import GeneratedScript, Scene, ScriptResponse, VideoCategory
from autoshorts.services.infrastructure.keys import RotatingCallExecutor
from autoshorts.services.infrastructure.llm.gemini import GeminiGateway
from autoshorts.services.infrastructure.parsing import JsonParseError, parse_json_object

from .prompts import SYSTEM_INSTRUCTION_SCRIPT, build_script_prompt

logger = get_logger(__name__, component="script_generator")


def _require_text(data: Dict[str, Any], field_name: str, where: str) -> str:
    value = data.get(field_name)
    if not isinstance(value, str) or not value.strip():
        raise MalformedResponse(f"{where}: missing or empty '{field_name}'")
    return value.strip()


def parse_script_payload(text: str, expected_scenes: int) -> GeneratedScript:
    """Validate a raw model response into a ``GeneratedScript`` (visual prompts unprefixed)."""
    try:
        data = parse_json_object(text)
    except JsonParseError as exc:
        raise MalformedResponse(f"Script response is not valid JSON: {exc}") from exc

    topic = _require_text(data, "trending_topic", "script")
    character = _require_text(data, "character_description", "script")
    full_script = _require_text(data, "full_script", "script")

    raw_scenes = data.get("scenes")
    if not isinstance(raw_scenes, list):
        raise MalformedResponse("script: 'scenes' must be a list")
    if len(raw_scenes) != expected_scenes:
        raise MalformedResponse(f"script: expected {expected_scenes} scenes, got {len(raw_scenes)}")

    scenes: List[Scene] = []
    for index, raw in enumerate(raw_scenes, start=1):
        if not isinstance(raw, dict):
            raise MalformedResponse(f"scene {index}: expected an object")
        scenes.append(Scene(
            narration=_require_text(raw, "narration", f"scene {index}"),
            visual_prompt=_require_text(raw, "visual_prompt", f"scene {index}"),
        ))

    return GeneratedScript(topic=topic, character_description=character, full_script=full_script, scenes=scenes)


def force_ad_scene(script: GeneratedScript) -> GeneratedScript:
    """Put the fixed sponsor copy at ``AD_SCENE_INDEX`` and re-derive the voice-over from the scenes."""
    scenes = list(script.scenes)
    scenes[AD_SCENE_INDEX] = Scene(narration=AD_SCENE_NARRATION, visual_prompt=AD_SCENE_VISUAL_PROMPT)
    return GeneratedScript(
        topic=script.topic,
        character_description=script.character_description,
        full_script=" ".join(scene.narration for scene in scenes),
        scenes=scenes,
    )


def prefix_character(script: GeneratedScript) -> GeneratedScript:
    prefix = f"({script.character_description}), "
    return GeneratedScript(
        topic=script.topic,
        character_description=script.character_description,
        full_script=script.full_script,
        scenes=[Scene(narration=s.narration, visual_prompt=prefix + s.visual_prompt) for s in script.scenes],
    )


class ScriptGenerator:
    """Generates one short-video script through the rotating executor."""

    def __init__(
        self,
        executor: RotatingCallExecutor,
        gateway: GeminiGateway,
        rng: Optional[random.Random] = None,
        model: Optional[str] = None,
    ):
        self.executor = executor
        self.gateway = gateway
        self.rng = rng or random.Random()
        self.model = model or get_stage_models().text

    def pick_viral_lines(self) -> tuple:
        return self.rng.choice(VIRAL_HOOKS), self.rng.choice(VIRAL_CTAS)

    async def generate(
        self,
        category: VideoCategory,
        ad_injected: bool = False,
        viral_mode: bool = False,
    ) -> GeneratedScript:
        hook = cta = None
        if viral_mode:
            hook, cta = self.pick_viral_lines()

        prompt = build_script_prompt(
            category=category.value,
            category_label=category.label,
            ad_script=EDU_EASY_AD_SCRIPT if ad_injected else None,
            hook=hook,
            cta=cta,
        )
        temperature = VIRAL_SCRIPT_TEMPERATURE if viral_mode else SCRIPT_TEMPERATURE
        expected = SCENES_PER_VIDEO_WITH_AD if ad_injected else SCENES_PER_VIDEO

        logger.info(
            f"Generating {category.value} script",
            extra={"ad_injected": ad_injected, "viral_mode": viral_mode, "hook": hook, "cta": cta},
        )

        async def call(api_key: str) -> str:
            return await self.gateway.generate_json(
                api_key,
                model=self.model,
                prompt=prompt,
                temperature=temperature,
                response_schema=ScriptResponse,
                system_instruction=SYSTEM_INSTRUCTION_SCRIPT,
            )

        raw = await self.executor.execute(call, label="script")
        script = parse_script_payload(raw, expected)
        if ad_injected:
            script = force_ad_scene(script)
        script = prefix_character(script)

        logger.info(f"Script ready: {script.topic}", extra={"scenes": len(script.scenes)})
        return script
