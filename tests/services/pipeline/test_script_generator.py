import json
import random

import pytest

from autoshorts.config.constants import (
    AD_SCENE_NARRATION,
    VIRAL_CTAS,
    VIRAL_HOOKS,
)
from autoshorts.core.exceptions import MalformedResponse
from autoshorts.models.generation import VideoCategory
from autoshorts.services.pipeline.script_generation import (
    ScriptGenerator,
    build_script_prompt,
    parse_script_payload,
)
from conftest import FakeGateway, script_payload


def make_generator(executor, gateway, seed=7):
    return ScriptGenerator(executor, gateway, rng=random.Random(seed), model="text-model")


@pytest.mark.asyncio
async def test_plain_script_has_four_prefixed_scenes(executor):
    gateway = FakeGateway(scene_count=4)
    script = await make_generator(executor, gateway).generate(VideoCategory.SCHOOL_TIPS)

    assert len(script.scenes) == 4
    assert script.scenes[0].visual_prompt == "(Un lycéen en sweat bleu), Visual 1"
    assert [scene.narration for scene in script.scenes] == [f"Narration {i}" for i in range(1, 5)]

    prompt = gateway.calls_to("generate_json")[0][2]["prompt"]
    assert "exactement 4 scènes" in prompt
    assert gateway.calls_to("generate_json")[0][2]["temperature"] == 0.85


@pytest.mark.asyncio
async def test_ad_script_forces_sponsor_scene_at_index_two(executor):
    gateway = FakeGateway(scene_count=5)
    script = await make_generator(executor, gateway).generate(VideoCategory.MOTIVATION, ad_injected=True)

    assert len(script.scenes) == 5
    assert script.scenes[2].narration == AD_SCENE_NARRATION
    assert script.scenes[2].visual_prompt.startswith("(Un lycéen en sweat bleu), ")
    assert AD_SCENE_NARRATION in script.full_script
    assert script.scenes[1].narration == "Narration 2"
    assert script.scenes[3].narration == "Narration 4"

    prompt = gateway.calls_to("generate_json")[0][2]["prompt"]
    assert "5 SCÈNES" in prompt
    assert "edueasy.net" in prompt


@pytest.mark.asyncio
async def test_viral_mode_uses_pool_lines_and_higher_temperature(executor):
    gateway = FakeGateway()
    generator = make_generator(executor, gateway, seed=3)
    await generator.generate(VideoCategory.SCARY_STORY, viral_mode=True)

    call = gateway.calls_to("generate_json")[0][2]
    assert call["temperature"] == 1.0
    assert any(hook in call["prompt"] for hook in VIRAL_HOOKS)
    assert any(cta in call["prompt"] for cta in VIRAL_CTAS)


@pytest.mark.asyncio
async def test_wrong_scene_count_is_malformed_and_not_retried(executor):
    gateway = FakeGateway(scene_count=3)
    with pytest.raises(MalformedResponse):
        await make_generator(executor, gateway).generate(VideoCategory.SCHOOL_TIPS)
    assert len(gateway.calls_to("generate_json")) == 1


@pytest.mark.asyncio
async def test_ad_job_rejects_four_scene_answer(executor):
    gateway = FakeGateway(scene_count=4)
    with pytest.raises(MalformedResponse):
        await make_generator(executor, gateway).generate(VideoCategory.SCHOOL_TIPS, ad_injected=True)


def test_fenced_json_is_accepted():
    text = "```json\n" + script_payload(4) + "\n```"
    assert len(parse_script_payload(text, 4).scenes) == 4


@pytest.mark.parametrize("text", [
    "not json at all",
    json.dumps({"trending_topic": "t", "character_description": "c", "full_script": "s"}),
    json.dumps({
        "trending_topic": "t",
        "character_description": "c",
        "full_script": "s",
        "scenes": [{"visual_prompt": "", "narration": "n"}] * 4,
    }),
    json.dumps({
        "trending_topic": "",
        "character_description": "c",
        "full_script": "s",
        "scenes": [{"visual_prompt": "v", "narration": "n"}] * 4,
    }),
])
def test_incomplete_payloads_are_malformed(text):
    with pytest.raises(MalformedResponse):
        parse_script_payload(text, 4)


def test_calm_prompt_has_no_viral_block():
    prompt = build_script_prompt("SCHOOL_TIPS", "Conseils Scolaires (Étudiants)")
    assert "MODE VIRAL" not in prompt
    assert "bienveillant" in prompt
