"""
Voice-over synthesis for a whole script.
"""

from typing import Optional

from autoshorts.config.models import TTS_VOICE, get_stage_models
from autoshorts.core.logging import get_logger
from autoshorts.services.infrastructure.keys import RotatingCallExecutor
from autoshorts.services.infrastructure.llm.gemini import GeminiGateway

from .wav import pcm_to_wav

logger = get_logger(__name__, component="voice")


class VoiceSynthesizer:
    """One TTS call per script. Returns WAV bytes, or ``None`` when no audio came back."""

    def __init__(
        self,
        executor: RotatingCallExecutor,
        gateway: GeminiGateway,
        voice: str = TTS_VOICE,
        model: Optional[str] = None,
    ):
        self.executor = executor
        self.gateway = gateway
        self.voice = voice
        self.model = model or get_stage_models().tts

    async def synthesize(self, text: str) -> Optional[bytes]:
        async def call(api_key: str) -> Optional[bytes]:
            return await self.gateway.synthesize_speech(api_key, model=self.model, text=text, voice=self.voice)

        pcm = await self.executor.execute(call, label="voice")
        if not pcm:
            logger.warning("Speech synthesis returned no audio payload, continuing without voice-over")
            return None

        wav = pcm_to_wav(pcm)
        logger.info(f"Voice-over synthesized ({len(wav)} bytes)", extra={"voice": self.voice})
        return wav
