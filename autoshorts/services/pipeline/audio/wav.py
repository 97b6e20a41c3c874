"""WAV container for the raw PCM returned by speech synthesis."""

import io
import wave

from autoshorts.config.models import TTS_CHANNELS, TTS_SAMPLE_RATE, TTS_SAMPLE_WIDTH


def pcm_to_wav(
    pcm: bytes,
    rate: int = TTS_SAMPLE_RATE,
    channels: int = TTS_CHANNELS,
    sample_width: int = TTS_SAMPLE_WIDTH,
) -> bytes:
    # A trailing partial frame would make the header lie about the data length
    frame_size = sample_width * max(1, channels)
    usable = len(pcm) - (len(pcm) % frame_size)
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(max(1, channels))
        wf.setsampwidth(sample_width)
        wf.setframerate(rate)
        wf.writeframes(pcm[:usable])
    return buffer.getvalue()
