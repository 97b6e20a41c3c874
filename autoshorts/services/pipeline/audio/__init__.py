"""
Audio - voice-over synthesis and WAV wrapping
"""

from .synthesizer import VoiceSynthesizer
from .wav import pcm_to_wav

__all__ = ["VoiceSynthesizer", "pcm_to_wav"]
