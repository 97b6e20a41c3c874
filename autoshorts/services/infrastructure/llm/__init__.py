"""LLM infrastructure - Gemini gateway."""

from .gemini import GeminiGateway, translate_api_errors

__all__ = ["GeminiGateway", "translate_api_errors"]
