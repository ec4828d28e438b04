"""Providers remotos de transcricao e traducao."""

from voice_processor.providers.interface import SpeechProvider
from voice_processor.providers.openai import OpenAIProvider

__all__ = ["OpenAIProvider", "SpeechProvider"]
