"""Normalizacao da entrada de audio e orquestracao transcricao -> traducao."""

from voice_processor.pipeline.normalizer import materialize, resolve_audio_input
from voice_processor.pipeline.orchestrator import AudioPipeline

__all__ = ["AudioPipeline", "materialize", "resolve_audio_input"]
