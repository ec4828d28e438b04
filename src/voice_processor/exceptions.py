"""Exceptions tipadas do Voice Processor.

Hierarquia:
    VoiceProcessorError (base)
    +-- ConfigError
    +-- InvalidRequestError
    |   +-- MissingInputError
    |   +-- InvalidAudioPayloadError
    +-- AudioSourceError
    |   +-- DownloadError
    +-- ProviderError
        +-- TranscriptionError
        +-- TranslationError
"""

from __future__ import annotations


class VoiceProcessorError(Exception):
    """Base para todas as exceptions do Voice Processor."""


# --- Configuracao ---


class ConfigError(VoiceProcessorError):
    """Erro de configuracao do runtime (variaveis de ambiente invalidas)."""


# --- Request ---


class InvalidRequestError(VoiceProcessorError):
    """Parametro de request invalido."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class MissingInputError(InvalidRequestError):
    """Nenhuma das tres fontes de audio (file, audio_url, audio_base64) foi enviada."""

    def __init__(self) -> None:
        super().__init__(
            'Nenhum audio informado: envie "file" (multipart), "audio_url" ou "audio_base64".'
        )


class InvalidAudioPayloadError(InvalidRequestError):
    """Payload Base64 invalido ou vazio."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"audio_base64 invalido: {reason}")


# --- Fonte de audio ---


class AudioSourceError(VoiceProcessorError):
    """Erro ao materializar o audio em disco."""


class DownloadError(AudioSourceError):
    """Falha ao baixar audio de uma URL remota."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Falha ao baixar audio de '{url}': {reason}")


# --- Provider remoto ---


class ProviderError(VoiceProcessorError):
    """Erro retornado pelo provider remoto de transcricao/traducao."""


class TranscriptionError(ProviderError):
    """Falha na transcricao do audio."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Falha ao transcrever audio: {reason}")


class TranslationError(ProviderError):
    """Falha na traducao do texto transcrito."""

    def __init__(self, target_language: str, reason: str) -> None:
        self.target_language = target_language
        self.reason = reason
        super().__init__(f"Falha ao traduzir texto para '{target_language}': {reason}")
