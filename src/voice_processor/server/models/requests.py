"""Modelos de request da API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TranslateAudioRequest(BaseModel):
    """Corpo JSON de POST /translate-audio.

    Todos os campos sao opcionais; a presenca de ao menos uma fonte de
    audio e validada pelo pipeline, nao pelo schema.
    """

    model_config = ConfigDict(extra="ignore")

    audio_url: str | None = Field(
        default=None,
        description="URL do arquivo de audio (alternativa ao upload).",
    )
    audio_base64: str | None = Field(
        default=None,
        description="Audio codificado em Base64 (aceita prefixo data URI).",
    )
    target_language: str | None = Field(
        default=None,
        description='Idioma alvo da traducao (ex: "English", "Spanish").',
        examples=["Spanish"],
    )
