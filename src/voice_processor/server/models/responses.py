"""Modelos de resposta da API — Pydantic models para serializacao JSON."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from voice_processor._types import ProcessingResult  # noqa: TC001


class AudioProcessingResponse(BaseModel):
    """Resposta de sucesso de POST /translate-audio.

    ``target_language`` so aparece quando houve traducao.
    """

    status: Literal["success"] = "success"
    text: str = Field(description="Texto transcrito ou traduzido.")
    type: Literal["transcription", "translation"]
    target_language: str | None = Field(default=None, examples=["Spanish"])

    @classmethod
    def from_result(cls, result: ProcessingResult) -> AudioProcessingResponse:
        return cls(
            text=result.text,
            type=result.result_type.value,
            target_language=result.target_language,
        )


class ErrorResponse(BaseModel):
    """Resposta de erro: ``{"error": "<mensagem>"}``."""

    error: str
