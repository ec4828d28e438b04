"""Tipos fundamentais do Voice Processor.

Define a variante de entrada de audio (upload, URL, Base64) e o resultado
interno do pipeline. Todos os tipos sao request-scoped: nada persiste entre
requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path  # noqa: TC003


class ResultType(Enum):
    """Discriminador do texto devolvido ao cliente."""

    TRANSCRIPTION = "transcription"
    TRANSLATION = "translation"


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Arquivo enviado via multipart, ja gravado no scratch directory."""

    local_path: Path


@dataclass(frozen=True, slots=True)
class RemoteUrl:
    """Referencia a um audio remoto que sera baixado via streaming."""

    url: str


@dataclass(frozen=True, slots=True)
class Base64Payload:
    """Audio codificado em Base64, como recebido na request."""

    data: str


AudioInput = UploadedFile | RemoteUrl | Base64Payload


@dataclass(frozen=True, slots=True)
class ProcessingResult:
    """Resultado do pipeline (transcricao + traducao opcional).

    ``text`` e o texto final: traducao se houve target_language, senao a
    transcricao bruta. ``target_language`` so e preenchido para traducoes.
    """

    text: str
    result_type: ResultType
    transcription: str
    target_language: str | None = None
