"""Interface abstrata para providers remotos de speech.

Todo provider (OpenAI, Azure, um servidor OpenAI-compatible) implementa
esta interface para ser plugavel no pipeline. O pipeline nunca conhece o
provider concreto.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class SpeechProvider(ABC):
    """Contrato de um provider remoto: transcrever arquivo e traduzir texto."""

    @abstractmethod
    async def transcribe(self, path: Path) -> str:
        """Transcreve o audio em ``path``.

        Args:
            path: Arquivo de audio local (MaterializedAudioFile).

        Returns:
            Texto transcrito.

        Raises:
            TranscriptionError: Se o provider falhar.
        """
        ...

    @abstractmethod
    async def translate(self, text: str, target_language: str) -> str:
        """Traduz ``text`` para ``target_language``.

        Args:
            text: Texto transcrito.
            target_language: Rotulo do idioma (ex: "Spanish", "English").

        Returns:
            Texto traduzido, sem espacos nas extremidades.

        Raises:
            TranslationError: Se o provider falhar.
        """
        ...

    async def close(self) -> None:  # noqa: B027
        """Libera recursos de rede. Default: no-op."""
