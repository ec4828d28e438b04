"""Pipeline de audio: materializa, transcreve, traduz (opcional), limpa."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from voice_processor._types import AudioInput, ProcessingResult, ResultType
from voice_processor.logging import get_logger
from voice_processor.pipeline.normalizer import materialize

if TYPE_CHECKING:
    from pathlib import Path

    from voice_processor.providers.interface import SpeechProvider
    from voice_processor.storage.tempfiles import AudioDownloader

logger = get_logger("pipeline")


class AudioPipeline:
    """Orquestra uma request de audio ponta a ponta.

    Recebe o provider e o downloader ja construidos (nenhum cliente global),
    o que permite substituir ambos em testes.

    Fluxo:
    1. Materializa a entrada no scratch directory
    2. Transcreve via provider
    3. Traduz se ``target_language`` foi informado
    4. Remove o arquivo local, com sucesso ou falha
    """

    def __init__(
        self,
        provider: SpeechProvider,
        downloader: AudioDownloader,
        scratch_dir: Path,
    ) -> None:
        self._provider = provider
        self._downloader = downloader
        self._scratch_dir = scratch_dir

    @property
    def scratch_dir(self) -> Path:
        """Diretorio dos arquivos temporarios da request."""
        return self._scratch_dir

    async def process(
        self,
        audio: AudioInput,
        target_language: str | None = None,
    ) -> ProcessingResult:
        """Processa a entrada de audio.

        Raises:
            InvalidAudioPayloadError: Base64 invalido.
            DownloadError: Falha ao baixar a URL.
            TranscriptionError: Falha do provider na transcricao.
            TranslationError: Falha do provider na traducao.
        """
        start = time.monotonic()

        async with materialize(
            audio, scratch_dir=self._scratch_dir, downloader=self._downloader
        ) as path:
            transcription = await self._provider.transcribe(path)

            if target_language:
                translation = await self._provider.translate(transcription, target_language)
                result = ProcessingResult(
                    text=translation,
                    result_type=ResultType.TRANSLATION,
                    transcription=transcription,
                    target_language=target_language,
                )
            else:
                result = ProcessingResult(
                    text=transcription,
                    result_type=ResultType.TRANSCRIPTION,
                    transcription=transcription,
                )

        logger.info(
            "audio_processed",
            source=type(audio).__name__,
            result_type=result.result_type.value,
            target_language=target_language,
            transcription_chars=len(transcription),
            elapsed_ms=round((time.monotonic() - start) * 1000, 1),
        )
        return result
