"""Provider OpenAI: Whisper para transcricao, chat completion para traducao."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openai import AsyncOpenAI

from voice_processor.exceptions import TranscriptionError, TranslationError
from voice_processor.logging import get_logger
from voice_processor.providers.interface import SpeechProvider

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger("providers.openai")

TRANSLATION_INSTRUCTION = (
    "You are a helpful translator. Translate the following text to {target_language}. "
    "Return ONLY the translated text, nothing else."
)


class OpenAIProvider(SpeechProvider):
    """SpeechProvider sobre o SDK ``openai``.

    Timeout e retries sao explicitos: o SDK so re-tenta erros de conexao,
    408/409/429 e 5xx, limitados por ``max_retries``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        transcription_model: str = "whisper-1",
        translation_model: str = "gpt-4o",
        timeout_s: float = 120.0,
        max_retries: int = 2,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_s,
            max_retries=max_retries,
        )
        self._transcription_model = transcription_model
        self._translation_model = translation_model

    async def transcribe(self, path: Path) -> str:
        try:
            with path.open("rb") as audio_file:
                response = await self._client.audio.transcriptions.create(
                    model=self._transcription_model,
                    file=audio_file,
                )
        except Exception as exc:
            logger.error(
                "transcription_failed",
                model=self._transcription_model,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise TranscriptionError(str(exc)) from exc

        return response.text

    async def translate(self, text: str, target_language: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._translation_model,
                messages=[
                    {
                        "role": "system",
                        "content": TRANSLATION_INSTRUCTION.format(
                            target_language=target_language
                        ),
                    },
                    {"role": "user", "content": text},
                ],
            )
        except Exception as exc:
            logger.error(
                "translation_failed",
                model=self._translation_model,
                target_language=target_language,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise TranslationError(target_language, str(exc)) from exc

        content = response.choices[0].message.content if response.choices else None
        if content is None:
            raise TranslationError(target_language, "resposta vazia do provider")
        return content.strip()

    async def close(self) -> None:
        await self._client.close()
