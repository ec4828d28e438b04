"""Normalizacao das tres fontes de audio em um unico arquivo local.

A request pode trazer upload multipart, URL remota ou payload Base64. A
precedencia e fixa: upload, depois Base64, depois URL. Apenas a primeira
fonte presente e usada; as demais sao ignoradas.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import re
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from voice_processor._types import AudioInput, Base64Payload, RemoteUrl, UploadedFile
from voice_processor.exceptions import InvalidAudioPayloadError, MissingInputError
from voice_processor.logging import get_logger
from voice_processor.storage.tempfiles import (
    cleanup_file,
    scratch_file_path,
    write_audio_bytes,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

    from voice_processor.storage.tempfiles import AudioDownloader

logger = get_logger("pipeline.normalizer")

_DATA_URI_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def resolve_audio_input(
    file_path: Path | None = None,
    audio_url: str | None = None,
    audio_base64: str | None = None,
) -> AudioInput:
    """Escolhe a fonte de audio da request.

    Strings vazias contam como ausentes.

    Raises:
        MissingInputError: Se nenhuma das tres fontes foi enviada.
    """
    if file_path is not None:
        return UploadedFile(local_path=file_path)
    if audio_base64:
        return Base64Payload(data=audio_base64)
    if audio_url:
        return RemoteUrl(url=audio_url)
    raise MissingInputError()


def decode_base64_audio(data: str) -> bytes:
    """Decodifica audio em Base64.

    Aceita prefixo ``data:<mime>;base64,`` e ignora quebras de linha.

    Raises:
        InvalidAudioPayloadError: Se o payload nao e Base64 valido ou e vazio.
    """
    payload = _WHITESPACE.sub("", _DATA_URI_PREFIX.sub("", data.strip(), count=1))
    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidAudioPayloadError(str(exc)) from None

    if not decoded:
        raise InvalidAudioPayloadError("payload vazio")
    return decoded


def _target_path(audio: AudioInput, scratch_dir: Path) -> Path:
    match audio:
        case UploadedFile(local_path=local_path):
            return local_path
        case Base64Payload():
            return scratch_file_path(scratch_dir, "base64")
        case RemoteUrl():
            return scratch_file_path(scratch_dir, "download")


def _write_base64_audio(data: str, path: Path) -> None:
    write_audio_bytes(decode_base64_audio(data), path)


@asynccontextmanager
async def materialize(
    audio: AudioInput,
    *,
    scratch_dir: Path,
    downloader: AudioDownloader,
) -> AsyncIterator[Path]:
    """Materializa ``audio`` como arquivo local e garante sua remocao.

    O caminho e reservado antes de qualquer escrita, entao um download ou
    decode que falhe no meio tambem tem o arquivo parcial removido. O
    upload ja gravado pertence ao pipeline durante a request e segue a
    mesma regra.

    Yields:
        Path do MaterializedAudioFile.
    """
    path = _target_path(audio, scratch_dir)
    try:
        match audio:
            case Base64Payload(data=data):
                await asyncio.to_thread(_write_base64_audio, data, path)
            case RemoteUrl(url=url):
                await downloader.download(url, path)
            case UploadedFile():
                pass

        logger.debug("audio_materialized", source=type(audio).__name__, path=str(path))
        yield path
    finally:
        cleanup_file(path)
