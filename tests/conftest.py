"""Fixtures compartilhadas para todos os testes."""

from __future__ import annotations

import base64
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Cabecalho ID3 + frames fake: o provider e sempre mockado, o conteudo nao e decodificado.
FAKE_AUDIO = b"ID3\x04\x00\x00\x00\x00\x00\x00fake-mp3-frames" * 8


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Scratch directory isolado (ainda nao criado)."""
    return tmp_path / "uploads"


@pytest.fixture
def sample_audio_bytes() -> bytes:
    """Bytes de audio fake."""
    return FAKE_AUDIO


@pytest.fixture
def sample_audio_base64() -> str:
    """Audio fake codificado em Base64."""
    return base64.b64encode(FAKE_AUDIO).decode("ascii")


@pytest.fixture
def mock_provider() -> MagicMock:
    """SpeechProvider mockado que registra o conteudo lido em cada transcricao.

    ``provider.seen_files`` guarda (path, bytes) para verificar que o arquivo
    existia durante a chamada remota.
    """
    provider = MagicMock()
    provider.seen_files = []

    async def _transcribe(path: Path) -> str:
        provider.seen_files.append((path, path.read_bytes()))
        return "Ola, como posso ajudar?"

    provider.transcribe = AsyncMock(side_effect=_transcribe)
    provider.translate = AsyncMock(return_value="Hola, como puedo ayudar?")
    provider.close = AsyncMock()
    return provider