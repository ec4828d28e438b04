"""Configuracao do Voice Processor carregada de variaveis de ambiente."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from voice_processor.exceptions import ConfigError

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_SCRATCH_DIR = "uploads"
DEFAULT_TRANSCRIPTION_MODEL = "whisper-1"
DEFAULT_TRANSLATION_MODEL = "gpt-4o"
DEFAULT_REQUEST_TIMEOUT_S = 120.0
DEFAULT_MAX_RETRIES = 2


def _parse_origins(raw: str | None) -> list[str]:
    if not raw:
        return ["*"]
    parts = [item.strip() for item in raw.split(",") if item.strip()]
    return parts or ["*"]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} deve ser um inteiro, recebido '{raw}'") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} deve ser numerico, recebido '{raw}'") from None


@dataclass(slots=True)
class Settings:
    """Parametros do servico carregados de variaveis de ambiente."""

    host: str = field(default_factory=lambda: os.getenv("HOST", DEFAULT_HOST))
    port: int = field(default_factory=lambda: _env_int("PORT", DEFAULT_PORT))
    openai_api_key: str | None = field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY") or None,
    )
    openai_base_url: str | None = field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL") or None,
    )
    scratch_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("VOICE_PROCESSOR_SCRATCH_DIR", DEFAULT_SCRATCH_DIR)
        ).expanduser(),
    )
    transcription_model: str = field(
        default_factory=lambda: os.getenv(
            "VOICE_PROCESSOR_TRANSCRIPTION_MODEL", DEFAULT_TRANSCRIPTION_MODEL
        ),
    )
    translation_model: str = field(
        default_factory=lambda: os.getenv(
            "VOICE_PROCESSOR_TRANSLATION_MODEL", DEFAULT_TRANSLATION_MODEL
        ),
    )
    request_timeout_s: float = field(
        default_factory=lambda: _env_float(
            "VOICE_PROCESSOR_REQUEST_TIMEOUT_S", DEFAULT_REQUEST_TIMEOUT_S
        ),
    )
    max_retries: int = field(
        default_factory=lambda: _env_int("VOICE_PROCESSOR_MAX_RETRIES", DEFAULT_MAX_RETRIES),
    )
    cors_origins: list[str] = field(
        default_factory=lambda: _parse_origins(os.getenv("VOICE_PROCESSOR_CORS_ORIGINS")),
    )

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> Settings:
        """Carrega settings do ambiente, lendo antes um ``.env`` se existir."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        return cls()

    def require_api_key(self) -> str:
        """Retorna a credencial do provider.

        Raises:
            ConfigError: Se OPENAI_API_KEY nao estiver definido.
        """
        if not self.openai_api_key:
            raise ConfigError("OPENAI_API_KEY nao definido no ambiente")
        return self.openai_api_key
