"""FastAPI application factory para o Voice Processor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

import voice_processor
from voice_processor.server.error_handlers import register_error_handlers
from voice_processor.server.routes import health, translate_audio

if TYPE_CHECKING:
    from voice_processor.pipeline.orchestrator import AudioPipeline

API_DOCS_URL = "/api-docs"


def create_app(
    pipeline: AudioPipeline | None = None,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Cria a aplicacao FastAPI.

    Args:
        pipeline: AudioPipeline ja construido (opcional, None apenas para
            testes do health endpoint).
        cors_origins: Lista de CORS origins permitidos (opcional).

    Returns:
        FastAPI application configurada.
    """
    app = FastAPI(
        title="Voice Processor API",
        version=voice_processor.__version__,
        description="API para transcrever e traduzir audio usando OpenAI Whisper e GPT.",
        docs_url=API_DOCS_URL,
        redoc_url=None,
    )

    app.state.pipeline = pipeline

    if cors_origins:
        from fastapi.middleware.cors import CORSMiddleware

        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials="*" not in cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(translate_audio.router)

    return app
