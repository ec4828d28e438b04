"""FastAPI dependencies para injecao do pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request  # noqa: TC002

if TYPE_CHECKING:
    from voice_processor.pipeline.orchestrator import AudioPipeline


def get_pipeline(request: Request) -> AudioPipeline:
    """Retorna o AudioPipeline do app state.

    Raises:
        RuntimeError: Se pipeline nao foi configurado em create_app().
    """
    pipeline = request.app.state.pipeline
    if pipeline is None:
        raise RuntimeError("Pipeline nao configurado. Passe pipeline= em create_app().")
    return pipeline  # type: ignore[no-any-return]
