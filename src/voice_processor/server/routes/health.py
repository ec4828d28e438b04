"""Health check endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

import voice_processor

router = APIRouter()

LIVENESS_MESSAGE = "Voice Processor Service is running."


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Liveness em texto puro."""
    return LIVENESS_MESSAGE


@router.get("/health")
async def health() -> dict[str, Any]:
    """Health check do servico (liveness + versao)."""
    return {
        "status": "ok",
        "version": voice_processor.__version__,
    }
