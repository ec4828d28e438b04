"""Exception handlers HTTP para o FastAPI.

Mapeia exceptions tipadas do Voice Processor para respostas
``{"error": "<mensagem>"}`` com o status code correto.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse

from voice_processor.exceptions import (
    DownloadError,
    InvalidRequestError,
    ProviderError,
    VoiceProcessorError,
)
from voice_processor.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger("server.errors")

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _get_request_id(request: Request) -> str | None:
    """Extrai request_id do request state, se disponivel."""
    return getattr(request.state, "request_id", None)


async def _handle_invalid_request(request: Request, exc: InvalidRequestError) -> JSONResponse:
    logger.warning(
        "invalid_request",
        error_type=type(exc).__name__,
        detail=exc.detail,
        request_id=_get_request_id(request),
    )
    return _error_response(400, str(exc))


async def _handle_download_error(request: Request, exc: DownloadError) -> JSONResponse:
    logger.error(
        "download_error",
        url=exc.url,
        reason=exc.reason,
        request_id=_get_request_id(request),
    )
    return _error_response(500, str(exc))


async def _handle_provider_error(request: Request, exc: ProviderError) -> JSONResponse:
    logger.error(
        "provider_error",
        error=str(exc),
        error_type=type(exc).__name__,
        request_id=_get_request_id(request),
    )
    return _error_response(500, str(exc))


async def _handle_voice_processor_error(
    request: Request, exc: VoiceProcessorError
) -> JSONResponse:
    logger.error(
        "unhandled_voice_processor_error",
        error=str(exc),
        error_type=type(exc).__name__,
        request_id=_get_request_id(request),
        exc_info=True,
    )
    return _error_response(500, str(exc) or INTERNAL_ERROR_MESSAGE)


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unexpected_error",
        error=str(exc),
        error_type=type(exc).__name__,
        request_id=_get_request_id(request),
        exc_info=True,
    )
    return _error_response(500, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Registra todos os exception handlers no FastAPI app."""
    app.add_exception_handler(InvalidRequestError, _handle_invalid_request)  # type: ignore[arg-type]
    app.add_exception_handler(DownloadError, _handle_download_error)  # type: ignore[arg-type]
    app.add_exception_handler(ProviderError, _handle_provider_error)  # type: ignore[arg-type]
    app.add_exception_handler(VoiceProcessorError, _handle_voice_processor_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _handle_unexpected_error)
