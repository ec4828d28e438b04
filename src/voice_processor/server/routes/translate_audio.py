"""POST /translate-audio — transcricao com traducao opcional.

Aceita ``multipart/form-data`` (campo binario ``file`` mais campos de texto)
ou ``application/json`` com ``audio_url`` / ``audio_base64``.
"""

from __future__ import annotations

import json
import uuid
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.datastructures import FormData, UploadFile

from voice_processor.exceptions import InvalidRequestError
from voice_processor.logging import get_logger
from voice_processor.pipeline.normalizer import resolve_audio_input
from voice_processor.pipeline.orchestrator import AudioPipeline  # noqa: TC001
from voice_processor.server.constants import MAX_FORM_PART_SIZE_BYTES
from voice_processor.server.dependencies import get_pipeline
from voice_processor.server.models.requests import TranslateAudioRequest
from voice_processor.server.models.responses import AudioProcessingResponse, ErrorResponse
from voice_processor.storage.tempfiles import spool_upload

logger = get_logger("server.routes")

router = APIRouter()

_MULTIPART_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "file": {
            "type": "string",
            "format": "binary",
            "description": "Arquivo de audio.",
        },
        "audio_url": {
            "type": "string",
            "description": "URL do arquivo de audio (alternativa ao upload).",
        },
        "audio_base64": {
            "type": "string",
            "description": "Audio codificado em Base64 (alternativa ao upload).",
        },
        "target_language": {
            "type": "string",
            "description": 'Idioma alvo da traducao (ex: "English", "Spanish").',
        },
    },
}

_REQUEST_BODY: dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {"schema": _MULTIPART_SCHEMA},
            "application/json": {"schema": TranslateAudioRequest.model_json_schema()},
        },
    }
}


def _form_str(form: FormData, key: str) -> str | None:
    value = form.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def _form_upload(form: FormData) -> UploadFile | None:
    value = form.get("file")
    # Swagger UI e alguns clientes enviam a parte "file" vazia sem filename
    if isinstance(value, UploadFile) and value.filename:
        return value
    return None


async def _parse_json_body(request: Request) -> TranslateAudioRequest:
    try:
        raw = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidRequestError("Corpo JSON invalido") from None

    try:
        return TranslateAudioRequest.model_validate(raw)
    except ValidationError as exc:
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidRequestError(f"Corpo JSON invalido: {detail}") from None


@router.post(
    "/translate-audio",
    summary="Transcribe and optionally translate audio",
    description=(
        "Envie um arquivo de audio (multipart), uma URL ou um payload Base64 para "
        "transcricao. Se target_language for informado, o texto e traduzido."
    ),
    response_model=AudioProcessingResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Nenhuma fonte de audio ou payload invalido"},
        500: {"model": ErrorResponse, "description": "Falha no download ou no provider"},
    },
    openapi_extra=_REQUEST_BODY,
)
async def translate_audio(
    request: Request,
    pipeline: AudioPipeline = Depends(get_pipeline),  # noqa: B008
) -> AudioProcessingResponse:
    """Transcreve audio e, se pedido, traduz o texto."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    with structlog.contextvars.bound_contextvars(request_id=request_id):
        media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

        if media_type == "application/json":
            body = await _parse_json_body(request)
            logger.info(
                "translate_audio_request",
                content_type="json",
                target_language=body.target_language,
            )
            audio = resolve_audio_input(
                audio_url=body.audio_url,
                audio_base64=body.audio_base64,
            )
            result = await pipeline.process(audio, body.target_language)
            return AudioProcessingResponse.from_result(result)

        async with request.form(max_part_size=MAX_FORM_PART_SIZE_BYTES) as form:
            upload = _form_upload(form)
            audio_url = _form_str(form, "audio_url")
            audio_base64 = _form_str(form, "audio_base64")
            target_language = _form_str(form, "target_language")

            logger.info(
                "translate_audio_request",
                content_type="form",
                has_file=upload is not None,
                target_language=target_language,
            )

            upload_path = (
                await spool_upload(upload, pipeline.scratch_dir) if upload is not None else None
            )
            audio = resolve_audio_input(
                file_path=upload_path,
                audio_url=audio_url,
                audio_base64=audio_base64,
            )
            result = await pipeline.process(audio, target_language)

        return AudioProcessingResponse.from_result(result)
