"""Structured logging para o Voice Processor.

structlog renderiza tanto os eventos do proprio servico quanto registros
stdlib de terceiros (uvicorn, httpx, openai) pelo mesmo handler no root
logger. Formatos: ``console`` (default) ou ``json``.

``get_logger()`` configura com os defaults do ambiente na primeira
chamada, normalmente em import. O entrypoint (``voice-processor serve``)
reconfigura com ``force=True`` depois de ler opcoes de CLI e ``.env``.
"""

from __future__ import annotations

import logging
import os

import structlog

LOG_FORMATS = ("console", "json")

# Bibliotecas que logam cada request HTTP em INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")

_handler: logging.Handler | None = None


def _resolve_format(log_format: str | None) -> str:
    fmt = (log_format or os.environ.get("VOICE_PROCESSOR_LOG_FORMAT") or "console").lower()
    return fmt if fmt in LOG_FORMATS else "console"


def _resolve_level(level: str | None) -> int:
    name = (level or os.environ.get("VOICE_PROCESSOR_LOG_LEVEL") or "INFO").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _build_handler(log_format: str) -> logging.Handler:
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    log_format: str | None = None,
    level: str | None = None,
    *,
    force: bool = False,
) -> None:
    """Configura logging estruturado do processo.

    Sem ``force`` a chamada e ignorada se o logging ja foi configurado.
    Loggers ja criados por ``get_logger`` passam a usar o novo formato e
    nivel, pois renderizacao e filtro ficam no handler stdlib.

    Args:
        log_format: "json" ou "console". Default via VOICE_PROCESSOR_LOG_FORMAT.
        level: DEBUG, INFO, WARNING ou ERROR. Default via VOICE_PROCESSOR_LOG_LEVEL.
        force: Substitui a configuracao atual.
    """
    global _handler
    if _handler is not None and not force:
        return

    resolved_level = _resolve_level(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)
    handler = _build_handler(_resolve_format(log_format))
    root_logger.addHandler(handler)
    root_logger.setLevel(resolved_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, resolved_level))

    _handler = handler


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Retorna logger com o campo ``component`` vinculado.

    Args:
        component: Nome do componente (ex: "pipeline", "storage.tempfiles").
    """
    configure_logging()
    return structlog.get_logger().bind(component=component)  # type: ignore[no-any-return]
