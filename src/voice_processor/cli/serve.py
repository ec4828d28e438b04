"""Comando `voice-processor serve` — inicia o API Server."""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path

import click

from voice_processor.cli.main import cli
from voice_processor.config import Settings
from voice_processor.exceptions import ConfigError
from voice_processor.logging import configure_logging, get_logger

logger = get_logger("cli.serve")


@cli.command()
@click.option("--host", default=None, help="Host do API Server. [env: HOST, default: 0.0.0.0]")
@click.option("--port", default=None, type=int, help="Porta HTTP. [env: PORT, default: 8080]")
@click.option(
    "--scratch-dir",
    default=None,
    help="Diretorio de arquivos temporarios. [env: VOICE_PROCESSOR_SCRATCH_DIR, default: uploads]",
)
@click.option(
    "--cors-origins",
    default=None,
    help="CORS origins (comma-separated). [env: VOICE_PROCESSOR_CORS_ORIGINS, default: *]",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Formato de log. [env: VOICE_PROCESSOR_LOG_FORMAT, default: console]",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Nivel de log. [env: VOICE_PROCESSOR_LOG_LEVEL, default: INFO]",
)
def serve(
    host: str | None,
    port: int | None,
    scratch_dir: str | None,
    cors_origins: str | None,
    log_format: str | None,
    log_level: str | None,
) -> None:
    """Inicia o Voice Processor API Server."""
    # .env ja carregado pelo grupo cli
    configure_logging(log_format=log_format, level=log_level, force=True)

    try:
        settings = Settings.from_env(dotenv=False)
        settings.require_api_key()
    except ConfigError as exc:
        logger.error("invalid_config", error=str(exc))
        click.echo(f"Erro: {exc}", err=True)
        sys.exit(1)

    if host:
        settings.host = host
    if port is not None:
        settings.port = port
    if scratch_dir:
        settings.scratch_dir = Path(scratch_dir).expanduser()
    if cors_origins is not None:
        settings.cors_origins = [o.strip() for o in cors_origins.split(",") if o.strip()]

    asyncio.run(_serve(settings))


async def _serve(settings: Settings) -> None:
    """Fluxo async principal do serve."""
    import uvicorn

    from voice_processor.pipeline.orchestrator import AudioPipeline
    from voice_processor.providers.openai import OpenAIProvider
    from voice_processor.server.app import create_app
    from voice_processor.storage.tempfiles import AudioDownloader

    # 1. Provider e downloader (unicos para o processo)
    provider = OpenAIProvider(
        settings.require_api_key(),
        base_url=settings.openai_base_url,
        transcription_model=settings.transcription_model,
        translation_model=settings.translation_model,
        timeout_s=settings.request_timeout_s,
        max_retries=settings.max_retries,
    )
    downloader = AudioDownloader(
        timeout_s=settings.request_timeout_s,
        retries=settings.max_retries,
    )

    # 2. Create app
    settings.scratch_dir.mkdir(parents=True, exist_ok=True)
    pipeline = AudioPipeline(provider, downloader, settings.scratch_dir)
    app = create_app(pipeline=pipeline, cors_origins=settings.cors_origins)

    logger.info(
        "server_starting",
        host=settings.host,
        port=settings.port,
        scratch_dir=str(settings.scratch_dir),
        transcription_model=settings.transcription_model,
        translation_model=settings.translation_model,
    )

    # 3. Setup shutdown
    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _handle_signal(s: signal.Signals) -> None:
        logger.info("shutdown_signal", signal=s.name)
        shutdown_event.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, _handle_signal, sig)

    # 4. Run uvicorn
    config = uvicorn.Config(app, host=settings.host, port=settings.port, log_level="warning")
    server = uvicorn.Server(config)

    server_task = asyncio.create_task(server.serve())

    _done, _ = await asyncio.wait(
        [server_task, asyncio.create_task(shutdown_event.wait())],
        return_when=asyncio.FIRST_COMPLETED,
    )

    # 5. Graceful shutdown
    if not server_task.done():
        server.should_exit = True
        await server_task

    await downloader.aclose()
    await provider.close()
    logger.info("server_stopped")
