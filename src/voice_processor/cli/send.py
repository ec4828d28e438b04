"""Comando `voice-processor send` — thin client HTTP para /translate-audio."""

from __future__ import annotations

import base64
import json
import sys
from pathlib import Path

import click
import httpx

from voice_processor.cli.main import cli

DEFAULT_SERVER_URL = "http://localhost:8080"
ENDPOINT = "/translate-audio"


def _extract_error(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text


@cli.command()
@click.argument("file", type=click.Path(exists=False), required=False, default=None)
@click.option("--url", "audio_url", default=None, help="URL do audio (alternativa a FILE).")
@click.option(
    "--base64",
    "as_base64",
    is_flag=True,
    default=False,
    help="Envia FILE como audio_base64 em JSON em vez de multipart.",
)
@click.option(
    "--target-language",
    "-t",
    default=None,
    help='Idioma alvo da traducao (ex: "English", "Spanish").',
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Imprime a resposta completa.")
@click.option(
    "--server",
    default=DEFAULT_SERVER_URL,
    show_default=True,
    help="URL do servidor Voice Processor.",
)
@click.option("--timeout", default=300.0, show_default=True, type=float, help="Timeout em segundos.")
def send(
    file: str | None,
    audio_url: str | None,
    as_base64: bool,
    target_language: str | None,
    as_json: bool,
    server: str,
    timeout: float,
) -> None:
    """Envia um audio (arquivo ou URL) ao servidor e imprime o texto."""
    if file is None and not audio_url:
        click.echo("Erro: informe FILE ou --url.", err=True)
        sys.exit(1)

    url = f"{server.rstrip('/')}{ENDPOINT}"

    try:
        if file is not None:
            file_path = Path(file)
            if not file_path.exists():
                click.echo(f"Erro: arquivo nao encontrado: {file_path}", err=True)
                sys.exit(1)

            if as_base64:
                payload: dict[str, str] = {
                    "audio_base64": base64.b64encode(file_path.read_bytes()).decode("ascii"),
                }
                if target_language:
                    payload["target_language"] = target_language
                response = httpx.post(url, json=payload, timeout=timeout)
            else:
                data: dict[str, str] = {}
                if target_language:
                    data["target_language"] = target_language
                with file_path.open("rb") as f:
                    response = httpx.post(
                        url,
                        files={"file": (file_path.name, f, "application/octet-stream")},
                        data=data,
                        timeout=timeout,
                    )
        else:
            payload = {"audio_url": audio_url or ""}
            if target_language:
                payload["target_language"] = target_language
            response = httpx.post(url, json=payload, timeout=timeout)
    except httpx.ConnectError:
        click.echo(
            f"Erro: servidor nao disponivel em {server}. Execute 'voice-processor serve' primeiro.",
            err=True,
        )
        sys.exit(1)

    if response.status_code != 200:
        click.echo(f"Erro ({response.status_code}): {_extract_error(response)}", err=True)
        sys.exit(1)

    body = response.json()
    if as_json:
        click.echo(json.dumps(body, indent=2, ensure_ascii=False))
    else:
        click.echo(body["text"])
