"""Grupo principal de comandos CLI do Voice Processor."""

from __future__ import annotations

import click
from dotenv import find_dotenv, load_dotenv

import voice_processor


@click.group()
@click.version_option(version=voice_processor.__version__, prog_name="voice-processor")
def cli() -> None:
    """Voice Processor — gateway HTTP de transcricao e traducao de audio."""
    load_dotenv(find_dotenv(usecwd=True))
