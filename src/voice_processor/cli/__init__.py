"""CLI do Voice Processor.

Registra todos os comandos no grupo principal.
"""

from voice_processor.cli.main import cli
from voice_processor.cli.send import send
from voice_processor.cli.serve import serve

__all__ = [
    "cli",
    "send",
    "serve",
]
