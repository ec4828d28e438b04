"""Voice Processor — gateway HTTP de transcricao e traducao de audio."""

__version__ = "1.0.0"
