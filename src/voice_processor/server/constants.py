"""Constantes compartilhadas do server."""

from __future__ import annotations

# Campos de texto multipart podem carregar audio em Base64 (audio_base64);
# o limite default do Starlette (1MB por parte) e pequeno demais.
MAX_FORM_PART_SIZE_BYTES = 50 * 1024 * 1024  # 50MB
