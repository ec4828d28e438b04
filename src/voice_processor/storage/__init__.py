"""Arquivos temporarios request-scoped (scratch directory)."""
