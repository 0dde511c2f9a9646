"""Perplexity adapter errors."""

from __future__ import annotations


class RepertoireExtractionError(RuntimeError):
    """Raised when a PRO repertoire answer is missing or cannot be parsed."""
