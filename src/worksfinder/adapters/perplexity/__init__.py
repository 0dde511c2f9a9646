"""Perplexity-backed PRO repertoire extraction adapter."""

from __future__ import annotations

from .client import PerplexityClient
from .errors import RepertoireExtractionError
from .extractor import PerplexityRepertoireExtractor
from .parsing import parse_repertoire, strip_code_fences

__all__ = [
    "PerplexityClient",
    "PerplexityRepertoireExtractor",
    "RepertoireExtractionError",
    "parse_repertoire",
    "strip_code_fences",
]
