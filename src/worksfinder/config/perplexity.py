"""Perplexity (PRO repertoire extraction) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_PERPLEXITY_BASE_URL = "https://api.perplexity.ai/"
DEFAULT_PERPLEXITY_MODEL = "sonar-pro"


@dataclass(frozen=True, slots=True)
class PerplexityConfig:
    api_key: str
    resilience: ResilienceConfig
    model: str = DEFAULT_PERPLEXITY_MODEL
    temperature: float = 0.1
    max_tokens: int = 4000


def get_perplexity_config() -> PerplexityConfig:
    values = require_env_vars(("PERPLEXITY_API_KEY",))
    api_key = values["PERPLEXITY_API_KEY"]
    resilience = ResilienceConfig(
        name="perplexity",
        base_url=DEFAULT_PERPLEXITY_BASE_URL,
        timeout_seconds=60.0,
        ratelimit=RateLimit(max_calls=3, per_seconds=1.0),
        retry=RetryPolicy(total=2),
        default_headers={"Authorization": f"Bearer {api_key}"},
    )
    return PerplexityConfig(
        api_key=api_key,
        resilience=resilience,
        model=optional_env_var("PERPLEXITY_MODEL") or DEFAULT_PERPLEXITY_MODEL,
    )
