"""Wikipedia summary service configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

DEFAULT_WIKIPEDIA_BASE_URL = "https://en.wikipedia.org/api/rest_v1/"


@dataclass(frozen=True, slots=True)
class WikipediaConfig:
    resilience: ResilienceConfig


def get_wikipedia_config() -> WikipediaConfig:
    contact = optional_env_var("MUSICBRAINZ_CONTACT") or "unknown"
    resilience = ResilienceConfig(
        name="wikipedia",
        base_url=DEFAULT_WIKIPEDIA_BASE_URL,
        timeout_seconds=10.0,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=CacheConfig(enabled=True, backend="memory"),
        default_headers={"User-Agent": f"worksfinder ({contact})"},
    )
    return WikipediaConfig(resilience=resilience)
