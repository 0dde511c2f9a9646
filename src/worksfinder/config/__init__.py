"""Application configuration helpers."""

from __future__ import annotations

from .discovery import DiscoverySettings, get_discovery_settings
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidSettingError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .musicbrainz import MusicBrainzConfig, get_musicbrainz_config
from .perplexity import PerplexityConfig, get_perplexity_config
from .storage import data_dir, database_uri, http_cache_path
from .verification import VerificationAgentConfig, get_verification_agent_config
from .wikipedia import WikipediaConfig, get_wikipedia_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "InvalidSettingError",
    "DiscoverySettings",
    "MissingConfigurationError",
    "MusicBrainzConfig",
    "PerplexityConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "VerificationAgentConfig",
    "WikipediaConfig",
    "configure_logging",
    "data_dir",
    "database_uri",
    "get_discovery_settings",
    "get_musicbrainz_config",
    "get_perplexity_config",
    "get_verification_agent_config",
    "get_wikipedia_config",
    "http_cache_path",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
