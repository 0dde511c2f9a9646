"""Discovery pipeline tuning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import float_env_var

DEFAULT_MAX_WORKS: Final[int] = 200
MAX_WORKS_CEILING: Final[int] = 1000
DEFAULT_ENRICH_DELAY_SECONDS: Final[float] = 0.3


@dataclass(frozen=True, slots=True)
class DiscoverySettings:
    """Caps and throttle applied by the discovery engine."""

    max_works: int = DEFAULT_MAX_WORKS
    max_works_ceiling: int = MAX_WORKS_CEILING
    enrich_delay_seconds: float = DEFAULT_ENRICH_DELAY_SECONDS

    def collection_cap(self, requested: int | None = None) -> int:
        cap = self.max_works if requested is None else requested
        return max(0, min(cap, self.max_works_ceiling))


def get_discovery_settings() -> DiscoverySettings:
    return DiscoverySettings(
        enrich_delay_seconds=float_env_var(
            "WORKSFINDER_ENRICH_DELAY_SECONDS", default=DEFAULT_ENRICH_DELAY_SECONDS
        ),
    )
