"""Internal verification agent configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import ResilienceConfig, RetryPolicy

SECRET_HEADER = "x-assistant-secret"


@dataclass(frozen=True, slots=True)
class VerificationAgentConfig:
    shared_secret: str
    resilience: ResilienceConfig


def get_verification_agent_config() -> VerificationAgentConfig | None:
    """Return the agent config, or ``None`` when the agent is not configured."""

    base_url = optional_env_var("VERIFICATION_AGENT_URL")
    secret = optional_env_var("ASSISTANT_SHARED_SECRET")
    if base_url is None or secret is None:
        return None
    resilience = ResilienceConfig(
        name="verification-agent",
        base_url=base_url.rstrip("/") + "/",
        timeout_seconds=30.0,
        retry=RetryPolicy(total=1),
        default_headers={SECRET_HEADER: secret},
    )
    return VerificationAgentConfig(shared_secret=secret, resilience=resilience)
