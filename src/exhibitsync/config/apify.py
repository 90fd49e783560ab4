"""Apify extraction service configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

APIFY_BASE_URL = "https://api.apify.com/v2"
ACTOR_TIMEOUT_SECONDS = 300
# the HTTP call blocks for the whole actor run
_HTTP_TIMEOUT_MARGIN_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ApifyConfig:
    """Holds Apify credentials and the actor used for extraction."""

    api_token: str
    actor_id: str
    openai_api_key: str
    resilience: ResilienceConfig
    actor_timeout_seconds: int = ACTOR_TIMEOUT_SECONDS


def default_apify_resilience(
    *, actor_timeout_seconds: int = ACTOR_TIMEOUT_SECONDS
) -> ResilienceConfig:
    return ResilienceConfig(
        name="apify",
        base_url=APIFY_BASE_URL,
        timeout_seconds=actor_timeout_seconds + _HTTP_TIMEOUT_MARGIN_SECONDS,
        # actor runs are not idempotent, so a failed run is never retried
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )


def get_apify_config(*, resilience: ResilienceConfig | None = None) -> ApifyConfig:
    values = require_env_vars(("APIFY_API_TOKEN", "APIFY_ACTOR_ID", "OPENAI_API_KEY"))
    return ApifyConfig(
        api_token=values["APIFY_API_TOKEN"],
        actor_id=values["APIFY_ACTOR_ID"],
        openai_api_key=values["OPENAI_API_KEY"],
        resilience=resilience or default_apify_resilience(),
    )
