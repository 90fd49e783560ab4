"""HTTP client running the Apify extraction actor."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from exhibitsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from exhibitsync.config.apify import APIFY_BASE_URL, ApifyConfig, get_apify_config
from exhibitsync.domain.errors import ExternalServiceError
from exhibitsync.domain.model import Origin
from exhibitsync.domain.ports.extraction import ExhibitionExtractor, ExtractionRequest

from .actor_input import ActorInput, build_scrape_actor_input, build_scrape_feed_actor_input
from .schema import FeedExhibitionPayload, parse_dataset_items, parse_feed_dataset_items
from .translator import to_scraped_exhibition

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from exhibitsync.domain.model import ScrapedExhibition

log = getLogger(__name__)

_SERVICE = "Apify"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def actor_path(actor_id: str) -> str:
    """Apify addresses ``user/actor`` ids as ``user~actor`` in URLs."""

    return f"acts/{actor_id.replace('/', '~')}/run-sync-get-dataset-items"


@dataclass(slots=True)
class ApifyExtractor:
    config: ApifyConfig = field(default_factory=get_apify_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, request: ExtractionRequest) -> list[ScrapedExhibition]:
        actor_input = self.build_actor_input(request)
        items = asyncio.run(self.run_actor(actor_input))
        payloads = self._parse(items, feed=request.origin is Origin.SCRAPE_FEED)
        log.info(f"Apify returned {len(payloads)} exhibitions from {len(items)} dataset items")
        return [to_scraped_exhibition(payload) for payload in payloads]

    def build_actor_input(self, request: ExtractionRequest) -> ActorInput:
        if request.origin is Origin.SCRAPE_FEED:
            return build_scrape_feed_actor_input(
                self.config.openai_api_key,
                start_urls=list(request.start_urls) or None,
            )
        return build_scrape_actor_input(list(request.start_urls), self.config.openai_api_key)

    async def run_actor(self, actor_input: ActorInput) -> list[object]:
        base_url = (self.config.resilience.base_url or APIFY_BASE_URL).rstrip("/")
        url = f"{base_url}/{actor_path(self.config.actor_id)}"
        params = httpx.QueryParams(
            {"timeout": self.config.actor_timeout_seconds, "format": "json"}
        )
        headers = {"Authorization": f"Bearer {self.config.api_token}"}

        log.info(f"Running Apify actor {self.config.actor_id} on {len(actor_input['startUrls'])} URLs")
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.post(url, params=params, headers=headers, json=actor_input)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            log.error(f"Apify actor run failed with status {exc.response.status_code}")
            raise ExternalServiceError(
                f"Apify actor run failed with status {exc.response.status_code}",
                service=_SERVICE,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            log.error(f"Apify actor run failed: {exc}")
            raise ExternalServiceError(f"Apify actor run failed: {exc}", service=_SERVICE) from exc

        if not isinstance(payload, list):
            raise ExternalServiceError("Unexpected Apify dataset payload", service=_SERVICE)
        return payload

    @staticmethod
    def _parse(items: Sequence[object], *, feed: bool) -> Sequence[FeedExhibitionPayload]:
        try:
            if feed:
                return parse_feed_dataset_items(items)
            return parse_dataset_items(items)
        except ValidationError as exc:
            raise ExternalServiceError(
                f"Unexpected Apify dataset payload: {exc.error_count()} validation errors",
                service=_SERVICE,
            ) from exc


if TYPE_CHECKING:
    _extractor_check: ExhibitionExtractor = ApifyExtractor()
