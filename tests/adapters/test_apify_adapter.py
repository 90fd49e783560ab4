from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from exhibitsync.adapters.apify import (
    FEED_START_URL,
    ApifyExtractor,
    actor_path,
    build_scrape_actor_input,
    build_scrape_feed_actor_input,
    parse_dataset_items,
    parse_feed_dataset_items,
)
from exhibitsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from exhibitsync.config import ApifyConfig, MissingConfigurationError, default_apify_resilience
from exhibitsync.domain.errors import ExternalServiceError
from exhibitsync.domain.model import Origin, ScrapedExhibition
from exhibitsync.domain.ports.extraction import ExtractionRequest


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def _config() -> ApifyConfig:
    return ApifyConfig(
        api_token="apify-token",
        actor_id="someone/llm-scraper",
        openai_api_key="sk-test",
        resilience=default_apify_resilience(),
    )


def _dataset() -> list[dict[str, object]]:
    return [
        {
            "url": "https://www.nmwa.go.jp/jp/exhibitions/",
            "jsonAnswer": {
                "exhibitions": [
                    {
                        "title": " モネ展 ",
                        "venue": "国立西洋美術館",
                        "startDate": "2024-06-01",
                        "endDate": "",
                        "officialUrl": "https://www.nmwa.go.jp/monet",
                        "imageUrl": "  ",
                    }
                ]
            },
        },
        {"url": "https://www.nmwa.go.jp/jp/about/", "jsonAnswer": None},
        {
            "url": "https://www.tobikan.jp/exhibition/",
            "jsonAnswer": {
                "exhibitions": [
                    {"title": "ゴッホ展", "venue": "東京都美術館"},
                ]
            },
        },
    ]


def test_actor_path_escapes_owner_separator() -> None:
    assert actor_path("someone/llm-scraper") == "acts/someone~llm-scraper/run-sync-get-dataset-items"
    assert actor_path("abc123") == "acts/abc123/run-sync-get-dataset-items"


def test_scrape_actor_input_carries_urls_and_schema() -> None:
    actor_input = build_scrape_actor_input(["https://a.example/", "https://b.example/"], "sk-x")

    assert actor_input["startUrls"] == [
        {"url": "https://a.example/", "method": "GET"},
        {"url": "https://b.example/", "method": "GET"},
    ]
    assert actor_input["openaiApiKey"] == "sk-x"
    assert actor_input["maxCrawlingDepth"] == 2
    assert actor_input["model"] == "gpt-4o-mini"
    properties = actor_input["schema"]["properties"]["exhibitions"]["items"]["properties"]
    assert {"title", "venue", "startDate", "endDate", "officialUrl", "imageUrl"} == set(properties)


def test_feed_actor_input_uses_feed_url_without_url_fields() -> None:
    actor_input = build_scrape_feed_actor_input("sk-x")

    assert actor_input["startUrls"] == [{"url": FEED_START_URL, "method": "GET"}]
    assert actor_input["maxCrawlingDepth"] == 1
    properties = actor_input["schema"]["properties"]["exhibitions"]["items"]["properties"]
    assert set(properties) == {"title", "venue", "startDate", "endDate"}


def test_parse_dataset_items_flattens_and_blanks_to_none() -> None:
    payloads = parse_dataset_items(_dataset())

    assert [payload.title for payload in payloads] == ["モネ展", "ゴッホ展"]
    monet = payloads[0]
    assert monet.start_date == "2024-06-01"
    assert monet.end_date is None
    assert monet.official_url == "https://www.nmwa.go.jp/monet"
    assert monet.image_url is None


def test_parse_feed_dataset_items_drops_url_fields() -> None:
    payloads = parse_feed_dataset_items(_dataset())

    assert not hasattr(payloads[0], "official_url")


def test_extractor_runs_actor_and_translates_records() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["params"] = dict(request.url.params)
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json=_dataset())

    extractor = ApifyExtractor(config=_config(), client_factory=_make_client_factory(handler))

    request = ExtractionRequest(
        origin=Origin.SCRAPE, start_urls=("https://www.nmwa.go.jp/jp/exhibitions/",)
    )
    records = extractor(request)

    assert captured["method"] == "POST"
    assert captured["path"] == "/v2/acts/someone~llm-scraper/run-sync-get-dataset-items"
    assert captured["params"] == {"timeout": "300", "format": "json"}
    assert captured["auth"] == "Bearer apify-token"
    body = captured["body"]
    assert isinstance(body, dict)
    assert body["startUrls"] == [{"url": "https://www.nmwa.go.jp/jp/exhibitions/", "method": "GET"}]
    assert records == [
        ScrapedExhibition(
            title="モネ展",
            venue="国立西洋美術館",
            start_date="2024-06-01",
            end_date=None,
            official_url="https://www.nmwa.go.jp/monet",
        ),
        ScrapedExhibition(title="ゴッホ展", venue="東京都美術館"),
    ]


def test_extractor_feed_records_never_carry_urls() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json=_dataset())

    extractor = ApifyExtractor(config=_config(), client_factory=_make_client_factory(handler))

    records = extractor(ExtractionRequest(origin=Origin.SCRAPE_FEED, start_urls=(FEED_START_URL,)))

    body = captured["body"]
    assert isinstance(body, dict)
    assert body["maxCrawlingDepth"] == 1
    assert all(record.official_url is None for record in records)
    assert all(record.image_url is None for record in records)


@pytest.mark.parametrize("status", [400, 401, 408, 500])
def test_extractor_wraps_http_errors(status: int) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"error": {"type": "run-failed"}})

    extractor = ApifyExtractor(config=_config(), client_factory=_make_client_factory(handler))

    with pytest.raises(ExternalServiceError) as exc:
        extractor(ExtractionRequest(origin=Origin.SCRAPE, start_urls=("https://a.example/",)))

    assert exc.value.service == "Apify"
    assert str(status) in str(exc.value)


def test_extractor_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    extractor = ApifyExtractor(config=_config(), client_factory=_make_client_factory(handler))

    with pytest.raises(ExternalServiceError):
        extractor(ExtractionRequest(origin=Origin.SCRAPE, start_urls=("https://a.example/",)))


@pytest.mark.parametrize(
    "payload",
    [
        {"items": []},
        [{"jsonAnswer": {"exhibitions": [{"venue": "国立西洋美術館"}]}}],
    ],
)
def test_extractor_rejects_unexpected_payloads(payload: object) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json=payload)

    extractor = ApifyExtractor(config=_config(), client_factory=_make_client_factory(handler))

    with pytest.raises(ExternalServiceError):
        extractor(ExtractionRequest(origin=Origin.SCRAPE, start_urls=("https://a.example/",)))


def test_extractor_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APIFY_API_TOKEN", "APIFY_ACTOR_ID", "OPENAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(MissingConfigurationError):
        ApifyExtractor()
