"""Input documents for the Apify LLM page-extraction actor.

The actor crawls from ``startUrls`` and asks the model to fill
``EXHIBITION_SCHEMA``. Instructions are written in Japanese because the scraped
sites are.
"""

from __future__ import annotations

from typing import Any, Final, Literal, TypedDict

FEED_START_URL: Final[str] = (
    "https://www.tokyoartbeat.com/events/regionId/3t69ZtVfJeKUQ2UM0DXnJM/orderBy/latest"
)


class StartUrl(TypedDict):
    url: str
    method: Literal["GET"]


class ActorInput(TypedDict):
    excludeUrlGlobs: list[dict[str, str]]
    instructions: str
    linkSelector: str
    maxCrawlingDepth: int
    maxPagesPerCrawl: int
    model: str
    openaiApiKey: str
    proxyConfiguration: dict[str, Any]
    removeElementsCssSelector: str
    removeLinkUrls: bool
    saveSnapshots: bool
    schema: dict[str, Any]
    schemaDescription: str
    startUrls: list[StartUrl]
    useStructureOutput: bool


_BASE_CONFIG: Final[dict[str, Any]] = {
    "excludeUrlGlobs": [{"glob": ""}],
    "linkSelector": "a[href]",
    "maxPagesPerCrawl": 100,
    "model": "gpt-4o-mini",
    "proxyConfiguration": {"useApifyProxy": True, "apifyProxyGroups": []},
    "removeElementsCssSelector": "script, style, noscript, path, svg, xlink",
    "removeLinkUrls": False,
    "saveSnapshots": True,
    "useStructureOutput": True,
}

_EXHIBITION_PROPERTIES: Final[dict[str, Any]] = {
    "title": {"type": "string", "description": "展覧会のタイトル"},
    "venue": {"type": "string", "description": "会場名"},
    "startDate": {"type": "string", "description": "展覧会の開始日時"},
    "endDate": {"type": "string", "description": "展覧会の終了日時"},
}

_URL_PROPERTIES: Final[dict[str, Any]] = {
    "officialUrl": {"type": "string", "description": "展覧会の公式URL"},
    "imageUrl": {"type": "string", "description": "展覧会の代表画像URL"},
}

_SCHEMA_DESCRIPTION_COMMON = (
    "`title`の先頭に「特別展」「企画展」などの余計な単語を付け加えないでください。"
    "`startDate`と`endDate`は`yyyy-mm-dd`形式で出力して下さい。"
)
_SCHEMA_DESCRIPTION_VENUE = (
    "`venue`は美術館、博物館の名称を出力して下さい。"
    "例えば、`venue`には「本館展示室」「企画展示室」ではなく「国立西洋美術館」を出力して下さい。"
    "情報が見つからない場合は空文字列を出力して下さい。"
)
_SCHEMA_DESCRIPTION_URLS = "`officialUrl`と`imageUrl`は`https`始まりの代表画像のURLを出力して下さい。"


def exhibition_schema(*, include_urls: bool) -> dict[str, Any]:
    """JSON schema the actor's model output must follow."""

    properties = dict(_EXHIBITION_PROPERTIES)
    if include_urls:
        properties.update(_URL_PROPERTIES)
    return {
        "title": "ExhibitionListSchema",
        "type": "object",
        "properties": {
            "exhibitions": {
                "type": "array",
                "description": "展覧会情報の一覧",
                "items": {
                    "type": "object",
                    "properties": properties,
                    "additionalProperties": False,
                },
            },
        },
    }


def build_scrape_actor_input(start_urls: list[str], openai_api_key: str) -> ActorInput:
    """Actor input for crawling the venues' own exhibition pages."""

    return ActorInput(
        **_BASE_CONFIG,
        instructions=(
            "開催中、開催予定の「展覧会」の情報を取得して、指定されたJSONの形式で出力して下さい。"
            "「常設展」の情報はJSONに含めないでください。"
        ),
        maxCrawlingDepth=2,
        openaiApiKey=openai_api_key,
        schema=exhibition_schema(include_urls=True),
        schemaDescription=(
            _SCHEMA_DESCRIPTION_COMMON + _SCHEMA_DESCRIPTION_URLS + _SCHEMA_DESCRIPTION_VENUE
        ),
        startUrls=[StartUrl(url=url, method="GET") for url in start_urls],
    )


def build_scrape_feed_actor_input(
    openai_api_key: str,
    *,
    start_urls: list[str] | None = None,
) -> ActorInput:
    """Actor input for crawling an aggregator feed; feeds carry no URLs."""

    return ActorInput(
        **_BASE_CONFIG,
        instructions="「展覧会」情報を取得して、指定されたJSONの形式で出力して下さい。",
        maxCrawlingDepth=1,
        openaiApiKey=openai_api_key,
        schema=exhibition_schema(include_urls=False),
        schemaDescription=_SCHEMA_DESCRIPTION_COMMON + _SCHEMA_DESCRIPTION_VENUE,
        startUrls=[StartUrl(url=url, method="GET") for url in (start_urls or [FEED_START_URL])],
    )
