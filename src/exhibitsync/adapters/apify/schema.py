"""Pydantic models describing Apify dataset items."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        return value.strip() or None
    return value


class ApifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FeedExhibitionPayload(ApifyBaseModel):
    """Exhibition as extracted from an aggregator feed (no URL fields)."""

    title: str
    venue: str
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")

    @field_validator("title", "venue", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    _normalize_dates = field_validator("start_date", "end_date", mode="before")(_blank_to_none)


class ExhibitionPayload(FeedExhibitionPayload):
    """Exhibition as extracted from a venue's own pages."""

    official_url: str | None = Field(default=None, alias="officialUrl")
    image_url: str | None = Field(default=None, alias="imageUrl")

    _normalize_urls = field_validator("official_url", "image_url", mode="before")(_blank_to_none)


class JsonAnswer(ApifyBaseModel):
    exhibitions: list[ExhibitionPayload] = Field(default_factory=list)


class FeedJsonAnswer(ApifyBaseModel):
    exhibitions: list[FeedExhibitionPayload] = Field(default_factory=list)


class DatasetItem(ApifyBaseModel):
    """One item of the actor's dataset; pages without an answer have none."""

    json_answer: JsonAnswer | None = Field(default=None, alias="jsonAnswer")


class FeedDatasetItem(ApifyBaseModel):
    json_answer: FeedJsonAnswer | None = Field(default=None, alias="jsonAnswer")


_SCRAPE_ITEMS = TypeAdapter(list[DatasetItem])
_FEED_ITEMS = TypeAdapter(list[FeedDatasetItem])


def parse_dataset_items(items: object) -> list[ExhibitionPayload]:
    """Flatten dataset items from a venue-page crawl into exhibition payloads."""

    parsed = _SCRAPE_ITEMS.validate_python(items)
    return [
        exhibition
        for item in parsed
        if item.json_answer is not None
        for exhibition in item.json_answer.exhibitions
    ]


def parse_feed_dataset_items(items: object) -> list[FeedExhibitionPayload]:
    """Flatten dataset items from a feed crawl, dropping any URL fields."""

    parsed = _FEED_ITEMS.validate_python(items)
    return [
        exhibition
        for item in parsed
        if item.json_answer is not None
        for exhibition in item.json_answer.exhibitions
    ]
