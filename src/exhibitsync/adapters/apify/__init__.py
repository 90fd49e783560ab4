"""Apify adapter: runs the LLM extraction actor and parses its dataset."""

from __future__ import annotations

from .actor_input import (
    FEED_START_URL,
    ActorInput,
    build_scrape_actor_input,
    build_scrape_feed_actor_input,
)
from .client import ApifyExtractor, actor_path
from .schema import (
    DatasetItem,
    FeedDatasetItem,
    ExhibitionPayload,
    FeedExhibitionPayload,
    parse_dataset_items,
    parse_feed_dataset_items,
)
from .translator import to_scraped_exhibition

__all__ = [
    "FEED_START_URL",
    "ActorInput",
    "ApifyExtractor",
    "DatasetItem",
    "FeedDatasetItem",
    "ExhibitionPayload",
    "FeedExhibitionPayload",
    "actor_path",
    "build_scrape_actor_input",
    "build_scrape_feed_actor_input",
    "parse_dataset_items",
    "parse_feed_dataset_items",
    "to_scraped_exhibition",
]
