"""Translate Apify payloads into domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from exhibitsync.domain.model import ScrapedExhibition

from .schema import ExhibitionPayload

if TYPE_CHECKING:
    from .schema import FeedExhibitionPayload


def to_scraped_exhibition(payload: FeedExhibitionPayload) -> ScrapedExhibition:
    if isinstance(payload, ExhibitionPayload):
        return ScrapedExhibition(
            title=payload.title,
            venue=payload.venue,
            start_date=payload.start_date,
            end_date=payload.end_date,
            official_url=payload.official_url,
            image_url=payload.image_url,
        )
    return ScrapedExhibition(
        title=payload.title,
        venue=payload.venue,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
