"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ExhibitionStatus(StrEnum):
    PENDING = "pending"
    ACTIVE = "active"


class Origin(StrEnum):
    """Where an exhibition document came from."""

    SCRAPE = "scrape"
    SCRAPE_FEED = "scrape-feed"
    MANUAL = "manual"
