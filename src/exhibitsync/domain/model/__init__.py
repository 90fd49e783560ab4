"""Domain model package."""

from __future__ import annotations

from .enums import ExhibitionStatus, Origin
from .exhibition import Exhibition, ScrapedExhibition
from .venue import Venue, VenueMaps

__all__ = [
    "Exhibition",
    "ExhibitionStatus",
    "Origin",
    "ScrapedExhibition",
    "Venue",
    "VenueMaps",
]
