"""Per-origin rules for optional document fields.

Feed-sourced records never carry official URLs; adding an origin is a change to
``ORIGIN_OPTIONAL_FIELDS``, not to the engine.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from exhibitsync.domain.model import Origin

if TYPE_CHECKING:
    from collections.abc import Mapping

    from exhibitsync.domain.model import ScrapedExhibition


ORIGIN_OPTIONAL_FIELDS: Final[Mapping[Origin, frozenset[str]]] = MappingProxyType(
    {
        Origin.SCRAPE: frozenset({"official_url"}),
        Origin.SCRAPE_FEED: frozenset(),
        Origin.MANUAL: frozenset({"official_url"}),
    }
)


def optional_fields_for(origin: Origin, record: ScrapedExhibition) -> dict[str, str]:
    """Return the optional fields ``origin`` may store that ``record`` actually has."""

    allowed = ORIGIN_OPTIONAL_FIELDS.get(origin, frozenset())
    values: dict[str, str] = {}
    for name in sorted(allowed):
        value = getattr(record, name)
        if value:
            values[name] = value
    return values
