"""Venue registry entities and derived lookup maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(eq=False, kw_only=True)
class Venue:
    """A museum or gallery known to the registry.

    ``name`` is the canonical venue name; ``aliases`` are alternative spellings the
    extraction service may emit for the same venue.
    """

    id: str
    name: str
    aliases: tuple[str, ...] = ()
    scrape_url: str | None = None
    scrape_enabled: bool = False

    address: str | None = None
    access: str | None = None
    opening_information: str | None = None
    official_url: str | None = None
    venue_type: str | None = None
    area: str | None = None

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical name followed by every alias."""
        return (self.name, *self.aliases)


@dataclass(frozen=True, slots=True)
class VenueMaps:
    """Read-only lookups built once per reconciliation run."""

    alias_to_name: Mapping[str, str] = field(default_factory=dict[str, str])
    name_to_id: Mapping[str, str] = field(default_factory=dict[str, str])
