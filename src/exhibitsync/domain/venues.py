"""Venue name resolution against the venue registry."""

from __future__ import annotations

from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from exhibitsync.domain.errors import MuseumIdNotFoundError, VenueRegistryError
from exhibitsync.domain.model import VenueMaps

if TYPE_CHECKING:
    from collections.abc import Iterable

    from exhibitsync.domain.model import Venue

log = getLogger(__name__)


def _conflict(message: str, *, strict: bool) -> None:
    if strict:
        raise VenueRegistryError(message)
    log.warning(f"{message}; dropping it from this run's venue maps")


def build_venue_maps(venues: Iterable[Venue], *, strict: bool = False) -> VenueMaps:
    """Build alias and id lookups for one reconciliation run.

    Every alias and every canonical name maps to exactly one canonical name. A name
    claimed by two different venues is ambiguous: with ``strict`` it raises
    ``VenueRegistryError``, otherwise it is logged and left out of the maps so that
    records naming it fail on their own.
    """

    alias_to_name: dict[str, str] = {}
    name_to_id: dict[str, str] = {}
    ambiguous_aliases: set[str] = set()
    ambiguous_names: set[str] = set()

    for venue in venues:
        if venue.name in ambiguous_names:
            continue
        existing_id = name_to_id.get(venue.name)
        if existing_id is not None and existing_id != venue.id:
            _conflict(
                f"Venue name {venue.name!r} registered for both {existing_id} and {venue.id}",
                strict=strict,
            )
            ambiguous_names.add(venue.name)
            del name_to_id[venue.name]
            continue
        name_to_id[venue.name] = venue.id

        for name in venue.names:
            if name in ambiguous_aliases:
                continue
            canonical = alias_to_name.get(name)
            if canonical is not None and canonical != venue.name:
                _conflict(
                    f"Venue alias {name!r} maps to both {canonical!r} and {venue.name!r}",
                    strict=strict,
                )
                ambiguous_aliases.add(name)
                del alias_to_name[name]
                continue
            alias_to_name[name] = venue.name

    log.debug("Built venue maps: venues=%s, names=%s", len(name_to_id), len(alias_to_name))
    return VenueMaps(
        alias_to_name=MappingProxyType(alias_to_name),
        name_to_id=MappingProxyType(name_to_id),
    )


def resolve_venue(raw_name: str, venue_maps: VenueMaps) -> str | None:
    """Return the canonical venue name for ``raw_name`` or ``None`` if unregistered."""

    return venue_maps.alias_to_name.get(raw_name)


def get_museum_id(venue_name: str, venue_maps: VenueMaps) -> str:
    museum_id = venue_maps.name_to_id.get(venue_name)
    if not museum_id:
        raise MuseumIdNotFoundError(venue_name)
    return museum_id
