from __future__ import annotations

import logging

import pytest

from exhibitsync.domain.errors import MuseumIdNotFoundError, VenueRegistryError
from exhibitsync.domain.model import VenueMaps
from exhibitsync.domain.venues import build_venue_maps, get_museum_id, resolve_venue
from tests.support.exhibitions import make_venue


def test_build_venue_maps_resolves_canonical_name_and_aliases() -> None:
    venue = make_venue("museum-1", "国立西洋美術館", aliases=("西洋美術館", "NMWA"))

    maps = build_venue_maps([venue])

    assert resolve_venue("国立西洋美術館", maps) == "国立西洋美術館"
    assert resolve_venue("西洋美術館", maps) == "国立西洋美術館"
    assert resolve_venue("NMWA", maps) == "国立西洋美術館"
    assert get_museum_id("国立西洋美術館", maps) == "museum-1"


def test_resolve_venue_returns_none_for_unregistered_name() -> None:
    maps = build_venue_maps([make_venue()])

    assert resolve_venue("東京都美術館", maps) is None


def test_resolve_venue_matches_exact_strings_only() -> None:
    maps = build_venue_maps([make_venue(aliases=("NMWA",))])

    assert resolve_venue("nmwa", maps) is None
    assert resolve_venue(" NMWA", maps) is None


def test_build_venue_maps_drops_alias_claimed_by_two_venues(
    caplog: pytest.LogCaptureFixture,
) -> None:
    first = make_venue("museum-1", "国立西洋美術館", aliases=("上野の美術館",))
    second = make_venue("museum-2", "東京都美術館", aliases=("上野の美術館",))

    with caplog.at_level(logging.WARNING, logger="exhibitsync.domain.venues"):
        maps = build_venue_maps([first, second])

    assert resolve_venue("上野の美術館", maps) is None
    assert resolve_venue("国立西洋美術館", maps) == "国立西洋美術館"
    assert resolve_venue("東京都美術館", maps) == "東京都美術館"
    assert "上野の美術館" in caplog.text


def test_build_venue_maps_drops_name_with_two_ids() -> None:
    maps = build_venue_maps(
        [make_venue("museum-1"), make_venue("museum-2"), make_venue("museum-3", "東京都美術館")]
    )

    with pytest.raises(MuseumIdNotFoundError):
        get_museum_id("国立西洋美術館", maps)
    assert get_museum_id("東京都美術館", maps) == "museum-3"


def test_build_venue_maps_strict_rejects_alias_claimed_by_two_venues() -> None:
    first = make_venue("museum-1", "国立西洋美術館", aliases=("上野の美術館",))
    second = make_venue("museum-2", "東京都美術館", aliases=("上野の美術館",))

    with pytest.raises(VenueRegistryError, match="上野の美術館"):
        build_venue_maps([first, second], strict=True)


def test_build_venue_maps_strict_rejects_name_with_two_ids() -> None:
    with pytest.raises(VenueRegistryError):
        build_venue_maps([make_venue("museum-1"), make_venue("museum-2")], strict=True)


def test_get_museum_id_raises_for_missing_id() -> None:
    maps = VenueMaps(alias_to_name={"別館": "国立西洋美術館"}, name_to_id={})

    with pytest.raises(MuseumIdNotFoundError) as exc:
        get_museum_id("国立西洋美術館", maps)

    assert str(exc.value) == "Museum ID not found for venue: 国立西洋美術館"


def test_venue_maps_are_read_only() -> None:
    maps = build_venue_maps([make_venue()])

    with pytest.raises(TypeError):
        maps.alias_to_name["新しい館"] = "国立西洋美術館"  # type: ignore[index]
