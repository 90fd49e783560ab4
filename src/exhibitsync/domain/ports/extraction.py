"""Ports for the external exhibition extraction service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from exhibitsync.domain.model import Origin, ScrapedExhibition


@dataclass(frozen=True, slots=True)
class ExtractionRequest:
    """What to scrape: the pages to start from and which record shape to expect."""

    origin: Origin
    start_urls: tuple[str, ...] = field(default_factory=tuple)


@runtime_checkable
class ExhibitionExtractor(Protocol):
    """Callable port returning parsed exhibition records for a request."""

    def __call__(self, request: ExtractionRequest) -> list[ScrapedExhibition]: ...


__all__ = ["ExhibitionExtractor", "ExtractionRequest"]
