"""Domain error hierarchy."""

from __future__ import annotations


class ExhibitSyncError(RuntimeError):
    """Base class for errors raised by the exhibition sync domain."""


class NotFoundError(ExhibitSyncError):
    """Raised when a referenced registry entry does not exist."""


class VenueNotFoundError(NotFoundError):
    """Raised when a scraped venue name matches no registered venue or alias."""

    def __init__(self, venue: str, title: str) -> None:
        super().__init__(f"Venue not found for exhibition: {venue} - {title}")
        self.venue = venue
        self.title = title


class MuseumIdNotFoundError(NotFoundError):
    """Raised when a canonical venue name has no registered id."""

    def __init__(self, venue_name: str) -> None:
        super().__init__(f"Museum ID not found for venue: {venue_name}")
        self.venue_name = venue_name


class VenueRegistryError(ExhibitSyncError):
    """Raised when the venue registry maps one name to several venues."""


class MalformedDocumentError(ExhibitSyncError):
    """Raised when a stored exhibition document cannot be interpreted."""

    def __init__(self, document_id: str, reason: str) -> None:
        super().__init__(f"Malformed exhibition document {document_id}: {reason}")
        self.document_id = document_id


class InvalidDateError(ExhibitSyncError, ValueError):
    """Raised when an incoming date string is not a ``yyyy-mm-dd`` calendar date."""


class ExternalServiceError(ExhibitSyncError):
    """Raised when an external collaborator (extraction service, etc.) fails."""

    def __init__(self, message: str, *, service: str) -> None:
        super().__init__(message)
        self.service = service
