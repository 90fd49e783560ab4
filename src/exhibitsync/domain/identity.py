"""Deterministic document identities for exhibitions.

The identity is a content hash of the venue id and the normalised title. The
normalisation below is part of the identity contract: changing it re-addresses
every existing document.
"""

from __future__ import annotations

import hashlib
import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(text: str) -> str:
    """Fold width and case and collapse whitespace."""

    folded = unicodedata.normalize("NFKC", text).casefold()
    return _WHITESPACE_RE.sub(" ", folded).strip()


def derive_document_id(museum_id: str, title: str) -> str:
    payload = f"{museum_id}_{normalize_title(title)}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
