"""Core data models shared by the search and enrichment pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

DEFAULT_NAME = "Unknown Business"
DEFAULT_ADDRESS = "No address listed"
DEFAULT_PHONE = "N/A"
PLACES_NOTE = "Fetched from Google Places API"
NOTE_SEPARATOR = " | "

DEFAULT_LIMIT = 10
MAX_LIMIT = 1000


class SearchValidationError(ValueError):
    """Raised when a search request is missing or has malformed parameters."""


def is_http_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return value.strip().lower().startswith(("http://", "https://"))


@dataclass(slots=True)
class BusinessRecord:
    """Normalized business returned by Google Places, enriched in place by the AI passes."""

    id: str
    name: str = DEFAULT_NAME
    category: str = ""
    address: str = DEFAULT_ADDRESS
    phone: str = DEFAULT_PHONE
    website: Optional[str] = None
    socials: List[str] = field(default_factory=list)
    verification_notes: str = PLACES_NOTE

    def add_note(self, note: str) -> None:
        if not note:
            return
        if self.verification_notes:
            self.verification_notes = f"{self.verification_notes}{NOTE_SEPARATOR}{note}"
        else:
            self.verification_notes = note

    def set_website(self, url: str) -> bool:
        """Set the website once; an existing website is never replaced."""
        if self.website is not None or not is_http_url(url):
            return False
        self.website = url.strip()
        return True

    def add_socials(self, urls: Iterable[str]) -> List[str]:
        """Append unseen http(s) links and return the ones actually added."""
        if self.website is None:
            return []
        added: List[str] = []
        for url in urls:
            if not is_http_url(url):
                continue
            url = url.strip()
            if url in self.socials or url in added:
                continue
            added.append(url)
        self.socials.extend(added)
        return added

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "socials": list(self.socials),
            "verificationNotes": self.verification_notes,
        }


@dataclass(frozen=True)
class SearchRequest:
    location: str
    category: str
    limit: int = DEFAULT_LIMIT

    @property
    def query(self) -> str:
        return f"{self.category} in {self.location}"

    @classmethod
    def from_params(cls, location: Any, category: Any, limit: Any = None) -> "SearchRequest":
        location = str(location or "").strip()
        category = str(category or "").strip()

        missing = [name for name, value in (("location", location), ("category", category)) if not value]
        if missing:
            raise SearchValidationError(f"missing required params: {', '.join(missing)}")

        if limit is None or (isinstance(limit, str) and not limit.strip()):
            parsed_limit = DEFAULT_LIMIT
        else:
            try:
                parsed_limit = int(limit)
            except (TypeError, ValueError) as exc:
                raise SearchValidationError("limit must be an integer") from exc
        if parsed_limit <= 0 or parsed_limit > MAX_LIMIT:
            raise SearchValidationError(f"limit must be between 1 and {MAX_LIMIT}")

        return cls(location=location, category=category, limit=parsed_limit)
