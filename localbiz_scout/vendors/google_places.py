"""Client utilities for the Google Places API."""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
DETAIL_FIELDS = "name,formatted_address,formatted_phone_number,website,types"


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""

    def __init__(self, message: str, status: Optional[str] = None, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload or {}


class GooglePlacesClient:
    """Thin wrapper over the Places text search and details endpoints."""

    def __init__(self, api_key: str, timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.get(f"{_BASE_URL}/{endpoint}/json", params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("%s request failed: %s", endpoint, exc)
            raise GooglePlacesError(str(exc), status="REQUEST_FAILED", payload={"error_message": str(exc)}) from exc

    def text_search(self, query: str) -> Dict[str, Any]:
        payload = self._get("textsearch", {"query": query, "key": self.api_key})
        status = payload.get("status")
        if status not in {"OK", "ZERO_RESULTS"}:
            logger.error("text_search failed: status=%s, error_message=%s", status, payload.get("error_message"))
            raise GooglePlacesError(payload.get("error_message") or str(status), status=status, payload=payload)
        payload.setdefault("results", [])
        return payload

    def place_details(self, place_id: str) -> Dict[str, Any]:
        params = {"place_id": place_id, "key": self.api_key, "fields": DETAIL_FIELDS}
        payload = self._get("details", params)
        status = payload.get("status")
        if status != "OK":
            logger.warning("place_details failed for %s: status=%s", place_id, status)
            raise GooglePlacesError(payload.get("error_message") or str(status), status=status, payload=payload)
        return payload.get("result") or {}
