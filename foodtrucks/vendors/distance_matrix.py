"""Client utilities for the Google Distance Matrix API."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"
DEFAULT_TIMEOUT = 10
MAX_DESTINATIONS_PER_REQUEST = 25


class DistanceMatrixError(RuntimeError):
    """Raised when the Distance Matrix API call fails or returns a non-OK status."""


def _build_session() -> requests.Session:
    session = requests.Session()
    retries = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET",),
    )
    session.mount("https://", HTTPAdapter(max_retries=retries))
    return session


_SESSION = _build_session()


class DistanceMatrixClient:
    """Thin wrapper around the Distance Matrix endpoint bound to one API key."""

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._session = session

    def distance_matrix(
        self,
        origins: Sequence[str],
        destinations: Sequence[str],
        mode: str = "walking",
    ) -> Dict[str, Any]:
        if len(destinations) > MAX_DESTINATIONS_PER_REQUEST:
            raise ValueError(
                f"at most {MAX_DESTINATIONS_PER_REQUEST} destinations per request, got {len(destinations)}"
            )

        params = {
            "origins": "|".join(origins),
            "destinations": "|".join(destinations),
            "mode": mode,
            "language": "en",
            "units": "metric",
            "departure_time": "now",
            "key": self.api_key,
        }
        session = self._session or _SESSION
        try:
            response = session.get(_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("distance_matrix request failed: %s", exc)
            raise DistanceMatrixError(f"distance matrix request failed: {exc}") from exc

        status = payload.get("status")
        if status != "OK":
            logger.error("distance_matrix failed: status=%s, error_message=%s", status, payload.get("error_message"))
            raise DistanceMatrixError(payload.get("error_message") or status or "missing status")
        return payload


def row_elements(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the per-destination elements of the first (single origin) row."""
    rows = payload.get("rows") or []
    if not rows:
        raise DistanceMatrixError("distance matrix response has no rows")
    return rows[0].get("elements") or []
