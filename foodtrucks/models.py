"""Core data models shared by the loader, the search pipeline and the HTTP layer."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class VendorRecord:
    """One approved row of the mobile food facility permit dataset."""

    name: str
    facility_type: str
    address: str
    status: str
    food_items: str
    latitude: float = 0.0
    longitude: float = 0.0
    received: int = 0
    # Raw "lat,lon" text exactly as it appeared in the CSV.
    raw_lat_lon: str = ""

    @property
    def lat_lon(self) -> str:
        """Destination string in the "lat,lon" form the Distance Matrix API accepts."""
        if self.raw_lat_lon:
            return self.raw_lat_lon
        return f"{self.latitude},{self.longitude}"

    def to_dict(self) -> Dict[str, Any]:
        entry = asdict(self)
        entry.pop("raw_lat_lon")
        entry["lat_lon"] = self.lat_lon
        return entry


@dataclass(frozen=True)
class SearchQuery:
    """Parameters of a single search, built from request arguments."""

    keyword: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    newest_first: bool = False
    debug: bool = False

    @property
    def has_location(self) -> bool:
        # A zero coordinate counts as "not supplied".
        return bool(self.latitude) and bool(self.longitude)


def parse_coordinate(raw: str) -> float:
    """Parse a latitude or longitude, rejecting nan and infinities."""
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"coordinate {raw!r} is not a finite number")
    return value
