"""Walking distance filter backed by a distance matrix lookup."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Protocol, Sequence, Tuple

from foodtrucks.models import VendorRecord
from foodtrucks.vendors.distance_matrix import MAX_DESTINATIONS_PER_REQUEST, row_elements

logger = logging.getLogger(__name__)

# Roughly a fifteen minute walk.
WALKING_DISTANCE_METERS = 1000

Batch = Tuple[int, Sequence[VendorRecord]]


class DistanceRetriever(Protocol):
    def distance_matrix(
        self, origins: Sequence[str], destinations: Sequence[str], mode: str = "walking"
    ) -> Dict[str, Any]:
        ...


def iter_batches(candidates: Sequence[VendorRecord], size: int = MAX_DESTINATIONS_PER_REQUEST) -> List[Batch]:
    return [(start, candidates[start : start + size]) for start in range(0, len(candidates), size)]


def _is_walkable(element: Dict[str, Any]) -> bool:
    if element.get("status") != "OK":
        return False
    meters = (element.get("distance") or {}).get("value")
    return meters is not None and meters < WALKING_DISTANCE_METERS


def _walkable_in_batch(
    retriever: DistanceRetriever, origin: str, batch: Batch, level: int = logging.DEBUG
) -> List[VendorRecord]:
    start, records = batch
    destinations = [record.lat_lon for record in records]
    logger.log(level, "Requesting distances for indexes [%d,%d) from %s to %s", start, start + len(records), origin, destinations)

    payload = retriever.distance_matrix(origins=[origin], destinations=destinations, mode="walking")
    logger.log(level, "Distance matrix response: %s", payload)
    elements = row_elements(payload)
    # zip() drops any elements beyond the batch length.
    return [record for record, element in zip(records, elements) if _is_walkable(element)]


def filter_by_walking_distance(
    retriever: DistanceRetriever,
    candidates: Sequence[VendorRecord],
    lat: float,
    lon: float,
    *,
    max_workers: int = 1,
    debug: bool = False,
) -> List[VendorRecord]:
    """
    Keep the candidates within walking distance of (lat, lon).

    Candidates are sent in batches of at most 25 destinations. Any lookup error
    aborts the whole filter; results of other batches are discarded. With
    ``debug`` the per-batch diagnostics are logged at INFO.
    """
    level = logging.INFO if debug else logging.DEBUG
    origin = f"{lat:f},{lon:f}"
    batches = iter_batches(candidates)
    logger.log(level, "Splitting list of length %d into %d batch requests", len(candidates), len(batches))

    if max_workers > 1 and len(batches) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(batches))) as executor:
            # map() yields in submission order, which keeps candidate order.
            per_batch = list(executor.map(lambda batch: _walkable_in_batch(retriever, origin, batch, level), batches))
    else:
        per_batch = [_walkable_in_batch(retriever, origin, batch, level) for batch in batches]

    walkable = [record for records in per_batch for record in records]
    logger.log(level, "%d of %d candidates are within %dm", len(walkable), len(candidates), WALKING_DISTANCE_METERS)
    return walkable
