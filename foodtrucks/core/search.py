"""Keyword, proximity and recency search over the approved vendor dataset."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from foodtrucks.core.config import ConfigError
from foodtrucks.core.proximity import DistanceRetriever, filter_by_walking_distance
from foodtrucks.models import SearchQuery, VendorRecord

logger = logging.getLogger(__name__)


def search_vendors(
    base: Sequence[VendorRecord],
    query: SearchQuery,
    retriever: Optional[DistanceRetriever] = None,
    *,
    max_workers: int = 1,
) -> List[VendorRecord]:
    """
    Narrow ``base`` by keyword, then by walking distance, then optionally sort
    newest first. Lookup errors from the proximity step propagate.
    """
    level = logging.INFO if query.debug else logging.DEBUG

    results: Sequence[VendorRecord] = base
    if query.keyword:
        logger.log(level, "Searching for trucks serving %r", query.keyword)
        needle = query.keyword.lower()
        results = [record for record in results if needle in record.food_items.lower()]

    # A lone lat or lon is ignored here; callers validate pairs.
    if query.has_location:
        if retriever is None:
            raise ConfigError("a distance retriever is required for walking distance searches")
        logger.log(level, "Filtering %d trucks to walking distance of %s,%s", len(results), query.latitude, query.longitude)
        results = filter_by_walking_distance(
            retriever,
            results,
            query.latitude,
            query.longitude,
            max_workers=max_workers,
            debug=query.debug,
        )

    if query.newest_first:
        logger.log(level, "Prioritizing newest food trucks")
        # sorted() stays stable with reverse=True.
        return sorted(results, key=lambda record: record.received, reverse=True)

    logger.log(level, "Search matched %d trucks", len(results))
    return list(results)
