"""CLI job to run a single food truck search against the local dataset."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from foodtrucks.core.config import ConfigError, get_settings
from foodtrucks.core.search import search_vendors
from foodtrucks.etl.loader import load_vendors
from foodtrucks.etl.transform import DatasetError
from foodtrucks.jobs.server import default_retriever_factory
from foodtrucks.models import SearchQuery, parse_coordinate
from foodtrucks.vendors.distance_matrix import DistanceMatrixError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Search approved food trucks")
    parser.add_argument("--search", dest="keyword", help="Keyword to match against food items")
    parser.add_argument("--lat", dest="lat", type=parse_coordinate, help="Latitude for walking distance search")
    parser.add_argument("--lon", dest="lon", type=parse_coordinate, help="Longitude for walking distance search")
    parser.add_argument("--newest", dest="newest", action="store_true", help="Sort newest permits first")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Verbose diagnostic logging")
    parser.add_argument("--data", dest="data_path", default=settings.data_path, help="Permit CSV path")
    parser.add_argument(
        "--strict",
        dest="strict",
        action="store_true",
        default=settings.strict_load,
        help="Abort on malformed rows instead of skipping them",
    )
    return parser


def run_search(args: argparse.Namespace) -> List[dict]:
    if (args.lat is None) != (args.lon is None):
        raise ConfigError("--lat and --lon must be supplied together")

    query = SearchQuery(
        keyword=args.keyword,
        latitude=args.lat,
        longitude=args.lon,
        newest_first=args.newest,
        debug=args.debug,
    )
    vendors = load_vendors(args.data_path, strict=args.strict)
    retriever = default_retriever_factory() if query.has_location else None
    results = search_vendors(vendors, query, retriever, max_workers=get_settings().lookup_workers)
    return [record.to_dict() for record in results]


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    try:
        results = run_search(args)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except (DatasetError, DistanceMatrixError) as exc:
        logger.error("Search failed: %s", exc)
        raise SystemExit(1) from exc

    json.dump(results, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
