"""HTTP entrypoint serving the approved food truck dataset."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from flask import Blueprint, Flask, current_app, jsonify, request

from foodtrucks.core.config import ConfigError, get_settings, require_api_key
from foodtrucks.core.proximity import DistanceRetriever
from foodtrucks.core.search import search_vendors
from foodtrucks.etl.loader import load_vendors
from foodtrucks.etl.transform import DatasetError
from foodtrucks.models import SearchQuery, VendorRecord, parse_coordinate
from foodtrucks.vendors.distance_matrix import DistanceMatrixClient, DistanceMatrixError

logger = logging.getLogger(__name__)

RetrieverFactory = Callable[[], DistanceRetriever]

bp = Blueprint("foodtrucks", __name__)


def default_retriever_factory() -> DistanceRetriever:
    settings = get_settings()
    return DistanceMatrixClient(require_api_key(settings), timeout=settings.lookup_timeout)


def create_app(
    vendors: Sequence[VendorRecord],
    retriever_factory: Optional[RetrieverFactory] = None,
    lookup_workers: int = 1,
) -> Flask:
    """Build the Flask app around an already loaded, read-only vendor dataset."""
    app = Flask(__name__)
    app.config["VENDORS"] = tuple(vendors)
    app.config["RETRIEVER_FACTORY"] = retriever_factory or default_retriever_factory
    app.config["LOOKUP_WORKERS"] = lookup_workers
    app.register_blueprint(bp)
    return app


# ---------- Routes ----------


@bp.get("/")
def root() -> Any:
    return "ok", 200


@bp.get("/healthz")
def healthcheck() -> Any:
    return jsonify({"status": "ok", "vendors": len(current_app.config["VENDORS"])}), 200


def _parse_coordinate(name: str) -> Optional[float]:
    raw = request.args.get(name)
    if raw is None:
        return None
    return parse_coordinate(raw)


@bp.get("/foodtrucks")
def get_foodtrucks() -> Any:
    """
    List APPROVED food trucks as JSON.
    Optional query params: search, lat + lon (within 1km walking), newest, debug
    """
    args = request.args
    debug = "debug" in args
    if debug:
        logger.info("get_foodtrucks called with: %s", args.to_dict(flat=False))

    try:
        lat = _parse_coordinate("lat")
        lon = _parse_coordinate("lon")
    except ValueError:
        return jsonify({"error": "lat and lon must be finite numbers"}), 400
    if (lat is None) != (lon is None):
        return jsonify({"error": "lat and lon must be supplied together"}), 400

    query = SearchQuery(
        keyword=args.get("search") or None,
        latitude=lat,
        longitude=lon,
        newest_first="newest" in args,
        debug=debug,
    )

    try:
        retriever = current_app.config["RETRIEVER_FACTORY"]() if query.has_location else None
        results = search_vendors(
            current_app.config["VENDORS"],
            query,
            retriever,
            max_workers=current_app.config["LOOKUP_WORKERS"],
        )
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return jsonify({"error": str(exc)}), 500
    except DistanceMatrixError as exc:
        logger.error("Distance lookup failed: %s", exc)
        return jsonify({"error": "distance lookup failed"}), 502
    except Exception as exc:  # noqa: BLE001
        logger.exception("Search failed: %s", exc)
        return jsonify({"error": "search failed"}), 500

    return jsonify([record.to_dict() for record in results]), 200


# ---------- Internals ----------


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    settings = get_settings()

    logger.info("[BOOT] Loading dataset from %s", settings.data_path)
    try:
        vendors = load_vendors(settings.data_path, strict=settings.strict_load)
    except DatasetError as exc:
        logger.error("Unable to load dataset: %s", exc)
        raise SystemExit(1) from exc

    app = create_app(vendors, lookup_workers=settings.lookup_workers)
    logger.info("[BOOT] Binding on %s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
