"""Utilities for transforming permit CSV rows into vendor records."""

import logging
from typing import Any, Optional, Sequence

from foodtrucks.models import VendorRecord

logger = logging.getLogger(__name__)

APPROVED_STATUS = "APPROVED"

# Positional columns of the Mobile Food Facility Permit export.
COL_NAME = 1
COL_FACILITY_TYPE = 2
COL_ADDRESS = 5
COL_STATUS = 10
COL_FOOD_ITEMS = 11
COL_LATITUDE = 14
COL_LONGITUDE = 15
COL_RECEIVED = 20
MIN_COLUMNS = COL_RECEIVED + 1


class DatasetError(RuntimeError):
    """Base class for failures while loading the permit dataset."""


class RowParseError(DatasetError, ValueError):
    """Raised when a row carries a malformed numeric field."""


def _cell(row: Sequence[Any], index: int) -> str:
    # pandas fills short rows with NaN even when reading everything as str.
    value = row[index] if index < len(row) else None
    if not isinstance(value, str):
        return ""
    return value


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None or value == "":
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def is_approved(row: Sequence[Any]) -> bool:
    return _cell(row, COL_STATUS) == APPROVED_STATUS


def parse_received(value: str) -> int:
    """Parse the permit "received" column, used as a freshness marker."""
    raw = value or ""
    # int() alone would also take "1_000", padding and non-ASCII digits.
    if not (raw.isascii() and raw.lstrip("+-").isdigit()):
        raise RowParseError(f"received value {value!r} is not an integer")
    try:
        received = int(raw)
    except ValueError as exc:
        raise RowParseError(f"received value {value!r} is not an integer") from exc
    if received < 0:
        raise RowParseError(f"received value {value!r} is negative")
    return received


def to_vendor_record(row: Sequence[Any]) -> VendorRecord:
    raw_lat = _cell(row, COL_LATITUDE).strip()
    raw_lon = _cell(row, COL_LONGITUDE).strip()
    latitude = _safe_float(raw_lat)
    longitude = _safe_float(raw_lon)
    if latitude is None or longitude is None:
        logger.debug("Row for %s has no usable coordinates", _cell(row, COL_NAME))

    return VendorRecord(
        name=_cell(row, COL_NAME),
        facility_type=_cell(row, COL_FACILITY_TYPE),
        address=_cell(row, COL_ADDRESS),
        status=_cell(row, COL_STATUS),
        food_items=_cell(row, COL_FOOD_ITEMS),
        latitude=latitude or 0.0,
        longitude=longitude or 0.0,
        received=parse_received(_cell(row, COL_RECEIVED)),
        raw_lat_lon=f"{raw_lat},{raw_lon}" if raw_lat and raw_lon else "",
    )
