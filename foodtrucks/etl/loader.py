"""Load the mobile food facility permit CSV into approved vendor records."""

from __future__ import annotations

import logging
from os import PathLike
from typing import IO, Tuple, Union

import pandas as pd

from foodtrucks.etl.transform import (
    MIN_COLUMNS,
    DatasetError,
    RowParseError,
    is_approved,
    to_vendor_record,
)
from foodtrucks.models import VendorRecord

logger = logging.getLogger(__name__)

Source = Union[str, "PathLike[str]", IO[str]]


class DatasetReadError(DatasetError):
    """Raised when the dataset source cannot be opened or parsed as CSV."""


def _read_frame(source: Source) -> pd.DataFrame:
    try:
        # Every column as text: positional parsing happens in transform.
        # index_col=False stops a trailing delimiter from turning column 0 into the index.
        return pd.read_csv(source, dtype=str, keep_default_na=False, index_col=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DatasetReadError(f"unable to read dataset {source!r}: {exc}") from exc


def load_vendors(source: Source, *, strict: bool = False) -> Tuple[VendorRecord, ...]:
    """
    Read the permit dataset and keep only APPROVED rows, in file order.

    Rows with a malformed "received" value are skipped with a warning. With
    ``strict=True`` the first such row aborts the load instead.
    """
    frame = _read_frame(source)
    if len(frame.columns) < MIN_COLUMNS:
        raise DatasetReadError(
            f"dataset {source!r} has {len(frame.columns)} columns, expected at least {MIN_COLUMNS}"
        )

    vendors = []
    dropped = 0
    skipped = 0
    # Line 1 is the header.
    for line_no, row in enumerate(frame.itertuples(index=False, name=None), start=2):
        if not is_approved(row):
            dropped += 1
            continue
        try:
            vendors.append(to_vendor_record(row))
        except RowParseError as exc:
            if strict:
                raise RowParseError(f"line {line_no}: {exc}") from exc
            logger.warning("Skipping line %d of dataset: %s", line_no, exc)
            skipped += 1

    logger.info(
        "Loaded %d approved vendors from %d rows (dropped=%d, skipped=%d)",
        len(vendors),
        len(frame),
        dropped,
        skipped,
    )
    return tuple(vendors)
