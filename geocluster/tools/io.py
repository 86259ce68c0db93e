"""CSV ingestion and output for clustered locations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

import pandas as pd

from .columns import CoordinateColumns, detect_coordinate_columns

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_locations(path: PathLike) -> Tuple[pd.DataFrame, CoordinateColumns]:
    """
    Read a CSV of locations and detect its coordinate columns.

    Every cell is kept as its original text so records are written back
    unchanged; coordinates are parsed later, at point construction.

    Raises:
        FileNotFoundError: if ``path`` does not exist
        CoordinateColumnsNotFound: if no latitude/longitude header is present
    """
    path = Path(path)
    logger.info("Reading CSV file: %s", path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()

    columns = detect_coordinate_columns([str(c) for c in df.columns])
    logger.info("Found %d locations (lat=%r, lng=%r)", len(df), columns.lat, columns.lng)
    return df, columns


def write_clustered(df: pd.DataFrame, path: PathLike) -> None:
    """Write ``df`` (original columns, then ``cluster``) as CSV."""
    path = Path(path)
    logger.info("Writing results to: %s", path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


__all__ = ["read_locations", "write_clustered"]
