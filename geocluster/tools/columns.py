"""Detection of latitude/longitude columns from header names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

LAT_NAMES = ("lat", "latitude")
LNG_NAMES = ("lon", "lng", "long", "longitude")


class CoordinateColumnsNotFound(LookupError):
    """No header matches one of the accepted coordinate names."""


@dataclass(frozen=True)
class CoordinateColumns:
    """Header names holding latitude and longitude."""

    lat: str
    lng: str


def _find_column(headers: Sequence[str], candidates: Sequence[str]) -> Optional[str]:
    for header in headers:
        if str(header).strip().lower() in candidates:
            return header
    return None


def detect_coordinate_columns(headers: Sequence[str]) -> CoordinateColumns:
    """
    Find the latitude and longitude columns, ignoring case.

    The first matching header wins for each axis.

    Raises:
        CoordinateColumnsNotFound: if either axis has no matching header
    """
    headers = list(headers)
    lat = _find_column(headers, LAT_NAMES)
    lng = _find_column(headers, LNG_NAMES)

    for found, names in ((lat, LAT_NAMES), (lng, LNG_NAMES)):
        if found is None:
            raise CoordinateColumnsNotFound(
                f"Could not find coordinate column. Looking for one of: {list(names)}. "
                f"Available headers: {headers}"
            )
    return CoordinateColumns(lat=lat, lng=lng)


__all__ = [
    "CoordinateColumns",
    "CoordinateColumnsNotFound",
    "LAT_NAMES",
    "LNG_NAMES",
    "detect_coordinate_columns",
]
