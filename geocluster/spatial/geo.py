"""Geographic points and great-circle distances."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

EARTH_RADIUS_KM = 6371.0
"""Mean Earth radius used by every distance in the package."""

LAT_MIN, LAT_MAX = -90.0, 90.0
LNG_MIN, LNG_MAX = -180.0, 180.0


class InvalidCoordinate(ValueError):
    """Latitude/longitude is non-numeric, non-finite or out of range."""


@dataclass(frozen=True)
class Point:
    """An immutable (lat, lng) observation in degrees.

    ``index`` is the position of the point in the caller's input ordering and
    is what ties a label back to the original record.
    """

    lat: float
    lng: float
    index: int = 0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            raise InvalidCoordinate(
                f"Point {self.index}: coordinates must be finite, got ({self.lat}, {self.lng})"
            )
        if not LAT_MIN <= self.lat <= LAT_MAX:
            raise InvalidCoordinate(
                f"Point {self.index}: latitude {self.lat} out of bounds [-90, 90]"
            )
        if not LNG_MIN <= self.lng <= LNG_MAX:
            raise InvalidCoordinate(
                f"Point {self.index}: longitude {self.lng} out of bounds [-180, 180]"
            )


def haversine_km(a: Point, b: Point) -> float:
    """Great-circle distance between ``a`` and ``b`` in kilometres.

    The intermediate value is clamped to [0, 1] so floating point drift near
    antipodal points never produces a domain error.
    """

    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    dphi = phi2 - phi1
    dlambda = math.radians(b.lng - a.lng)

    h = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    h = min(1.0, max(0.0, h))
    return 2.0 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def haversine_km_many(
    lat_rad: float,
    lng_rad: float,
    lats_rad: np.ndarray,
    lngs_rad: np.ndarray,
) -> np.ndarray:
    """Vectorized haversine from one point to many, all inputs in radians."""

    dphi = lats_rad - lat_rad
    dlambda = lngs_rad - lng_rad
    h = np.sin(dphi / 2.0) ** 2 + np.cos(lat_rad) * np.cos(lats_rad) * np.sin(dlambda / 2.0) ** 2
    h = np.clip(h, 0.0, 1.0)
    return 2.0 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(h))


def chord_length(distance_km: float) -> float:
    """Straight-line distance on the unit sphere for a surface distance."""

    angle = min(max(distance_km, 0.0) / EARTH_RADIUS_KM, math.pi)
    return 2.0 * math.sin(angle / 2.0)


def points_from_coordinates(pairs: Iterable[Tuple[float, float]]) -> List[Point]:
    """Build index-numbered points from ``(lat, lng)`` pairs."""

    return [Point(float(lat), float(lng), index=i) for i, (lat, lng) in enumerate(pairs)]


def _coerce(value, row: int, axis: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"Row {row}: {axis} {value!r} is not a number") from None


def points_from_columns(lats: Iterable, lngs: Iterable) -> List[Point]:
    """Coerce two parallel columns (text or numbers) into points.

    Raises:
        InvalidCoordinate: if a value cannot be parsed or is out of range
    """

    points: List[Point] = []
    for row, (lat, lng) in enumerate(zip(lats, lngs)):
        points.append(
            Point(_coerce(lat, row, "latitude"), _coerce(lng, row, "longitude"), index=row)
        )
    return points


__all__ = [
    "EARTH_RADIUS_KM",
    "InvalidCoordinate",
    "Point",
    "chord_length",
    "haversine_km",
    "haversine_km_many",
    "points_from_columns",
    "points_from_coordinates",
]
