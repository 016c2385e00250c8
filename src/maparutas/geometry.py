#!/usr/bin/env python3
"""
Geographic positions and route distance calculation.

Distances between consecutive points are measured either on the WGS84
ellipsoid (via pyproj's geodesic solver) or on a sphere using the Haversine
formula, and summed into a total path length in kilometers.
"""

from typing import List, NamedTuple, Sequence
import logging
import math

import pyproj

logger = logging.getLogger(__name__)

GEODESIC = "geodesic"
HAVERSINE = "haversine"
DISTANCE_METHODS = (GEODESIC, HAVERSINE)

# IUGG mean Earth radius in meters
EARTH_MEAN_RADIUS = 6371008.8

_WGS84 = pyproj.Geod(ellps="WGS84")


class Position(NamedTuple):
    """Represents a geographic position with latitude and longitude."""

    latitude: float
    longitude: float


def _finite(coord: Position) -> bool:
    return math.isfinite(coord.latitude) and math.isfinite(coord.longitude)


def _solvable(coord: Position) -> bool:
    """True if the geodesic solver accepts the position."""
    return _finite(coord) and -90.0 <= coord.latitude <= 90.0


def geodesic_distance(coord1: Position, coord2: Position) -> float:
    """
    Calculate the ellipsoidal distance between two coordinates.

    Args:
        coord1: First coordinate position
        coord2: Second coordinate position

    Returns:
        Distance in meters on the WGS84 ellipsoid, NaN if either latitude is
        not a finite value within [-90, 90]
    """
    if not (_solvable(coord1) and _solvable(coord2)):
        return math.nan
    _, _, distance = _WGS84.inv(
        coord1.longitude, coord1.latitude, coord2.longitude, coord2.latitude
    )
    return distance


def haversine_distance(coord1: Position, coord2: Position) -> float:
    """
    Calculate Haversine distance between two coordinates.

    Uses Haversine formula for great circle distance along the Earth's surface.

    Args:
        coord1: First coordinate position
        coord2: Second coordinate position

    Returns:
        Distance in meters, NaN if any coordinate is infinite or NaN
    """
    if not (_finite(coord1) and _finite(coord2)):
        return math.nan

    lat1, lon1 = math.radians(coord1.latitude), math.radians(coord1.longitude)
    lat2, lon2 = math.radians(coord2.latitude), math.radians(coord2.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # Out-of-range degrees can push a slightly past 1.0
    a = min(1.0, max(0.0, a))

    return 2 * EARTH_MEAN_RADIUS * math.asin(math.sqrt(a))


def segment_distances(
    points: Sequence[Position], method: str = GEODESIC
) -> List[float]:
    """
    Distances in meters between each pair of consecutive points.

    Args:
        points: Ordered route points
        method: "geodesic" (WGS84 ellipsoid) or "haversine" (sphere)

    Returns:
        List of len(points) - 1 distances, empty for fewer than two points

    Raises:
        ValueError: If method is not a known distance method
    """
    if method not in DISTANCE_METHODS:
        raise ValueError(
            f"Unknown distance method {method!r}, expected one of {DISTANCE_METHODS}"
        )

    if len(points) < 2:
        return []

    if method == HAVERSINE:
        return [
            haversine_distance(points[i], points[i + 1])
            for i in range(len(points) - 1)
        ]

    if not all(_solvable(pos) for pos in points):
        return [
            geodesic_distance(points[i], points[i + 1])
            for i in range(len(points) - 1)
        ]

    lons = [pos.longitude for pos in points]
    lats = [pos.latitude for pos in points]
    return list(_WGS84.line_lengths(lons, lats))


def calculate_total_distance_km(
    points: Sequence[Position], method: str = GEODESIC
) -> float:
    """
    Calculate the total path length of an ordered list of points.

    Only consecutive points are measured, so the result depends on order.

    Args:
        points: Ordered route points
        method: "geodesic" (WGS84 ellipsoid) or "haversine" (sphere)

    Returns:
        Total distance in kilometers, 0.0 for fewer than two points
    """
    if len(points) < 2:
        return 0.0

    total_meters = 0.0
    for distance in segment_distances(points, method):
        total_meters += distance

    return total_meters / 1000.0


def parse_position(text: str) -> Position:
    """
    Parse a "LAT,LON" string into a Position.

    Args:
        text: Latitude and longitude in decimal degrees separated by a comma

    Returns:
        Parsed Position

    Raises:
        ValueError: If the text is not two comma-separated finite numbers
    """
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"Expected LAT,LON but got {text!r}")
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError(f"Coordinates must be numeric: {text!r}")
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValueError(f"Coordinates must be finite: {text!r}")
    return Position(latitude=latitude, longitude=longitude)
