#!/usr/bin/env python3
"""
Route data model: an ordered list of waypoints with its total distance.
"""

from typing import List, Optional, TextIO, Tuple
import logging
from math import cos, radians

import gpxpy
import gpxpy.gpx

from .classification import RouteCategory, classify_distance
from .geometry import (
    DISTANCE_METHODS,
    GEODESIC,
    Position,
    calculate_total_distance_km,
)

logger = logging.getLogger(__name__)


class Route:
    """A user-drawn route whose distance is recomputed after every change."""

    def __init__(
        self, coords: Optional[List[Position]] = None, method: str = GEODESIC
    ):
        """Initializes a Route object.

        Args:
            coords: Initial points in traversal order (copied).
            method: Distance method passed to calculate_total_distance_km.

        Raises:
            ValueError: If method is not a known distance method.
        """
        if method not in DISTANCE_METHODS:
            raise ValueError(
                f"Unknown distance method {method!r}, expected one of {DISTANCE_METHODS}"
            )
        self.method = method
        self.coords: List[Position] = list(coords) if coords else []
        self.total_distance_km = 0.0
        self._recalculate()

    def _recalculate(self) -> None:
        self.total_distance_km = calculate_total_distance_km(self.coords, self.method)

    def add_point(self, position: Position) -> float:
        """
        Append a point to the end of the route.

        Args:
            position: Point to append

        Returns:
            The new total distance in kilometers

        Raises:
            TypeError: If the position holds non-numeric values; the route
                is left unchanged.
        """
        # Full recomputation on every append; routes are drawn by hand and stay small
        coords = self.coords + [position]
        total_distance_km = calculate_total_distance_km(coords, self.method)
        self.coords = coords
        self.total_distance_km = total_distance_km
        logger.debug(
            f"Added point ({position.latitude:.6f}, {position.longitude:.6f}); "
            f"{len(self.coords)} points, {self.total_distance_km:.3f} km"
        )
        return self.total_distance_km

    def reset(self) -> None:
        """Remove all points and zero the distance."""
        self.coords.clear()
        self.total_distance_km = 0.0
        logger.debug("Route reset")

    @property
    def category(self) -> RouteCategory:
        return classify_distance(self.total_distance_km)

    @property
    def start(self) -> Optional[Position]:
        """First point, or None for an empty route."""
        return self.coords[0] if self.coords else None

    @property
    def end(self) -> Optional[Position]:
        """Last point, or None unless the route has at least two points."""
        return self.coords[-1] if len(self.coords) > 1 else None

    def get_bbox(self, buffer: float = 0.0) -> Tuple[float, float, float, float]:
        """
        Get bounding box for this route, optionally with a buffer.

        Args:
            buffer: Buffer distance in meters (default: 0.0)

        Returns:
            Tuple of (south, west, north, east) in decimal degrees

        Raises:
            ValueError: If the route has no points
        """
        if not self.coords:
            raise ValueError("Cannot compute bounding box of an empty route")

        latitudes = [coord.latitude for coord in self.coords]
        longitudes = [coord.longitude for coord in self.coords]
        min_lat, max_lat = min(latitudes), max(latitudes)
        min_lon, max_lon = min(longitudes), max(longitudes)

        if buffer == 0.0:
            return (min_lat, min_lon, max_lat, max_lon)

        # 1 degree latitude ≈ 111 km; longitude shrinks with the average latitude
        avg_lat = (min_lat + max_lat) / 2
        lat_buffer = buffer / 111000.0
        lon_buffer = buffer / (111000.0 * max(abs(cos(radians(avg_lat))), 1e-6))

        south = max(-90.0, min_lat - lat_buffer)
        north = min(90.0, max_lat + lat_buffer)
        west = max(-180.0, min_lon - lon_buffer)
        east = min(180.0, max_lon + lon_buffer)

        logger.debug(
            f"Buffered bounding box: ({south:.4f}, {west:.4f}, {north:.4f}, {east:.4f}) with {buffer}m buffer"
        )
        return (south, west, north, east)

    @classmethod
    def from_positions(
        cls, positions: List[Position], method: str = GEODESIC
    ) -> "Route":
        """Create a route from a list of Position objects."""
        return cls(coords=positions, method=method)

    @classmethod
    def from_gpx(cls, file_input: TextIO, method: str = GEODESIC) -> "Route":
        """
        Parse GPX data into a route.

        Track points of all tracks and segments come first, followed by the
        points of all GPX routes. Waypoints are used only when the document
        has neither.

        Args:
            file_input: File-like object containing GPX data
            method: Distance method for the new route

        Returns:
            Route object with the points in document order

        Raises:
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        gpx_data = gpxpy.parse(file_input)

        coords = []
        for track in gpx_data.tracks:
            for segment in track.segments:
                for point in segment.points:
                    coords.append(
                        Position(latitude=point.latitude, longitude=point.longitude)
                    )
        for gpx_route in gpx_data.routes:
            for point in gpx_route.points:
                coords.append(
                    Position(latitude=point.latitude, longitude=point.longitude)
                )
        if not coords:
            coords = [
                Position(latitude=point.latitude, longitude=point.longitude)
                for point in gpx_data.waypoints
            ]

        logger.debug(f"Parsed {len(coords)} points from GPX")
        return cls(coords=coords, method=method)

    @classmethod
    def from_file(cls, filename: str, method: str = GEODESIC) -> "Route":
        """
        Load and parse a GPX file into a route.

        Args:
            filename: Path to GPX file
            method: Distance method for the new route

        Returns:
            Route object representing the route

        Raises:
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        logger.debug(f"Reading GPX file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            return cls.from_gpx(f, method=method)

    def __len__(self) -> int:
        """Return number of points in route."""
        return len(self.coords)

    def __getitem__(self, index):
        """Allow indexing into points."""
        return self.coords[index]

    def __iter__(self):
        """Allow iteration over points."""
        return iter(self.coords)
