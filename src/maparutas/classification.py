#!/usr/bin/env python3
"""
Distance categories used to pick the route line color.
"""

from enum import Enum

SHORT_THRESHOLD_KM = 2.0
LONG_THRESHOLD_KM = 5.0


class RouteCategory(Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


CATEGORY_COLORS = {
    RouteCategory.SHORT: "#2ECC40",  # green
    RouteCategory.MEDIUM: "#FFDC00",  # yellow
    RouteCategory.LONG: "#FF4136",  # red
}


def classify_distance(distance_km: float) -> RouteCategory:
    """
    Classify a route distance.

    Both thresholds belong to MEDIUM: 2.0 km is not SHORT and 5.0 km is not LONG.

    Args:
        distance_km: Route length in kilometers

    Returns:
        RouteCategory for the distance
    """
    if distance_km < SHORT_THRESHOLD_KM:
        return RouteCategory.SHORT
    if distance_km <= LONG_THRESHOLD_KM:
        return RouteCategory.MEDIUM
    return RouteCategory.LONG


def category_color(category: RouteCategory) -> str:
    """Return the hex line color for a category."""
    return CATEGORY_COLORS[category]
