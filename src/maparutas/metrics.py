"""
Module for collecting and logging metrics about a route.
"""

import logging
from typing import NamedTuple

from .classification import RouteCategory
from .config import MaparutasConfig
from .geometry import segment_distances
from .route import Route

logger = logging.getLogger(__name__)


class RouteMetrics(NamedTuple):
    """Container for route metrics data."""

    point_count: int
    segment_count: int
    total_distance_km: float
    longest_segment_km: float
    shortest_segment_km: float
    category: RouteCategory


def collect_metrics(route: Route) -> RouteMetrics:
    """
    Collect metrics for a route.

    Args:
        route: Route to analyze

    Returns:
        RouteMetrics for the route; segment figures are 0.0 with fewer than two points
    """
    segments_km = [d / 1000.0 for d in segment_distances(route.coords, route.method)]

    return RouteMetrics(
        point_count=len(route),
        segment_count=len(segments_km),
        total_distance_km=route.total_distance_km,
        longest_segment_km=max(segments_km, default=0.0),
        shortest_segment_km=min(segments_km, default=0.0),
        category=route.category,
    )


def log_metrics(metrics: RouteMetrics, config: MaparutasConfig) -> None:
    """
    Log detailed metrics.

    Args:
        metrics: RouteMetrics to log
        config: Configuration; nothing is logged unless config.metrics is set
    """
    if not config.metrics:
        return

    logger.debug("=== MAPARUTAS_METRICS ===")
    logger.debug(f"point_count={metrics.point_count}")
    logger.debug(f"segment_count={metrics.segment_count}")
    logger.debug(f"total_distance_km={metrics.total_distance_km:.3f}")
    logger.debug(f"longest_segment_km={metrics.longest_segment_km:.3f}")
    logger.debug(f"shortest_segment_km={metrics.shortest_segment_km:.3f}")
    logger.debug(f"category={metrics.category.value}")
    logger.debug("=== END_MAPARUTAS_METRICS ===")
