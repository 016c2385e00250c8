#!/usr/bin/env python3
"""
Maparutas - draw a route point by point and measure it.

This package sums the distance between consecutive waypoints of a route,
classifies it as short, medium or long, and renders it on an interactive map.
"""
import importlib.metadata

__version__ = importlib.metadata.version("maparutas")

# Import main classes for public API
from .classification import RouteCategory, classify_distance
from .geometry import Position, calculate_total_distance_km
from .route import Route

__all__ = [
    "Position",
    "Route",
    "RouteCategory",
    "calculate_total_distance_km",
    "classify_distance",
]
