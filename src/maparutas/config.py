from dataclasses import dataclass

from .geometry import GEODESIC


@dataclass
class MaparutasConfig:
    """Configuration for the maparutas CLI."""

    # Parque Simón Bolívar, Bogotá
    default_latitude: float = 4.658768900734289
    default_longitude: float = -74.0934688649813
    default_zoom: int = 14
    line_weight: float = 20.0
    bbox_buffer: float = 50.0
    distance_method: str = GEODESIC
    metrics: bool = False
    log_level: str = "WARNING"
