#!/usr/bin/env python3
"""
Route visualization using folium maps.
"""

import logging
import folium
from folium.template import Template

from .classification import (
    LONG_THRESHOLD_KM,
    SHORT_THRESHOLD_KM,
    RouteCategory,
    category_color,
)
from .config import MaparutasConfig
from .route import Route

logger = logging.getLogger(__name__)


def format_distance(distance_km: float) -> str:
    """Format a distance the way the end marker shows it."""
    return f"Distance: {distance_km:.2f} km"


class RouteLegend(folium.MacroElement):
    """Legend with the color thresholds and the current route distance."""

    def __init__(self, route: Route):
        super().__init__()
        self.distance_text = format_distance(route.total_distance_km)
        self.category = route.category.value
        self.short_color = category_color(RouteCategory.SHORT)
        self.medium_color = category_color(RouteCategory.MEDIUM)
        self.long_color = category_color(RouteCategory.LONG)
        self.short_threshold = f"{SHORT_THRESHOLD_KM:g}"
        self.long_threshold = f"{LONG_THRESHOLD_KM:g}"

        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="route-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 200px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: Arial, sans-serif;
            border-radius: 5px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.2);
            box-sizing: border-box;
        ">
            <b>Legend</b><br>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ this.short_color }}; font-weight: bold; font-size: 18px;">—</span>
                Under {{ this.short_threshold }} km
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ this.medium_color }}; font-weight: bold; font-size: 18px;">—</span>
                {{ this.short_threshold }} to {{ this.long_threshold }} km
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ this.long_color }}; font-weight: bold; font-size: 18px;">—</span>
                Over {{ this.long_threshold }} km
            </div>
            <div style="margin-top: 8px;">
                {{ this.distance_text }} ({{ this.category }})
            </div>
        </div>
        {% endmacro %}
        """
        )


def create_route_map(
    route: Route,
    output_filename: str,
    config: MaparutasConfig,
) -> None:
    """
    Create an interactive map showing the route and save it as HTML.

    An empty route produces a map on the default camera position. The start
    marker appears with one point; the end marker and the colored polyline
    appear with two or more.

    Args:
        route: Route to draw
        output_filename: Path where HTML map file should be saved
        config: Configuration with camera defaults, line weight and bbox buffer
    """
    if route.start is not None:
        south, west, north, east = route.get_bbox(config.bbox_buffer)
        location = [(south + north) / 2, (west + east) / 2]
    else:
        location = [config.default_latitude, config.default_longitude]

    logger.debug(f"Creating map centered at ({location[0]:.4f}, {location[1]:.4f})")

    route_map = folium.Map(
        location=location,
        zoom_start=config.default_zoom,
        tiles=None,
    )

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(route_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(route_map)

    folium.LayerControl().add_to(route_map)

    if route.start is not None:
        folium.Marker(
            [route.start.latitude, route.start.longitude],
            popup="Start",
            tooltip="Start",
            icon=folium.Icon(color="green", icon="play"),
        ).add_to(route_map)

    if route.end is not None:
        distance_text = format_distance(route.total_distance_km)
        coordinates = [[pos.latitude, pos.longitude] for pos in route]

        folium.PolyLine(
            coordinates,
            color=category_color(route.category),
            weight=config.line_weight,
            opacity=0.9,
            popup=distance_text,
        ).add_to(route_map)

        folium.Marker(
            [route.end.latitude, route.end.longitude],
            popup=folium.Popup(f"<b>End</b><br>{distance_text}", max_width=200),
            tooltip="End",
            icon=folium.Icon(color="red", icon="stop"),
        ).add_to(route_map)

    route_map.add_child(RouteLegend(route))

    if route.start is not None:
        south, west, north, east = route.get_bbox(config.bbox_buffer)
        route_map.fit_bounds([[south, west], [north, east]])

    route_map.save(output_filename)

    logger.debug(
        f"Map saved to {output_filename} with {len(route)} points, "
        f"{route.total_distance_km:.2f} km ({route.category.value})"
    )
