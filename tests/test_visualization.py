import os
import tempfile
import unittest
from unittest.mock import patch, MagicMock

from maparutas.classification import RouteCategory, category_color
from maparutas.config import MaparutasConfig
from maparutas.geometry import Position
from maparutas.route import Route
from maparutas.visualization import RouteLegend, create_route_map, format_distance


@patch('maparutas.visualization.RouteLegend')
@patch('maparutas.visualization.folium.LayerControl')
@patch('maparutas.visualization.folium.TileLayer')
@patch('maparutas.visualization.folium.Map')
@patch('maparutas.visualization.folium.PolyLine')
@patch('maparutas.visualization.folium.Marker')
class TestCreateRouteMap(unittest.TestCase):

    def setUp(self):
        self.config = MaparutasConfig(line_weight=20.0)

    def test_empty_route_uses_default_camera(
        self, mock_marker, mock_polyline, mock_map, mock_tilelayer,
        mock_layercontrol, mock_legend
    ):
        map_instance = MagicMock(name="map_instance")
        mock_map.return_value = map_instance

        create_route_map(Route(), "empty.html", self.config)

        _, map_kwargs = mock_map.call_args
        self.assertEqual(
            map_kwargs['location'],
            [self.config.default_latitude, self.config.default_longitude],
        )
        self.assertEqual(map_kwargs['zoom_start'], 14)
        self.assertIsNone(map_kwargs.get('tiles'))
        mock_marker.assert_not_called()
        mock_polyline.assert_not_called()
        map_instance.fit_bounds.assert_not_called()
        map_instance.save.assert_called_once_with("empty.html")

    def test_single_point_shows_start_marker_only(
        self, mock_marker, mock_polyline, mock_map, mock_tilelayer,
        mock_layercontrol, mock_legend
    ):
        route = Route([Position(4.65, -74.09)])

        create_route_map(route, "single.html", self.config)

        mock_marker.assert_called_once()
        args, kwargs = mock_marker.call_args
        self.assertEqual(args[0], [4.65, -74.09])
        self.assertEqual(kwargs['popup'], "Start")
        mock_polyline.assert_not_called()

    def test_route_draws_colored_polyline_and_end_marker(
        self, mock_marker, mock_polyline, mock_map, mock_tilelayer,
        mock_layercontrol, mock_legend
    ):
        map_instance = MagicMock(name="map_instance")
        mock_map.return_value = map_instance
        route = Route([Position(0.0, 0.0), Position(0.0, 1.0)])

        create_route_map(route, "route.html", self.config)

        self.assertEqual(mock_marker.call_count, 2)
        end_args, _ = mock_marker.call_args_list[1]
        self.assertEqual(end_args[0], [0.0, 1.0])

        mock_polyline.assert_called_once()
        line_args, line_kwargs = mock_polyline.call_args
        self.assertEqual(line_args[0], [[0.0, 0.0], [0.0, 1.0]])
        self.assertEqual(line_kwargs['color'], category_color(RouteCategory.LONG))
        self.assertEqual(line_kwargs['weight'], 20.0)
        self.assertEqual(line_kwargs['popup'], "Distance: 111.32 km")

        map_instance.fit_bounds.assert_called_once()
        mock_legend.assert_called_once_with(route)

    def test_adds_tile_layers_and_layer_control(
        self, mock_marker, mock_polyline, mock_map, mock_tilelayer,
        mock_layercontrol, mock_legend
    ):
        map_instance = MagicMock(name="map_instance")
        mock_map.return_value = map_instance
        standard = MagicMock(name="standard")
        satellite = MagicMock(name="satellite")
        mock_tilelayer.side_effect = [standard, satellite]

        create_route_map(Route(), "layers.html", self.config)

        self.assertEqual(mock_tilelayer.call_count, 2)
        standard_kwargs = mock_tilelayer.call_args_list[0][1]
        satellite_kwargs = mock_tilelayer.call_args_list[1][1]
        self.assertEqual(standard_kwargs.get('tiles'), "CartoDB positron")
        self.assertEqual(standard_kwargs.get('name'), "Standard")
        self.assertIn('CARTO', standard_kwargs.get('attr', ''))
        self.assertEqual(satellite_kwargs.get('name'), "Satellite")
        self.assertFalse(satellite_kwargs.get('show'))
        standard.add_to.assert_called_once_with(map_instance)
        satellite.add_to.assert_called_once_with(map_instance)
        mock_layercontrol.return_value.add_to.assert_called_once_with(map_instance)


class TestFormatDistance(unittest.TestCase):

    def test_two_decimals(self):
        self.assertEqual(format_distance(0.0), "Distance: 0.00 km")
        self.assertEqual(format_distance(3.14159), "Distance: 3.14 km")


class TestRenderedMap(unittest.TestCase):

    def test_saved_html_contains_route(self):
        route = Route([Position(4.6587, -74.0934), Position(4.6600, -74.0900)])
        with tempfile.TemporaryDirectory() as tmpdir:
            output = os.path.join(tmpdir, "map.html")
            create_route_map(route, output, MaparutasConfig())
            with open(output, encoding="utf-8") as f:
                html = f.read()

        self.assertIn(category_color(RouteCategory.SHORT), html)
        self.assertIn("route-legend", html)
        self.assertIn(format_distance(route.total_distance_km), html)

    def test_legend_values(self):
        route = Route([Position(0.0, 0.0), Position(0.0, 1.0)])
        legend = RouteLegend(route)
        self.assertEqual(legend.category, "long")
        self.assertEqual(legend.short_threshold, "2")
        self.assertEqual(legend.long_threshold, "5")


if __name__ == '__main__':
    unittest.main()
