#!/usr/bin/env python3
"""
Route distance tool.
Builds a route from points given on the command line, a GPX file or an
interactive session, reports its length and generates an interactive HTML map
with the route colored by distance.

Requirements:
    pip install gpxpy folium pyproj

"""

from typing import Iterable, List, Optional, TextIO
import webbrowser
import argparse
import logging
import sys
import os
from gpxpy import gpx

from . import __version__
from . import visualization
from .config import MaparutasConfig
from .file_utils import generate_output_filename
from .geometry import DISTANCE_METHODS, GEODESIC, Position, parse_position
from .metrics import collect_metrics, log_metrics
from .route import Route

# Configure logging
logger = logging.getLogger("maparutas")


def position_arg(text: str) -> Position:
    """argparse type for LAT,LON arguments."""
    try:
        return parse_position(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Route distance tool",
        epilog="Put -- before the points when the first one has a negative latitude:\n  maparutas -- -33.45,-70.66 -33.44,-70.65",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "points",
        type=position_arg,
        nargs="*",
        metavar="LAT,LON",
        help="Route points in traversal order",
    )
    parser.add_argument(
        "--gpx",
        type=str,
        default=None,
        help="GPX file whose points start the route",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output HTML map file (default: auto-generated)",
    )
    parser.add_argument(
        "--method",
        type=str,
        default=GEODESIC,
        choices=list(DISTANCE_METHODS),
        help="Distance formula (default: geodesic)",
    )
    parser.add_argument(
        "--line-weight",
        type=float,
        default=20.0,
        help="Route line width in pixels (default: 20)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML file in browser",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Read LAT,LON / reset / quit commands from stdin",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"maparutas {__version__}",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> MaparutasConfig:
    """Build a MaparutasConfig from parsed arguments."""
    return MaparutasConfig(
        line_weight=args.line_weight,
        distance_method=args.method,
        metrics=args.metrics,
        log_level=args.log_level,
    )


def determine_output_filename(
    input_filename: Optional[str], output_arg: Optional[str]
) -> str:
    """
    Determine the output filename to use.

    Raises:
        RuntimeError: If auto-generation fails
        ValueError: If constructed filename would be illegal
    """
    if output_arg is not None:
        return output_arg

    try:
        return generate_output_filename(input_filename)
    except (RuntimeError, ValueError) as e:
        logger.error(f"Failed to generate output filename: {e}")
        raise


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except webbrowser.Error as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    level = getattr(logging, args.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    logging.getLogger("pyproj").setLevel(logging.WARNING)


def format_summary(route: Route) -> str:
    """One-line description of the route length and category."""
    return f"Total distance: {route.total_distance_km:.2f} km ({route.category.value})"


def run_interactive(route: Route, lines: Iterable[str], out: TextIO) -> None:
    """
    Drive a route from text commands.

    "LAT,LON" appends a point, "reset" clears the route and "quit" ends the
    session. The route summary is written after every accepted command.

    Args:
        route: Route to mutate
        lines: Command lines, e.g. sys.stdin
        out: Stream for the summaries and error messages
    """
    for line in lines:
        command = line.strip()
        if not command:
            continue
        if command.lower() in ("quit", "exit"):
            break
        if command.lower() == "reset":
            route.reset()
        else:
            try:
                position = parse_position(command)
            except ValueError as e:
                print(f"Ignored: {e}", file=out)
                continue
            route.add_point(position)
        print(format_summary(route), file=out)


def main(argv: Optional[List[str]] = None):
    """
    Parses command-line arguments, builds the route, reports its distance
    and generates an interactive map.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.points and not args.gpx and not args.interactive:
        parser.print_help()
        sys.exit(1)

    setup_logging(args)
    config = config_from_args(args)

    if args.gpx:
        try:
            route = Route.from_file(args.gpx, method=config.distance_method)
        except FileNotFoundError:
            logger.error(f"GPX file not found: {args.gpx}")
            sys.exit(1)
        except PermissionError:
            logger.error(f"Cannot read GPX file (permission denied): {args.gpx}")
            sys.exit(1)
        except gpx.GPXException as e:
            logger.error(f"Invalid GPX file: {e}")
            sys.exit(1)
        except UnicodeDecodeError as e:
            logger.error(f"GPX file is not valid UTF-8: {args.gpx} ({e})")
            sys.exit(1)
        except OSError as e:
            logger.error(f"Cannot read GPX file {args.gpx}: {e}")
            sys.exit(1)
        logger.info(f"Loaded GPX route with {len(route)} points")
    else:
        route = Route(method=config.distance_method)

    for position in args.points:
        route.add_point(position)

    if args.interactive:
        run_interactive(route, sys.stdin, sys.stdout)

    print(format_summary(route))

    try:
        output_filename = determine_output_filename(args.gpx, args.output)
        logger.debug(f"Output filename: {output_filename}")
    except (RuntimeError, ValueError):
        sys.exit(1)

    metrics = collect_metrics(route)

    try:
        visualization.create_route_map(route, output_filename, config)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to create map: {e}")
        sys.exit(1)

    log_metrics(metrics, config)

    if not args.no_open:
        open_file_in_browser(output_filename)


if __name__ == "__main__":
    main()
