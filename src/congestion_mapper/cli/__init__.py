"""Command-line interface for congestion-mapper."""

import sys
import argparse

from loguru import logger


def configure_logging(verbose: bool = False):
    """Send library logs to stderr; warnings only unless verbose."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> | {name}:{function} - {message}",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="congestion-mapper",
        description="Metric statistics, map encodings and congested road ranking for hexagon grids"
    )
    parser.add_argument(
        "--config",
        help="Path to INI config file (default: use built-in settings)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Stats subcommand
    stats_parser = subparsers.add_parser(
        "stats",
        help="Compute metric statistics, encoding and legend"
    )
    stats_parser.add_argument(
        "--geojson",
        help="Input hexagon GeoJSON (default: dataset from config)"
    )
    stats_parser.add_argument(
        "--metric",
        help="Metric property name (default: from config, mean_conge)"
    )
    stats_parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of most congested cells to list (default: 10)"
    )
    stats_parser.add_argument(
        "--ranking-csv",
        help="Write the congested cell ranking to this CSV file"
    )
    stats_parser.add_argument(
        "--paint-json",
        help="Write Mapbox GL paint properties for the encoding to this JSON file"
    )

    # Analyze-roads subcommand
    roads_parser = subparsers.add_parser(
        "analyze-roads",
        help="Find and rank congested roads near hotspot cells"
    )
    roads_parser.add_argument(
        "--geojson",
        help="Input hexagon GeoJSON (default: dataset from config)"
    )
    roads_parser.add_argument(
        "--token",
        help="Mapbox access token (default: $MAPBOX_ACCESS_TOKEN)"
    )
    roads_parser.add_argument(
        "--threshold",
        type=float,
        help="Minimum congestion for a hotspot cell (default: 0.5)"
    )
    roads_parser.add_argument(
        "--max-hotspots",
        type=int,
        help="Maximum number of hotspot cells to query (default: 20)"
    )
    roads_parser.add_argument(
        "--limit",
        type=int,
        help="Number of roads to return (default: 10)"
    )
    roads_parser.add_argument(
        "--radius",
        type=float,
        help="Search radius in meters around each hotspot (default: 500)"
    )
    roads_parser.add_argument(
        "--workers",
        type=int,
        help="Parallel road lookups (default: 1)"
    )
    roads_parser.add_argument(
        "--criteria-config",
        default="config/road_criteria.yaml",
        help="Path to road criteria config (default: config/road_criteria.yaml)"
    )
    roads_parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible jitter and synthetic roads"
    )
    roads_parser.add_argument(
        "--output-geojson",
        help="Output GeoJSON file with ranked roads"
    )
    roads_parser.add_argument(
        "--output-gpx",
        help="Output GPX file with ranked roads"
    )

    # Test-road-query subcommand
    query_parser = subparsers.add_parser(
        "test-road-query",
        help="Probe road data availability at one point"
    )
    query_parser.add_argument("--lon", type=float, required=True, help="Longitude")
    query_parser.add_argument("--lat", type=float, required=True, help="Latitude")
    query_parser.add_argument(
        "--token",
        help="Mapbox access token (default: $MAPBOX_ACCESS_TOKEN)"
    )
    query_parser.add_argument(
        "--radius",
        type=float,
        default=25,
        help="Search radius in meters (default: 25)"
    )
    query_parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Maximum number of features (default: 10)"
    )
    query_parser.add_argument(
        "--layer",
        default="road",
        help="Vector tile layer to query (default: road)"
    )

    return parser


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)

    # Route to appropriate subcommand
    if args.command == "stats":
        from .stats import run_stats
        sys.exit(run_stats(args))
    elif args.command == "analyze-roads":
        from .roads import run_road_analysis
        sys.exit(run_road_analysis(args))
    elif args.command == "test-road-query":
        from .diagnostics import run_road_query
        sys.exit(run_road_query(args))


if __name__ == "__main__":
    main()
