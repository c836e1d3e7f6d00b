"""CLI command for congested road analysis."""

import random
import sys

from ..core import CongestionMapperError
from ..exporters import export_roads_to_geojson, export_roads_to_gpx
from ..roads import CongestedRoadAnalyzer, RoadCriteria, select_hotspots
from .common import load_config, load_dataset, pick, resolve_token


def run_road_analysis(args):
    """Execute congested road analysis command."""
    try:
        config = load_config(args)
        criteria = RoadCriteria.from_yaml(args.criteria_config)

        metric = config.get("hotspot_metric")
        threshold = pick(args.threshold, config.get("hotspot_threshold"))
        max_hotspots = pick(args.max_hotspots, config.get("max_hotspots"))
        limit = pick(args.limit, config.get("result_limit"))
        radius = pick(args.radius, config.get("search_radius"))
        workers = pick(args.workers, config.get("max_workers"))

        print("=" * 70)
        print("🚗 CONGESTED ROAD ANALYSIS")
        print("=" * 70)
        collection = load_dataset(args, config)
        print(f"Hotspot threshold: {metric} > {threshold}")
        print(f"Search radius: {radius} m")
        print(f"Result limit: {limit}")

        hotspots = select_hotspots(
            collection,
            metric=metric,
            threshold=threshold,
            max_count=max_hotspots,
        )
        print(f"\n📍 Hotspot cells: {len(hotspots)}")
        if not hotspots:
            print("\n✓ No cells above the congestion threshold.")
            return 0

        analyzer = CongestedRoadAnalyzer(
            criteria=criteria,
            metric=metric,
            max_workers=workers,
            rng=random.Random(args.seed) if args.seed is not None else None,
        )
        analysis = analyzer.analyze(
            hotspots,
            resolve_token(args),
            limit=limit,
            radius=radius,
        )
        roads = analysis.roads

        print("\n" + "=" * 70)
        print("📊 ANALYSIS RESULTS")
        print("=" * 70)
        print(f"Lookups: {len(analysis.lookups)} "
              f"({analysis.failed_lookups} failed)")
        print(f"Roads ranked: {len(roads)} "
              f"({len(roads) - analysis.synthetic_count} real, "
              f"{analysis.synthetic_count} synthetic)")
        print()
        for rank, road in enumerate(roads, start=1):
            speed = "N/A" if road.speed is None else f"{road.speed:.1f} km/h"
            marker = " (synthetic)" if road.synthetic else ""
            print(f"  {rank:>3}. {road.name}{marker}")
            print(f"       congestion {road.congestion_level:.2f} ({road.congestion_label}) | "
                  f"speed {speed} | length {road.length:.0f} m")

        if args.output_geojson:
            path = export_roads_to_geojson(roads, args.output_geojson)
            print(f"\n✓ Exported GeoJSON file: {path}")

        if args.output_gpx:
            path = export_roads_to_gpx(roads, args.output_gpx)
            print(f"✓ Exported GPX file: {path}")

        return 0

    except FileNotFoundError as e:
        print(f"\n❌ Error: File not found: {e}", file=sys.stderr)
        return 1
    except CongestionMapperError as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
