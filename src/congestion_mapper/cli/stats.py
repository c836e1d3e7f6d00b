"""CLI command for metric statistics and encodings."""

import json
import sys
from pathlib import Path

from ..core import CongestionMapperError
from ..encoding import (
    MapboxExpressionRenderer,
    encode_metric,
    format_display_value,
    get_metric_label,
    legend_entries,
)
from ..encoding.legend import legend_note
from ..roads import rank_congested_cells
from .common import load_config, load_dataset, pick


def run_stats(args):
    """Execute statistics command."""
    try:
        config = load_config(args)
        metric = pick(args.metric, config.get("metric"))

        print("=" * 70)
        print("📊 METRIC STATISTICS")
        print("=" * 70)
        collection = load_dataset(args, config)

        available = collection.property_names()
        if available and metric not in available:
            print(f"⚠️  Metric '{metric}' not found in first feature. "
                  f"Available: {', '.join(available)}")

        stats, colors, encoding = encode_metric(collection, metric)

        print(f"\nMetric: {get_metric_label(metric)} ({metric})")
        if stats.is_default:
            print("⚠️  No numeric values found; showing default statistics")
        print(f"  Valid values: {stats.count}")
        print(f"  Min:  {format_display_value(stats.min, metric)}")
        print(f"  Max:  {format_display_value(stats.max, metric)}")
        print(f"  Mean: {format_display_value(stats.mean, metric)}")
        print(f"  Quantiles (20/40/60/80%): "
              f"{', '.join(format_display_value(q, metric) for q in stats.quantiles)}")
        print(f"\nEncoding: {encoding.mode}")

        print("\nLegend:")
        for entry in legend_entries(encoding, stats, metric):
            print(f"  {entry.color}  {entry.label}")
        note = legend_note(encoding)
        if note:
            print(f"  ({note})")

        if args.paint_json:
            paint = MapboxExpressionRenderer().apply_encoding(encoding)
            output = Path(args.paint_json)
            output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, 'w', encoding='utf-8') as f:
                json.dump(paint, f, indent=2)
            print(f"\n✓ Exported paint properties: {output}")

        ranking = rank_congested_cells(
            collection,
            metric=config.get("hotspot_metric"),
            limit=args.top,
        )
        if len(ranking):
            print("\n" + "=" * 70)
            print(f"🚦 TOP {len(ranking)} MOST CONGESTED AREAS")
            print("=" * 70)
            for _, row in ranking.iterrows():
                print(f"  {row['rank']:>3}. {row['grid_id']}  "
                      f"congestion {row['congestion_display']}  "
                      f"speed {row['speed_display']}")

            if args.ranking_csv:
                output = Path(args.ranking_csv)
                output.parent.mkdir(parents=True, exist_ok=True)
                ranking.to_csv(output, index=False)
                print(f"\n✓ Exported ranking CSV: {output}")

        return 0

    except FileNotFoundError as e:
        print(f"\n❌ Error: File not found: {e}", file=sys.stderr)
        return 1
    except CongestionMapperError as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
