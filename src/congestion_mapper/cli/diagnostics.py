"""CLI command for single-point road lookup diagnostics."""

import json

from ..roads import diagnostics
from .common import resolve_token


def run_road_query(args):
    """Probe the road lookup service and print the diagnostics record."""
    print("=" * 70)
    print("🔎 ROAD API DIAGNOSTICS")
    print("=" * 70)

    result = diagnostics.test_road_query(
        (args.lon, args.lat),
        resolve_token(args),
        radius=args.radius,
        limit=args.limit,
        layer=args.layer,
    )

    status = "✓ Success" if result.success else "❌ Failed"
    print(f"Status: {status}")
    print(f"HTTP status: {result.response_status or 'N/A'} {result.response_status_text or ''}")
    print(f"Location: [{result.location[0]:.5f}, {result.location[1]:.5f}]")
    print(f"Request: {result.request_url}")
    print(f"Features: {result.features_count}")
    print(f"Road features: {result.road_features_count}")

    if result.error_message:
        print(f"Error: {result.error_message}")

    if result.success and result.road_features_count == 0:
        print("\n⚠️  No road features at this location; "
              "road analysis would generate synthetic roads here.")

    if result.raw_response and result.features_count:
        print("\nResponse summary:")
        print(json.dumps(result.raw_response, indent=2))

    return 0 if result.success else 1
