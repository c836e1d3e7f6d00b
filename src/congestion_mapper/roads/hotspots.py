"""Hotspot selection and congested-cell ranking."""

from typing import List

import pandas as pd

from ..core.models import Feature, as_features
from ..encoding.colors import format_display_value

DEFAULT_METRIC = "mean_conge"
ID_PROPERTIES = ("GRID_ID", "hex_id", "id")


def hotspot_congestion(feature: Feature, metric: str = DEFAULT_METRIC) -> float:
    """Congestion value used to order hotspots; missing values count as 0."""
    value = feature.value(metric)
    return 0.0 if value is None else value


def select_hotspots(features, metric: str = DEFAULT_METRIC, threshold: float = 0.5,
                    max_count: int = 20) -> List[Feature]:
    """
    Pick the most congested polygon cells.

    Args:
        features: FeatureCollection, GeoJSON mapping or iterable of features
        metric: Congestion property name
        threshold: Keep cells whose value is strictly greater than this
        max_count: Maximum number of hotspots returned

    Returns:
        Copies of the hotspot features, most congested first
    """
    candidates = [
        f for f in as_features(features)
        if f.is_polygon and f.value(metric) is not None and f.value(metric) > threshold
    ]
    candidates.sort(key=lambda f: hotspot_congestion(f, metric), reverse=True)
    return candidates[:max_count]


def cell_id(feature: Feature, default=None):
    for key in ID_PROPERTIES:
        if feature.properties.get(key) is not None:
            return feature.properties[key]
    return default


def rank_congested_cells(features, metric: str = DEFAULT_METRIC,
                         speed_metric: str = "mean_speed", limit: int = 10) -> pd.DataFrame:
    """
    Table of the most congested cells.

    Returns:
        DataFrame with columns rank, grid_id, congestion, speed and their
        formatted display strings; cells without a congestion value are left out
    """
    rows = []
    for index, feature in enumerate(as_features(features)):
        congestion = feature.value(metric)
        if congestion is None:
            continue
        speed = feature.value(speed_metric)
        rows.append({
            'grid_id': cell_id(feature, default=index),
            'congestion': congestion,
            'speed': speed,
            'congestion_display': format_display_value(congestion, metric),
            'speed_display': format_display_value(speed, speed_metric),
        })

    columns = ['rank', 'grid_id', 'congestion', 'speed', 'congestion_display', 'speed_display']
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    df = df.sort_values('congestion', ascending=False, kind='mergesort').head(limit)
    df = df.reset_index(drop=True)
    df.insert(0, 'rank', range(1, len(df) + 1))
    return df[columns]
