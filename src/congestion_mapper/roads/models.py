"""Data models for road discovery and ranking."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..encoding.colors import CONGESTION_COLORS

SYNTHETIC_PREFIX = "synthetic-"
UNNAMED_ROAD = "Unnamed Road"


@dataclass(frozen=True)
class RoadSegment:
    """A road segment with an estimated congestion level."""

    id: str
    name: str
    coordinates: Tuple[Tuple[float, float], ...]  # ((lon, lat), ...)
    length: float  # meters
    congestion_level: float  # 0.0 - 1.0
    speed: Optional[float] = None  # km/h
    road_class: str = "street"

    def __post_init__(self):
        if len(self.coordinates) < 2:
            raise ValueError(f"Road segment {self.id} needs at least 2 points")
        if not 0.0 <= self.congestion_level <= 1.0:
            raise ValueError(
                f"Congestion level must be within [0, 1], got {self.congestion_level}"
            )

    def __repr__(self) -> str:
        return (
            f"RoadSegment(id={self.id}, name='{self.name}', "
            f"class={self.road_class}, congestion={self.congestion_level:.2f})"
        )

    @property
    def synthetic(self) -> bool:
        """True for procedurally generated stand-in roads."""
        return self.id.startswith(SYNTHETIC_PREFIX)

    @property
    def congestion_label(self) -> str:
        """Get human-readable congestion level."""
        if self.congestion_level >= 0.8:
            return "severe"
        elif self.congestion_level >= 0.6:
            return "heavy"
        elif self.congestion_level >= 0.4:
            return "moderate"
        elif self.congestion_level >= 0.2:
            return "light"
        else:
            return "free-flow"

    @property
    def color(self) -> str:
        """Get color code for visualization (congestion ramp)."""
        colors = {
            "free-flow": CONGESTION_COLORS[0],
            "light": CONGESTION_COLORS[1],
            "moderate": CONGESTION_COLORS[2],
            "heavy": CONGESTION_COLORS[3],
            "severe": CONGESTION_COLORS[4],
        }
        return colors[self.congestion_label]

    def length_km(self) -> float:
        return self.length / 1000.0


@dataclass
class RoadApiDiagnostics:
    """Outcome of a single road lookup, for debugging panels."""

    success: bool
    location: Tuple[float, float]  # (lon, lat)
    radius: float
    layer: str
    request_url: str  # token masked
    features_count: int = 0
    road_features_count: int = 0
    response_status: Optional[int] = None
    response_status_text: Optional[str] = None
    error_message: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = None
    geometry_types: Dict[str, int] = field(default_factory=dict)
