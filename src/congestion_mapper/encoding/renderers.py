"""Renderer adapters that consume a VisualEncoding."""

from typing import Any, Dict, List

from ..core.models import FeatureCollection, as_features
from .encoding import VisualEncoding


class EncodingRenderer:
    """Capability interface: apply an encoding to some rendering target."""

    def apply_encoding(self, encoding: VisualEncoding):
        raise NotImplementedError


class MapboxExpressionRenderer(EncodingRenderer):
    """Build Mapbox GL paint properties for a fill-extrusion hexagon layer."""

    def __init__(self, layer_id: str = "hexagons-fill", opacity: float = 0.7):
        self.layer_id = layer_id
        self.opacity = opacity

    def apply_encoding(self, encoding: VisualEncoding) -> Dict[str, Any]:
        """
        Paint properties for the encoding.

        Returns:
            Mapping of paint property name to Mapbox style expression
        """
        return {
            "fill-extrusion-color": self.color_expression(encoding),
            "fill-extrusion-height": self.height_expression(encoding),
            "fill-extrusion-base": 0,
            "fill-extrusion-opacity": self.opacity,
        }

    def layer(self, encoding: VisualEncoding, source: str) -> Dict[str, Any]:
        """Complete layer definition for map.addLayer."""
        return {
            "id": self.layer_id,
            "type": "fill-extrusion",
            "source": source,
            "paint": self.apply_encoding(encoding),
        }

    @staticmethod
    def color_expression(encoding: VisualEncoding) -> List:
        value = ["get", encoding.metric]
        if encoding.is_classified:
            expression = ["step", value, encoding.base_color]
            for threshold, color in zip(encoding.breakpoints, encoding.step_colors):
                expression.extend([threshold, color])
            return expression

        expression = ["interpolate", ["linear"], value]
        for stop, color in encoding.color_stops:
            expression.extend([stop, color])
        return expression

    @staticmethod
    def height_expression(encoding: VisualEncoding) -> List:
        expression = ["interpolate", ["linear"], ["get", encoding.metric]]
        for stop, height in encoding.height_stops:
            expression.extend([stop, height])
        return expression


class GeoJSONStyleRenderer(EncodingRenderer):
    """Bake per-feature colors and heights into a copy of a collection."""

    def __init__(self, features, missing_color: str = "#808080"):
        self.features = as_features(features)
        self.missing_color = missing_color

    def apply_encoding(self, encoding: VisualEncoding) -> FeatureCollection:
        styled = FeatureCollection(self.features)
        for feature in styled:
            value = feature.properties.get(encoding.metric)
            feature.properties["fill_color"] = encoding.color_for(value) or self.missing_color
            feature.properties["height"] = encoding.height_for(value) or 0
        return styled
