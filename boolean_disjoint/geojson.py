"""
GeoJSON Input and Flattening
============================

Converts GeoJSON mappings (RFC 7946) and objects exposing
``__geo_interface__`` into the geometry dataclasses, and decomposes any
geometry, feature or collection into its simple parts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Union

from boolean_disjoint.dataclasses import (
    Feature,
    FeatureCollection,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    SimpleGeometry,
    ValidationError,
    GEOMETRY_TYPES,
    ensure_sequence,
)

GeoInput = Union[
    Point,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
    Feature,
    FeatureCollection,
    Mapping[str, Any],
]


def _require(obj: Mapping[str, Any], member: str) -> Any:
    if member not in obj:
        raise ValidationError(f"GeoJSON {obj.get('type')} is missing '{member}'")
    return obj[member]


def _parse_polygon_rings(rings: Any, name: str) -> Polygon:
    ensure_sequence(rings, name)
    return Polygon(tuple(rings))


def _parse_geometry(obj: Mapping[str, Any]) -> Any:
    geom_type = obj.get("type")

    if geom_type == "Point":
        return Point(_require(obj, "coordinates"))
    if geom_type == "LineString":
        return LineString(_require(obj, "coordinates"))
    if geom_type == "Polygon":
        return _parse_polygon_rings(_require(obj, "coordinates"), "Polygon coordinates")
    if geom_type == "MultiPoint":
        return MultiPoint(_require(obj, "coordinates"))
    if geom_type == "MultiLineString":
        lines = ensure_sequence(_require(obj, "coordinates"), "MultiLineString coordinates")
        return MultiLineString(tuple(lines))
    if geom_type == "MultiPolygon":
        polygons = ensure_sequence(_require(obj, "coordinates"), "MultiPolygon coordinates")
        return MultiPolygon(tuple(
            _parse_polygon_rings(rings, f"MultiPolygon coordinates[{i}]")
            for i, rings in enumerate(polygons)
        ))
    if geom_type == "GeometryCollection":
        members = ensure_sequence(_require(obj, "geometries"), "GeometryCollection geometries")
        return GeometryCollection(tuple(parse_geometry(g) for g in members))

    raise ValidationError(f"Unsupported GeoJSON geometry type: {geom_type!r}")


def parse_geometry(obj: Any) -> Any:
    """Parse a GeoJSON geometry (not a feature) into a geometry dataclass."""
    if isinstance(obj, GEOMETRY_TYPES):
        return obj
    if hasattr(obj, "__geo_interface__"):
        obj = obj.__geo_interface__
    if not isinstance(obj, Mapping):
        raise ValidationError(f"Expected a GeoJSON geometry mapping, got {type(obj).__name__}")
    return _parse_geometry(obj)


def parse_geojson(obj: Any) -> Any:
    """
    Parse any GeoJSON object into the matching dataclass.

    Dataclass instances are returned unchanged. Objects exposing
    ``__geo_interface__`` (shapely geometries, for example) are read
    through that mapping.

    Parameters:
        obj: GeoJSON mapping, ``__geo_interface__`` provider or dataclass

    Returns:
        Geometry, Feature or FeatureCollection dataclass

    Raises:
        ValidationError: If the object is not valid GeoJSON
    """
    if isinstance(obj, GEOMETRY_TYPES + (Feature, FeatureCollection)):
        return obj
    if hasattr(obj, "__geo_interface__"):
        obj = obj.__geo_interface__
    if not isinstance(obj, Mapping):
        raise ValidationError(f"Expected a GeoJSON mapping, got {type(obj).__name__}")

    obj_type = obj.get("type")
    if obj_type == "Feature":
        geometry = obj.get("geometry")
        properties = obj.get("properties") or {}
        return Feature(
            geometry=None if geometry is None else parse_geometry(geometry),
            properties=properties,
            id=obj.get("id"),
        )
    if obj_type == "FeatureCollection":
        features = ensure_sequence(_require(obj, "features"), "FeatureCollection features")
        parsed = []
        for i, feat in enumerate(features):
            item = parse_geojson(feat)
            if not isinstance(item, Feature):
                raise ValidationError(
                    f"FeatureCollection features[{i}] must be a Feature, "
                    f"got {type(item).__name__}"
                )
            parsed.append(item)
        return FeatureCollection(tuple(parsed))

    return _parse_geometry(obj)


# =============================================================================
# Flattening
# =============================================================================

@dataclass(frozen=True)
class FlatGeometry:
    """A simple geometry produced by flattening.

    Attributes:
        geometry: The Point, LineString or Polygon part
        feature_index: Position of the owning feature in its collection (0 for bare geometries)
        multi_feature_index: Position of the part inside its multi-geometry or collection
    """

    geometry: SimpleGeometry
    feature_index: int = 0
    multi_feature_index: int = 0


def _simple_parts(geometry: Any) -> Iterator[SimpleGeometry]:
    if isinstance(geometry, Point):
        if not geometry.is_empty:
            yield geometry
    elif isinstance(geometry, (LineString, Polygon)):
        yield geometry
    elif isinstance(geometry, (MultiPoint, MultiLineString, MultiPolygon)):
        yield from geometry.parts
    elif isinstance(geometry, GeometryCollection):
        for member in geometry.geometries:
            yield from _simple_parts(member)
    else:
        raise ValidationError(f"Cannot flatten {type(geometry).__name__}")


def iter_flatten(obj: GeoInput) -> Iterator[FlatGeometry]:
    """
    Yield every simple geometry inside obj, in a stable order.

    Features are visited in collection order, parts in the order they appear
    in their multi-geometry. Nested geometry collections are descended
    recursively. Features without geometry and empty points contribute nothing.
    """
    obj = parse_geojson(obj)

    if isinstance(obj, FeatureCollection):
        features = obj.features
    elif isinstance(obj, Feature):
        features = (obj,)
    else:
        features = (Feature(geometry=obj),)

    for feature_index, feature in enumerate(features):
        if feature.geometry is None:
            continue
        for multi_feature_index, part in enumerate(_simple_parts(feature.geometry)):
            yield FlatGeometry(part, feature_index, multi_feature_index)


def flatten_each(obj: GeoInput, visitor: Callable[[FlatGeometry], Any]) -> None:
    """
    Call visitor once per simple geometry in obj.

    Iteration stops as soon as the visitor returns ``False`` (any other return
    value, including None, continues).
    """
    for flat in iter_flatten(obj):
        if visitor(flat) is False:
            return
