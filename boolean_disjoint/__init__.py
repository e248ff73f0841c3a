"""
Boolean Disjoint
================

Public API for testing whether two geometries (points, line strings,
polygons, their multi-part variants, features and collections) share no
common point.
"""

from boolean_disjoint.api import boolean_disjoint, disjoint
from boolean_disjoint.dataclasses import (
    Point,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
    Feature,
    FeatureCollection,
    DisjointOptions,
    ValidationError,
)
from boolean_disjoint.geojson import (
    FlatGeometry,
    parse_geojson,
    iter_flatten,
    flatten_each,
)
from boolean_disjoint.predicates import (
    coords_equal,
    is_point_on_segment,
    is_point_on_line,
    boolean_point_in_polygon,
    line_intersect,
    polygon_to_line,
)
from boolean_disjoint.debug import (
    format_point,
    format_geometry,
    setup_debug_logging,
    disable_debug_logging,
)

__all__ = [
    # Main API
    'boolean_disjoint',
    'disjoint',
    'DisjointOptions',
    'ValidationError',
    # Geometry types
    'Point',
    'LineString',
    'Polygon',
    'MultiPoint',
    'MultiLineString',
    'MultiPolygon',
    'GeometryCollection',
    'Feature',
    'FeatureCollection',
    # GeoJSON and flattening
    'FlatGeometry',
    'parse_geojson',
    'iter_flatten',
    'flatten_each',
    # Predicates
    'coords_equal',
    'is_point_on_segment',
    'is_point_on_line',
    'boolean_point_in_polygon',
    'line_intersect',
    'polygon_to_line',
    # Debug utilities
    'format_point',
    'format_geometry',
    'setup_debug_logging',
    'disable_debug_logging',
]
__version__ = '0.1.0'
