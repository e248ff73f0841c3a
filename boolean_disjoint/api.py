"""
Public API for the disjoint predicate.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Tuple

from boolean_disjoint.dataclasses import (
    DisjointOptions,
    LineString,
    Point,
    Polygon,
    SimpleGeometry,
    ValidationError,
    coerce_options,
)
from boolean_disjoint.debug import format_geometry, logger
from boolean_disjoint.geojson import GeoInput, iter_flatten
from boolean_disjoint.predicates import (
    boolean_point_in_polygon,
    coords_equal,
    is_point_on_line,
    lines_intersect,
    polygon_to_line,
)


def boolean_disjoint(
    feature1: GeoInput,
    feature2: GeoInput,
    options: DisjointOptions | Mapping[str, Any] | None = None
) -> bool:
    """
    Return True if two geometries share no point.

    Each input is flattened into its Point, LineString and Polygon parts and
    every part of feature1 is tested against every part of feature2. The
    first intersecting pair ends the search. Inputs without any parts (empty
    collections, features with a null geometry) are disjoint from everything.

    Parameters:
        feature1: Geometry, Feature, FeatureCollection, GeoJSON mapping or
                  object with ``__geo_interface__``
        feature2: Same as feature1
        options: DisjointOptions, a mapping such as
                 ``{"ignoreSelfIntersections": False}``, or None for defaults

    Returns:
        True if the intersection of the two inputs is empty

    Raises:
        ValidationError: If an input is not valid geometry or options are invalid

    Example:
        >>> point = Point((2, 2))
        >>> line = LineString([[1, 1], [1, 2], [1, 3], [1, 4]])
        >>> boolean_disjoint(line, point)
        True
    """
    opts = coerce_options(options)
    parts2 = list(iter_flatten(feature2))

    for flat1 in iter_flatten(feature1):
        for flat2 in parts2:
            if not disjoint(flat1.geometry, flat2.geometry, opts.ignore_self_intersections):
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Parts %d.%d and %d.%d intersect: %s / %s",
                        flat1.feature_index, flat1.multi_feature_index,
                        flat2.feature_index, flat2.multi_feature_index,
                        format_geometry(flat1.geometry),
                        format_geometry(flat2.geometry),
                    )
                return False

    return True


# =============================================================================
# Pairwise intersection handlers for simple geometries
# =============================================================================

def is_line_on_line(
    line1: LineString,
    line2: LineString,
    ignore_self_intersections: bool
) -> bool:
    """True if the two line strings share at least one point."""
    return lines_intersect(line1, line2, ignore_self_intersections)


def is_line_in_poly(
    polygon: Polygon,
    line: LineString,
    ignore_self_intersections: bool
) -> bool:
    """
    True if a line string touches a polygon.

    Any line vertex inside or on the polygon is enough; otherwise the line
    must cross the polygon's outer ring.
    """
    for coord in line.coordinates:
        if boolean_point_in_polygon(coord, polygon):
            return True
    return lines_intersect(line, polygon_to_line(polygon), ignore_self_intersections)


def is_poly_in_poly(
    polygon1: Polygon,
    polygon2: Polygon,
    ignore_self_intersections: bool
) -> bool:
    """
    True if two polygons share a point, using outer rings only.

    A vertex of either outer ring inside the other polygon catches
    containment; otherwise the two outer rings must cross.
    """
    for coord in polygon1.outer_ring:
        if boolean_point_in_polygon(coord, polygon2):
            return True
    for coord in polygon2.outer_ring:
        if boolean_point_in_polygon(coord, polygon1):
            return True
    return lines_intersect(
        polygon_to_line(polygon1),
        polygon_to_line(polygon2),
        ignore_self_intersections,
    )


IntersectsHandler = Callable[[Any, Any, bool], bool]

# Each entry answers "do geom1 and geom2 intersect?"
_INTERSECTS: Dict[Tuple[type, type], IntersectsHandler] = {
    (Point, Point): lambda g1, g2, _: coords_equal(g1.coordinates, g2.coordinates),
    (Point, LineString): lambda g1, g2, _: is_point_on_line(g2, g1),
    (Point, Polygon): lambda g1, g2, _: boolean_point_in_polygon(g1, g2),
    (LineString, Point): lambda g1, g2, _: is_point_on_line(g1, g2),
    (LineString, LineString): is_line_on_line,
    (LineString, Polygon): lambda g1, g2, ignore: is_line_in_poly(g2, g1, ignore),
    (Polygon, Point): lambda g1, g2, _: boolean_point_in_polygon(g2, g1),
    (Polygon, LineString): is_line_in_poly,
    (Polygon, Polygon): lambda g1, g2, ignore: is_poly_in_poly(g2, g1, ignore),
}


def disjoint(
    geom1: SimpleGeometry,
    geom2: SimpleGeometry,
    ignore_self_intersections: bool = True
) -> bool:
    """
    Disjoint test for two simple geometries (Point, LineString or Polygon).

    Parameters:
        geom1: First simple geometry
        geom2: Second simple geometry
        ignore_self_intersections: Forwarded to the line intersection checks

    Returns:
        True if the geometries share no point

    Raises:
        ValidationError: If either geometry is not a Point, LineString or Polygon
    """
    handler = _INTERSECTS.get((type(geom1), type(geom2)))
    if handler is None:
        raise ValidationError(
            f"disjoint() supports Point, LineString and Polygon only, got "
            f"{type(geom1).__name__} and {type(geom2).__name__}; "
            f"use boolean_disjoint() for multi-part input"
        )
    if (isinstance(geom1, Point) and geom1.is_empty) or (isinstance(geom2, Point) and geom2.is_empty):
        return True
    return not handler(geom1, geom2, ignore_self_intersections)
