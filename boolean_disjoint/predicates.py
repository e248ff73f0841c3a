"""
Exact 2D predicates: coordinate equality, point-on-segment, point-in-polygon,
and segment/line intersection.

All comparisons are exact (no epsilon). Collinearity is decided by a cross
product that must be exactly zero, so points that are only approximately on a
segment are reported as off it.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from boolean_disjoint.dataclasses import (
    LineString,
    MultiLineString,
    MultiPolygon,
    Point,
    Polygon,
    ValidationError,
    as_position,
)

Position = Tuple[float, float]
LineLike = Union[LineString, MultiLineString, Polygon, MultiPolygon]


def coords_equal(pair1: Any, pair2: Any) -> bool:
    """Return True if both coordinate components match exactly."""
    return bool(pair1[0] == pair2[0] and pair1[1] == pair2[1])


def is_point_on_segment(
    segment_start: Any,
    segment_end: Any,
    pt: Any
) -> bool:
    """
    Test whether a point lies on a closed line segment.

    The point must be exactly collinear with the segment (zero cross product)
    and fall within the segment's extent along its dominant axis. Endpoints
    are included. A zero-length segment reduces to coordinate equality.

    Parameters:
        segment_start: Segment start (x, y)
        segment_end: Segment end (x, y)
        pt: Point (x, y) to test

    Returns:
        True if pt lies on [segment_start, segment_end]
    """
    x0, y0 = float(segment_start[0]), float(segment_start[1])
    x1, y1 = float(segment_end[0]), float(segment_end[1])
    px, py = float(pt[0]), float(pt[1])

    dxc = px - x0
    dyc = py - y0
    dxl = x1 - x0
    dyl = y1 - y0

    cross = dxc * dyl - dyc * dxl
    if cross != 0:
        return False

    if dxl == 0 and dyl == 0:
        return px == x0 and py == y0

    if abs(dxl) >= abs(dyl):
        if dxl > 0:
            return x0 <= px <= x1
        return x1 <= px <= x0
    if dyl > 0:
        return y0 <= py <= y1
    return y1 <= py <= y0


def is_point_on_line(line: LineString, point: Point) -> bool:
    """Return True if the point lies on any segment of the line string."""
    coords = line.coordinates
    for i in range(line.num_segments):
        if is_point_on_segment(coords[i], coords[i + 1], point.coordinates):
            return True
    return False


# =============================================================================
# Point in polygon
# =============================================================================

def _ring_location(pt: Position, ring: NDArray[np.float64]) -> int:
    """
    Locate a point relative to a single ring using even-odd ray casting.

    The ring may be open or closed; the closing edge is always considered.

    Returns:
        1 if strictly inside, 0 if on the boundary, -1 if outside
    """
    n = ring.shape[0]
    if n == 0:
        return -1

    px, py = pt
    inside = False
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        if is_point_on_segment(a, b, pt):
            return 0

        ax, ay = float(a[0]), float(a[1])
        bx, by = float(b[0]), float(b[1])
        # Half-open rule on y so a vertex on the ray is counted once
        if (ay > py) != (by > py):
            x_cross = ax + (py - ay) * (bx - ax) / (by - ay)
            if px < x_cross:
                inside = not inside

    return 1 if inside else -1


def _in_bbox(pt: Position, ring: NDArray[np.float64]) -> bool:
    min_pt = ring.min(axis=0)
    max_pt = ring.max(axis=0)
    return bool(min_pt[0] <= pt[0] <= max_pt[0] and min_pt[1] <= pt[1] <= max_pt[1])


def _point_in_single_polygon(pt: Position, polygon: Polygon, ignore_boundary: bool) -> bool:
    outer = polygon.outer_ring
    if outer.shape[0] == 0 or not _in_bbox(pt, outer):
        return False

    location = _ring_location(pt, outer)
    if location < 0:
        return False
    if location == 0:
        return not ignore_boundary

    for hole in polygon.holes:
        hole_location = _ring_location(pt, hole)
        if hole_location > 0:
            return False
        if hole_location == 0:
            return not ignore_boundary

    return True


def boolean_point_in_polygon(
    point: Union[Point, Any],
    polygon: Union[Polygon, MultiPolygon],
    ignore_boundary: bool = False
) -> bool:
    """
    Test whether a point is inside a polygon or multi-polygon.

    Holes are honoured: a point strictly inside a hole is outside the polygon,
    and a point on a hole's edge is on the boundary.

    Parameters:
        point: Point geometry or an (x, y) position
        polygon: Polygon or MultiPolygon
        ignore_boundary: If True, points on the boundary count as outside

    Returns:
        True if the point is inside (or on the boundary, unless ignored)

    Raises:
        ValidationError: If polygon is not a Polygon or MultiPolygon
    """
    coords = point.coordinates if isinstance(point, Point) else as_position(point, name="point")
    if coords.shape[0] == 0:
        return False
    pt = (float(coords[0]), float(coords[1]))

    if isinstance(polygon, Polygon):
        return _point_in_single_polygon(pt, polygon, ignore_boundary)
    if isinstance(polygon, MultiPolygon):
        return any(_point_in_single_polygon(pt, p, ignore_boundary) for p in polygon.polygons)
    raise ValidationError(
        f"polygon must be a Polygon or MultiPolygon, got {type(polygon).__name__}"
    )


def polygon_to_line(polygon: Polygon) -> LineString:
    """
    Convert a polygon's outer ring to a line string.

    An open ring is closed by repeating its first position. A polygon with no
    rings gives an empty line string.
    """
    line = LineString(polygon.outer_ring)
    if line.coordinates.shape[0] < 2 or line.is_closed:
        return line
    return LineString(np.vstack([line.coordinates, line.coordinates[:1]]))


# =============================================================================
# Segment and line intersection
# =============================================================================

def _orientation(p: Position, q: Position, r: Position) -> float:
    """Signed area of triangle (p, q, r); exactly 0 when collinear."""
    return (q[0] - p[0]) * (r[1] - p[1]) - (q[1] - p[1]) * (r[0] - p[0])


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def segment_intersection(
    a1: Position,
    a2: Position,
    b1: Position,
    b2: Position
) -> List[Position]:
    """
    Compute the points shared by two closed segments.

    A proper crossing yields its single crossing point. When the segments
    only touch, or overlap collinearly, the shared endpoints are returned
    instead (an overlap is represented by the endpoints that bound it).

    Parameters:
        a1, a2: Endpoints of the first segment
        b1, b2: Endpoints of the second segment

    Returns:
        List of shared points, empty if the segments are disjoint
    """
    # Bounding boxes must overlap for any contact
    if (max(a1[0], a2[0]) < min(b1[0], b2[0]) or max(b1[0], b2[0]) < min(a1[0], a2[0])
            or max(a1[1], a2[1]) < min(b1[1], b2[1]) or max(b1[1], b2[1]) < min(a1[1], a2[1])):
        return []

    d1 = _sign(_orientation(b1, b2, a1))
    d2 = _sign(_orientation(b1, b2, a2))
    d3 = _sign(_orientation(a1, a2, b1))
    d4 = _sign(_orientation(a1, a2, b2))

    if d1 * d2 < 0 and d3 * d4 < 0:
        # Proper crossing: solve a1 + t * (a2 - a1) on the line through b1, b2
        rx, ry = a2[0] - a1[0], a2[1] - a1[1]
        sx, sy = b2[0] - b1[0], b2[1] - b1[1]
        denom = rx * sy - ry * sx
        t = ((b1[0] - a1[0]) * sy - (b1[1] - a1[1]) * sx) / denom
        return [(a1[0] + t * rx, a1[1] + t * ry)]

    touching: List[Position] = []
    for candidate, start, end in (
        (a1, b1, b2),
        (a2, b1, b2),
        (b1, a1, a2),
        (b2, a1, a2),
    ):
        if is_point_on_segment(start, end, candidate) and candidate not in touching:
            touching.append(candidate)
    return touching


def _line_parts(geom: LineLike) -> List[NDArray[np.float64]]:
    """Collect the coordinate arrays of every line (or ring) in geom."""
    if isinstance(geom, LineString):
        return [geom.coordinates]
    if isinstance(geom, MultiLineString):
        return list(geom.lines)
    if isinstance(geom, Polygon):
        return list(geom.rings)
    if isinstance(geom, MultiPolygon):
        return [ring for polygon in geom.polygons for ring in polygon.rings]
    raise ValidationError(
        f"line_intersect expects LineString, MultiLineString, Polygon or MultiPolygon, "
        f"got {type(geom).__name__}"
    )


def _segments(coords: NDArray[np.float64]) -> List[Tuple[Position, Position]]:
    points = [(float(x), float(y)) for x, y in coords]
    return [(points[i], points[i + 1]) for i in range(len(points) - 1)]


def _drop_repeated(coords: NDArray[np.float64]) -> NDArray[np.float64]:
    """Remove consecutive duplicate positions."""
    if coords.shape[0] < 2:
        return coords
    keep = np.ones(coords.shape[0], dtype=bool)
    keep[1:] = np.any(coords[1:] != coords[:-1], axis=1)
    return coords[keep]


def _self_intersections(coords: NDArray[np.float64]) -> Iterator[Position]:
    """Yield crossings between non-adjacent segments of one line."""
    coords = _drop_repeated(coords)
    segments = _segments(coords)
    n = len(segments)
    closed = n >= 3 and LineString(coords).is_closed

    for i in range(n):
        for j in range(i + 2, n):
            # First and last segments of a closed ring share the closing vertex
            if closed and i == 0 and j == n - 1:
                continue
            yield from segment_intersection(*segments[i], *segments[j])


def _pairwise_intersections(
    coords1: NDArray[np.float64],
    coords2: NDArray[np.float64]
) -> Iterator[Position]:
    segments2 = _segments(coords2)
    for a1, a2 in _segments(coords1):
        for b1, b2 in segments2:
            yield from segment_intersection(a1, a2, b1, b2)


def iter_line_intersections(
    line1: LineLike,
    line2: LineLike,
    ignore_self_intersections: bool = True
) -> Iterator[Position]:
    """
    Lazily yield the points where two linear geometries meet.

    Points may repeat. Consumers that only need to know whether any
    intersection exists can stop after the first item.
    """
    parts1 = _line_parts(line1)
    parts2 = _line_parts(line2)

    for coords1 in parts1:
        for coords2 in parts2:
            yield from _pairwise_intersections(coords1, coords2)

    if not ignore_self_intersections:
        for parts in (parts1, parts2):
            for i, coords in enumerate(parts):
                yield from _self_intersections(coords)
                for other in parts[i + 1:]:
                    yield from _pairwise_intersections(coords, other)


def line_intersect(
    line1: LineLike,
    line2: LineLike,
    ignore_self_intersections: bool = True
) -> NDArray[np.float64]:
    """
    Find all points where two linear geometries meet.

    Polygons contribute all of their rings as lines. With
    ignore_self_intersections=False, places where either input crosses
    itself (including one part of a multi-geometry crossing another) are
    reported as well.

    Parameters:
        line1: LineString, MultiLineString, Polygon or MultiPolygon
        line2: LineString, MultiLineString, Polygon or MultiPolygon
        ignore_self_intersections: Skip intersections within a single input

    Returns:
        Array of shape (K, 2) with unique intersection points in discovery order
    """
    unique: List[Position] = []
    seen = set()
    for pt in iter_line_intersections(line1, line2, ignore_self_intersections):
        if pt not in seen:
            seen.add(pt)
            unique.append(pt)

    if not unique:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(unique, dtype=np.float64)


def lines_intersect(
    line1: LineLike,
    line2: LineLike,
    ignore_self_intersections: bool = True
) -> bool:
    """Return True if line_intersect would report at least one point."""
    first: Optional[Position] = next(
        iter_line_intersections(line1, line2, ignore_self_intersections), None
    )
    return first is not None
