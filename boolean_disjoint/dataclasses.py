"""
Geometry Data Structures
========================

Immutable geometry types consumed by the disjoint predicate:
- Point, LineString, Polygon: simple geometries handled by the dispatcher
- MultiPoint, MultiLineString, MultiPolygon, GeometryCollection: composites
- Feature, FeatureCollection: GeoJSON-style wrappers
- DisjointOptions: configuration record for boolean_disjoint
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

import numpy as np
from numpy.typing import NDArray


class ValidationError(Exception):
    """Raised when input validation fails."""

    pass


def as_coordinate_array(coordinates: Any, name: str = "coordinates") -> NDArray[np.float64]:
    """Convert a sequence of positions to a read-only (N, 2) float64 array.

    Positions may carry extra ordinates (e.g. altitude); only x and y are kept.
    Empty input produces an array of shape (0, 2).

    Args:
        coordinates: Sequence of positions or an array of shape (N, >=2)
        name: Field name used in error messages

    Returns:
        Read-only array of shape (N, 2)

    Raises:
        ValidationError: If positions are not numeric or have fewer than 2 ordinates
    """
    if not isinstance(coordinates, np.ndarray):
        # Trim per position so 2D and 3D positions can be mixed
        try:
            coordinates = [p[:2] for p in coordinates]
        except TypeError:
            pass

    try:
        arr = np.asarray(coordinates, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must contain numeric positions: {e}") from e

    if arr.size == 0:
        arr = arr.reshape(0, 2)

    if arr.ndim != 2:
        raise ValidationError(
            f"{name} must be a sequence of positions with shape (N, 2), got shape {arr.shape}"
        )
    if arr.shape[1] < 2:
        raise ValidationError(
            f"{name} positions must have at least 2 ordinates, got {arr.shape[1]}"
        )

    arr = np.array(arr[:, :2], dtype=np.float64)
    arr.setflags(write=False)
    return arr


def as_position(position: Any, name: str = "coordinates") -> NDArray[np.float64]:
    """Convert a single position to a read-only (2,) float64 array.

    An empty position gives an empty (0,) array (an empty Point).
    """
    try:
        arr = np.asarray(position, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a numeric position: {e}") from e

    if arr.ndim == 1 and arr.shape[0] == 0:
        arr = np.array(arr, dtype=np.float64)
        arr.setflags(write=False)
        return arr

    if arr.ndim != 1 or arr.shape[0] < 2:
        raise ValidationError(
            f"{name} must be a position with at least 2 ordinates, got shape {arr.shape}"
        )

    arr = np.array(arr[:2], dtype=np.float64)
    arr.setflags(write=False)
    return arr


def _array_tuple_equal(a: tuple[NDArray[np.float64], ...], b: tuple[NDArray[np.float64], ...]) -> bool:
    return len(a) == len(b) and all(np.array_equal(x, y) for x, y in zip(a, b))


# =============================================================================
# Simple geometries
# =============================================================================


@dataclass(frozen=True, eq=False)
class Point:
    """A single position.

    Attributes:
        coordinates: Array of shape (2,) holding (x, y), or shape (0,) for an
                     empty point
    """

    coordinates: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", as_position(self.coordinates))

    @property
    def is_empty(self) -> bool:
        """True for a point without coordinates; it shares no point with anything."""
        return self.coordinates.shape[0] == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return np.array_equal(self.coordinates, other.coordinates)

    def __hash__(self) -> int:
        return hash((Point, self.coordinates.tobytes()))


@dataclass(frozen=True, eq=False)
class LineString:
    """An ordered sequence of positions joined by straight segments.

    Attributes:
        coordinates: Array of shape (N, 2). Fewer than 2 positions is accepted
                     and simply has no segments.
    """

    coordinates: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", as_coordinate_array(self.coordinates))

    @property
    def num_segments(self) -> int:
        """Number of consecutive-coordinate segments."""
        return max(int(self.coordinates.shape[0]) - 1, 0)

    @property
    def is_closed(self) -> bool:
        """True if the first and last positions coincide (and there are at least 2)."""
        return self.coordinates.shape[0] >= 2 and bool(
            np.array_equal(self.coordinates[0], self.coordinates[-1])
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineString):
            return NotImplemented
        return np.array_equal(self.coordinates, other.coordinates)

    def __hash__(self) -> int:
        return hash((LineString, self.coordinates.tobytes()))


@dataclass(frozen=True, eq=False)
class Polygon:
    """A polygon made of linear rings.

    The first ring is the outer boundary; any further rings are holes.

    Attributes:
        rings: Tuple of arrays, each of shape (N, 2)
    """

    rings: tuple[NDArray[np.float64], ...]

    def __post_init__(self) -> None:
        if isinstance(self.rings, np.ndarray) and self.rings.ndim == 2:
            raise ValidationError(
                "Polygon rings must be a sequence of rings, got a single (N, 2) array"
            )
        rings = tuple(
            as_coordinate_array(ring, name=f"rings[{i}]") for i, ring in enumerate(self.rings)
        )
        object.__setattr__(self, "rings", rings)

    @classmethod
    def from_exterior(cls, exterior: Any, *holes: Any) -> Polygon:
        """Build a polygon from an outer ring and optional holes."""
        return cls((exterior, *holes))

    @property
    def outer_ring(self) -> NDArray[np.float64]:
        """The outer ring, or an empty (0, 2) array for a polygon without rings."""
        if not self.rings:
            empty = np.empty((0, 2), dtype=np.float64)
            empty.setflags(write=False)
            return empty
        return self.rings[0]

    @property
    def holes(self) -> tuple[NDArray[np.float64], ...]:
        return self.rings[1:]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return _array_tuple_equal(self.rings, other.rings)

    def __hash__(self) -> int:
        return hash((Polygon, tuple(ring.tobytes() for ring in self.rings)))


# =============================================================================
# Composite geometries
# =============================================================================


@dataclass(frozen=True, eq=False)
class MultiPoint:
    """A collection of points stored as one (N, 2) array."""

    coordinates: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", as_coordinate_array(self.coordinates))

    @property
    def parts(self) -> tuple[Point, ...]:
        return tuple(Point(c) for c in self.coordinates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiPoint):
            return NotImplemented
        return np.array_equal(self.coordinates, other.coordinates)

    def __hash__(self) -> int:
        return hash((MultiPoint, self.coordinates.tobytes()))


@dataclass(frozen=True, eq=False)
class MultiLineString:
    """A collection of line strings, one (N, 2) array per line."""

    lines: tuple[NDArray[np.float64], ...]

    def __post_init__(self) -> None:
        lines = tuple(
            as_coordinate_array(line, name=f"lines[{i}]") for i, line in enumerate(self.lines)
        )
        object.__setattr__(self, "lines", lines)

    @property
    def parts(self) -> tuple[LineString, ...]:
        return tuple(LineString(line) for line in self.lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiLineString):
            return NotImplemented
        return _array_tuple_equal(self.lines, other.lines)

    def __hash__(self) -> int:
        return hash((MultiLineString, tuple(line.tobytes() for line in self.lines)))


@dataclass(frozen=True)
class MultiPolygon:
    """A collection of polygons."""

    polygons: tuple[Polygon, ...]

    def __post_init__(self) -> None:
        polygons = tuple(
            p if isinstance(p, Polygon) else Polygon(p) for p in self.polygons
        )
        object.__setattr__(self, "polygons", polygons)

    @property
    def parts(self) -> tuple[Polygon, ...]:
        return self.polygons


@dataclass(frozen=True)
class GeometryCollection:
    """A heterogeneous collection of geometries (possibly nested)."""

    geometries: tuple[Geometry, ...]

    def __post_init__(self) -> None:
        geometries = tuple(self.geometries)
        for i, geom in enumerate(geometries):
            if not isinstance(geom, GEOMETRY_TYPES):
                raise ValidationError(
                    f"geometries[{i}] must be a geometry, got {type(geom).__name__}"
                )
        object.__setattr__(self, "geometries", geometries)


@dataclass(frozen=True)
class Feature:
    """A geometry with properties.

    Attributes:
        geometry: The wrapped geometry, or None for an unlocated feature
        properties: Arbitrary feature properties
        id: Optional feature identifier
    """

    geometry: Geometry | None
    properties: Mapping[str, Any] = field(default_factory=dict, compare=False)
    id: str | int | None = None

    def __post_init__(self) -> None:
        if self.geometry is not None and not isinstance(self.geometry, GEOMETRY_TYPES):
            raise ValidationError(
                f"Feature geometry must be a geometry or None, got {type(self.geometry).__name__}"
            )

    def __hash__(self) -> int:
        return hash((Feature, self.geometry, self.id))


@dataclass(frozen=True)
class FeatureCollection:
    """An ordered collection of features."""

    features: tuple[Feature, ...]

    def __post_init__(self) -> None:
        features = tuple(self.features)
        for i, feat in enumerate(features):
            if not isinstance(feat, Feature):
                raise ValidationError(
                    f"features[{i}] must be a Feature, got {type(feat).__name__}"
                )
        object.__setattr__(self, "features", features)


SimpleGeometry = Union[Point, LineString, Polygon]
Geometry = Union[
    Point, LineString, Polygon, MultiPoint, MultiLineString, MultiPolygon, GeometryCollection
]

SIMPLE_GEOMETRY_TYPES: tuple[type, ...] = (Point, LineString, Polygon)
GEOMETRY_TYPES: tuple[type, ...] = SIMPLE_GEOMETRY_TYPES + (
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
)


# =============================================================================
# Options
# =============================================================================

_OPTION_ALIASES: dict[str, str] = {
    "ignore_self_intersections": "ignore_self_intersections",
    "ignoreSelfIntersections": "ignore_self_intersections",
}


@dataclass(frozen=True)
class DisjointOptions:
    """Configuration for boolean_disjoint.

    Attributes:
        ignore_self_intersections: When True (default), a line string crossing
            itself is not counted as an intersection in the line/line and
            polygon boundary checks.

    Raises:
        ValidationError: If ignore_self_intersections is not a bool
    """

    ignore_self_intersections: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.ignore_self_intersections, (bool, np.bool_)):
            raise ValidationError(
                f"ignore_self_intersections must be a bool, "
                f"got {type(self.ignore_self_intersections).__name__}"
            )
        object.__setattr__(self, "ignore_self_intersections", bool(self.ignore_self_intersections))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> DisjointOptions:
        """Build options from a mapping.

        Accepts both ``ignore_self_intersections`` and the GeoJSON-tooling
        spelling ``ignoreSelfIntersections``.

        Raises:
            ValidationError: If the mapping has unknown keys or conflicting values
        """
        if not isinstance(options, Mapping):
            raise ValidationError(
                f"options must be a mapping, got {type(options).__name__}"
            )

        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            if key not in _OPTION_ALIASES:
                raise ValidationError(f"Unknown option '{key}'")
            target = _OPTION_ALIASES[key]
            if target in kwargs and kwargs[target] != value:
                raise ValidationError(f"Conflicting values given for option '{target}'")
            kwargs[target] = value
        return cls(**kwargs)


def coerce_options(options: DisjointOptions | Mapping[str, Any] | None) -> DisjointOptions:
    """Normalize the ``options`` argument of boolean_disjoint."""
    if options is None:
        return DisjointOptions()
    if isinstance(options, DisjointOptions):
        return options
    if isinstance(options, Mapping):
        return DisjointOptions.from_mapping(options)
    raise ValidationError(
        f"options must be DisjointOptions, a mapping or None, got {type(options).__name__}"
    )


def ensure_sequence(value: Any, name: str) -> Sequence[Any]:
    """Check that a GeoJSON member is a list-like container."""
    if isinstance(value, (str, bytes)) or not isinstance(value, (Sequence, np.ndarray)):
        raise ValidationError(f"{name} must be a sequence, got {type(value).__name__}")
    return value
