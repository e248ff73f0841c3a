"""
Tests for the main API functions boolean_disjoint and disjoint.
"""

import itertools
import logging

import pytest

from boolean_disjoint.api import (
    boolean_disjoint,
    disjoint,
    is_line_in_poly,
    is_poly_in_poly,
)
from boolean_disjoint.dataclasses import (
    DisjointOptions,
    Feature,
    FeatureCollection,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    ValidationError,
)


# =============================================================================
# Helper functions for creating test fixtures
# =============================================================================

def make_square(x0: float, y0: float, size: float = 1.0) -> Polygon:
    """Closed square polygon with lower-left corner at (x0, y0)."""
    return Polygon(([
        [x0, y0],
        [x0, y0 + size],
        [x0 + size, y0 + size],
        [x0 + size, y0],
        [x0, y0],
    ],))


UNIT_SQUARE = make_square(0, 0)
VERTICAL_LINE = LineString([[1, 1], [1, 2], [1, 3], [1, 4]])
BOWTIE = LineString([[0, 0], [2, 2], [2, 0], [0, 2]])

SAMPLE_GEOMETRIES = [
    Point((0, 0)),
    Point((0.5, 0.5)),
    Point((1, 2)),
    Point((5, 5)),
    VERTICAL_LINE,
    LineString([[0, 0], [2, 2]]),
    LineString([[0, 2], [2, 0]]),
    LineString([[-3, -3], [-2, -1]]),
    UNIT_SQUARE,
    make_square(0.5, 0.5),
    make_square(3, 3),
    make_square(-10, -10, 30),
]


# =============================================================================
# Test: Simple geometry pairs
# =============================================================================

class TestPointPoint:
    """Point / Point coincidence."""

    def test_same_point(self):
        assert boolean_disjoint(Point((0, 0)), Point((0, 0))) is False

    def test_different_points(self):
        assert boolean_disjoint(Point((0, 0)), Point((1, 1))) is True

    def test_exact_comparison(self):
        assert boolean_disjoint(Point((0.1 + 0.2, 0)), Point((0.3, 0))) is True


class TestPointLine:
    """Point / LineString via the collinearity test."""

    def test_point_on_line(self):
        assert boolean_disjoint(Point((1, 2)), VERTICAL_LINE) is False

    def test_point_off_line(self):
        assert boolean_disjoint(Point((5, 5)), VERTICAL_LINE) is True

    def test_point_beside_line(self):
        assert boolean_disjoint(VERTICAL_LINE, Point((2, 2))) is True

    def test_point_at_line_end(self):
        assert boolean_disjoint(VERTICAL_LINE, Point((1, 4))) is False

    def test_point_on_collinear_extension(self):
        assert boolean_disjoint(Point((1, 5)), VERTICAL_LINE) is True

    def test_line_with_repeated_vertex(self):
        line = LineString([[3, 3], [3, 3], [5, 5]])
        assert boolean_disjoint(Point((3, 10)), line) is True
        assert boolean_disjoint(Point((10, 3)), line) is True
        assert boolean_disjoint(Point((4, 4)), line) is False


class TestPointPolygon:
    """Point / Polygon via point-in-polygon."""

    def test_point_inside(self):
        assert boolean_disjoint(Point((0.5, 0.5)), UNIT_SQUARE) is False

    def test_point_outside(self):
        assert boolean_disjoint(Point((5, 5)), UNIT_SQUARE) is True

    def test_point_on_boundary(self):
        assert boolean_disjoint(UNIT_SQUARE, Point((1, 0.5))) is False

    def test_point_in_hole(self):
        with_hole = Polygon.from_exterior(
            [[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]],
            [[4, 4], [4, 6], [6, 6], [6, 4], [4, 4]],
        )
        assert boolean_disjoint(Point((5, 5)), with_hole) is True

    def test_ring_with_repeated_vertex(self):
        triangle = Polygon(([[0, 0], [2, 0], [2, 0], [0, 2], [0, 0]],))
        assert boolean_disjoint(Point((2, 1)), triangle) is True
        assert boolean_disjoint(Point((0.5, 0.5)), triangle) is False

    def test_empty_point_is_disjoint(self):
        assert boolean_disjoint({"type": "Point", "coordinates": []}, UNIT_SQUARE) is True
        assert boolean_disjoint(Point([]), Point([])) is True


class TestLineLine:
    """LineString / LineString via line intersection."""

    def test_crossing(self):
        line1 = LineString([[0, 0], [2, 2]])
        line2 = LineString([[0, 2], [2, 0]])
        assert boolean_disjoint(line1, line2) is False

    def test_parallel(self):
        line1 = LineString([[0, 0], [2, 0]])
        line2 = LineString([[0, 1], [2, 1]])
        assert boolean_disjoint(line1, line2) is True

    def test_touching_endpoints(self):
        line1 = LineString([[0, 0], [1, 1]])
        line2 = LineString([[1, 1], [2, 0]])
        assert boolean_disjoint(line1, line2) is False

    def test_collinear_overlap(self):
        line1 = LineString([[0, 0], [2, 0]])
        line2 = LineString([[1, 0], [3, 0]])
        assert boolean_disjoint(line1, line2) is False

    def test_multi_segment_crossing(self):
        line1 = LineString([[0, 0], [1, 2], [2, 0], [3, 2]])
        line2 = LineString([[2.5, -1], [2.5, 5]])
        assert boolean_disjoint(line1, line2) is False


class TestLinePolygon:
    """LineString / Polygon via vertex containment and boundary crossing."""

    def test_line_inside(self):
        line = LineString([[0.2, 0.2], [0.8, 0.8]])
        assert boolean_disjoint(line, UNIT_SQUARE) is False

    def test_line_crossing_without_inner_vertex(self):
        line = LineString([[-1, 0.5], [2, 0.5]])
        assert boolean_disjoint(line, UNIT_SQUARE) is False

    def test_line_outside(self):
        line = LineString([[2, 2], [3, 3]])
        assert boolean_disjoint(UNIT_SQUARE, line) is True

    def test_line_clipping_corner(self):
        line = LineString([[-0.5, 0.5], [0.5, -0.5]])
        assert boolean_disjoint(UNIT_SQUARE, line) is False

    def test_line_passing_near_corner(self):
        line = LineString([[-1, 0.5], [0.5, 2]])
        assert boolean_disjoint(line, UNIT_SQUARE) is True

    def test_line_in_hole_still_crosses_nothing(self):
        """Vertices in a hole are outside, and the outer ring is not crossed."""
        with_hole = Polygon.from_exterior(
            [[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]],
            [[4, 4], [4, 6], [6, 6], [6, 4], [4, 4]],
        )
        line = LineString([[4.5, 4.5], [5.5, 5.5]])
        assert boolean_disjoint(line, with_hole) is True

    def test_is_line_in_poly_direct(self):
        assert is_line_in_poly(UNIT_SQUARE, LineString([[0.5, -1], [0.5, 2]]), True) is True


class TestPolygonPolygon:
    """Polygon / Polygon via vertex containment and ring crossing."""

    def test_overlapping(self):
        assert boolean_disjoint(UNIT_SQUARE, make_square(0.5, 0.5)) is False

    def test_separated(self):
        assert boolean_disjoint(UNIT_SQUARE, make_square(3, 3)) is True

    def test_containment(self):
        outer = make_square(-10, -10, 30)
        assert boolean_disjoint(outer, UNIT_SQUARE) is False
        assert boolean_disjoint(UNIT_SQUARE, outer) is False

    def test_shared_edge(self):
        assert boolean_disjoint(UNIT_SQUARE, make_square(1, 0)) is False

    def test_cross_shape_without_contained_vertices(self):
        """Two thin rectangles forming a plus sign only meet through crossing edges."""
        horizontal = Polygon(([[-3, -1], [-3, 1], [3, 1], [3, -1], [-3, -1]],))
        vertical = Polygon(([[-1, -3], [-1, 3], [1, 3], [1, -3], [-1, -3]],))
        assert is_poly_in_poly(horizontal, vertical, True) is True
        assert boolean_disjoint(horizontal, vertical) is False

    def test_polygon_inside_hole(self):
        """Vertices inside a hole are outside the polygon and the outer rings never meet."""
        with_hole = Polygon.from_exterior(
            [[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]],
            [[3, 3], [3, 7], [7, 7], [7, 3], [3, 3]],
        )
        inner = make_square(4, 4, 2)
        assert boolean_disjoint(inner, with_hole) is True

    def test_polygon_straddling_hole_edge(self):
        """A polygon partly in the solid area and partly in the hole is not disjoint."""
        with_hole = Polygon.from_exterior(
            [[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]],
            [[2, 2], [2, 8], [8, 8], [8, 2], [2, 2]],
        )
        # Vertices of this square straddle the hole edge at x=2
        straddling = Polygon(([[1.5, 4], [1.5, 5], [2.5, 5], [2.5, 4], [1.5, 4]],))
        assert boolean_disjoint(straddling, with_hole) is False


# =============================================================================
# Test: Dispatcher
# =============================================================================

class TestDisjointDispatcher:
    """Tests for disjoint() on simple geometries."""

    @pytest.mark.parametrize("geom1, geom2", list(itertools.product(
        [Point((0.5, 0.5)), LineString([[0, 0], [1, 1]]), UNIT_SQUARE], repeat=2
    )))
    def test_all_nine_pairs_dispatch(self, geom1, geom2):
        assert disjoint(geom1, geom2) is False

    def test_rejects_multi_geometry(self):
        with pytest.raises(ValidationError, match="MultiPoint and Point"):
            disjoint(MultiPoint([[0, 0]]), Point((0, 0)))

    def test_rejects_feature(self):
        with pytest.raises(ValidationError, match="use boolean_disjoint"):
            disjoint(Point((0, 0)), Feature(Point((0, 0))))

    def test_empty_point_is_disjoint(self):
        assert disjoint(Point([]), UNIT_SQUARE) is True
        assert disjoint(VERTICAL_LINE, Point(())) is True
        assert disjoint(Point([]), Point([])) is True


# =============================================================================
# Test: Properties
# =============================================================================

class TestProperties:
    """Symmetry, reflexivity and idempotence."""

    @pytest.mark.parametrize("geom1, geom2", list(itertools.combinations(SAMPLE_GEOMETRIES, 2)))
    def test_symmetry(self, geom1, geom2):
        assert boolean_disjoint(geom1, geom2) == boolean_disjoint(geom2, geom1)

    @pytest.mark.parametrize("geom", SAMPLE_GEOMETRIES)
    def test_not_disjoint_from_itself(self, geom):
        assert boolean_disjoint(geom, geom) is False

    def test_idempotent(self):
        line = LineString([[0, 0], [2, 2]])
        results = {boolean_disjoint(line, UNIT_SQUARE) for _ in range(5)}
        assert results == {False}


# =============================================================================
# Test: Self-intersection option
# =============================================================================

class TestIgnoreSelfIntersections:
    """The ignore_self_intersections option only affects line crossings within one input."""

    FAR_LINE = LineString([[10, 10], [11, 11]])

    def test_default_ignores_self_crossing(self):
        assert boolean_disjoint(BOWTIE, self.FAR_LINE) is True

    def test_options_record(self):
        options = DisjointOptions(ignore_self_intersections=False)
        assert boolean_disjoint(BOWTIE, self.FAR_LINE, options) is False
        assert boolean_disjoint(self.FAR_LINE, BOWTIE, options) is False

    def test_options_mapping(self):
        assert boolean_disjoint(
            BOWTIE, self.FAR_LINE, {"ignoreSelfIntersections": False}
        ) is False
        assert boolean_disjoint(
            BOWTIE, self.FAR_LINE, {"ignore_self_intersections": True}
        ) is True

    def test_self_crossing_line_against_polygon(self):
        far_square = make_square(20, 20)
        options = DisjointOptions(ignore_self_intersections=False)
        assert boolean_disjoint(BOWTIE, far_square) is True
        assert boolean_disjoint(BOWTIE, far_square, options) is False

    def test_no_effect_on_point_pairs(self):
        options = DisjointOptions(ignore_self_intersections=False)
        assert boolean_disjoint(BOWTIE, Point((5, 5)), options) is True

    def test_invalid_options(self):
        with pytest.raises(ValidationError, match="Unknown option"):
            boolean_disjoint(BOWTIE, self.FAR_LINE, {"ignoreBoundary": True})


# =============================================================================
# Test: Multi-geometries, features and GeoJSON input
# =============================================================================

class TestMultiGeometry:
    """Flattening driver over composite inputs."""

    def test_multipoint_one_inside(self):
        multi = MultiPoint([[0.5, 0.5], [5, 5]])
        assert boolean_disjoint(multi, UNIT_SQUARE) is False

    def test_multipoint_all_outside(self):
        multi = MultiPoint([[5, 5], [-5, -5]])
        assert boolean_disjoint(multi, UNIT_SQUARE) is True

    def test_multilinestring_vs_multipolygon(self):
        lines = MultiLineString(([[20, 20], [21, 21]], [[0.5, -1], [0.5, 0.2]]))
        polygons = MultiPolygon((make_square(10, 10), UNIT_SQUARE))
        assert boolean_disjoint(lines, polygons) is False
        assert boolean_disjoint(polygons, lines) is False

    def test_geometry_collection(self):
        collection = GeometryCollection((Point((5, 5)), LineString([[3, 0], [3, 3]])))
        assert boolean_disjoint(collection, UNIT_SQUARE) is True
        assert boolean_disjoint(collection, Point((3, 1))) is False

    def test_feature_wrapping(self):
        feature = Feature(Point((0.5, 0.5)), properties={"name": "inside"})
        assert boolean_disjoint(feature, Feature(UNIT_SQUARE)) is False

    def test_feature_collection(self):
        collection = FeatureCollection((
            Feature(Point((5, 5))),
            Feature(None),
            Feature(LineString([[0.5, 2], [0.5, 0.9]])),
        ))
        assert boolean_disjoint(collection, UNIT_SQUARE) is False

    def test_empty_inputs_are_disjoint(self):
        assert boolean_disjoint(FeatureCollection(()), UNIT_SQUARE) is True
        assert boolean_disjoint(UNIT_SQUARE, GeometryCollection(())) is True
        assert boolean_disjoint(Feature(None), Feature(None)) is True
        assert boolean_disjoint(MultiPoint([]), Point((0, 0))) is True

    def test_geojson_mappings(self):
        point = {"type": "Point", "coordinates": [2, 2]}
        line = {
            "type": "Feature",
            "properties": {},
            "geometry": {"type": "LineString", "coordinates": [[1, 1], [1, 2], [1, 3], [1, 4]]},
        }
        assert boolean_disjoint(line, point) is True

    def test_geojson_mixed_dimension_positions(self):
        line = {"type": "LineString", "coordinates": [[0.5, 0.5, 10], [2, 2]]}
        assert boolean_disjoint(line, UNIT_SQUARE) is False
        far = {"type": "LineString", "coordinates": [[5, 5, 10], [6, 6]]}
        assert boolean_disjoint(far, UNIT_SQUARE) is True

    def test_invalid_geojson(self):
        with pytest.raises(ValidationError):
            boolean_disjoint({"type": "Circle"}, UNIT_SQUARE)

    def test_stops_at_first_intersection(self, monkeypatch):
        """Pairs after the first intersecting one are never tested."""
        calls = []

        def counting_disjoint(geom1, geom2, ignore_self_intersections):
            calls.append((geom1, geom2))
            return disjoint(geom1, geom2, ignore_self_intersections)

        monkeypatch.setattr("boolean_disjoint.api.disjoint", counting_disjoint)
        multi = MultiPoint([[5, 5], [0.5, 0.5], [0.25, 0.25], [7, 7]])
        assert boolean_disjoint(multi, UNIT_SQUARE) is False
        assert len(calls) == 2

    def test_logs_deciding_pair(self, caplog):
        multi = MultiPoint([[5, 5], [0.5, 0.5], [0.25, 0.25]])
        with caplog.at_level(logging.DEBUG, logger="boolean_disjoint"):
            assert boolean_disjoint(multi, UNIT_SQUARE) is False
        messages = [r.getMessage() for r in caplog.records if r.name == "boolean_disjoint"]
        assert len(messages) == 1
        assert messages[0].startswith("Parts 0.1 and 0.0 intersect")
        assert "Point(0.5, 0.5)" in messages[0]
