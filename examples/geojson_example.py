"""
Disjoint Tests on GeoJSON Input - Complete Example

Demonstrates boolean_disjoint on the kinds of input a GIS pipeline passes
around:
1. Bare geometries built from the dataclasses
2. GeoJSON features and feature collections (plain dicts)
3. Multi-part geometries with early exit on the first touching part
4. The ignore_self_intersections option
5. Debug logging of the deciding pair

Run with: python examples/geojson_example.py
"""

import logging

from boolean_disjoint import (
    DisjointOptions,
    LineString,
    MultiPoint,
    Point,
    Polygon,
    boolean_disjoint,
    setup_debug_logging,
)


PARK = {
    "type": "Feature",
    "id": "park",
    "properties": {"name": "City Park"},
    "geometry": {
        "type": "Polygon",
        "coordinates": [[[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]]],
    },
}


def example_1_bare_geometries() -> None:
    """Example 1: Point, LineString and Polygon dataclasses."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Bare Geometries")
    print("=" * 70)

    line = LineString([[1, 1], [1, 2], [1, 3], [1, 4]])
    print(f"Point (2, 2) vs vertical line: disjoint={boolean_disjoint(Point((2, 2)), line)}")
    print(f"Point (1, 2) vs vertical line: disjoint={boolean_disjoint(Point((1, 2)), line)}")

    square = Polygon(([[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]],))
    print(f"Point (0.5, 0.5) vs unit square: disjoint={boolean_disjoint(Point((0.5, 0.5)), square)}")


def example_2_features() -> None:
    """Example 2: GeoJSON features and feature collections."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: GeoJSON Features")
    print("=" * 70)

    trails = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "north trail"},
                "geometry": {"type": "LineString", "coordinates": [[-5, 12], [15, 12]]},
            },
            {
                "type": "Feature",
                "properties": {"name": "river path"},
                "geometry": {"type": "LineString", "coordinates": [[-5, 5], [15, 5]]},
            },
        ],
    }
    print(f"Trails vs park: disjoint={boolean_disjoint(trails, PARK)}")


def example_3_multi_part() -> None:
    """Example 3: Multi-part inputs; one touching part is enough."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Multi-Part Geometries")
    print("=" * 70)

    outside = MultiPoint([[20, 20], [-3, 4]])
    mixed = MultiPoint([[20, 20], [5, 5]])
    print(f"All points outside: disjoint={boolean_disjoint(outside, PARK)}")
    print(f"One point inside:   disjoint={boolean_disjoint(mixed, PARK)}")


def example_4_self_intersections() -> None:
    """Example 4: A self-crossing route far away from the park."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Self-Intersections")
    print("=" * 70)

    figure_eight = LineString([[30, 30], [32, 32], [32, 30], [30, 32]])
    strict = DisjointOptions(ignore_self_intersections=False)
    print(f"Default options:               disjoint={boolean_disjoint(figure_eight, PARK)}")
    print(f"ignore_self_intersections=False: disjoint={boolean_disjoint(figure_eight, PARK, strict)}")


def example_5_debug_logging() -> None:
    """Example 5: Log which parts decided the result."""
    print("\n" + "=" * 70)
    print("EXAMPLE 5: Debug Logging")
    print("=" * 70)

    setup_debug_logging(logging.DEBUG)
    boolean_disjoint(MultiPoint([[20, 20], [5, 5]]), PARK)


if __name__ == "__main__":
    example_1_bare_geometries()
    example_2_features()
    example_3_multi_part()
    example_4_self_intersections()
    example_5_debug_logging()
