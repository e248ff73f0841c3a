#!/usr/bin/env python3
"""
Profile script for boolean_disjoint to identify performance bottlenecks.
"""

import cProfile
import pstats
import io
import numpy as np
from numpy.typing import NDArray
import time
from typing import List
from boolean_disjoint import boolean_disjoint, DisjointOptions, MultiPolygon, Polygon


def generate_random_polygon(
    center: NDArray[np.float64],
    radius: float,
    n_vertices: int = 5
) -> Polygon:
    """Generate a random star-shaped polygon roughly centered at center."""
    angles = np.sort(np.random.uniform(0, 2 * np.pi, n_vertices))
    radii = np.random.uniform(0.5 * radius, 1.5 * radius, n_vertices)
    x = center[0] + radii * np.cos(angles)
    y = center[1] + radii * np.sin(angles)
    ring = np.column_stack([x, y])
    return Polygon((np.vstack([ring, ring[:1]]),))


def generate_polygon_field(
    n_polygons: int = 5,
    vertices_per_polygon: int = 5,
    extent: float = 1000.0
) -> List[Polygon]:
    """Scatter polygons uniformly over a square field."""
    polygons = []
    for _ in range(n_polygons):
        center = np.random.uniform(0, extent, 2)
        polygons.append(generate_random_polygon(center, 30.0, vertices_per_polygon))
    return polygons


def run_typical_workload(n_iterations: int = 100) -> None:
    """Test small polygon pairs, most of them far apart."""
    np.random.seed(42)  # For reproducibility

    for _ in range(n_iterations):
        polygons = generate_polygon_field(n_polygons=5, vertices_per_polygon=5)
        for a in polygons:
            for b in polygons:
                boolean_disjoint(a, b)


def run_multipolygon_workload(n_iterations: int = 20) -> None:
    """Test large multi-polygons against each other, counting self-intersections."""
    np.random.seed(42)
    options = DisjointOptions(ignore_self_intersections=False)

    for _ in range(n_iterations):
        multi1 = MultiPolygon(tuple(generate_polygon_field(50, 8)))
        multi2 = MultiPolygon(tuple(generate_polygon_field(50, 8)))
        boolean_disjoint(multi1, multi2, options)


def profile_function(func, description: str) -> None:
    """Profile a function and print statistics."""
    print(f"\n{'=' * 60}")
    print(f"Profiling: {description}")
    print('=' * 60)

    start = time.perf_counter()

    profiler = cProfile.Profile()
    profiler.enable()
    func()
    profiler.disable()

    elapsed = time.perf_counter() - start

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats('cumulative')
    ps.print_stats(30)
    print(s.getvalue())

    print(f"\nTotal time: {elapsed:.3f}s")


if __name__ == "__main__":
    print("Boolean Disjoint Performance Profiling")
    print("=" * 60)

    profile_function(
        lambda: run_typical_workload(100),
        "Typical workload (5 polygons x 5 vertices, all pairs, 100 iterations)"
    )

    profile_function(
        lambda: run_multipolygon_workload(20),
        "Multi-polygons (50 polygons x 8 vertices each side, 20 iterations)"
    )
