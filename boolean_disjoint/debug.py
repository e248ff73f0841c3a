"""
Debug logging helpers.

The package logs under the ``boolean_disjoint`` logger and is silent unless
the application configures logging or calls setup_debug_logging().
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from boolean_disjoint.dataclasses import LineString, Point, Polygon

logger = logging.getLogger("boolean_disjoint")
logger.addHandler(logging.NullHandler())

_debug_handler: Optional[logging.Handler] = None

DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_debug_logging(level: int = logging.DEBUG) -> logging.Logger:
    """
    Send package log records to stderr.

    Calling it again only updates the level; a second handler is never added.

    Parameters:
        level: Logging level for the package logger

    Returns:
        The package logger
    """
    global _debug_handler

    if _debug_handler is None:
        _debug_handler = logging.StreamHandler()
        _debug_handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
        logger.addHandler(_debug_handler)

    _debug_handler.setLevel(level)
    logger.setLevel(level)
    return logger


def disable_debug_logging() -> None:
    """Remove the handler installed by setup_debug_logging()."""
    global _debug_handler

    if _debug_handler is not None:
        logger.removeHandler(_debug_handler)
        _debug_handler = None
    logger.setLevel(logging.NOTSET)


def format_point(point: Any, precision: int = 6) -> str:
    """Format an (x, y) position as a compact string."""
    return f"({float(point[0]):.{precision}g}, {float(point[1]):.{precision}g})"


def _format_coords(coords: NDArray[np.float64], max_points: int) -> str:
    n = coords.shape[0]
    shown = [format_point(c) for c in coords[:max_points]]
    if n > max_points:
        shown.append(f"... +{n - max_points} more")
    return "[" + ", ".join(shown) + "]"


def format_geometry(geometry: Any, max_points: int = 4) -> str:
    """Short human-readable description of a simple geometry."""
    if isinstance(geometry, Point):
        return f"Point{format_point(geometry.coordinates)}"
    if isinstance(geometry, LineString):
        return f"LineString{_format_coords(geometry.coordinates, max_points)}"
    if isinstance(geometry, Polygon):
        holes = len(geometry.holes)
        suffix = f" with {holes} hole(s)" if holes else ""
        return f"Polygon{_format_coords(geometry.outer_ring, max_points)}{suffix}"
    return type(geometry).__name__
