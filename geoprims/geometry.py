"""Point samplers and polygon helpers.

Angles are in degrees. A point at angle ``a`` on a circle of radius ``r`` is
``(r*sin(a), r*cos(a))``, so 0 degrees points along +y and angles grow
clockwise.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .constants import EPSILON, GOLDEN_ANGLE
from .logging_utils import apply_debug_logging
from .vectors import angle360, as_vector, normalized, rotate_cw

logger = logging.getLogger(__name__)

Coord = np.ndarray

_PLANE_AXES = {
    "xy": (0, 1),
    "xz": (0, 2),
    "yz": (1, 2),
}


def _plane_axes(plane: str) -> Tuple[int, int]:
    try:
        return _PLANE_AXES[plane.lower()]
    except KeyError:
        raise ValueError(f"unknown plane {plane!r}, expected one of {sorted(_PLANE_AXES)}") from None


def _offset(point: Coord, center: Optional[Sequence[float]]) -> Coord:
    if center is None:
        return point
    return as_vector(center, point.shape[0]) + point


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


def point_on_segment(segment_a: Sequence[float], segment_b: Sequence[float], position: float) -> Coord:
    """Point at ``position`` in ``[0, 1]`` along the segment (clamped)."""

    segment_a, segment_b = as_vector(segment_a), as_vector(segment_b)
    t = min(max(float(position), 0.0), 1.0)
    return segment_a + (segment_b - segment_a) * t


def points_on_segment(segment_a: Sequence[float], segment_b: Sequence[float], count: int) -> List[Coord]:
    """``count`` evenly spaced points from ``segment_a`` to ``segment_b`` inclusive."""

    if count <= 0:
        return []
    if count == 1:
        return [as_vector(segment_a).copy()]
    return [point_on_segment(segment_a, segment_b, i / (count - 1)) for i in range(count)]


# ---------------------------------------------------------------------------
# 2D circles
# ---------------------------------------------------------------------------


def point_on_circle2(radius: float, angle: float, center: Optional[Sequence[float]] = None) -> Coord:
    radians = math.radians(angle)
    point = np.array([radius * math.sin(radians), radius * math.cos(radians)], dtype=float)
    return _offset(point, center)


def points_on_circle2(radius: float, count: int, center: Optional[Sequence[float]] = None) -> List[Coord]:
    if count <= 0:
        return []
    segment_angle = 360.0 / count
    return [point_on_circle2(radius, i * segment_angle, center) for i in range(count)]


def points_in_circle2(radius: float, count: int, center: Optional[Sequence[float]] = None) -> List[Coord]:
    """Evenly distributed points inside a disc (golden-angle sunflower)."""

    points: List[Coord] = []
    angle = 0.0
    for i in range(max(count, 0)):
        # The 0.5 offset keeps the first point off the exact center
        r = radius * math.sqrt((i + 0.5) / count)
        point = np.array([r * math.sin(angle), r * math.cos(angle)], dtype=float)
        points.append(_offset(point, center))
        angle += GOLDEN_ANGLE
    return points


# ---------------------------------------------------------------------------
# 3D circles and spheres
# ---------------------------------------------------------------------------


def point_on_circle3(plane: str, radius: float, angle: float, center: Optional[Sequence[float]] = None) -> Coord:
    """Point on an axis-aligned circle in the ``"xy"``, ``"xz"`` or ``"yz"`` plane."""

    first, second = _plane_axes(plane)
    radians = math.radians(angle)
    point = np.zeros(3, dtype=float)
    point[first] = radius * math.sin(radians)
    point[second] = radius * math.cos(radians)
    return _offset(point, center)


def points_on_circle3(plane: str, radius: float, count: int, center: Optional[Sequence[float]] = None) -> List[Coord]:
    if count <= 0:
        return []
    segment_angle = 360.0 / count
    return [point_on_circle3(plane, radius, i * segment_angle, center) for i in range(count)]


def points_in_circle3(plane: str, radius: float, count: int, center: Optional[Sequence[float]] = None) -> List[Coord]:
    first, second = _plane_axes(plane)
    points: List[Coord] = []
    for flat in points_in_circle2(radius, count):
        point = np.zeros(3, dtype=float)
        point[first] = flat[0]
        point[second] = flat[1]
        points.append(_offset(point, center))
    return points


def point_on_spheroid(radius: float, height: float, horizontal_angle: float, vertical_angle: float) -> Coord:
    horizontal = math.radians(horizontal_angle)
    vertical = math.radians(vertical_angle)
    cos_vertical = math.cos(vertical)
    return np.array(
        [
            radius * math.sin(horizontal) * cos_vertical,
            height * math.sin(vertical),
            radius * math.cos(horizontal) * cos_vertical,
        ],
        dtype=float,
    )


def point_on_sphere(radius: float, horizontal_angle: float, vertical_angle: float) -> Coord:
    return point_on_spheroid(radius, radius, horizontal_angle, vertical_angle)


def point_on_teardrop(radius: float, height: float, horizontal_angle: float, vertical_angle: float) -> Coord:
    horizontal = math.radians(horizontal_angle)
    vertical = math.radians(vertical_angle)
    sin_vertical = math.sin(vertical)
    teardrop = (1.0 - sin_vertical) * math.cos(vertical) / 2.0
    return np.array(
        [
            radius * math.sin(horizontal) * teardrop,
            height * sin_vertical,
            radius * math.cos(horizontal) * teardrop,
        ],
        dtype=float,
    )


def points_on_sphere(radius: float, count: int) -> List[Coord]:
    """Roughly uniform points on a sphere surface (golden-angle spiral)."""

    if count <= 0:
        return []
    points: List[Coord] = []
    delta_y = -2.0 / count
    y = 1.0 + delta_y / 2.0
    angle = 0.0
    for _ in range(count):
        r = math.sqrt(max(0.0, 1.0 - y * y))
        points.append(
            np.array(
                [radius * math.sin(angle) * r, radius * y, radius * math.cos(angle) * r],
                dtype=float,
            )
        )
        y += delta_y
        angle += GOLDEN_ANGLE
    return points


# ---------------------------------------------------------------------------
# Polygons
# ---------------------------------------------------------------------------


def polygon2(vertices: int, radius: float) -> List[Coord]:
    """Regular polygon inscribed in a circle, first vertex on +y."""

    return points_on_circle2(radius, vertices)


def star_polygon2(vertices: int, inner_radius: float, outer_radius: float) -> List[Coord]:
    if vertices <= 0:
        return []
    segment_angle = 360.0 / vertices
    half_segment_angle = segment_angle / 2.0
    polygon: List[Coord] = []
    for i in range(vertices):
        angle = i * segment_angle
        polygon.append(point_on_circle2(outer_radius, angle))
        polygon.append(point_on_circle2(inner_radius, angle + half_segment_angle))
    return polygon


def get_angle(previous: Sequence[float], current: Sequence[float], next_: Sequence[float]) -> float:
    """Clockwise angle at ``current`` from the edge towards ``next_`` to the edge towards ``previous``."""

    current = as_vector(current)
    to_previous = normalized(as_vector(previous) - current)
    to_next = normalized(as_vector(next_) - current)
    return angle360(to_next, to_previous)


def get_angle_bisector(
    previous: Sequence[float], current: Sequence[float], next_: Sequence[float]
) -> Tuple[Coord, float]:
    """Unit bisector of the angle at ``current`` and the angle in degrees."""

    current = as_vector(current)
    to_previous = normalized(as_vector(previous) - current)
    to_next = normalized(as_vector(next_) - current)
    degrees = angle360(to_next, to_previous)
    return rotate_cw(to_next, degrees / 2.0), degrees


def get_angle_bisector_sin(angle: float) -> float:
    return math.sin(math.radians(angle) / 2.0)


def get_angle_offset(edge_offset: float, angle: float) -> float:
    """Distance to move a vertex along its bisector so both edges move by ``edge_offset``."""

    sin_half = get_angle_bisector_sin(angle)
    if abs(sin_half) < EPSILON:
        logger.warning("Degenerate polygon angle %.6g, vertex left in place", angle)
        return 0.0
    return edge_offset / sin_half


def offset_polygon(polygon: Sequence[Sequence[float]], distance: float) -> List[Coord]:
    """Offset every vertex of a closed polygon along its angle bisector.

    Works vertex by vertex and does not resolve self-intersections; use a
    polygon clipping library when a globally valid offset is needed.
    """

    vertices = [as_vector(vertex, 2) for vertex in polygon]
    count = len(vertices)
    result: List[Coord] = []
    for i, current in enumerate(vertices):
        previous = vertices[(i - 1) % count]
        next_ = vertices[(i + 1) % count]
        bisector, angle = get_angle_bisector(previous, current, next_)
        result.append(current - bisector * get_angle_offset(distance, angle))
    return result


def get_rect(vertices: Sequence[Sequence[float]]) -> Tuple[Coord, Coord]:
    """Axis-aligned bounds ``(min, max)`` of a point set."""

    points = np.asarray(vertices, dtype=float)
    if points.ndim != 2 or points.shape[0] == 0:
        raise ValueError("get_rect requires at least one vertex")
    return points.min(axis=0), points.max(axis=0)


def get_circumradius(width: float, height: float) -> float:
    return math.sqrt((width / 2.0) ** 2 + (height / 2.0) ** 2)


apply_debug_logging(globals(), logger=logger)
