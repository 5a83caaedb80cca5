"""Type-pair dispatch over primitives and plain points.

``closest_points``, ``distance`` and ``intersect`` accept any two of
``Line2``, ``Ray2``, ``Segment2``, ``Circle2``, their 3D counterparts, a
``Sphere``, or a plain point (any 2 or 3 element sequence) and route to the
component-level function for that pair. Pairs registered in one order are
also served in the other.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Tuple

import numpy as np

from . import closest as _closest
from . import distance as _distance
from . import intersect as _intersect
from . import intersect3d as _intersect3d
from .constants import EPSILON
from .intersection import Intersection
from .primitives import PRIMITIVE_TYPES
from .vectors import as_vector, magnitude, sqr_magnitude

logger = logging.getLogger(__name__)

PointPair = Tuple[np.ndarray, np.ndarray]

POINT2 = "Point2"
POINT3 = "Point3"


def _coerce(value: Any) -> Any:
    if isinstance(value, PRIMITIVE_TYPES):
        return value
    try:
        point = as_vector(value)
    except (TypeError, ValueError):
        raise TypeError(f"unsupported shape: {value!r}") from None
    if point.shape[0] not in (2, 3):
        raise TypeError(f"points must have 2 or 3 components, got {point.shape[0]}")
    return point


def _kind(value: Any) -> str:
    if isinstance(value, np.ndarray):
        return POINT2 if value.shape[0] == 2 else POINT3
    return type(value).__name__


def _point_hit(point: np.ndarray, hit: bool) -> Intersection:
    return Intersection.at_point(point) if hit else Intersection.none()


# ---------------------------------------------------------------------------
# Dispatch tables
# ---------------------------------------------------------------------------

_CLOSEST: Dict[Tuple[str, str], Callable[[Any, Any], PointPair]] = {
    (POINT2, POINT2): lambda p, q: (p.copy(), q.copy()),
    (POINT3, POINT3): lambda p, q: (p.copy(), q.copy()),
    (POINT2, "Line2"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT2, "Ray2"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT2, "Segment2"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT2, "Circle2"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT3, "Line3"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT3, "Ray3"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT3, "Segment3"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT3, "Circle3"): lambda p, s: (p.copy(), s.closest_point(p)),
    (POINT3, "Sphere"): lambda p, s: (p.copy(), s.closest_point(p)),
    ("Line2", "Line2"): lambda a, b: _closest.line_line(a.origin, a.direction, b.origin, b.direction),
    ("Line2", "Ray2"): lambda a, b: _closest.line_ray(a.origin, a.direction, b.origin, b.direction),
    ("Line2", "Segment2"): lambda a, b: _closest.line_segment(a.origin, a.direction, b.a, b.b),
    ("Line2", "Circle2"): lambda a, b: _closest.line_circle(a.origin, a.direction, b.center, b.radius),
    ("Ray2", "Ray2"): lambda a, b: _closest.ray_ray(a.origin, a.direction, b.origin, b.direction),
    ("Ray2", "Segment2"): lambda a, b: _closest.ray_segment(a.origin, a.direction, b.a, b.b),
    ("Ray2", "Circle2"): lambda a, b: _closest.ray_circle(a.origin, a.direction, b.center, b.radius),
    ("Segment2", "Segment2"): lambda a, b: _closest.segment_segment(a.a, a.b, b.a, b.b),
    ("Segment2", "Circle2"): lambda a, b: _closest.segment_circle(a.a, a.b, b.center, b.radius),
    ("Circle2", "Circle2"): lambda a, b: _closest.circle_circle(a.center, a.radius, b.center, b.radius),
    ("Line3", "Line3"): lambda a, b: _closest.line_line_3d(a.origin, a.direction, b.origin, b.direction),
    ("Line3", "Sphere"): lambda a, b: _closest.line_sphere(a.origin, a.direction, b.center, b.radius),
    ("Ray3", "Sphere"): lambda a, b: _closest.ray_sphere(a.origin, a.direction, b.center, b.radius),
    ("Segment3", "Sphere"): lambda a, b: _closest.segment_sphere(a.a, a.b, b.center, b.radius),
    ("Sphere", "Sphere"): lambda a, b: _closest.sphere_sphere(a.center, a.radius, b.center, b.radius),
}

_DISTANCE: Dict[Tuple[str, str], Callable[[Any, Any], float]] = {
    (POINT2, POINT2): lambda p, q: magnitude(p - q),
    (POINT3, POINT3): lambda p, q: magnitude(p - q),
    (POINT2, "Line2"): lambda p, s: s.distance_to(p),
    (POINT2, "Ray2"): lambda p, s: s.distance_to(p),
    (POINT2, "Segment2"): lambda p, s: s.distance_to(p),
    (POINT2, "Circle2"): lambda p, s: s.distance_to(p),
    (POINT3, "Line3"): lambda p, s: s.distance_to(p),
    (POINT3, "Ray3"): lambda p, s: s.distance_to(p),
    (POINT3, "Segment3"): lambda p, s: s.distance_to(p),
    (POINT3, "Circle3"): lambda p, s: s.distance_to(p),
    (POINT3, "Sphere"): lambda p, s: s.distance_to(p),
    ("Line2", "Line2"): lambda a, b: _distance.line_line(a.origin, a.direction, b.origin, b.direction),
    ("Line2", "Ray2"): lambda a, b: _distance.line_ray(a.origin, a.direction, b.origin, b.direction),
    ("Line2", "Segment2"): lambda a, b: _distance.line_segment(a.origin, a.direction, b.a, b.b),
    ("Line2", "Circle2"): lambda a, b: _distance.line_circle(a.origin, a.direction, b.center, b.radius),
    ("Ray2", "Ray2"): lambda a, b: _distance.ray_ray(a.origin, a.direction, b.origin, b.direction),
    ("Ray2", "Segment2"): lambda a, b: _distance.ray_segment(a.origin, a.direction, b.a, b.b),
    ("Ray2", "Circle2"): lambda a, b: _distance.ray_circle(a.origin, a.direction, b.center, b.radius),
    ("Segment2", "Segment2"): lambda a, b: _distance.segment_segment(a.a, a.b, b.a, b.b),
    ("Segment2", "Circle2"): lambda a, b: _distance.segment_circle(a.a, a.b, b.center, b.radius),
    ("Circle2", "Circle2"): lambda a, b: _distance.circle_circle(a.center, a.radius, b.center, b.radius),
    ("Line3", "Line3"): lambda a, b: _distance.line_line_3d(a.origin, a.direction, b.origin, b.direction),
    ("Line3", "Sphere"): lambda a, b: _distance.line_sphere(a.origin, a.direction, b.center, b.radius),
    ("Ray3", "Sphere"): lambda a, b: _distance.ray_sphere(a.origin, a.direction, b.center, b.radius),
    ("Segment3", "Sphere"): lambda a, b: _distance.segment_sphere(a.a, a.b, b.center, b.radius),
    ("Sphere", "Sphere"): lambda a, b: _distance.sphere_sphere(a.center, a.radius, b.center, b.radius),
}

_INTERSECT: Dict[Tuple[str, str], Callable[[Any, Any], Intersection]] = {
    (POINT2, POINT2): lambda p, q: _point_hit(p, sqr_magnitude(p - q) < EPSILON),
    (POINT3, POINT3): lambda p, q: _point_hit(p, sqr_magnitude(p - q) < EPSILON),
    (POINT2, "Line2"): lambda p, s: _point_hit(p, _intersect.point_line(p, s.origin, s.direction)),
    (POINT2, "Ray2"): lambda p, s: _point_hit(p, _intersect.point_ray(p, s.origin, s.direction)),
    (POINT2, "Segment2"): lambda p, s: _point_hit(p, _intersect.point_segment(p, s.a, s.b)),
    (POINT2, "Circle2"): lambda p, s: _point_hit(p, s.contains(p)),
    (POINT3, "Line3"): lambda p, s: _point_hit(p, _intersect3d.point_line(p, s.origin, s.direction)),
    (POINT3, "Ray3"): lambda p, s: _point_hit(p, _intersect3d.point_ray(p, s.origin, s.direction)),
    (POINT3, "Segment3"): lambda p, s: _point_hit(p, _intersect3d.point_segment(p, s.a, s.b)),
    (POINT3, "Sphere"): lambda p, s: _point_hit(p, s.contains(p)),
    ("Line2", "Line2"): lambda a, b: _intersect.line_line(a.origin, a.direction, b.origin, b.direction),
    ("Line2", "Ray2"): lambda a, b: _intersect.line_ray(a.origin, a.direction, b.origin, b.direction),
    ("Line2", "Segment2"): lambda a, b: _intersect.line_segment(a.origin, a.direction, b.a, b.b),
    ("Line2", "Circle2"): lambda a, b: _intersect.line_circle(a.origin, a.direction, b.center, b.radius),
    ("Ray2", "Ray2"): lambda a, b: _intersect.ray_ray(a.origin, a.direction, b.origin, b.direction),
    ("Ray2", "Segment2"): lambda a, b: _intersect.ray_segment(a.origin, a.direction, b.a, b.b),
    ("Ray2", "Circle2"): lambda a, b: _intersect.ray_circle(a.origin, a.direction, b.center, b.radius),
    ("Segment2", "Segment2"): lambda a, b: _intersect.segment_segment(a.a, a.b, b.a, b.b),
    ("Segment2", "Circle2"): lambda a, b: _intersect.segment_circle(a.a, a.b, b.center, b.radius),
    ("Circle2", "Circle2"): lambda a, b: _intersect.circle_circle(a.center, a.radius, b.center, b.radius),
    ("Line3", "Line3"): lambda a, b: _intersect3d.line_line(a.origin, a.direction, b.origin, b.direction),
    ("Line3", "Sphere"): lambda a, b: _intersect3d.line_sphere(a.origin, a.direction, b.center, b.radius),
    ("Ray3", "Sphere"): lambda a, b: _intersect3d.ray_sphere(a.origin, a.direction, b.center, b.radius),
    ("Segment3", "Sphere"): lambda a, b: _intersect3d.segment_sphere(a.a, a.b, b.center, b.radius),
    ("Sphere", "Sphere"): lambda a, b: _intersect3d.sphere_sphere(a.center, a.radius, b.center, b.radius),
}


def _lookup(table: Dict[Tuple[str, str], Callable], operation: str, a: Any, b: Any):
    key = (_kind(a), _kind(b))
    func = table.get(key)
    if func is not None:
        return func, False
    func = table.get((key[1], key[0]))
    if func is not None:
        return func, True
    raise TypeError(f"{operation} is not supported between {key[0]} and {key[1]}")


def closest_points(a: Any, b: Any) -> PointPair:
    """Closest pair ``(point_on_a, point_on_b)``."""

    a, b = _coerce(a), _coerce(b)
    func, swapped = _lookup(_CLOSEST, "closest_points", a, b)
    if swapped:
        on_b, on_a = func(b, a)
        return on_a, on_b
    return func(a, b)


def distance(a: Any, b: Any) -> float:
    """Distance between two shapes; signed where a circle or sphere is involved."""

    a, b = _coerce(a), _coerce(b)
    func, swapped = _lookup(_DISTANCE, "distance", a, b)
    return func(b, a) if swapped else func(a, b)


def intersect(a: Any, b: Any) -> Intersection:
    a, b = _coerce(a), _coerce(b)
    func, swapped = _lookup(_INTERSECT, "intersect", a, b)
    result = func(b, a) if swapped else func(a, b)
    logger.debug("intersect(%s, %s) -> %s", _kind(a), _kind(b), result.kind.name)
    return result


def supported_pairs(operation: str) -> Tuple[Tuple[str, str], ...]:
    """Registered type pairs for ``"closest_points"``, ``"distance"`` or ``"intersect"``."""

    tables = {"closest_points": _CLOSEST, "distance": _DISTANCE, "intersect": _INTERSECT}
    try:
        return tuple(sorted(tables[operation]))
    except KeyError:
        raise ValueError(f"unknown operation {operation!r}") from None


__all__ = [
    'closest_points',
    'distance',
    'intersect',
    'supported_pairs',
]