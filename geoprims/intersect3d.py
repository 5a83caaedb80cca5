"""Typed intersections between 3D primitives."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from . import closest, distance
from .constants import EPSILON, EPSILON_SQUARED
from .intersect import _radical_middle, _round_contact
from .intersect import line_circle, ray_circle, segment_circle
from .intersection import Intersection
from .logging_utils import apply_debug_logging
from .vectors import as_vector, magnitude, normalized, sqr_magnitude

logger = logging.getLogger(__name__)


def point_line(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> bool:
    return distance.point_line(as_vector(point, 3), origin, direction) < EPSILON


def point_ray(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> bool:
    return distance.point_ray(as_vector(point, 3), origin, direction) < EPSILON


def point_segment(point: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]) -> bool:
    return distance.point_segment(as_vector(point, 3), segment_a, segment_b) < EPSILON


def line_line(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> Intersection:
    """Intersect two 3D lines.

    Lines count as intersecting when their closest points are within
    tolerance of each other; skew lines return ``NONE`` with failure.
    """

    point_a, point_b = closest.line_line_3d(origin_a, direction_a, origin_b, direction_b)
    if sqr_magnitude(point_b - point_a) < EPSILON:
        return Intersection.at_point(point_a)
    return Intersection.none()


def line_sphere(
    line_origin: Sequence[float], line_direction: Sequence[float], center: Sequence[float], radius: float
) -> Intersection:
    return line_circle(line_origin, line_direction, center, radius)


def ray_sphere(
    ray_origin: Sequence[float], ray_direction: Sequence[float], center: Sequence[float], radius: float
) -> Intersection:
    return ray_circle(ray_origin, ray_direction, center, radius)


def segment_sphere(
    segment_a: Sequence[float], segment_b: Sequence[float], center: Sequence[float], radius: float
) -> Intersection:
    return segment_circle(segment_a, segment_b, center, radius)


def sphere_sphere(center_a: Sequence[float], radius_a: float, center_b: Sequence[float], radius_b: float) -> Intersection:
    """Intersect two spheres.

    Crossing spheres meet in a ``CIRCLE`` described by its center, plane
    normal (pointing from ``a`` towards ``b``) and radius.
    """

    center_a, center_b = as_vector(center_a, 3), as_vector(center_b, 3)
    from_b_to_a = center_a - center_b
    if sqr_magnitude(from_b_to_a) < EPSILON_SQUARED:
        if abs(radius_a - radius_b) < EPSILON:
            return Intersection.sphere(center_a, radius_a)
        # One sphere is inside the other
        return Intersection.none(success=True)
    contact = _round_contact(center_a, radius_a, center_b, radius_b)
    if contact is not None:
        return contact
    middle, discriminant = _radical_middle(center_a, radius_a, center_b, radius_b)
    radius = magnitude(from_b_to_a) * math.sqrt(discriminant)
    return Intersection.circle(middle, -normalized(from_b_to_a), radius)


apply_debug_logging(globals(), logger=logger)
