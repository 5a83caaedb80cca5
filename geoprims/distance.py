"""Distances between primitives.

Distances to circles and spheres are signed: positive outside, negative
inside (the penetration depth). Everything else is non-negative.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from . import closest
from .constants import EPSILON
from .logging_utils import apply_debug_logging
from .vectors import as_vector, dot, magnitude, normalized, perp_dot, sqr_magnitude

logger = logging.getLogger(__name__)


def _offset_from_line(to_point: np.ndarray, projection: float) -> float:
    # |to_point|^2 - projection^2 can dip below zero from rounding
    distance_sqr = sqr_magnitude(to_point) - projection * projection
    return 0.0 if distance_sqr <= 0.0 else math.sqrt(distance_sqr)


def _between(point_a: np.ndarray, point_b: np.ndarray) -> float:
    return magnitude(point_a - point_b)


def point_line(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> float:
    projected, _ = closest.point_line(point, origin, direction)
    return _between(as_vector(point), projected)


def point_ray(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> float:
    projected, _ = closest.point_ray(point, origin, direction)
    return _between(as_vector(point), projected)


def point_segment(point: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]) -> float:
    projected, _ = closest.point_segment(point, segment_a, segment_b)
    return _between(as_vector(point), projected)


def point_circle(point: Sequence[float], center: Sequence[float], radius: float) -> float:
    return magnitude(as_vector(center) - as_vector(point)) - radius


point_sphere = point_circle


def line_line(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> float:
    origin_a, direction_a, origin_b, direction_b = (
        as_vector(origin_a),
        as_vector(direction_a),
        as_vector(origin_b),
        as_vector(direction_b),
    )
    if abs(perp_dot(direction_a, direction_b)) < EPSILON:
        # Parallel
        origin_b_to_a = origin_a - origin_b
        if (
            abs(perp_dot(direction_a, origin_b_to_a)) > EPSILON
            or abs(perp_dot(direction_b, origin_b_to_a)) > EPSILON
        ):
            return _offset_from_line(origin_b_to_a, dot(direction_a, origin_b_to_a))
        # Collinear
        return 0.0
    return 0.0


def line_ray(
    line_origin: Sequence[float], line_direction: Sequence[float], ray_origin: Sequence[float], ray_direction: Sequence[float]
) -> float:
    line_origin, line_direction, ray_origin, ray_direction = (
        as_vector(line_origin),
        as_vector(line_direction),
        as_vector(ray_origin),
        as_vector(ray_direction),
    )
    ray_origin_to_line_origin = line_origin - ray_origin
    denominator = perp_dot(line_direction, ray_direction)
    perp_dot_a = perp_dot(line_direction, ray_origin_to_line_origin)
    if abs(denominator) < EPSILON:
        perp_dot_b = perp_dot(ray_direction, ray_origin_to_line_origin)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            projection = dot(line_direction, ray_origin_to_line_origin)
            return _offset_from_line(ray_origin_to_line_origin, projection)
        return 0.0
    line_point, ray_point = closest.line_ray(line_origin, line_direction, ray_origin, ray_direction)
    return _between(line_point, ray_point)


def line_segment(
    line_origin: Sequence[float], line_direction: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]
) -> float:
    line_origin, line_direction, segment_a, segment_b = (
        as_vector(line_origin),
        as_vector(line_direction),
        as_vector(segment_a),
        as_vector(segment_b),
    )
    segment_a_to_origin = line_origin - segment_a
    segment_direction = segment_b - segment_a
    denominator = perp_dot(line_direction, segment_direction)
    perp_dot_a = perp_dot(line_direction, segment_a_to_origin)
    if abs(denominator) < EPSILON:
        perp_dot_b = perp_dot(normalized(segment_direction), segment_a_to_origin)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            projection = dot(line_direction, segment_a_to_origin)
            return _offset_from_line(segment_a_to_origin, projection)
        return 0.0
    line_point, segment_point = closest.line_segment(line_origin, line_direction, segment_a, segment_b)
    return _between(line_point, segment_point)


def line_circle(
    line_origin: Sequence[float], line_direction: Sequence[float], center: Sequence[float], radius: float
) -> float:
    line_origin, line_direction, center = as_vector(line_origin), as_vector(line_direction), as_vector(center)
    origin_to_center = center - line_origin
    center_projection = dot(line_direction, origin_to_center)
    sqr_distance_to_line = sqr_magnitude(origin_to_center) - center_projection * center_projection
    if radius * radius - sqr_distance_to_line < -EPSILON:
        return math.sqrt(sqr_distance_to_line) - radius
    return 0.0


line_sphere = line_circle


def ray_ray(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> float:
    """Distance between two rays.

    Parallel rays are split into collinear and offset cases. Non-parallel
    rays whose supporting lines cross behind either origin fall back to
    endpoint-to-ray distances.
    """

    origin_a, direction_a, origin_b, direction_b = (
        as_vector(origin_a),
        as_vector(direction_a),
        as_vector(origin_b),
        as_vector(direction_b),
    )
    origin_b_to_a = origin_a - origin_b
    denominator = perp_dot(direction_a, direction_b)
    perp_dot_a = perp_dot(direction_a, origin_b_to_a)
    perp_dot_b = perp_dot(direction_b, origin_b_to_a)
    codirected = dot(direction_a, direction_b) > 0.0
    if abs(denominator) < EPSILON:
        # Parallel
        origin_b_projection = -dot(direction_a, origin_b_to_a)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            if not codirected and origin_b_projection < EPSILON:
                return _between(origin_a, origin_b)
            return _offset_from_line(origin_b_to_a, origin_b_projection)
        # Collinear
        if codirected:
            return 0.0
        if origin_b_projection < EPSILON:
            # Pointing away from each other
            return _between(origin_a, origin_b)
        return 0.0

    distance_a = perp_dot_b / denominator
    distance_b = perp_dot_a / denominator
    if distance_a < -EPSILON or distance_b < -EPSILON:
        point_a, point_b = closest.ray_ray(origin_a, direction_a, origin_b, direction_b)
        return _between(point_a, point_b)
    return 0.0


def ray_segment(
    ray_origin: Sequence[float], ray_direction: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]
) -> float:
    ray_point, segment_point = closest.ray_segment(ray_origin, ray_direction, segment_a, segment_b)
    return _between(ray_point, segment_point)


def ray_circle(
    ray_origin: Sequence[float], ray_direction: Sequence[float], center: Sequence[float], radius: float
) -> float:
    ray_origin, ray_direction, center = as_vector(ray_origin), as_vector(ray_direction), as_vector(center)
    origin_to_center = center - ray_origin
    center_projection = dot(ray_direction, origin_to_center)
    sqr_distance_to_origin = sqr_magnitude(origin_to_center)
    from_origin = math.sqrt(sqr_distance_to_origin) - radius
    if center_projection + radius < -EPSILON:
        return from_origin
    sqr_distance_to_line = sqr_distance_to_origin - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        if center_projection < -EPSILON:
            return from_origin
        return math.sqrt(sqr_distance_to_line) - radius
    if sqr_distance_to_intersection < EPSILON:
        return from_origin if center_projection < -EPSILON else 0.0
    distance_to_intersection = math.sqrt(sqr_distance_to_intersection)
    if center_projection - distance_to_intersection < -EPSILON:
        if center_projection + distance_to_intersection < -EPSILON:
            return from_origin
    return 0.0


ray_sphere = ray_circle


def segment_segment(
    segment1_a: Sequence[float], segment1_b: Sequence[float], segment2_a: Sequence[float], segment2_b: Sequence[float]
) -> float:
    point1, point2 = closest.segment_segment(segment1_a, segment1_b, segment2_a, segment2_b)
    return _between(point1, point2)


def segment_circle(
    segment_a: Sequence[float], segment_b: Sequence[float], center: Sequence[float], radius: float
) -> float:
    """Signed distance between a segment and a circle boundary.

    A segment lying entirely inside the circle yields a negative value: the
    gap between its nearer endpoint and the boundary.
    """

    segment_a, segment_b, center = as_vector(segment_a), as_vector(segment_b), as_vector(center)
    segment_a_to_center = center - segment_a
    from_a_to_b = segment_b - segment_a
    segment_length = magnitude(from_a_to_b)
    from_a = magnitude(segment_a_to_center) - radius
    if segment_length < EPSILON:
        return from_a
    from_b = magnitude(center - segment_b) - radius

    segment_direction = from_a_to_b / segment_length
    center_projection = dot(segment_direction, segment_a_to_center)
    if center_projection + radius < -EPSILON or center_projection - radius > segment_length + EPSILON:
        return from_a if center_projection < 0.0 else from_b

    sqr_distance_to_line = sqr_magnitude(segment_a_to_center) - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        if center_projection < -EPSILON:
            return from_a
        if center_projection > segment_length + EPSILON:
            return from_b
        return math.sqrt(sqr_distance_to_line) - radius
    if sqr_distance_to_intersection < EPSILON:
        if center_projection < -EPSILON:
            return from_a
        if center_projection > segment_length + EPSILON:
            return from_b
        return 0.0

    distance_to_intersection = math.sqrt(sqr_distance_to_intersection)
    distance_a = center_projection - distance_to_intersection
    distance_b = center_projection + distance_to_intersection
    a_after_start = distance_a > -EPSILON
    b_before_end = distance_b < segment_length + EPSILON
    if a_after_start and b_before_end:
        return 0.0
    if not a_after_start and not b_before_end:
        # Inside: both values are negative, the larger one is nearer the boundary
        return max(distance_a, segment_length - distance_b)
    if a_after_start and distance_a < segment_length + EPSILON:
        return 0.0
    if distance_b > -EPSILON and b_before_end:
        return 0.0
    return from_a if center_projection < 0.0 else from_b


segment_sphere = segment_circle


def circle_circle(center_a: Sequence[float], radius_a: float, center_b: Sequence[float], radius_b: float) -> float:
    return magnitude(as_vector(center_a) - as_vector(center_b)) - radius_a - radius_b


sphere_sphere = circle_circle


def line_line_3d(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> float:
    point_a, point_b = closest.line_line_3d(origin_a, direction_a, origin_b, direction_b)
    return _between(point_a, point_b)


apply_debug_logging(globals(), logger=logger)
