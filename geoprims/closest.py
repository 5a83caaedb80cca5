"""Closest points between primitives.

Every function works on raw components (origins, directions, endpoints,
centers and radii) and returns fresh numpy arrays. Point projections return
``(point, t)`` where ``t`` is the parametric position of the projection;
pairwise queries return ``(point_on_first, point_on_second)``.

Pairwise line/ray/segment queries are 2D (they rely on the perp-dot product).
Queries involving a circle only use dot products and work for spheres too.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence, Tuple

import numpy as np

from .constants import EPSILON
from .logging_utils import apply_debug_logging
from .vectors import as_vector, dot, magnitude, normalized, perp_dot, sqr_magnitude

logger = logging.getLogger(__name__)

Coord = np.ndarray
PointPair = Tuple[Coord, Coord]


def _args(*values: Sequence[float]) -> Tuple[Coord, ...]:
    return tuple(as_vector(value) for value in values)


# ---------------------------------------------------------------------------
# Point projections
# ---------------------------------------------------------------------------


def point_line(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> Tuple[Coord, float]:
    """Project ``point`` onto the line ``origin + t * direction``; ``t`` is unbounded."""

    point, origin, direction = _args(point, origin, direction)
    sqr_length = sqr_magnitude(direction)
    if sqr_length < EPSILON:
        logger.warning("Line direction %s is degenerate, using its origin", direction.tolist())
        return origin.copy(), 0.0
    t = dot(direction, point - origin) / sqr_length
    return origin + direction * t, t


def point_ray(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> Tuple[Coord, float]:
    """Project ``point`` onto a ray; ``t`` is clamped to ``t >= 0``."""

    point, origin, direction = _args(point, origin, direction)
    sqr_length = sqr_magnitude(direction)
    if sqr_length < EPSILON:
        logger.warning("Ray direction %s is degenerate, using its origin", direction.tolist())
        return origin.copy(), 0.0
    projection = dot(direction, point - origin)
    if projection <= 0.0:
        return origin.copy(), 0.0
    t = projection / sqr_length
    return origin + direction * t, t


def point_segment(point: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]) -> Tuple[Coord, float]:
    """Project ``point`` onto a segment; ``t`` is 0 at ``segment_a`` and 1 at ``segment_b``."""

    point, segment_a, segment_b = _args(point, segment_a, segment_b)
    direction = segment_b - segment_a
    sqr_length = sqr_magnitude(direction)
    if sqr_length < EPSILON:
        logger.warning("Segment %s-%s has zero length, using its first endpoint", segment_a.tolist(), segment_b.tolist())
        return segment_a.copy(), 0.0
    projection = dot(direction, point - segment_a)
    if projection <= 0.0:
        return segment_a.copy(), 0.0
    if projection >= sqr_length:
        return segment_b.copy(), 1.0
    t = projection / sqr_length
    return segment_a + direction * t, t


def _point_segment(point: Coord, segment_a: Coord, segment_b: Coord, unit_direction: Coord, length: float) -> Coord:
    projection = dot(unit_direction, point - segment_a)
    if projection <= 0.0:
        return segment_a.copy()
    if projection >= length:
        return segment_b.copy()
    return segment_a + unit_direction * projection


def point_circle(point: Sequence[float], center: Sequence[float], radius: float) -> Coord:
    """Radial projection of ``point`` onto a circle or sphere boundary.

    A point sitting on the center has no defined direction; the +x axis is used.
    """

    point, center = _args(point, center)
    to_point = point - center
    distance = magnitude(to_point)
    if distance <= 1e-12:
        offset = np.zeros_like(center)
        offset[0] = radius
        return center + offset
    return center + to_point * (radius / distance)


point_sphere = point_circle


# ---------------------------------------------------------------------------
# Line pairs
# ---------------------------------------------------------------------------


def line_line(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> PointPair:
    origin_a, direction_a, origin_b, direction_b = _args(origin_a, direction_a, origin_b, direction_b)
    origin_b_to_a = origin_a - origin_b
    denominator = perp_dot(direction_a, direction_b)
    perp_dot_b = perp_dot(direction_b, origin_b_to_a)
    if abs(denominator) < EPSILON:
        # Parallel
        if abs(perp_dot_b) > EPSILON or abs(perp_dot(direction_a, origin_b_to_a)) > EPSILON:
            return origin_a.copy(), origin_b + direction_b * dot(direction_b, origin_b_to_a)
        # Collinear
        return origin_a.copy(), origin_a.copy()
    point = origin_a + direction_a * (perp_dot_b / denominator)
    return point, point.copy()


def line_ray(
    line_origin: Sequence[float], line_direction: Sequence[float], ray_origin: Sequence[float], ray_direction: Sequence[float]
) -> PointPair:
    line_origin, line_direction, ray_origin, ray_direction = _args(line_origin, line_direction, ray_origin, ray_direction)
    ray_origin_to_line_origin = line_origin - ray_origin
    denominator = perp_dot(line_direction, ray_direction)
    perp_dot_a = perp_dot(line_direction, ray_origin_to_line_origin)
    if abs(denominator) < EPSILON:
        # Parallel
        perp_dot_b = perp_dot(ray_direction, ray_origin_to_line_origin)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            projection = dot(line_direction, ray_origin_to_line_origin)
            return line_origin - line_direction * projection, ray_origin.copy()
        # Collinear
        return ray_origin.copy(), ray_origin.copy()
    ray_distance = perp_dot_a / denominator
    if ray_distance < -EPSILON:
        projection = dot(line_direction, ray_origin_to_line_origin)
        return line_origin - line_direction * projection, ray_origin.copy()
    point = ray_origin + ray_direction * ray_distance
    return point, point.copy()


def line_segment(
    line_origin: Sequence[float], line_direction: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]
) -> PointPair:
    line_origin, line_direction, segment_a, segment_b = _args(line_origin, line_direction, segment_a, segment_b)
    segment_direction = segment_b - segment_a
    segment_a_to_origin = line_origin - segment_a
    denominator = perp_dot(line_direction, segment_direction)
    perp_dot_a = perp_dot(line_direction, segment_a_to_origin)
    if abs(denominator) < EPSILON:
        # Parallel
        codirected = dot(line_direction, segment_direction) > 0.0
        perp_dot_b = perp_dot(normalized(segment_direction), segment_a_to_origin)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            if codirected:
                projection = dot(line_direction, segment_a_to_origin)
                return line_origin - line_direction * projection, segment_a.copy()
            projection = dot(line_direction, line_origin - segment_b)
            return line_origin - line_direction * projection, segment_b.copy()
        # Collinear
        endpoint = segment_a if codirected else segment_b
        return endpoint.copy(), endpoint.copy()
    segment_distance = perp_dot_a / denominator
    if segment_distance < -EPSILON or segment_distance > 1.0 + EPSILON:
        segment_point = segment_a + segment_direction * min(max(segment_distance, 0.0), 1.0)
        projection = dot(line_direction, segment_point - line_origin)
        return line_origin + line_direction * projection, segment_point
    point = segment_a + segment_direction * segment_distance
    return point, point.copy()


def line_circle(
    line_origin: Sequence[float], line_direction: Sequence[float], center: Sequence[float], radius: float
) -> PointPair:
    line_origin, line_direction, center = _args(line_origin, line_direction, center)
    origin_to_center = center - line_origin
    center_projection = dot(line_direction, origin_to_center)
    sqr_distance_to_line = sqr_magnitude(origin_to_center) - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        line_point = line_origin + line_direction * center_projection
        return line_point, center + normalized(line_point - center) * radius
    if sqr_distance_to_intersection < EPSILON:
        point = line_origin + line_direction * center_projection
        return point, point.copy()
    distance_a = center_projection - math.sqrt(sqr_distance_to_intersection)
    point = line_origin + line_direction * distance_a
    return point, point.copy()


line_sphere = line_circle


# ---------------------------------------------------------------------------
# Ray pairs
# ---------------------------------------------------------------------------


def ray_ray(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> PointPair:
    origin_a, direction_a, origin_b, direction_b = _args(origin_a, direction_a, origin_b, direction_b)
    origin_b_to_a = origin_a - origin_b
    denominator = perp_dot(direction_a, direction_b)
    perp_dot_a = perp_dot(direction_a, origin_b_to_a)
    perp_dot_b = perp_dot(direction_b, origin_b_to_a)
    codirected = dot(direction_a, direction_b) > 0.0
    if abs(denominator) < EPSILON:
        # Parallel
        origin_b_projection = dot(direction_a, origin_b_to_a)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            if codirected:
                if origin_b_projection > -EPSILON:
                    # origin_a projects onto ray b
                    return origin_a.copy(), origin_b + direction_a * origin_b_projection
                return origin_a - direction_a * origin_b_projection, origin_b.copy()
            if origin_b_projection > 0.0:
                return origin_a.copy(), origin_b.copy()
            return origin_a.copy(), origin_b + direction_a * origin_b_projection
        # Collinear
        if codirected:
            shared = origin_a if origin_b_projection > -EPSILON else origin_b
            return shared.copy(), shared.copy()
        if origin_b_projection > 0.0:
            return origin_a.copy(), origin_b.copy()
        return origin_a.copy(), origin_a.copy()

    distance_a = perp_dot_b / denominator
    distance_b = perp_dot_a / denominator
    if distance_a < -EPSILON or distance_b < -EPSILON:
        if codirected:
            origin_a_projection = dot(direction_b, origin_b_to_a)
            if origin_a_projection > -EPSILON:
                return origin_a.copy(), origin_b + direction_b * origin_a_projection
            origin_b_projection = -dot(direction_a, origin_b_to_a)
            if origin_b_projection > -EPSILON:
                return origin_a + direction_a * origin_b_projection, origin_b.copy()
            return origin_a.copy(), origin_b.copy()
        if distance_a > -EPSILON:
            origin_b_projection = -dot(direction_a, origin_b_to_a)
            if origin_b_projection > -EPSILON:
                return origin_a + direction_a * origin_b_projection, origin_b.copy()
        elif distance_b > -EPSILON:
            origin_a_projection = dot(direction_b, origin_b_to_a)
            if origin_a_projection > -EPSILON:
                return origin_a.copy(), origin_b + direction_b * origin_a_projection
        return origin_a.copy(), origin_b.copy()

    point = origin_a + direction_a * distance_a
    return point, point.copy()


def ray_segment(
    ray_origin: Sequence[float], ray_direction: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]
) -> PointPair:
    ray_origin, ray_direction, segment_a, segment_b = _args(ray_origin, ray_direction, segment_a, segment_b)
    segment_direction = segment_b - segment_a
    segment_a_to_origin = ray_origin - segment_a
    denominator = perp_dot(ray_direction, segment_direction)
    perp_dot_a = perp_dot(ray_direction, segment_a_to_origin)
    perp_dot_b = perp_dot(normalized(segment_direction), segment_a_to_origin)
    if abs(denominator) < EPSILON:
        # Parallel
        segment_a_projection = -dot(ray_direction, segment_a_to_origin)
        segment_b_projection = dot(ray_direction, segment_b - ray_origin)
        a_ahead = segment_a_projection > -EPSILON
        b_ahead = segment_b_projection > -EPSILON
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            if a_ahead and b_ahead:
                if segment_a_projection < segment_b_projection:
                    return ray_origin + ray_direction * segment_a_projection, segment_a.copy()
                return ray_origin + ray_direction * segment_b_projection, segment_b.copy()
            if a_ahead or b_ahead:
                sqr_segment_length = sqr_magnitude(segment_direction)
                if sqr_segment_length > EPSILON:
                    origin_projection = dot(segment_direction, segment_a_to_origin) / sqr_segment_length
                    return ray_origin.copy(), segment_a + segment_direction * origin_projection
                return ray_origin.copy(), segment_a.copy()
            nearest = segment_a if segment_a_projection > segment_b_projection else segment_b
            return ray_origin.copy(), nearest.copy()
        # Collinear
        if a_ahead and b_ahead:
            nearest = segment_a if segment_a_projection < segment_b_projection else segment_b
            return nearest.copy(), nearest.copy()
        if a_ahead or b_ahead:
            return ray_origin.copy(), ray_origin.copy()
        nearest = segment_a if segment_a_projection > segment_b_projection else segment_b
        return ray_origin.copy(), nearest.copy()

    ray_distance = perp_dot_b / denominator
    segment_distance = perp_dot_a / denominator
    if ray_distance < -EPSILON or segment_distance < -EPSILON or segment_distance > 1.0 + EPSILON:
        if dot(ray_direction, segment_direction) > 0.0:
            segment_b_to_origin = ray_origin - segment_b
        else:
            segment_a, segment_b = segment_b, segment_a
            segment_direction = -segment_direction
            segment_b_to_origin = segment_a_to_origin
            segment_a_to_origin = ray_origin - segment_a
            segment_distance = 1.0 - segment_distance
        segment_a_projection = -dot(ray_direction, segment_a_to_origin)
        segment_b_projection = -dot(ray_direction, segment_b_to_origin)
        a_on_ray = segment_a_projection > -EPSILON
        b_on_ray = segment_b_projection > -EPSILON
        if a_on_ray and b_on_ray:
            if segment_distance < 0.0:
                return ray_origin + ray_direction * segment_a_projection, segment_a.copy()
            return ray_origin + ray_direction * segment_b_projection, segment_b.copy()
        if not a_on_ray and b_on_ray:
            if segment_distance < 0.0:
                return ray_origin.copy(), segment_a.copy()
            if segment_distance > 1.0 + EPSILON:
                return ray_origin + ray_direction * segment_b_projection, segment_b.copy()
            origin_projection = dot(segment_direction, segment_a_to_origin)
            return ray_origin.copy(), segment_a + segment_direction * (origin_projection / sqr_magnitude(segment_direction))
        # Not on ray
        origin_projection = dot(segment_direction, segment_a_to_origin)
        sqr_segment_length = sqr_magnitude(segment_direction)
        if origin_projection < 0.0:
            return ray_origin.copy(), segment_a.copy()
        if origin_projection > sqr_segment_length:
            return ray_origin.copy(), segment_b.copy()
        return ray_origin.copy(), segment_a + segment_direction * (origin_projection / sqr_segment_length)

    point = segment_a + segment_direction * segment_distance
    return point, point.copy()


def ray_circle(
    ray_origin: Sequence[float], ray_direction: Sequence[float], center: Sequence[float], radius: float
) -> PointPair:
    ray_origin, ray_direction, center = _args(ray_origin, ray_direction, center)
    origin_to_center = center - ray_origin
    center_projection = dot(ray_direction, origin_to_center)

    def _from_origin() -> PointPair:
        return ray_origin.copy(), center - normalized(origin_to_center) * radius

    if center_projection + radius < -EPSILON:
        return _from_origin()
    sqr_distance_to_line = sqr_magnitude(origin_to_center) - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        if center_projection < -EPSILON:
            return _from_origin()
        ray_point = ray_origin + ray_direction * center_projection
        return ray_point, center + normalized(ray_point - center) * radius
    if sqr_distance_to_intersection < EPSILON:
        if center_projection < -EPSILON:
            return _from_origin()
        point = ray_origin + ray_direction * center_projection
        return point, point.copy()

    distance_to_intersection = math.sqrt(sqr_distance_to_intersection)
    distance_a = center_projection - distance_to_intersection
    if distance_a < -EPSILON:
        distance_b = center_projection + distance_to_intersection
        if distance_b < -EPSILON:
            return _from_origin()
        point = ray_origin + ray_direction * distance_b
        return point, point.copy()
    point = ray_origin + ray_direction * distance_a
    return point, point.copy()


ray_sphere = ray_circle


# ---------------------------------------------------------------------------
# Segment pairs
# ---------------------------------------------------------------------------


def _segment_segment_collinear(left_a: Coord, left_b: Coord, right_a: Coord) -> PointPair:
    """Closest pair of two codirected collinear segments with ``left_a`` first."""

    right_a_projection = dot(normalized(left_b - left_a), right_a - left_b)
    if abs(right_a_projection) < EPSILON:
        # left_b touches right_a
        return left_b.copy(), left_b.copy()
    if right_a_projection < 0.0:
        # Overlap starts at right_a
        return right_a.copy(), right_a.copy()
    return left_b.copy(), right_a.copy()


def segment_segment(
    segment1_a: Sequence[float], segment1_b: Sequence[float], segment2_a: Sequence[float], segment2_b: Sequence[float]
) -> PointPair:
    segment1_a, segment1_b, segment2_a, segment2_b = _args(segment1_a, segment1_b, segment2_a, segment2_b)
    from_2a_to_1a = segment1_a - segment2_a
    direction1 = segment1_b - segment1_a
    direction2 = segment2_b - segment2_a
    segment1_length = magnitude(direction1)
    segment2_length = magnitude(direction2)
    segment1_is_point = segment1_length < EPSILON
    segment2_is_point = segment2_length < EPSILON
    if segment1_is_point and segment2_is_point:
        if np.array_equal(segment1_a, segment2_a):
            return segment1_a.copy(), segment1_a.copy()
        return segment1_a.copy(), segment2_a.copy()
    if segment1_is_point:
        unit2 = direction2 / segment2_length
        return segment1_a.copy(), _point_segment(segment1_a, segment2_a, segment2_b, unit2, segment2_length)
    if segment2_is_point:
        unit1 = direction1 / segment1_length
        return _point_segment(segment2_a, segment1_a, segment1_b, unit1, segment1_length), segment2_a.copy()

    direction1 = direction1 / segment1_length
    direction2 = direction2 / segment2_length
    denominator = perp_dot(direction1, direction2)
    perp_dot1 = perp_dot(direction1, from_2a_to_1a)
    perp_dot2 = perp_dot(direction2, from_2a_to_1a)
    if abs(denominator) < EPSILON:
        # Parallel
        codirected = dot(direction1, direction2) > 0.0
        if abs(perp_dot1) > EPSILON or abs(perp_dot2) > EPSILON:
            if codirected:
                from_1a_to_2b = segment2_b - segment1_a
            else:
                segment2_a, segment2_b = segment2_b, segment2_a
                direction2 = -direction2
                from_1a_to_2b = -from_2a_to_1a
                from_2a_to_1a = segment1_a - segment2_a
            segment2a_projection = -dot(direction1, from_2a_to_1a)
            segment2b_projection = dot(direction1, from_1a_to_2b)
            a_after_1a = segment2a_projection > -EPSILON
            b_after_1a = segment2b_projection > -EPSILON
            if not a_after_1a and not b_after_1a:
                #           1A------1B
                # 2A------2B
                return segment1_a.copy(), segment2_b.copy()
            a_before_1b = segment2a_projection < segment1_length + EPSILON
            b_before_1b = segment2b_projection < segment1_length + EPSILON
            if not a_before_1b and not b_before_1b:
                # 1A------1B
                #           2A------2B
                return segment1_b.copy(), segment2_a.copy()
            if a_after_1a:
                # 1A------1B
                #   2A------
                return segment1_a + direction1 * segment2a_projection, segment2_a.copy()
            #   1A------1B
            # 2A----2B
            segment1a_projection = dot(direction2, from_2a_to_1a)
            return segment1_a.copy(), segment2_a + direction2 * segment1a_projection
        # Collinear
        if codirected:
            if -dot(direction1, from_2a_to_1a) > -EPSILON:
                return _segment_segment_collinear(segment1_a, segment1_b, segment2_a)
            point2, point1 = _segment_segment_collinear(segment2_a, segment2_b, segment1_a)
            return point1, point2
        if dot(direction1, segment2_b - segment1_a) > -EPSILON:
            return _segment_segment_collinear(segment1_a, segment1_b, segment2_b)
        point2, point1 = _segment_segment_collinear(segment2_b, segment2_a, segment1_a)
        return point1, point2

    distance1 = perp_dot2 / denominator
    distance2 = perp_dot1 / denominator
    if (
        distance1 < -EPSILON
        or distance1 > segment1_length + EPSILON
        or distance2 < -EPSILON
        or distance2 > segment2_length + EPSILON
    ):
        if dot(direction1, direction2) > 0.0:
            from_1a_to_2b = segment2_b - segment1_a
        else:
            segment2_a, segment2_b = segment2_b, segment2_a
            direction2 = -direction2
            from_1a_to_2b = -from_2a_to_1a
            from_2a_to_1a = segment1_a - segment2_a
            distance2 = segment2_length - distance2
        segment2a_projection = -dot(direction1, from_2a_to_1a)
        segment2b_projection = dot(direction1, from_1a_to_2b)
        a_after_1a = segment2a_projection > -EPSILON
        b_before_1b = segment2b_projection < segment1_length + EPSILON
        a_on_segment1 = a_after_1a and segment2a_projection < segment1_length + EPSILON
        b_on_segment1 = segment2b_projection > -EPSILON and b_before_1b

        def _onto_segment2(segment1_point: Coord) -> PointPair:
            projection = dot(direction2, segment1_point - segment2_a)
            projection = min(max(projection, 0.0), segment2_length)
            return segment1_point.copy(), segment2_a + direction2 * projection

        if a_on_segment1 and b_on_segment1:
            if distance2 < -EPSILON:
                return segment1_a + direction1 * segment2a_projection, segment2_a.copy()
            return segment1_a + direction1 * segment2b_projection, segment2_b.copy()
        if not a_on_segment1 and not b_on_segment1:
            if not a_after_1a and not b_before_1b:
                return _onto_segment2(segment1_a if distance1 < -EPSILON else segment1_b)
            return _onto_segment2(segment1_b if a_after_1a else segment1_a)
        if a_on_segment1:
            if distance2 < -EPSILON:
                return segment1_a + direction1 * segment2a_projection, segment2_a.copy()
            return _onto_segment2(segment1_b)
        if distance2 > segment2_length + EPSILON:
            return segment1_a + direction1 * segment2b_projection, segment2_b.copy()
        return _onto_segment2(segment1_a)

    point = segment1_a + direction1 * distance1
    return point, point.copy()


def segment_circle(
    segment_a: Sequence[float], segment_b: Sequence[float], center: Sequence[float], radius: float
) -> PointPair:
    segment_a, segment_b, center = _args(segment_a, segment_b, center)
    segment_a_to_center = center - segment_a
    from_a_to_b = segment_b - segment_a
    segment_length = magnitude(from_a_to_b)
    if segment_length < EPSILON:
        if abs(magnitude(segment_a_to_center) - radius) < EPSILON:
            return segment_a.copy(), segment_a.copy()
        return segment_a.copy(), point_circle(segment_a, center, radius)

    def _from_a() -> PointPair:
        return segment_a.copy(), center - normalized(segment_a_to_center) * radius

    def _from_b() -> PointPair:
        return segment_b.copy(), center - normalized(center - segment_b) * radius

    segment_direction = from_a_to_b / segment_length
    center_projection = dot(segment_direction, segment_a_to_center)
    if center_projection + radius < -EPSILON or center_projection - radius > segment_length + EPSILON:
        return _from_a() if center_projection < 0.0 else _from_b()

    sqr_distance_to_line = sqr_magnitude(segment_a_to_center) - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        if center_projection < -EPSILON:
            return _from_a()
        if center_projection > segment_length + EPSILON:
            return _from_b()
        segment_point = segment_a + segment_direction * center_projection
        return segment_point, center + normalized(segment_point - center) * radius
    if sqr_distance_to_intersection < EPSILON:
        if center_projection < -EPSILON:
            return _from_a()
        if center_projection > segment_length + EPSILON:
            return _from_b()
        point = segment_a + segment_direction * center_projection
        return point, point.copy()

    distance_to_intersection = math.sqrt(sqr_distance_to_intersection)
    distance_a = center_projection - distance_to_intersection
    distance_b = center_projection + distance_to_intersection
    a_after_start = distance_a > -EPSILON
    b_before_end = distance_b < segment_length + EPSILON
    if a_after_start and b_before_end:
        point = segment_a + segment_direction * distance_a
        return point, point.copy()
    if not a_after_start and not b_before_end:
        # The segment lies inside the circle
        if distance_a > -(distance_b - segment_length):
            return segment_a.copy(), segment_a + segment_direction * distance_a
        return segment_b.copy(), segment_a + segment_direction * distance_b
    if a_after_start and distance_a < segment_length + EPSILON:
        point = segment_a + segment_direction * distance_a
        return point, point.copy()
    if distance_b > -EPSILON and b_before_end:
        point = segment_a + segment_direction * distance_b
        return point, point.copy()
    return _from_a() if center_projection < 0.0 else _from_b()


segment_sphere = segment_circle


def circle_circle(
    center_a: Sequence[float], radius_a: float, center_b: Sequence[float], radius_b: float
) -> PointPair:
    center_a, center_b = _args(center_a, center_b)
    from_b_to_a = normalized(center_a - center_b)
    return center_a - from_b_to_a * radius_a, center_b + from_b_to_a * radius_b


sphere_sphere = circle_circle


# ---------------------------------------------------------------------------
# 3D lines
# ---------------------------------------------------------------------------


def line_line_3d(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> PointPair:
    """Closest pair of two 3D lines from the 2x2 normal equations."""

    origin_a, direction_a, origin_b, direction_b = _args(origin_a, direction_a, origin_b, direction_b)
    sqr_magnitude_a = sqr_magnitude(direction_a)
    sqr_magnitude_b = sqr_magnitude(direction_b)
    dot_ab = dot(direction_a, direction_b)
    denominator = sqr_magnitude_a * sqr_magnitude_b - dot_ab * dot_ab
    origin_b_to_a = origin_a - origin_b
    a = dot(direction_a, origin_b_to_a)
    b = dot(direction_b, origin_b_to_a)
    if abs(denominator) < EPSILON:
        # Parallel: divide by whichever term is better conditioned
        if sqr_magnitude_b < EPSILON and abs(dot_ab) < EPSILON:
            logger.warning("Line direction %s is degenerate, using its origin", direction_b.tolist())
            return origin_a.copy(), origin_b.copy()
        distance_b = a / dot_ab if dot_ab > sqr_magnitude_b else b / sqr_magnitude_b
        return origin_a.copy(), origin_b + direction_b * distance_b
    distance_a = (dot_ab * b - sqr_magnitude_b * a) / denominator
    distance_b = (sqr_magnitude_a * b - dot_ab * a) / denominator
    return origin_a + direction_a * distance_a, origin_b + direction_b * distance_b


apply_debug_logging(globals(), logger=logger)
