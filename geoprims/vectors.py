"""Small numpy vector helpers used across the geometry modules."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

Vector = np.ndarray


def as_vector(value: Sequence[float], dim: Optional[int] = None) -> Vector:
    arr = np.asarray(value, dtype=float)
    if arr.ndim != 1:
        raise ValueError("vector must be one-dimensional")
    if dim is not None and arr.shape != (dim,):
        raise ValueError(f"vector must be length-{dim}")
    return arr


def dot(a: Vector, b: Vector) -> float:
    return float(np.dot(a, b))


def sqr_magnitude(vec: Vector) -> float:
    return float(np.dot(vec, vec))


def magnitude(vec: Vector) -> float:
    return math.sqrt(sqr_magnitude(vec))


def normalized(vec: Vector) -> Vector:
    """Unit vector along ``vec``; near-zero input yields a zero vector."""

    vec = np.asarray(vec, dtype=float)
    norm = magnitude(vec)
    if norm <= 1e-12:
        return np.zeros_like(vec)
    return vec / norm


def perp_dot(a: Vector, b: Vector) -> float:
    """2D cross product ``a.x*b.y - a.y*b.x``."""

    return float(a[0] * b[1] - a[1] * b[0])


def rotate_cw90(vec: Vector) -> Vector:
    return np.array([vec[1], -vec[0]], dtype=float)


def rotate_ccw90(vec: Vector) -> Vector:
    return np.array([-vec[1], vec[0]], dtype=float)


def rotate_ccw(vec: Vector, degrees: float) -> Vector:
    radians = math.radians(degrees)
    cos_r = math.cos(radians)
    sin_r = math.sin(radians)
    return np.array(
        [
            vec[0] * cos_r - vec[1] * sin_r,
            vec[0] * sin_r + vec[1] * cos_r,
        ],
        dtype=float,
    )


def rotate_cw(vec: Vector, degrees: float) -> Vector:
    return rotate_ccw(vec, -degrees)


def signed_angle(from_vec: Vector, to_vec: Vector) -> float:
    """Signed angle in degrees, positive when ``to_vec`` is clockwise from ``from_vec``."""

    return math.degrees(math.atan2(perp_dot(to_vec, from_vec), dot(to_vec, from_vec)))


def angle360(from_vec: Vector, to_vec: Vector) -> float:
    """Clockwise angle from ``from_vec`` to ``to_vec`` in ``[0, 360)`` degrees."""

    angle = signed_angle(from_vec, to_vec)
    if angle < 0.0:
        angle += 360.0
    return angle


def to_vector2(vec: Vector) -> Vector:
    return np.array([vec[0], vec[1]], dtype=float)


def to_vector3(vec: Vector, z: float = 0.0) -> Vector:
    return np.array([vec[0], vec[1], z], dtype=float)


def clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)
