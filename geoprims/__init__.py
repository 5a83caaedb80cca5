from . import closest, distance, geometry, intersect, intersect3d, pairs
from .constants import EPSILON, EPSILON_SQUARED, GOLDEN_ANGLE
from .intersection import Intersection, IntersectionType
from .primitives import (
    Line2,
    Line3,
    Ray2,
    Ray3,
    Segment2,
    Segment3,
    Circle2,
    Circle3,
    Sphere,
)
from .pairs import closest_points
from .config import FormatConfig, get_format_config, set_format_config
from .query import Query, parse_query, parse_queries, run_query, format_result

__all__ = [
    'closest',
    'distance',
    'geometry',
    'intersect',
    'intersect3d',
    'pairs',
    'EPSILON',
    'EPSILON_SQUARED',
    'GOLDEN_ANGLE',
    'Intersection',
    'IntersectionType',
    'Line2',
    'Line3',
    'Ray2',
    'Ray3',
    'Segment2',
    'Segment3',
    'Circle2',
    'Circle3',
    'Sphere',
    'closest_points',
    'FormatConfig',
    'get_format_config',
    'set_format_config',
    'Query',
    'parse_query',
    'parse_queries',
    'run_query',
    'format_result',
]
