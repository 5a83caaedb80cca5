"""A one-line-per-query text format for running pair operations.

Each non-blank line is ``<operation> <shape> <shape>``::

    intersect segment(0 0, 4 0) segment(2 0, 6 0)
    distance line(0 0, 1 0) line(0 1, 1 0)
    closest point(3 4) circle(0 0, 1)

Vectors are whitespace-separated numbers (two or three of them); shape
arguments are separated by commas. ``#`` starts a comment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from . import pairs
from .config import get_format_config
from .intersection import Intersection, IntersectionType
from .lexer import Token, tokenize_line
from .primitives import Circle2, Line2, Line3, Ray2, Ray3, Segment2, Segment3, Sphere

logger = logging.getLogger(__name__)

OPERATIONS: Dict[str, Callable[[Any, Any], Any]] = {
    'intersect': pairs.intersect,
    'distance': pairs.distance,
    'closest': pairs.closest_points,
}


@dataclass(frozen=True, eq=False)
class Query:
    operation: str
    first: Any
    second: Any
    line: int = 1


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self):
        return self.toks[self.i] if self.i < len(self.toks) else None

    def match(self, *types: str):
        if self.i < len(self.toks) and self.toks[self.i][0] in types:
            t = self.toks[self.i]
            self.i += 1
            return t
        return None

    def expect(self, *types: str):
        t = self.peek()
        if t and t[0] in types:
            self.i += 1
            return t
        want = '|'.join(types)
        if t:
            raise SyntaxError(f'[line {t[2]}, col {t[3]}] expected {want}, got {t[0]}')
        raise SyntaxError(f'Unexpected end of line: expected {want}')


def parse_vector(cur: Cursor) -> Tuple[np.ndarray, Token]:
    first = cur.expect('NUMBER')
    values = [float(first[1])]
    while True:
        t = cur.match('NUMBER')
        if not t:
            break
        values.append(float(t[1]))
    if len(values) not in (2, 3):
        raise SyntaxError(
            f'[line {first[2]}, col {first[3]}] vectors need 2 or 3 components, got {len(values)}'
        )
    return np.array(values, dtype=float), first


def parse_scalar(cur: Cursor) -> float:
    t = cur.expect('NUMBER')
    return float(t[1])


def _same_dim(name: str, tok: Token, *vectors: np.ndarray) -> int:
    dims = {v.shape[0] for v in vectors}
    if len(dims) != 1:
        raise SyntaxError(f'[line {tok[2]}, col {tok[3]}] {name} mixes 2D and 3D vectors')
    return dims.pop()


def _parse_two_vectors(cur: Cursor, name: str, tok: Token) -> Tuple[np.ndarray, np.ndarray, int]:
    a, _ = parse_vector(cur)
    cur.expect('COMMA')
    b, _ = parse_vector(cur)
    return a, b, _same_dim(name, tok, a, b)


def _parse_round(cur: Cursor, name: str, tok: Token, dim: int) -> Tuple[np.ndarray, float]:
    center, center_tok = parse_vector(cur)
    if center.shape[0] != dim:
        raise SyntaxError(
            f'[line {center_tok[2]}, col {center_tok[3]}] {name} center must have {dim} components'
        )
    cur.expect('COMMA')
    return center, parse_scalar(cur)


def parse_shape(cur: Cursor):
    tok = cur.expect('ID')
    name = tok[1].lower()
    cur.expect('LPAREN')
    if name == 'point':
        shape, _ = parse_vector(cur)
    elif name in ('line', 'ray', 'segment'):
        a, b, dim = _parse_two_vectors(cur, name, tok)
        kinds = {
            'line': (Line2, Line3),
            'ray': (Ray2, Ray3),
            'segment': (Segment2, Segment3),
        }
        two_d, three_d = kinds[name]
        shape = (two_d if dim == 2 else three_d)(a, b)
    elif name == 'circle':
        center, radius = _parse_round(cur, name, tok, 2)
        shape = Circle2(center, radius)
    elif name == 'sphere':
        center, radius = _parse_round(cur, name, tok, 3)
        shape = Sphere(center, radius)
    else:
        raise SyntaxError(f'[line {tok[2]}, col {tok[3]}] unknown shape {tok[1]!r}')
    cur.expect('RPAREN')
    return shape


def parse_query(text: str, line_no: int = 1) -> Query:
    tokens = tokenize_line(text, line_no)
    if not tokens:
        raise SyntaxError(f'[line {line_no}, col 1] empty query')
    cur = Cursor(tokens)
    op = cur.expect('ID')
    operation = op[1].lower()
    if operation not in OPERATIONS:
        raise SyntaxError(
            f"[line {op[2]}, col {op[3]}] unknown operation {op[1]!r}, expected one of {sorted(OPERATIONS)}"
        )
    first = parse_shape(cur)
    second = parse_shape(cur)
    extra = cur.peek()
    if extra:
        raise SyntaxError(f'[line {extra[2]}, col {extra[3]}] unexpected {extra[0]} after query')
    return Query(operation, first, second, line_no)


def parse_queries(text: str) -> List[Query]:
    queries: List[Query] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        if not tokenize_line(raw, line_no):
            continue
        queries.append(parse_query(raw, line_no))
    logger.info("Parsed %d quer%s", len(queries), "y" if len(queries) == 1 else "ies")
    return queries


def run_query(query: Query):
    """Run a parsed query through :mod:`geoprims.pairs`."""

    logger.debug("Running %s on line %d", query.operation, query.line)
    return OPERATIONS[query.operation](query.first, query.second)


def _format_number(value: float, precision: int) -> str:
    text = f'{value:.{precision}f}'
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text


def _format_vector(vec: np.ndarray, precision: int) -> str:
    return '(' + ' '.join(_format_number(float(v), precision) for v in vec) + ')'


def _format_intersection(result: Intersection, precision: int) -> str:
    kind = result.kind
    if kind is IntersectionType.NONE:
        return 'none (contained)' if result.success else 'none'
    name = kind.name.lower()
    if kind in (IntersectionType.POINT, IntersectionType.TWO_POINTS, IntersectionType.SEGMENT):
        return ' '.join([name] + [_format_vector(p, precision) for p in result.points])
    if kind in (IntersectionType.LINE, IntersectionType.RAY):
        parts = [name, _format_vector(result.point_a, precision)]
        if result.direction is not None:
            parts += ['dir', _format_vector(result.direction, precision)]
        return ' '.join(parts)
    parts = [name]
    if result.point_a is not None:
        parts += ['center', _format_vector(result.point_a, precision)]
    if result.radius is not None:
        parts += ['radius', _format_number(result.radius, precision)]
    if result.normal is not None:
        parts += ['normal', _format_vector(result.normal, precision)]
    return ' '.join(parts)


def format_result(result, precision: Optional[int] = None) -> str:
    """Render a query result on one line."""

    if precision is None:
        precision = get_format_config().precision
    if isinstance(result, Intersection):
        return _format_intersection(result, precision)
    if isinstance(result, tuple):
        return ' '.join(_format_vector(p, precision) for p in result)
    return _format_number(float(result), precision)
