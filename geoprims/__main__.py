import argparse
import logging
import sys
from typing import List, Optional, Sequence

from geoprims import (
    FormatConfig,
    Query,
    format_result,
    parse_queries,
    run_query,
    set_format_config,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _collect_queries(paths: Sequence[str], expressions: Sequence[str]) -> List[Query]:
    queries: List[Query] = []
    for path in paths:
        logger.info("Reading queries from %s", path)
        with open(path) as fin:
            queries.extend(parse_queries(fin.read()))
    for expr in expressions:
        queries.extend(parse_queries(expr))
    return queries


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run geometry primitive queries")
    parser.add_argument("paths", nargs="*", help="Query files, one query per line")
    parser.add_argument(
        "-e",
        "--expr",
        action="append",
        default=[],
        help="Query text to run; may be given several times",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=6,
        help="Digits after the decimal point in printed results (default: 6)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    if args.precision < 0:
        parser.error("--precision must be non-negative")
    set_format_config(FormatConfig(precision=args.precision))

    if not args.paths and not args.expr:
        parser.error("no queries given; pass query files or --expr")

    try:
        queries = _collect_queries(args.paths, args.expr)
    except SyntaxError as exc:
        logger.error("Failed to parse queries: %s", exc)
        raise SystemExit(1)

    for query in queries:
        try:
            result = run_query(query)
        except TypeError as exc:
            logger.error("[line %d] %s", query.line, exc)
            raise SystemExit(1)
        print(format_result(result))


if __name__ == "__main__":
    main(sys.argv[1:])
