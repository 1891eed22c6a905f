"""
Command-line entry point: cluster line-delimited JSON points from stdin.

Usage:
    geocluster --eps 0.01 --minPts 5 < points.jsonl

Prints a JSON array of clusters to stdout. Exit codes: 0 on success, 1 on
input parse or I/O failure, 2 on invalid parameters.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, List, Optional

# Load environment variables from .env file
from dotenv import load_dotenv

from geocluster.spatial import InvalidParameterError, cluster_points
from geocluster.tools.config_loader import get_config, get_dbscan_config, get_log_level
from geocluster.tools.records import RecordError, read_points, write_clusters


logger = logging.getLogger("geocluster")

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_INVALID_PARAMS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geocluster",
        description="DBSCAN clustering of line-delimited JSON geo points.",
    )
    parser.add_argument(
        "--eps",
        type=float,
        default=None,
        help="neighborhood radius in coordinate units (default: profile, else 0.01)",
    )
    parser.add_argument(
        "--minPts",
        "--min-pts",
        dest="min_pts",
        type=int,
        default=None,
        help="minimum number of points per core neighborhood (default: profile, else 5)",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="configuration profile under geocluster/configs/ (default: $GEOCLUSTER_PROFILE or 'default')",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level for stderr output (default: profile, else WARNING)",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[IO] = None,
    stdout: Optional[IO[str]] = None,
) -> int:
    load_dotenv()
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout
    
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INVALID_PARAMS
    
    try:
        profile = get_config(args.profile)
    except FileNotFoundError as exc:
        print(f"geocluster: {exc}", file=sys.stderr)
        return EXIT_INVALID_PARAMS
    
    logging.basicConfig(
        level=(args.log_level or get_log_level(profile)).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    
    config = get_dbscan_config(profile, eps=args.eps, min_pts=args.min_pts)
    try:
        config.validate()
    except InvalidParameterError as exc:
        logger.error("Invalid parameters: %s", exc)
        return EXIT_INVALID_PARAMS
    
    try:
        points = read_points(stdin)
    except (RecordError, OSError) as exc:
        logger.error("Failed to read input: %s", exc)
        return EXIT_INPUT_ERROR
    
    clusters, _diagnostics = cluster_points(points, config)
    
    try:
        write_clusters(clusters, stdout)
    except OSError as exc:
        logger.error("Failed to write output: %s", exc)
        return EXIT_INPUT_ERROR
    
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
