"""Command-line interface for reactorscan."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from reactorscan.config import read_config
from reactorscan.errors import ReactorScanError
from reactorscan.pipeline import run

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reactorscan",
        description="Collect a deduplicated dependency inventory from a Maven reactor.",
    )
    parser.add_argument(
        "project_dir",
        type=Path,
        help="Path to the root module (directory containing pom.xml)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output JSON file path (default: reactorscan-inventory.json)",
    )
    parser.add_argument("--project-token", default=None)
    parser.add_argument(
        "--include",
        action="append",
        dest="includes",
        default=None,
        help="Glob of module artifactIds to scan (repeatable)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        dest="excludes",
        default=None,
        help="Glob of module artifactIds to skip (repeatable)",
    )
    parser.add_argument(
        "--ignored-scope",
        action="append",
        dest="ignored_scopes",
        default=None,
        help="Dependency scope to drop (repeatable, default: test and provided)",
    )
    parser.add_argument(
        "--ignore-pom-modules", action="store_true", default=None
    )
    parser.add_argument(
        "--aggregate-modules",
        action="store_true",
        default=None,
        help="Report all modules as one flat project",
    )
    parser.add_argument(
        "--preserve-module-info",
        action="store_true",
        default=None,
        help="Report all modules as one project, keeping modules as dependency nodes",
    )
    parser.add_argument("--aggregate-name", dest="aggregate_project_name", default=None)
    parser.add_argument("--aggregate-token", dest="aggregate_project_token", default=None)
    parser.add_argument(
        "--ignore-resolution-errors",
        dest="ignore_dependency_resolution_errors",
        action="store_true",
        default=None,
        help="Skip modules whose dependencies cannot be resolved",
    )
    parser.add_argument(
        "--update-empty-project",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report projects that have no dependencies (default: true)",
    )
    parser.add_argument("--skip", action="store_true", default=None)
    parser.add_argument(
        "--fail-on-error",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Exit with status 1 on errors (default: true)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )
    return parser


def _override_fields(args: argparse.Namespace) -> dict:
    names = (
        "project_token",
        "includes",
        "excludes",
        "ignored_scopes",
        "ignore_pom_modules",
        "aggregate_modules",
        "preserve_module_info",
        "aggregate_project_name",
        "aggregate_project_token",
        "ignore_dependency_resolution_errors",
        "update_empty_project",
        "skip",
        "fail_on_error",
    )
    return {name: getattr(args, name) for name in names}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = read_config(args.project_dir).with_overrides(**_override_fields(args))
    except ReactorScanError as e:
        logging.basicConfig(level=logging.WARNING, format="%(message)s")
        logger.error("%s", e)
        return 1

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s%(message)s",
        datefmt=config.time_format,
    )
    logging.getLogger("reactorscan").setLevel(
        logging.DEBUG if args.verbose else logging.INFO
    )

    try:
        run(args.project_dir, config, output=args.output)
    except ReactorScanError as e:
        if config.fail_on_error:
            logger.error("%s", e)
            return 1
        logger.debug("%s", e, exc_info=True)
        logger.error("%s", e)
    return 0


if __name__ == "__main__":
    sys.exit(main())
