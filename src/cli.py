from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

import structlog
from dotenv import load_dotenv

from config.loader import (
    get_data_path,
    get_default_year_floor,
    get_page_size,
)
from engine.facets import build_facets
from explorer.dataset import RegulationDataset
from models.criteria import FilterCriteria, MatchMode, default_match_mode
from utils.error_handler import (
    DatasetNotFoundError,
    ExplorerError,
    InvalidPageSizeError,
    RegulationNotFoundError,
    exit_with_error,
)
from views.cards import RegulationCard
from views.detail import RegulationDetail


logger = logging.getLogger(__name__)

DATA_ENV_VAR = "REGULATION_EXPLORER_DATA"
COMMANDS = ("search", "show", "facets")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        dest="input_path",
        default="",
        help=f"Path to the regulations CSV export (default: ${DATA_ENV_VAR} or config explorer.data_path)",
    )

    parser.add_argument(
        "--output",
        dest="output_path",
        default="",
        help="Optional output JSON file path. If not set, prints to stdout.",
    )

    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=os.getenv("REGULATION_EXPLORER_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    parser.add_argument(
        "--dotenv",
        dest="dotenv_path",
        default=".env",
        help="Path to .env file to load (default: .env at repo root)",
    )


def build_search_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regulation-explorer search",
        description="Filter the regulations export and print one page of results",
    )
    _add_common_arguments(parser)

    parser.add_argument("--search", default="", help="Free-text search term (case-insensitive)")

    for flag, dest, label in (
        ("--obligation", "obligations", "obligation"),
        ("--authority", "authorities", "authority"),
        ("--applicability", "applicabilities", "applicability"),
        ("--region", "regions", "region"),
        ("--country", "countries", "country"),
        ("--sector", "sectors", "sector"),
        ("--env-tag", "environmental_tags", "environmental tag"),
        ("--social-tag", "social_tags", "social tag"),
        ("--gov-tag", "governance_tags", "governance tag"),
    ):
        parser.add_argument(
            flag,
            dest=dest,
            action="append",
            default=[],
            help=f"Selected {label}; repeat to select several",
        )

    parser.add_argument("--employee-count", dest="employee_count", default="", help="Your employee count")
    parser.add_argument("--turnover", default="", help="Your annual turnover")
    parser.add_argument("--balance-sheet", dest="balance_sheet", default="", help="Your balance sheet total")

    parser.add_argument(
        "--extra-jurisdictional",
        dest="extra_jurisdictional",
        choices=["Yes", "No"],
        default=None,
        help="Only regulations that do (Yes) or do not (No) apply outside their jurisdiction",
    )

    parser.add_argument(
        "--year-from",
        dest="year_from",
        type=int,
        default=None,
        help="Earliest publication year (default: config filters.year_floor)",
    )

    parser.add_argument(
        "--year-to",
        dest="year_to",
        type=int,
        default=None,
        help="Latest publication year (default: current year)",
    )

    parser.add_argument(
        "--exact-match",
        dest="exact_match",
        action="store_true",
        help="Compare tags and Yes/No values as whole labels instead of substrings",
    )

    parser.add_argument("--page", type=int, default=1, help="Page number (1-based)")

    parser.add_argument(
        "--page-size",
        dest="page_size",
        type=int,
        default=None,
        help="Results per page (default: config explorer.page_size)",
    )

    return parser


def build_show_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regulation-explorer show",
        description="Print the detail view of one regulation",
    )
    parser.add_argument("meta_id", help="Regulation id, e.g. reg/0001")
    _add_common_arguments(parser)
    return parser


def build_facets_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regulation-explorer facets",
        description="Print the option lists available to each filter",
    )
    _add_common_arguments(parser)
    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regulation-explorer",
        description="Explore the ESG regulations export from the command line",
    )
    parser.add_argument("command", choices=COMMANDS, help="Command to run")
    return parser


def _configure_logging(log_level: str) -> None:
    level = getattr(logging, str(log_level).upper(), logging.WARNING)
    logging.basicConfig(level=level)

    # Route structlog events through stdlib logging so stdout stays clean for JSON output.
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    logging.getLogger().setLevel(level)


def _resolve_input(input_path: str) -> Path:
    return Path(input_path or os.getenv(DATA_ENV_VAR) or get_data_path())


def _load_dataset(input_path: str, page_size: Optional[int] = None) -> RegulationDataset:
    path = _resolve_input(input_path)
    if not path.exists():
        raise DatasetNotFoundError(str(path))
    return RegulationDataset.from_file(path, page_size=page_size)


def _write_payload(payload: dict[str, Any], output_path: str = "") -> None:
    text = json.dumps(payload, indent=2)
    if not output_path:
        print(text)
        return
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(text, encoding="utf-8")
    logger.info("[output] wrote=%s", str(output_file))


def criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    mode = MatchMode.EXACT if args.exact_match else default_match_mode()

    year_from = args.year_from if args.year_from is not None else get_default_year_floor()
    year_to = args.year_to if args.year_to is not None else date.today().year

    return FilterCriteria(
        search=args.search,
        obligations=args.obligations,
        authorities=args.authorities,
        applicabilities=args.applicabilities,
        regions=args.regions,
        countries=args.countries,
        sectors=args.sectors,
        environmental_tags=args.environmental_tags,
        social_tags=args.social_tags,
        governance_tags=args.governance_tags,
        employee_count=args.employee_count,
        turnover=args.turnover,
        balance_sheet=args.balance_sheet,
        extra_jurisdictional=args.extra_jurisdictional,
        year_range=(year_from, year_to),
        match_mode=mode,
    )


def run_search(args: argparse.Namespace) -> int:
    criteria = criteria_from_args(args)
    page_size = args.page_size if args.page_size is not None else get_page_size()
    if page_size < 1:
        raise InvalidPageSizeError(page_size)

    logger.info("[plan] Regulation search")
    logger.info("[plan] - Load and parse the export")
    logger.info("[plan] - Apply %s active filters", criteria.active_filter_count())
    logger.info("[plan] - Return page %s (size %s)", args.page, page_size)

    dataset = _load_dataset(args.input_path, page_size=page_size)
    dataset.apply(criteria)
    page = dataset.page(args.page)

    logger.info(
        "[run] input=%s total=%s matched=%s page=%s/%s",
        str(dataset.source),
        len(dataset.regulations),
        page.total_items,
        page.page,
        page.total_pages,
    )

    payload = {
        "criteria": criteria.model_dump(mode="json"),
        "active_filters": criteria.active_filter_count(),
        "summary": page.summary(),
        "page": page.page,
        "page_size": page.page_size,
        "total_pages": page.total_pages,
        "total_items": page.total_items,
        "results": [RegulationCard.from_regulation(reg).model_dump() for reg in page.items],
    }
    _write_payload(payload, args.output_path)
    return 0


def run_show(args: argparse.Namespace) -> int:
    dataset = _load_dataset(args.input_path)
    reg = dataset.find(args.meta_id)
    if reg is None:
        raise RegulationNotFoundError(args.meta_id)

    detail = RegulationDetail.from_regulation(reg, dataset.regulations)
    _write_payload(detail.model_dump(mode="json"), args.output_path)
    return 0


def run_facets(args: argparse.Namespace) -> int:
    dataset = _load_dataset(args.input_path)
    _write_payload(build_facets(dataset.regulations), args.output_path)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    argv_list = list(argv) if argv is not None else sys.argv[1:]

    if not argv_list or argv_list[0] not in COMMANDS:
        # Prints usage and exits with status 2
        build_parser().parse_args(argv_list[:1])

    command = argv_list[0]
    builders = {
        "search": (build_search_parser, run_search),
        "show": (build_show_parser, run_show),
        "facets": (build_facets_parser, run_facets),
    }
    build, run = builders[command]
    args = build().parse_args(argv_list[1:])

    _configure_logging(args.log_level)
    load_dotenv(args.dotenv_path)

    try:
        return run(args)
    except ExplorerError as e:
        return exit_with_error(e, context=command)


if __name__ == "__main__":
    raise SystemExit(main())
