"""
Application configuration and service wiring.

Parses the command line, configures logging and builds the object graph used
by the lookup operations (fetcher, store, normalizer, resolver).
"""

from __future__ import annotations
import argparse
import logging
from typing import List, NamedTuple, Optional, Sequence

from .. import __version__
from ..config import settings
from ..logging_setup import setup_logging
from ..services.csv_fetcher import CsvFetcher
from ..services.data_store import DataStore
from ..services.status_normalizer import StatusNormalizer
from ..services.tracking_resolver import TrackingResolver
from ..utils.diagnostics import log_diagnostic


class AppConfig(NamedTuple):
    """
    Configuration parsed from CLI arguments.

    Attributes:
        tracking_numbers (List[str]): Numbers to look up, in order
        as_json (bool): Print one JSON object per lookup instead of a card
        log_level (str): Logging level name
    """
    tracking_numbers: List[str]
    as_json: bool
    log_level: str


class ServiceContainer(NamedTuple):
    """
    Initialized services.

    Attributes:
        fetcher (CsvFetcher): HTTP download of CSV exports
        store (DataStore): Cached orders and batches
        normalizer (StatusNormalizer): Status scale mapping
        resolver (TrackingResolver): Lookup entry point
    """
    fetcher: CsvFetcher
    store: DataStore
    normalizer: StatusNormalizer
    resolver: TrackingResolver


def parse_command_line_arguments(argv: Optional[Sequence[str]] = None) -> AppConfig:
    """
    Parse command line arguments.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        AppConfig: Parsed configuration

    Raises:
        SystemExit: If the arguments are invalid
    """
    parser = argparse.ArgumentParser(
        prog="parcel-tracker",
        description="Look up parcels in the published orders and batches sheets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ABC123
  %(prog)s ABC123 XYZ789 --json
        """
    )

    parser.add_argument(
        "tracking_numbers",
        nargs="+",
        metavar="TRACKING_NUMBER",
        help="One or more tracking numbers"
    )

    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print results as JSON lines"
    )

    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Logging level (default: {settings.log_level})"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    return AppConfig(
        tracking_numbers=list(args.tracking_numbers),
        as_json=args.as_json,
        log_level=args.log_level,
    )


def initialize_application(config: AppConfig) -> None:
    """Configure logging and record the data sources in use."""
    setup_logging(config.log_level, settings.log_dir)
    logging.info("Parcel tracker %s starting", __version__)
    logging.debug("Orders CSV: %s", settings.orders_csv_url)
    logging.debug("Batches CSV: %s", settings.batches_csv_url)


def create_service_container() -> ServiceContainer:
    """
    Build all services from the current settings.

    Returns:
        ServiceContainer: Container with every service initialized
    """
    fetcher = CsvFetcher(
        timeout=settings.http_timeout,
        retries=settings.fetch_retries,
        cache_bust_param=settings.cache_bust_param,
    )
    store = DataStore(fetcher.fetch, settings.orders_csv_url, settings.batches_csv_url)
    normalizer = StatusNormalizer(on_unrecognized=log_diagnostic)
    resolver = TrackingResolver(store, normalizer, on_diagnostic=log_diagnostic)
    logging.debug("Services initialized")
    return ServiceContainer(
        fetcher=fetcher,
        store=store,
        normalizer=normalizer,
        resolver=resolver,
    )
