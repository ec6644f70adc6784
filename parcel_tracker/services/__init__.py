"""
Tracking pipeline services.

CSV download and parsing, header resolution, the cached datasets, status
normalization and the lookup that ties them together.
"""

from .csv_parser import CsvParser, Row
from .field_resolver import FieldResolver
from .csv_fetcher import CsvFetcher
from .data_store import DataStore
from .status_normalizer import ProgressInfo, StatusNormalizer
from .tracking_resolver import (
    OutcomeKind,
    TrackingOutcome,
    TrackingResolver,
    TrackingResult,
    outcome_to_dict,
)

__all__ = [
    "CsvParser",
    "Row",
    "FieldResolver",
    "CsvFetcher",
    "DataStore",
    "ProgressInfo",
    "StatusNormalizer",
    "OutcomeKind",
    "TrackingOutcome",
    "TrackingResolver",
    "TrackingResult",
    "outcome_to_dict",
]
