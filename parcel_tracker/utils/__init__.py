"""
Utilities shared across the parcel tracker.

Modules:
    - constants: header variants, status scale and transport defaults
    - diagnostics: observability hook and event types
    - errors: exception hierarchy
    - retry: retry decorator with exponential backoff
"""

from .constants import (
    ColumnHeaders,
    StatusValues,
    FetchConfig,
    LogConfig,
    Messages,
)
from .diagnostics import DiagnosticEvent, DiagnosticHook, log_diagnostic
from .errors import TrackerError, TransportError, DataIntegrityError
from .retry import retry

__all__ = [
    # Constants
    "ColumnHeaders",
    "StatusValues",
    "FetchConfig",
    "LogConfig",
    "Messages",

    # Diagnostics
    "DiagnosticEvent",
    "DiagnosticHook",
    "log_diagnostic",

    # Errors
    "TrackerError",
    "TransportError",
    "DataIntegrityError",

    "retry",
]
