"""
Diagnostic events emitted by the tracking pipeline.

The pipeline does not decide where warnings end up. Components receive a
hook (any callable taking a DiagnosticEvent) and the application chooses what
to do with it; log_diagnostic is the default and writes to the log.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict
import logging


UNRECOGNIZED_STATUS = "unrecognized_status"
DATE_MISSING = "date_missing"
BATCH_MISSING = "batch_missing"
LOAD_FAILED = "load_failed"


@dataclass(frozen=True)
class DiagnosticEvent:
    """
    A single diagnostic emitted during a lookup.

    Attributes:
        name (str): Event identifier, one of the module constants
        message (str): Human-readable description for logs
        context (Dict[str, Any]): Extra data useful for diagnosis
    """
    name: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


DiagnosticHook = Callable[[DiagnosticEvent], None]


def log_diagnostic(event: DiagnosticEvent) -> None:
    """Default hook: log the event as a warning, or an error for load failures."""
    level = logging.ERROR if event.name == LOAD_FAILED else logging.WARNING
    if event.context:
        logging.log(level, "%s: %s %s", event.name, event.message, event.context)
    else:
        logging.log(level, "%s: %s", event.name, event.message)
