"""
Tracking lookup: joins an order with its batch and normalizes the status.

TrackingResolver is the single entry point used by front ends. It always
reloads both sheets before answering so edits in the spreadsheet show up on
the next lookup, and it never raises: every failure is turned into a
TrackingOutcome carrying a short user-facing message, while the cause goes to
the diagnostics hook and the log.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Type
import logging

from .data_store import DataStore
from .field_resolver import FieldResolver
from .status_normalizer import ProgressInfo, StatusNormalizer
from ..utils.constants import ColumnHeaders, Messages
from ..utils.diagnostics import (
    BATCH_MISSING,
    DATE_MISSING,
    LOAD_FAILED,
    DiagnosticEvent,
    DiagnosticHook,
    log_diagnostic,
)
from ..utils.errors import DataIntegrityError, TransportError


@dataclass(frozen=True)
class TrackingResult:
    """
    Display-ready answer for one tracking number.

    Attributes:
        tracking_number (str): Number as entered (trimmed)
        status (str): Canonical status or "" when unknown
        date (str): Batch date exactly as written in the sheet, may be ""
        batch_id (str): Batch the order belongs to
    """
    tracking_number: str
    status: str
    date: str
    batch_id: str

    @property
    def progress(self) -> ProgressInfo:
        return _REFERENCE_SCALE.progress(self.status)

    def to_dict(self) -> Dict[str, str]:
        return {
            "tracking_number": self.tracking_number,
            "status": self.status,
            "date": self.date,
            "batch_id": self.batch_id,
        }


class OutcomeKind(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    ERROR = "error"
    # A newer lookup was issued while this one was running
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class TrackingOutcome:
    """
    Result of TrackingResolver.track.

    Attributes:
        kind (OutcomeKind): What happened
        result (Optional[TrackingResult]): Present for FOUND (and SUPERSEDED
            lookups that had found the parcel)
        message (str): Text safe to show to the end user
        sequence (int): Request number, increasing per track() call
    """
    kind: OutcomeKind
    result: Optional[TrackingResult] = None
    message: str = ""
    sequence: int = 0

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.FOUND


class TrackingResolver:
    """Coordinates DataStore, FieldResolver and StatusNormalizer for a lookup."""

    def __init__(
        self,
        store: DataStore,
        normalizer: Optional[StatusNormalizer] = None,
        on_diagnostic: Optional[DiagnosticHook] = None,
        resolver: Type[FieldResolver] = FieldResolver,
    ):
        self._emit = on_diagnostic or log_diagnostic
        self.store = store
        self.normalizer = normalizer or StatusNormalizer(on_unrecognized=self._emit)
        self._resolver = resolver
        self._sequence = 0

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def is_latest(self, outcome: TrackingOutcome) -> bool:
        return outcome.sequence == self._sequence

    async def track(self, tracking_number: Optional[str]) -> TrackingOutcome:
        """
        Look up a tracking number.

        Args:
            tracking_number (str): Number typed by the user

        Returns:
            TrackingOutcome: FOUND with a result, NOT_FOUND, INVALID for empty
            input, ERROR for load failures or inconsistent data, or SUPERSEDED
            when a newer lookup started before this one finished
        """
        self._sequence += 1
        sequence = self._sequence
        outcome = await self._track(str(tracking_number or "").strip(), sequence)
        if sequence != self._sequence:
            logging.debug(
                "Discarding lookup #%d, #%d is newer", sequence, self._sequence)
            return replace(outcome, kind=OutcomeKind.SUPERSEDED)
        return outcome

    async def _track(self, tracking_number: str, sequence: int) -> TrackingOutcome:
        if not tracking_number:
            return TrackingOutcome(OutcomeKind.INVALID, message=Messages.EMPTY_INPUT, sequence=sequence)

        try:
            await self.store.reload()

            order = await self.store.find_order_by_tracking(tracking_number)
            if order is None:
                logging.info("Tracking number %s not found", tracking_number)
                return TrackingOutcome(OutcomeKind.NOT_FOUND, message=Messages.NOT_FOUND, sequence=sequence)

            batch_id = self._resolver.get_field(order, ColumnHeaders.BATCH_ID)
            # An empty id would match filler rows of the batches sheet
            batch = await self.store.find_batch_by_id(batch_id) if batch_id else None
            if batch is None:
                raise DataIntegrityError(tracking_number, batch_id)

            raw_date = self._resolver.resolve(batch, ColumnHeaders.DATE, ColumnHeaders.DATE_TOKENS)
            raw_status = self._resolver.resolve(batch, ColumnHeaders.STATUS, ColumnHeaders.STATUS_TOKENS)
            if not raw_date:
                self._emit(DiagnosticEvent(
                    DATE_MISSING,
                    "Date not found in batch row",
                    {"batch_id": batch_id, "fields": list(batch.keys())},
                ))

            result = TrackingResult(
                tracking_number=tracking_number,
                status=self.normalizer.normalize(raw_status),
                date=raw_date,
                batch_id=batch_id,
            )
            logging.info(
                "Tracking %s -> batch %s, status '%s'", tracking_number, batch_id, result.status)
            return TrackingOutcome(OutcomeKind.FOUND, result=result, message=Messages.FOUND, sequence=sequence)

        except DataIntegrityError as e:
            self._emit(DiagnosticEvent(
                BATCH_MISSING,
                str(e),
                {"tracking_number": e.tracking_number, "batch_id": e.batch_id},
            ))
            return TrackingOutcome(OutcomeKind.ERROR, message=Messages.BATCH_MISSING, sequence=sequence)
        except TransportError as e:
            self._emit(DiagnosticEvent(
                LOAD_FAILED,
                str(e),
                {"url": e.url, "status_code": e.status_code},
            ))
            return TrackingOutcome(OutcomeKind.ERROR, message=Messages.LOAD_FAILED, sequence=sequence)
        except Exception as e:
            logging.exception("Unexpected error tracking %s: %s", tracking_number, e)
            return TrackingOutcome(OutcomeKind.ERROR, message=Messages.LOAD_FAILED, sequence=sequence)


_REFERENCE_SCALE = StatusNormalizer()


def outcome_to_dict(
    outcome: TrackingOutcome, normalizer: Optional[StatusNormalizer] = None
) -> Dict[str, Any]:
    """
    Plain-data view of an outcome, for JSON output.

    Args:
        outcome (TrackingOutcome): Outcome to convert
        normalizer (Optional[StatusNormalizer]): Scale used for the progress
            percentage, the reference scale when omitted
    """
    scale = normalizer or _REFERENCE_SCALE
    data: Dict[str, Any] = {
        "kind": outcome.kind.value,
        "message": outcome.message,
        "sequence": outcome.sequence,
        "result": None,
    }
    if outcome.result is not None:
        data["result"] = outcome.result.to_dict()
        data["result"]["progress_percent"] = scale.progress(outcome.result.status).percent
    return data
