"""Exceptions raised inside the tracking pipeline."""

from __future__ import annotations
from typing import Optional


class TrackerError(Exception):
    """Base class for parcel tracker failures."""


class TransportError(TrackerError):
    """A CSV export could not be downloaded."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DataIntegrityError(TrackerError):
    """An order references a batch that does not exist in the batches sheet."""

    def __init__(self, tracking_number: str, batch_id: str):
        super().__init__(
            f"Batch '{batch_id}' referenced by order '{tracking_number}' not found")
        self.tracking_number = tracking_number
        self.batch_id = batch_id
