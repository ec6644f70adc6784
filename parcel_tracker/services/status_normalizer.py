"""
Normalization of batch status text onto the canonical status scale.

Statuses are typed by hand into the batches sheet, so they arrive with stray
non-breaking spaces, doubled spaces or different casing. This module maps
them onto the fixed StatusValues.SCALE and computes the progress stage that
the scale implies. Text outside the scale is not an error: it degrades to an
unknown status and a diagnostic event is emitted.
"""

from __future__ import annotations
from typing import Dict, NamedTuple, Optional, Sequence, Tuple
import re

from ..utils.constants import StatusValues
from ..utils.diagnostics import (
    UNRECOGNIZED_STATUS,
    DiagnosticEvent,
    DiagnosticHook,
    log_diagnostic,
)

_WHITESPACE_RUN = re.compile(r"\s+")


class ProgressInfo(NamedTuple):
    """
    Position of a status on the scale.

    Attributes:
        stage (int): 0-based index on the scale, -1 when unknown
        percent (float): (stage + 1) / len(scale) * 100, 0.0 when unknown
        steps (Tuple[bool, ...]): One flag per scale entry, True up to the stage
    """
    stage: int
    percent: float
    steps: Tuple[bool, ...]


class StatusNormalizer:
    """
    Maps free-text statuses onto a closed, ordered scale.

    Attributes:
        scale (Tuple[str, ...]): Canonical statuses, least to most progress
    """

    def __init__(
        self,
        scale: Sequence[str] = StatusValues.SCALE,
        on_unrecognized: Optional[DiagnosticHook] = None,
    ):
        self.scale: Tuple[str, ...] = tuple(scale)
        self._hook = on_unrecognized or log_diagnostic
        self._lookup: Dict[str, str] = {
            self.clean_value(s).lower(): s for s in self.scale
        }

    @staticmethod
    def clean_value(value: Optional[str]) -> str:
        """Turn NBSP into spaces, collapse whitespace runs and trim."""
        text = str(value or "").replace("\u00a0", " ")
        return _WHITESPACE_RUN.sub(" ", text).strip()

    def normalize(self, external_status: Optional[str]) -> str:
        """
        Return the scale entry matching the status, or "" when there is none.

        Matching is case-insensitive on the cleaned text; the scale's own
        spelling is returned.

        Example:
            >>> StatusNormalizer().normalize("  готов\\u00a0к   выдаче ")
            'Готов к выдаче'
        """
        cleaned = self.clean_value(external_status)
        if not cleaned:
            return StatusValues.UNKNOWN
        match = self._lookup.get(cleaned.lower())
        if match is None:
            self._hook(DiagnosticEvent(
                UNRECOGNIZED_STATUS,
                f"Status not on the scale: '{cleaned}'",
                {"status": cleaned},
            ))
            return StatusValues.UNKNOWN
        return match

    def explain(self, external_status: Optional[str]) -> Dict[str, object]:
        """
        Describe how a status was normalized, for debugging sheet contents.

        Returns:
            Dict with keys:
            - raw (str): Input as given
            - cleaned (str): Input after whitespace cleanup
            - matched (bool): Whether a scale entry matched
            - status (str): Normalized status ("" when unmatched)
            - stage (int): Progress stage, -1 when unmatched
        """
        raw = "" if external_status is None else str(external_status)
        cleaned = self.clean_value(raw)
        status = self._lookup.get(cleaned.lower(), StatusValues.UNKNOWN) if cleaned else StatusValues.UNKNOWN
        return {
            "raw": raw,
            "cleaned": cleaned,
            "matched": bool(status),
            "status": status,
            "stage": self.progress(status).stage,
        }

    def progress(self, status: Optional[str]) -> ProgressInfo:
        """Progress implied by a canonical status (exact scale spelling)."""
        try:
            stage = self.scale.index(status or "")
        except ValueError:
            stage = -1
        percent = (stage + 1) / len(self.scale) * 100 if stage >= 0 and self.scale else 0.0
        steps = tuple(stage >= 0 and i <= stage for i in range(len(self.scale)))
        return ProgressInfo(stage=stage, percent=percent, steps=steps)
