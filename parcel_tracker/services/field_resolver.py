"""
Column lookup tolerant of how spreadsheet headers are spelled.

Headers like "Tracking_Number", "tracking number" and "TRACKINGNUMBER" all
refer to the same column. Exact resolution compares normalized names; fuzzy
resolution accepts any header containing one of the given tokens.
"""

from __future__ import annotations
from typing import Iterable, Mapping, Optional
import re

_WHITESPACE = re.compile(r"\s+")


class FieldResolver:
    """Pure helpers to read a row value by any of several header names."""

    @staticmethod
    def normalize_key(key: Optional[str]) -> str:
        """Lowercase and drop whitespace, underscores and non-breaking spaces."""
        text = str(key or "").lower()
        text = _WHITESPACE.sub("", text)
        return text.replace("_", "").replace("\u00a0", "")

    @classmethod
    def get_field(cls, row: Optional[Mapping[str, str]], candidates: Iterable[str]) -> str:
        """
        Return the value of the first candidate header present in the row.

        Args:
            row: Parsed CSV row (may be None)
            candidates: Accepted header names, in priority order

        Returns:
            str: Trimmed cell value, or "" when no candidate matches
        """
        if not row:
            return ""
        by_norm = {}
        for header in row:
            by_norm[cls.normalize_key(header)] = header
        for candidate in candidates:
            header = by_norm.get(cls.normalize_key(candidate))
            if header is not None:
                return str(row[header] or "").strip()
        return ""

    @classmethod
    def get_field_fuzzy(cls, row: Optional[Mapping[str, str]], include_tokens: Iterable[str]) -> str:
        """
        Return the value of the first header (in row order) containing any token.

        Empty tokens are ignored, otherwise they would match every header.
        """
        if not row:
            return ""
        tokens = [t for t in (cls.normalize_key(tok) for tok in include_tokens) if t]
        for header, value in row.items():
            norm = cls.normalize_key(header)
            if any(t in norm for t in tokens):
                return str(value or "").strip()
        return ""

    @classmethod
    def resolve(
        cls,
        row: Optional[Mapping[str, str]],
        candidates: Iterable[str],
        fuzzy_tokens: Iterable[str] = (),
    ) -> str:
        """Exact lookup first; fuzzy lookup only when the exact one yields nothing."""
        return cls.get_field(row, candidates) or cls.get_field_fuzzy(row, fuzzy_tokens)
