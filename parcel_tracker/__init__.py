"""Parcel tracking lookups over published spreadsheet CSV exports."""

__version__ = "1.0.0"
