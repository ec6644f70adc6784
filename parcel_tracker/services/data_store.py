"""
In-memory store for the orders and batches datasets.

Holds the two parsed CSV exports for the lifetime of the process. Datasets are
loaded on first use, reloaded on demand, and only dropped by an explicit
clear/refresh. A failed download leaves the previous data in place.
"""

from __future__ import annotations
from typing import Awaitable, Callable, List, Optional, Type
import asyncio
import logging

from .csv_parser import CsvParser, Row
from .field_resolver import FieldResolver
from ..utils.constants import ColumnHeaders

FetchCsv = Callable[[str], Awaitable[str]]


class DataStore:
    """
    Cached access to the orders and batches sheets.

    Attributes:
        orders_url (str): CSV export URL of the orders sheet
        batches_url (str): CSV export URL of the batches sheet
    """

    def __init__(
        self,
        fetch_csv: FetchCsv,
        orders_url: str,
        batches_url: str,
        parser: Type[CsvParser] = CsvParser,
        resolver: Type[FieldResolver] = FieldResolver,
    ):
        self._fetch_csv = fetch_csv
        self.orders_url = orders_url
        self.batches_url = batches_url
        self._parser = parser
        self._resolver = resolver
        self._orders: Optional[List[Row]] = None
        self._batches: Optional[List[Row]] = None

    @property
    def orders(self) -> Optional[List[Row]]:
        return self._orders

    @property
    def batches(self) -> Optional[List[Row]]:
        return self._batches

    async def _load(self, url: str, label: str) -> List[Row]:
        text = await self._fetch_csv(url)
        rows = self._parser.parse(text)
        logging.info("Loaded %d %s rows", len(rows), label)
        return rows

    async def ensure_orders_loaded(self, force: bool = False) -> List[Row]:
        """Return the orders, downloading them when forced or not yet loaded."""
        if force or self._orders is None:
            self._orders = await self._load(self.orders_url, "orders")
        return self._orders

    async def ensure_batches_loaded(self, force: bool = False) -> List[Row]:
        """Return the batches, downloading them when forced or not yet loaded."""
        if force or self._batches is None:
            self._batches = await self._load(self.batches_url, "batches")
        return self._batches

    async def reload(self) -> None:
        """Download both datasets concurrently, bypassing the cache."""
        await asyncio.gather(
            self.ensure_orders_loaded(force=True),
            self.ensure_batches_loaded(force=True),
        )

    def clear(self) -> None:
        self._orders = None
        self._batches = None

    async def refresh(self) -> None:
        """Drop the cache and load both datasets again."""
        self.clear()
        await asyncio.gather(self.ensure_orders_loaded(), self.ensure_batches_loaded())
        logging.info("Data refreshed")

    async def find_order_by_tracking(self, tracking_number: str) -> Optional[Row]:
        """
        Find an order by tracking number, ignoring case and surrounding spaces.

        Args:
            tracking_number (str): Number as entered by the user

        Returns:
            Optional[Row]: First matching order, or None
        """
        orders = await self.ensure_orders_loaded()
        wanted = tracking_number.strip().lower()
        for row in orders:
            value = self._resolver.get_field(row, ColumnHeaders.TRACKING_NUMBER)
            if value.lower() == wanted:
                return row
        return None

    async def find_batch_by_id(self, batch_id: str) -> Optional[Row]:
        """Find a batch by exact (case-sensitive) batch id."""
        batches = await self.ensure_batches_loaded()
        wanted = str(batch_id).strip()
        for row in batches:
            if self._resolver.get_field(row, ColumnHeaders.BATCH_ID) == wanted:
                return row
        return None
