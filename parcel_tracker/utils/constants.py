"""
Constants for the parcel tracker.

Centralizes the header-name variants used to locate columns in the published
spreadsheets, the canonical status scale, and transport defaults. Keeping the
candidate lists here means a new spelling of a column is a data change, not a
logic change.
"""

from __future__ import annotations
from typing import List, Tuple


class ColumnHeaders:
    """
    Accepted header spellings for each logical column.

    Spreadsheets are maintained by hand, in English or Russian, so every
    logical field has several accepted names. Matching is done on the
    normalized form (see FieldResolver.normalize_key).
    """

    TRACKING_NUMBER: List[str] = [
        "tracking_number",
        "tracking",
        "trackingnumber",
        "трек",
        "трекномер",
        "трек-номер",
        "трек номер",
    ]

    BATCH_ID: List[str] = [
        "batch_id",
        "batchid",
        "batch",
        "партия",
        "idпартии",
        "id партии",
    ]

    DATE: List[str] = [
        "date",
        "дата",
        "датаотправки",
        "дата отправки",
        "shipment_date",
        "shipdate",
    ]

    # Substring tokens tried only when no DATE header matched exactly
    DATE_TOKENS: List[str] = ["date", "дата", "ship", "shipment", "отправ"]

    STATUS: List[str] = ["status", "статус"]
    STATUS_TOKENS: List[str] = ["status", "статус"]


class StatusValues:
    """
    Canonical shipment statuses, ordered from least to most progress.

    The position of a status in SCALE is its progress stage; the last entry
    means the parcel is ready for pickup.
    """

    SHIPPED_FROM_CHINA = "Отправлен из Китая"
    CUSTOMS_CLEARED = "Прошел таможенный контроль"
    IN_TRANSIT_RUSSIA = "В пути по России"
    ARRIVED_MOSCOW = "Прибыл на склад в Москве"
    READY_FOR_PICKUP = "Готов к выдаче"

    SCALE: Tuple[str, ...] = (
        SHIPPED_FROM_CHINA,
        CUSTOMS_CLEARED,
        IN_TRANSIT_RUSSIA,
        ARRIVED_MOSCOW,
        READY_FOR_PICKUP,
    )

    UNKNOWN = ""


class FetchConfig:
    """Defaults for downloading the published CSV exports."""

    DEFAULT_TIMEOUT_SECONDS = 15.0
    DEFAULT_RETRIES = 2
    RETRY_DELAY_SECONDS = 0.75
    RETRY_BACKOFF = 2.0
    CACHE_BUST_PARAM = "t"

    NO_CACHE_HEADERS = {
        "Cache-Control": "no-cache, no-store",
        "Pragma": "no-cache",
    }
    USER_AGENT = "Mozilla/5.0 (compatible; ParcelTracker/1.0)"


class LogConfig:
    """Logging format and file naming."""

    LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    FILE_DATE_FORMAT = "%Y-%m-%d"


class Messages:
    """User-facing texts. Internal causes are never shown, only logged."""

    EMPTY_INPUT = "Пожалуйста, введите трек-номер"
    NOT_FOUND = "Посылка с таким трек-номером не найдена"
    BATCH_MISSING = "Партия не найдена"
    LOAD_FAILED = "Ошибка загрузки данных. Попробуйте позже."
    FOUND = "Посылка найдена!"
    STATUS_UNAVAILABLE = "Статус недоступен"
