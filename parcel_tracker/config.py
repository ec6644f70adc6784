from dataclasses import dataclass
import os
from dotenv import load_dotenv

from .utils.constants import FetchConfig

# Load environment variables from .env if present
load_dotenv()

_SHEET_BASE = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQModmlHL0Nh-vN18dxXMtRhuOd2P2owMk-G4qhfhYyJQpQz60VgRBD3-XzW54IvMsB8kjI6H9yJNnJ/pub"
)


@dataclass(frozen=True)
class Settings:
    """Centralized runtime configuration.

    Both data sources are public CSV exports of a published spreadsheet, so no
    credentials are involved. Override any value through the environment or a
    .env file.
    """
    orders_csv_url: str = (
        os.getenv("ORDERS_CSV_URL")
        or f"{_SHEET_BASE}?gid=526359759&single=true&output=csv"
    )
    batches_csv_url: str = (
        os.getenv("BATCHES_CSV_URL")
        or f"{_SHEET_BASE}?gid=0&single=true&output=csv"
    )
    http_timeout: float = float(
        os.getenv("HTTP_TIMEOUT") or FetchConfig.DEFAULT_TIMEOUT_SECONDS)
    fetch_retries: int = int(
        os.getenv("FETCH_RETRIES") or FetchConfig.DEFAULT_RETRIES)
    cache_bust_param: str = os.getenv("CACHE_BUST_PARAM") or FetchConfig.CACHE_BUST_PARAM
    log_level: str = os.getenv("LOG_LEVEL") or "INFO"
    # Empty means console only
    log_dir: str = os.getenv("LOG_DIR", "")


settings = Settings()
