"""
Downloads published CSV exports.

Spreadsheet exports are served through caching proxies, so every request
carries a fresh cache-busting query parameter and no-cache headers. The
download itself uses requests; ``fetch`` runs it in the default executor so it
can be awaited from the event loop.
"""

from __future__ import annotations
import asyncio
import logging
import time
from typing import Callable, Optional

import requests

from ..utils.constants import FetchConfig
from ..utils.errors import TransportError
from ..utils.retry import retry


def _is_retryable(exc: BaseException) -> bool:
    # Only network failures and 5xx responses are retried
    status = getattr(exc, "status_code", None)
    return status is None or status >= 500


class CsvFetcher:
    """Fetches CSV text over HTTP.

    Minimal use:
        fetcher = CsvFetcher(timeout=15)
        text = await fetcher.fetch(settings.orders_csv_url)
    """

    def __init__(
        self,
        timeout: float = FetchConfig.DEFAULT_TIMEOUT_SECONDS,
        retries: int = FetchConfig.DEFAULT_RETRIES,
        cache_bust_param: str = FetchConfig.CACHE_BUST_PARAM,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.timeout = timeout
        self.retries = max(0, int(retries))
        self.cache_bust_param = cache_bust_param
        self.session = session or requests.Session()
        self._clock = clock

    def bust_url(self, url: str) -> str:
        """Append ``<param>=<epoch millis>`` using ? or & as the URL requires."""
        sep = "&" if "?" in url else "?"
        return f"{url}{sep}{self.cache_bust_param}={int(self._clock() * 1000)}"

    @retry((TransportError,), delay=FetchConfig.RETRY_DELAY_SECONDS,
           backoff=FetchConfig.RETRY_BACKOFF, when=_is_retryable)
    def fetch_text(self, url: str) -> str:
        """
        Download ``url`` and return its body as text.

        Raises:
            TransportError: On network failure or a non-success status
        """
        target = self.bust_url(url)
        headers = dict(FetchConfig.NO_CACHE_HEADERS)
        headers["User-Agent"] = FetchConfig.USER_AGENT
        logging.debug("Downloading CSV %s", target)
        try:
            resp = self.session.get(target, timeout=self.timeout, headers=headers)
        except requests.exceptions.Timeout as e:
            raise TransportError(url, f"Timeout downloading CSV: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(url, f"Network error downloading CSV: {e}") from e

        if not resp.ok:
            raise TransportError(
                url, f"CSV download failed: HTTP {resp.status_code}", status_code=resp.status_code)

        # Sheets exports are UTF-8 but often omit the charset
        resp.encoding = "utf-8"
        text = resp.text
        logging.debug("Downloaded %d characters from %s", len(text), url)
        return text

    async def fetch(self, url: str) -> str:
        """Awaitable wrapper around fetch_text."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.fetch_text, url)

    def close(self) -> None:
        self.session.close()
