"""HTTP client for current instrument prices in Turkish lira.

Quotes come from a static currency API where ``<base>/<code>.json`` holds
``{"<code>": {"try": <price>, ...}}``. Metals are quoted per troy ounce and
converted to grams.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

import requests

from cashtrack.domain.instruments import Instrument

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies"
DEFAULT_TIMEOUT = 10
QUOTE_CURRENCY = "try"


class PriceFeedError(Exception):
    """A price could not be fetched or understood."""


class PriceFeed:
    """Fetches per-unit prices for instruments."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        max_workers: int = 4,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.max_workers = max_workers

    def fetch_quote(self, feed_code: str) -> Decimal:
        """Raw quote for a feed code in lira.

        Raises:
            PriceFeedError: On HTTP errors or a response without a lira quote
        """
        code = feed_code.lower()
        url = f"{self.base_url}/{code}.json"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise PriceFeedError(f"Failed to fetch price for {code.upper()}: {e}") from e

        raw = (data.get(code) or {}).get(QUOTE_CURRENCY)
        if not raw:
            raise PriceFeedError(f"{QUOTE_CURRENCY.upper()} price not found for {code.upper()}")
        try:
            return Decimal(str(raw))
        except InvalidOperation as e:
            raise PriceFeedError(f"Invalid price for {code.upper()}: {raw!r}") from e

    def fetch_price(self, instrument_code: str) -> Decimal:
        """Price per held unit (gram for metals) of an instrument.

        Raises:
            ValidationError: If the instrument code is unknown
            PriceFeedError: If the quote cannot be fetched
        """
        instrument = Instrument.from_code(instrument_code)
        return instrument.unit_price(self.fetch_quote(instrument.feed_code))

    def _fetch_quote_or_none(self, feed_code: str) -> Optional[Decimal]:
        try:
            return self.fetch_quote(feed_code)
        except PriceFeedError as e:
            logger.warning("%s", e)
            return None

    def fetch_prices(self, instrument_codes: Iterable[str]) -> dict[str, Optional[Decimal]]:
        """Prices for several instruments, fetched concurrently.

        Each feed code is requested once (22 karat gold reuses the 24 karat
        quote). Instruments whose quote failed, or unknown codes, map to None.
        """
        requested = {}
        for code in instrument_codes:
            instrument = Instrument.lookup(code)
            if instrument is None:
                logger.warning("Skipping unknown instrument %s", code)
                requested[code.upper()] = None
            else:
                requested[instrument.code] = instrument

        feed_codes = sorted({i.feed_code for i in requested.values() if i is not None})
        if feed_codes:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(feed_codes))) as pool:
                quotes = dict(zip(feed_codes, pool.map(self._fetch_quote_or_none, feed_codes)))
        else:
            quotes = {}

        prices: dict[str, Optional[Decimal]] = {}
        for code, instrument in requested.items():
            quote = quotes.get(instrument.feed_code) if instrument is not None else None
            prices[code] = instrument.unit_price(quote) if quote is not None else None
        return prices


def create_price_feed(base_url: Optional[str] = None) -> PriceFeed:
    """Create a price feed, reading CASHTRACK_PRICE_API_URL when no URL is given."""
    if base_url is None:
        base_url = os.environ.get("CASHTRACK_PRICE_API_URL", DEFAULT_BASE_URL)
    return PriceFeed(base_url=base_url)
