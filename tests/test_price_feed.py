"""Tests for the instrument price feed."""

import threading
from decimal import Decimal

import pytest
import requests

from cashtrack.domain.errors import ValidationError
from cashtrack.domain.instruments import GRAMS_PER_TROY_OUNCE
from cashtrack.pricing import PriceFeed, PriceFeedError, create_price_feed

BASE_URL = "https://prices.example/currencies"


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeHTTPSession:
    """Answers GETs from a dict of feed code to quote."""

    def __init__(self, quotes, failing=()):
        self.quotes = quotes
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url, timeout=None):
        with self._lock:
            self.calls.append((url, timeout))
        code = url.rsplit("/", 1)[-1].removesuffix(".json")
        if code in self.failing:
            raise requests.ConnectionError("connection refused")
        if code not in self.quotes:
            return FakeResponse({}, status_code=404)
        return FakeResponse({"date": "2024-03-15", code: {"try": self.quotes[code], "usd": 1}})


@pytest.fixture
def http():
    return FakeHTTPSession({"usd": 32.15, "eur": "35.00", "xau": str(GRAMS_PER_TROY_OUNCE * 2400)})


@pytest.fixture
def feed(http):
    return PriceFeed(base_url=BASE_URL + "/", timeout=3, session=http)


def test_fetch_quote_requests_code_with_timeout(feed, http):
    assert feed.fetch_quote("USD") == Decimal("32.15")
    assert http.calls == [(f"{BASE_URL}/usd.json", 3)]


def test_fetch_price_converts_metals_to_grams(feed):
    assert feed.fetch_price("XAU") == Decimal("2400")
    assert feed.fetch_price("xau22") == Decimal("2200")


def test_fetch_price_rejects_unknown_instrument(feed):
    with pytest.raises(ValidationError):
        feed.fetch_price("BTC")


def test_fetch_quote_http_error(feed):
    with pytest.raises(PriceFeedError, match="GBP"):
        feed.fetch_quote("gbp")


def test_fetch_quote_connection_error():
    feed = PriceFeed(base_url=BASE_URL, session=FakeHTTPSession({}, failing={"usd"}))
    with pytest.raises(PriceFeedError, match="connection refused"):
        feed.fetch_quote("usd")


def test_fetch_quote_without_lira_price():
    class NoLira(FakeHTTPSession):
        def get(self, url, timeout=None):
            return FakeResponse({"usd": {"eur": 0.92}})

    feed = PriceFeed(base_url=BASE_URL, session=NoLira({}))
    with pytest.raises(PriceFeedError, match="TRY price not found"):
        feed.fetch_quote("usd")


def test_fetch_quote_invalid_json():
    class BadJson(FakeHTTPSession):
        def get(self, url, timeout=None):
            return FakeResponse(ValueError("Expecting value"))

    feed = PriceFeed(base_url=BASE_URL, session=BadJson({}))
    with pytest.raises(PriceFeedError):
        feed.fetch_quote("usd")


def test_fetch_prices_fans_out_once_per_feed_code(feed, http):
    prices = feed.fetch_prices(["XAU", "XAU22", "usd", "EUR"])

    assert prices == {
        "XAU": Decimal("2400"),
        "XAU22": Decimal("2200"),
        "USD": Decimal("32.15"),
        "EUR": Decimal("35.00"),
    }
    requested = sorted(url for url, _ in http.calls)
    assert requested == [f"{BASE_URL}/{code}.json" for code in ("eur", "usd", "xau")]


def test_fetch_prices_maps_failures_to_none(http):
    http.failing.add("usd")
    feed = PriceFeed(base_url=BASE_URL, session=http)

    prices = feed.fetch_prices(["USD", "GBP", "btc", "EUR"])

    assert prices == {"USD": None, "GBP": None, "BTC": None, "EUR": Decimal("35.00")}


def test_fetch_prices_with_nothing_requested(feed, http):
    assert feed.fetch_prices([]) == {}
    assert http.calls == []


def test_create_price_feed_reads_environment(monkeypatch):
    monkeypatch.setenv("CASHTRACK_PRICE_API_URL", "https://mirror.example/api/")
    assert create_price_feed().base_url == "https://mirror.example/api"
    assert create_price_feed("https://other.example").base_url == "https://other.example"
