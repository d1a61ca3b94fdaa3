"""Price feed for investment instruments."""

from cashtrack.pricing.feed import PriceFeed, PriceFeedError, create_price_feed

__all__ = ["PriceFeed", "PriceFeedError", "create_price_feed"]
