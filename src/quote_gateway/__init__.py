"""Shipping-quote gateway: carrier quotes, offer normalization and price metrics."""

__version__ = "0.1.0"
