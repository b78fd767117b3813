"""Local storage for normalized offers."""

from quote_gateway.store.sqlite_store import QuoteStore

__all__ = ["QuoteStore"]
