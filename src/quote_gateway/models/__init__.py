"""Data models for quote requests, raw carrier responses and normalized offers."""

from quote_gateway.models.offer import MetricsSummary, NormalizedOffer, QuoteResponse
from quote_gateway.models.raw import RawCarrierResponse
from quote_gateway.models.request import (
    Dispatcher,
    QuoteRequest,
    Recipient,
    Returns,
    Shipper,
    Volume,
)

__all__ = [
    "Dispatcher",
    "MetricsSummary",
    "NormalizedOffer",
    "QuoteRequest",
    "QuoteResponse",
    "RawCarrierResponse",
    "Recipient",
    "Returns",
    "Shipper",
    "Volume",
]
