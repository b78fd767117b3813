"""Aggregate price statistics over normalized offers."""

import math
from typing import Iterable

from quote_gateway.models.offer import MetricsSummary, NormalizedOffer


def summarize(offers: Iterable[NormalizedOffer]) -> MetricsSummary:
    """
    Count, total, average, cheapest and most expensive price.
    Empty input gives zero count/total/average and None for min/max.
    No rounding is applied here.
    """
    prices = [o.price for o in offers]
    if not prices:
        return MetricsSummary()

    # fsum is correctly rounded, so the total does not depend on input order
    total = math.fsum(prices)
    return MetricsSummary(
        carrier_count=len(prices),
        total_price=total,
        average_price=total / len(prices),
        cheapest_shipping=min(prices),
        most_expensive_shipping=max(prices),
    )
