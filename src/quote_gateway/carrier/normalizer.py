"""Flatten carrier dispatcher/offer nesting into NormalizedOffer records."""

import logging
import math
from typing import Any, Optional

from quote_gateway.models.offer import NormalizedOffer
from quote_gateway.models.raw import RawCarrierResponse

logger = logging.getLogger(__name__)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def parse_price(value: Any) -> float:
    """Coerce a carrier price to float; anything unusable becomes 0.0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return price if math.isfinite(price) else 0.0


def parse_days(value: Any) -> str:
    """Coerce a delivery-time day count to a string-encoded integer."""
    if isinstance(value, bool) or value is None:
        return "0"
    try:
        days = float(value)
    except (TypeError, ValueError, OverflowError):
        return "0"
    if not math.isfinite(days):
        return "0"
    return str(int(days))


def parse_text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value)


def normalize_offer(offer: Any) -> NormalizedOffer:
    """
    Build one NormalizedOffer from a raw offer object.
    Absent or mistyped fields fall back to zero values instead of failing.
    """
    d = _as_dict(offer)
    carrier = _as_dict(d.get("carrier"))
    delivery_time = _as_dict(d.get("delivery_time"))
    return NormalizedOffer(
        carrier=parse_text(carrier.get("name")),
        service=parse_text(d.get("service")),
        deadline_days=parse_days(delivery_time.get("days")),
        price=parse_price(d.get("final_price")),
    )


def normalize_offers(raw: Optional[RawCarrierResponse]) -> list[NormalizedOffer]:
    """
    Walk dispatchers then offers and emit one record per offer entry,
    preserving dispatcher-major, offer-minor order.
    """
    if raw is None:
        return []
    offers: list[NormalizedOffer] = []
    for d_index, dispatcher in enumerate(raw.dispatchers):
        if not isinstance(dispatcher, dict):
            logger.warning("Skipping dispatcher %d: expected object, got %s", d_index, type(dispatcher).__name__)
            continue
        for o_index, offer in enumerate(_as_list(dispatcher.get("offers"))):
            if not isinstance(offer, dict):
                logger.warning(
                    "Offer %d of dispatcher %d is not an object; using zero values",
                    o_index,
                    d_index,
                )
            offers.append(normalize_offer(offer))
    return offers
