"""Normalized offer and derived metrics models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NormalizedOffer(BaseModel):
    """
    Canonical, immutable record for one carrier offer.
    Serialized with the public keys name/service/deadline/price.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    carrier: str = Field("", alias="name", description="Carrier display name")
    service: str = ""
    deadline_days: str = Field("0", alias="deadline", description="Delivery time in days")
    price: float = 0.0

    def to_public(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class QuoteResponse(BaseModel):
    """Body returned by POST /quote."""

    carrier: list[NormalizedOffer] = Field(default_factory=list)

    def to_public(self) -> dict:
        return {"carrier": [o.to_public() for o in self.carrier]}


class MetricsSummary(BaseModel):
    """
    Aggregate price statistics over a window of stored offers.
    cheapest_shipping and most_expensive_shipping are None for an empty window.
    """

    carrier_count: int = 0
    total_price: float = 0.0
    average_price: float = 0.0
    cheapest_shipping: Optional[float] = None
    most_expensive_shipping: Optional[float] = None

    def rounded(self, ndigits: int) -> "MetricsSummary":
        """Copy with prices rounded for presentation."""

        def _round(value: Optional[float]) -> Optional[float]:
            return None if value is None else round(value, ndigits)

        return self.model_copy(
            update={
                "total_price": round(self.total_price, ndigits),
                "average_price": round(self.average_price, ndigits),
                "cheapest_shipping": _round(self.cheapest_shipping),
                "most_expensive_shipping": _round(self.most_expensive_shipping),
            }
        )
